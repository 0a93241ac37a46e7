import logging

import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_create,
    cart_quote,
    cart_remove,
    cart_show,
    cart_summary,
    cart_update,
    cart_validate,
)
from storefront.infrastructure.cli.login_commands import (
    login_check,
    login_config,
    login_fail,
    login_status,
    login_succeed,
    login_unblock,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_stock,
    product_update,
)
from storefront.infrastructure.config import load_settings


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL (e.g. INFO, DEBUG).")
def cli(log_level: str | None) -> None:
    """Storefront: plant nursery carts, pricing and login protection"""
    logging.basicConfig(
        level=(log_level or load_settings().log_level).upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


@cli.group()
def cart() -> None:
    """Manage carts and price quotes."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def login() -> None:
    """Inspect and manage failed login tracking."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_create)
cart.add_command(cart_quote)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_summary)
cart.add_command(cart_update)
cart.add_command(cart_validate)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_stock)
product.add_command(product_update)
login.add_command(login_check)
login.add_command(login_config)
login.add_command(login_fail)
login.add_command(login_status)
login.add_command(login_succeed)
login.add_command(login_unblock)
