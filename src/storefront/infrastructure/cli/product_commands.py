"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.update_product import SetStockHandler, UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 24.99).")
@click.option("--out-of-stock", is_flag=True, default=False, help="Add as out of stock.")
def product_add(name: str, price: str, out_of_stock: bool) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(name=name, price=price, in_stock=not out_of_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10}  {'Stock':<12}")
    click.echo("-" * 56)
    for p in products:
        stock = "in stock" if p.in_stock else "out of stock"
        click.echo(f"{p.id:<6} {p.name:<24} {str(p.price):>10}  {stock:<12}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} price updated to {product.price}")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--in/--out", "in_stock", default=True, show_default=True, help="Mark in or out of stock.")
def product_stock(product_id: str, in_stock: bool) -> None:
    """Mark a product in or out of stock."""
    handler = SetStockHandler(product_repo=product_repository())

    try:
        product = handler.handle(product_id=product_id, in_stock=in_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    state = "in stock" if product.in_stock else "out of stock"
    click.echo(f"Product #{product.id} '{product.name}' is now {state}.")
