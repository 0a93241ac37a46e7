"""CLI commands for the Cart aggregate and ad-hoc price quotes."""

from __future__ import annotations

import click

from storefront.application.add_cart_item import AddCartItemHandler
from storefront.application.cart_summary import CartSummaryHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.create_cart import CreateCartHandler
from storefront.application.dto import CartDTO, CartItemSpec, CartTotalsDTO, PricedItemSpec
from storefront.application.quote_totals import QuoteTotalsHandler
from storefront.application.remove_cart_item import RemoveCartItemHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.application.validate_cart import ValidateCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    pricing_policy,
    product_repository,
)


def _parse_priced_items(raw: str) -> list[PricedItemSpec]:
    """Parse '12.50:2,30:1' into PricedItemSpec list."""
    specs: list[PricedItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'Price:Quantity'."
            )
        price, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(f"Invalid quantity '{qty_str}' for price '{price}'.")
        specs.append(PricedItemSpec(unit_price=price.strip(), quantity=qty))
    return specs


def _display_totals(totals: CartTotalsDTO) -> None:
    click.echo(f"  {'Subtotal':<27} {totals.subtotal:>20}")
    click.echo(f"  {'Tax':<27} {totals.tax:>20}")
    click.echo(f"  {'Shipping':<27} {totals.shipping:>20}")
    click.echo(f"  {'Total':<27} {totals.total:>20}")
    if totals.free_shipping_eligible:
        click.echo("  Free shipping applied.")
    else:
        click.echo(f"  Add {totals.amount_to_free_shipping} more for free shipping.")


def _display_cart(dto: CartDTO) -> None:
    click.echo(f"Cart {dto.session_id}  ({dto.item_count} item(s))")
    click.echo(f"Updated: {dto.updated_at}")
    click.echo()
    if not dto.items:
        click.echo("  Cart is empty.")
    else:
        click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
        click.echo(f"  {'-'*54}")
        for item in dto.items:
            click.echo(
                f"  {item.product_id:<6} {item.product_name:<20} {item.quantity:>5} "
                f"{item.unit_price:>10} {item.line_total:>10}"
            )
    click.echo(f"  {'-'*54}")
    _display_totals(dto.totals)


@click.command("create")
def cart_create() -> None:
    """Open a new cart session."""
    handler = CreateCartHandler(cart_repo=cart_repository(), pricing=pricing_policy())
    dto = handler.handle()
    click.echo(f"Cart created: {dto.session_id}")


@click.command("show")
@click.option("--session", "session_id", required=True, help="Cart session ID.")
def cart_show(session_id: str) -> None:
    """Show a cart with its totals."""
    handler = ShowCartHandler(cart_repo=cart_repository(), pricing=pricing_policy())

    try:
        dto = handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("add")
@click.option("--session", "session_id", required=True, help="Cart session ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", default=1, show_default=True, type=int, help="Quantity.")
def cart_add(session_id: str, product_id: str, quantity: int) -> None:
    """Add a product to a cart."""
    handler = AddCartItemHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        pricing=pricing_policy(),
    )

    try:
        dto = handler.handle(session_id, CartItemSpec(product_id=product_id, quantity=quantity))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("update")
@click.option("--session", "session_id", required=True, help="Cart session ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (1-99).")
def cart_update(session_id: str, product_id: str, quantity: int) -> None:
    """Change the quantity of an item in a cart."""
    handler = UpdateCartItemHandler(cart_repo=cart_repository(), pricing=pricing_policy())

    try:
        dto = handler.handle(session_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@click.option("--session", "session_id", required=True, help="Cart session ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_remove(session_id: str, product_id: str) -> None:
    """Remove an item from a cart."""
    handler = RemoveCartItemHandler(cart_repo=cart_repository(), pricing=pricing_policy())

    try:
        dto = handler.handle(session_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("clear")
@click.option("--session", "session_id", required=True, help="Cart session ID.")
def cart_clear(session_id: str) -> None:
    """Remove every item from a cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(), pricing=pricing_policy())

    try:
        handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {session_id} cleared.")


@click.command("quote")
@click.option("--items", required=True, help="Items as 'Price:Qty,Price:Qty'.")
def cart_quote(items: str) -> None:
    """Price ad-hoc items without a stored cart."""
    specs = _parse_priced_items(items)
    handler = QuoteTotalsHandler(pricing=pricing_policy())

    try:
        totals = handler.handle(specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_totals(totals)


@click.command("summary")
@click.option("--session", "session_id", required=True, help="Cart session ID.")
def cart_summary(session_id: str) -> None:
    """Show item count and totals only."""
    handler = CartSummaryHandler(cart_repo=cart_repository(), pricing=pricing_policy())

    try:
        dto = handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart {dto.session_id}  ({dto.item_count} item(s))")
    if not dto.has_items:
        click.echo("  Cart is empty.")
    _display_totals(dto.totals)


@click.command("validate")
@click.option("--session", "session_id", required=True, help="Cart session ID.")
def cart_validate(session_id: str) -> None:
    """Re-check a cart against the catalog before checkout."""
    handler = ValidateCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        pricing=pricing_policy(),
    )

    try:
        dto = handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto.is_valid:
        click.echo("Cart is valid.")
    else:
        click.echo(f"Cart validation found {len(dto.issues)} issue(s):")
        for issue in dto.issues:
            click.echo(f"  [{issue.type}] {issue.message}")
        click.echo()
    _display_cart(dto.cart)
