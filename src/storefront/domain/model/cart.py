"""Cart aggregate: a shopping session identified by a UUID4.

The Cart owns its items. Totals and item counts are always derived from
the items through the pricing rules; they are never stored.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import EntityNotFoundError, InvalidInput, ValidationError
from storefront.domain.model.pricing import (
    DEFAULT_PRICING,
    CartLineItem,
    CartTotals,
    PricingPolicy,
    compute_totals,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity

MAX_QUANTITY_PER_ITEM = 99


def _now() -> datetime:
    return datetime.now(timezone.utc)


def parse_session_id(raw: str) -> str:
    """Return the canonical form of a cart session ID.

    Raises InvalidInput unless ``raw`` is a version 4 UUID.
    """
    try:
        parsed = uuid.UUID(str(raw).strip())
    except ValueError as exc:
        raise InvalidInput("Session ID must be a valid UUID") from exc
    if parsed.version != 4:
        raise InvalidInput("Session ID must be a valid UUID")
    return str(parsed)


def _checked_quantity(quantity: int) -> Quantity:
    qty = Quantity(quantity)
    if qty.value > MAX_QUANTITY_PER_ITEM:
        raise ValidationError(f"Maximum quantity per item is {MAX_QUANTITY_PER_ITEM}")
    return qty


class CartIssueType(Enum):
    PRODUCT_REMOVED = "product_removed"
    OUT_OF_STOCK = "out_of_stock"
    PRICE_CHANGE = "price_change"


@dataclass(frozen=True)
class CartIssue:
    """Something that changed in the catalog since an item was added."""

    type: CartIssueType
    product_id: str
    message: str
    old_price: Money | None = None
    new_price: Money | None = None


@dataclass
class CartItem:
    """A product in the cart, with the price it had when it was added."""

    product_id: str
    product_name: str
    unit_price: Money  # snapshot
    quantity: Quantity
    added_at: datetime = field(default_factory=_now)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def to_line_item(self) -> CartLineItem:
        return CartLineItem(unit_price=self.unit_price, quantity=self.quantity)


@dataclass
class Cart:
    """Aggregate root for shopping carts.

    Use ``Cart.create()`` for new carts. The ``__init__`` stays simple so
    the repository can reconstitute persisted carts.
    """

    session_id: str
    items: list[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @staticmethod
    def create() -> Cart:
        now = _now()
        return Cart(session_id=str(uuid.uuid4()), created_at=now, updated_at=now)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> CartItem:
        """Add ``quantity`` of ``product``, merging with an existing line."""
        if not product.in_stock:
            raise ValidationError(f"{product.name} is out of stock")
        qty = _checked_quantity(quantity)

        existing = self._find_item_or_none(product.id)
        if existing is not None:
            existing.quantity = _checked_quantity(existing.quantity.value + qty.value)
            self._touch()
            return existing

        item = CartItem(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            quantity=qty,
        )
        self.items.append(item)
        self._touch()
        return item

    def update_quantity(self, product_id: str, quantity: int) -> CartItem:
        qty = _checked_quantity(quantity)
        item = self._find_item(product_id)
        item.quantity = qty
        self._touch()
        return item

    def remove_item(self, product_id: str) -> CartItem:
        item = self._find_item(product_id)
        self.items.remove(item)
        self._touch()
        return item

    def clear(self) -> None:
        self.items = []
        self._touch()

    def revalidate(self, products: Iterable[Product]) -> list[CartIssue]:
        """Bring the cart in line with the current catalog before checkout.

        Items whose product is gone or out of stock are dropped; items whose
        snapshot price no longer matches the catalog take the current price.
        Returns one issue per affected item, in cart order.
        """
        catalog = {product.id: product for product in products}
        issues: list[CartIssue] = []
        kept: list[CartItem] = []

        for item in self.items:
            product = catalog.get(item.product_id)
            if product is None:
                issues.append(CartIssue(
                    type=CartIssueType.PRODUCT_REMOVED,
                    product_id=item.product_id,
                    message=f"{item.product_name} is no longer available "
                            "and has been removed from your cart",
                ))
                continue
            if not product.in_stock:
                issues.append(CartIssue(
                    type=CartIssueType.OUT_OF_STOCK,
                    product_id=item.product_id,
                    message=f"{product.name} is currently out of stock "
                            "and has been removed from your cart",
                ))
                continue
            if product.price != item.unit_price:
                issues.append(CartIssue(
                    type=CartIssueType.PRICE_CHANGE,
                    product_id=item.product_id,
                    message=f"The price of {product.name} has changed "
                            f"from {item.unit_price} to {product.price}",
                    old_price=item.unit_price,
                    new_price=product.price,
                ))
                item.unit_price = product.price
            kept.append(item)

        if issues:
            self.items = kept
            self._touch()
        return issues

    # --- Computed -------------------------------------------------------------

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    def totals(self, policy: PricingPolicy = DEFAULT_PRICING) -> CartTotals:
        return compute_totals((item.to_line_item() for item in self.items), policy)

    # --- Internal helpers -----------------------------------------------------

    def _find_item_or_none(self, product_id: str) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def _find_item(self, product_id: str) -> CartItem:
        item = self._find_item_or_none(product_id)
        if item is None:
            raise EntityNotFoundError(f"Item '{product_id}' not found in cart")
        return item

    def _touch(self) -> None:
        self.updated_at = _now()
