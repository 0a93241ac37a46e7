"""Cart pricing: subtotal, tax, shipping and grand total.

Amounts are carried at full precision through the calculation and
rounded to cents (half-up) only when reported.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.exceptions import InvalidInput, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLineItem:
    """A unit price and how many units of it are being bought."""

    unit_price: Money
    quantity: Quantity

    def __post_init__(self) -> None:
        if not isinstance(self.unit_price, Money):
            raise InvalidInput("Line item unit price must be Money")
        if not isinstance(self.quantity, Quantity):
            raise InvalidInput("Line item quantity must be a Quantity")
        if self.unit_price.is_zero:
            raise InvalidInput("Unit price must be greater than zero")

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def of(unit_price: str | float | int | Decimal, quantity: str | int) -> CartLineItem:
        """Build from raw request values, rejecting anything malformed."""
        return CartLineItem(unit_price=Money.of(unit_price), quantity=Quantity.of(quantity))


@dataclass(frozen=True)
class PricingPolicy:
    """Fixed business rules for tax and shipping."""

    tax_rate: Decimal = Decimal("0.085")
    free_shipping_threshold: Money = Money(Decimal("75.00"))
    flat_shipping: Money = Money(Decimal("9.99"))

    def __post_init__(self) -> None:
        if not isinstance(self.tax_rate, Decimal) or not self.tax_rate.is_finite():
            raise ValidationError(f"Tax rate must be a finite Decimal, got {self.tax_rate!r}")
        if self.tax_rate < Decimal("0"):
            raise ValidationError("Tax rate cannot be negative")


DEFAULT_PRICING = PricingPolicy()


@dataclass(frozen=True)
class CartTotals:
    """Derived totals. Never stored apart from the items that produced them."""

    subtotal: Money
    tax: Money
    shipping: Money
    total: Money
    free_shipping_eligible: bool
    amount_to_free_shipping: Money


def compute_totals(
    line_items: Iterable[CartLineItem],
    policy: PricingPolicy = DEFAULT_PRICING,
) -> CartTotals:
    """Price a list of line items under ``policy``.

    Tax, shipping eligibility and the grand total all derive from the
    unrounded subtotal; each reported amount is rounded on its own.

    An empty list prices to zero everywhere, including shipping, and is
    never eligible for free shipping while the threshold is positive.
    """
    items = list(line_items)
    for item in items:
        if not isinstance(item, CartLineItem):
            raise InvalidInput(f"Expected a CartLineItem, got {type(item).__name__}")

    subtotal = Money.zero()
    for item in items:
        subtotal = subtotal + item.line_total

    tax = subtotal.apply_rate(policy.tax_rate)

    threshold = policy.free_shipping_threshold
    eligible = subtotal >= threshold

    # nothing to ship
    if eligible or not items:
        shipping = Money.zero()
    else:
        shipping = policy.flat_shipping

    total = subtotal + tax + shipping

    if eligible:
        amount_to_free_shipping = Money.zero()
    else:
        amount_to_free_shipping = threshold - subtotal

    return CartTotals(
        subtotal=subtotal.rounded(),
        tax=tax.rounded(),
        shipping=shipping.rounded(),
        total=total.rounded(),
        free_shipping_eligible=eligible,
        amount_to_free_shipping=amount_to_free_shipping.rounded(),
    )
