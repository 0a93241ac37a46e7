"""Data Transfer Objects: plain containers that cross layer boundaries.

Requests come in as typed specs and results go out as DTOs with amounts
already formatted, so callers never assemble payloads by hand.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart, CartIssue
from storefront.domain.model.pricing import CartTotals, PricingPolicy

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


# --- Requests -----------------------------------------------------------------


@dataclass(frozen=True)
class PricedItemSpec:
    """Input: a raw unit price and quantity, as typed by a user."""

    unit_price: str
    quantity: int


@dataclass(frozen=True)
class CartItemSpec:
    """Input: which product to put in the cart, and how many."""

    product_id: str
    quantity: int = 1


# --- Responses ----------------------------------------------------------------


@dataclass(frozen=True)
class CartTotalsDTO:
    subtotal: str  # formatted, e.g. "$80.00"
    tax: str
    shipping: str
    total: str
    free_shipping_eligible: bool
    amount_to_free_shipping: str


@dataclass(frozen=True)
class CartItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    session_id: str
    items: list[CartItemDTO]
    item_count: int
    totals: CartTotalsDTO
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class CartSummaryDTO:
    """Header-sized view of a cart: counts and totals, no line details."""

    session_id: str
    item_count: int
    totals: CartTotalsDTO
    has_items: bool
    updated_at: str


@dataclass(frozen=True)
class CartIssueDTO:
    type: str  # product_removed | out_of_stock | price_change
    product_id: str
    message: str
    old_price: str | None = None
    new_price: str | None = None


@dataclass(frozen=True)
class CartValidationDTO:
    cart: CartDTO
    is_valid: bool
    issues: list[CartIssueDTO]
    has_changes: bool


@dataclass(frozen=True)
class LoginCheckDTO:
    """Whether a login attempt may proceed to the credential check."""

    allowed: bool
    remaining_attempts: int
    retry_after_seconds: int = 0
    blocked_until: str | None = None  # ISO 8601
    message: str | None = None


@dataclass(frozen=True)
class LoginFailureDTO:
    recorded: bool
    attempts: int
    remaining_attempts: int
    blocked: bool
    message: str


@dataclass(frozen=True)
class LoginStatusDTO:
    identifier: str
    blocked: bool
    attempts: int
    remaining_attempts: int
    blocked_for_seconds: int
    unblock_at: str | None


@dataclass(frozen=True)
class LoginConfigDTO:
    max_attempts: int
    window_seconds: int
    block_seconds: int
    block_minutes: int


# --- Mapping ------------------------------------------------------------------


def totals_to_dto(totals: CartTotals) -> CartTotalsDTO:
    return CartTotalsDTO(
        subtotal=str(totals.subtotal),
        tax=str(totals.tax),
        shipping=str(totals.shipping),
        total=str(totals.total),
        free_shipping_eligible=totals.free_shipping_eligible,
        amount_to_free_shipping=str(totals.amount_to_free_shipping),
    )


def cart_to_dto(cart: Cart, policy: PricingPolicy) -> CartDTO:
    return CartDTO(
        session_id=cart.session_id,
        items=[
            CartItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in cart.items
        ],
        item_count=cart.item_count,
        totals=totals_to_dto(cart.totals(policy)),
        created_at=cart.created_at.strftime(TIMESTAMP_FORMAT),
        updated_at=cart.updated_at.strftime(TIMESTAMP_FORMAT),
    )


def cart_to_summary_dto(cart: Cart, policy: PricingPolicy) -> CartSummaryDTO:
    return CartSummaryDTO(
        session_id=cart.session_id,
        item_count=cart.item_count,
        totals=totals_to_dto(cart.totals(policy)),
        has_items=bool(cart.items),
        updated_at=cart.updated_at.strftime(TIMESTAMP_FORMAT),
    )


def issue_to_dto(issue: CartIssue) -> CartIssueDTO:
    return CartIssueDTO(
        type=issue.type.value,
        product_id=issue.product_id,
        message=issue.message,
        old_price=str(issue.old_price) if issue.old_price is not None else None,
        new_price=str(issue.new_price) if issue.new_price is not None else None,
    )
