"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.cart import Cart, parse_session_id
from storefront.domain.model.pricing import DEFAULT_PRICING, PricingPolicy
from storefront.domain.repository.cart_repository import CartRepository


def require_cart(cart_repo: CartRepository, session_id: str) -> Cart:
    """Load a cart, validating the session ID format first."""
    cart = cart_repo.get_by_session_id(parse_session_id(session_id))
    if cart is None:
        raise EntityNotFoundError("Cart not found")
    return cart


class ShowCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        pricing: PricingPolicy = DEFAULT_PRICING,
    ) -> None:
        self._cart_repo = cart_repo
        self._pricing = pricing

    def handle(self, session_id: str) -> CartDTO:
        return cart_to_dto(require_cart(self._cart_repo, session_id), self._pricing)
