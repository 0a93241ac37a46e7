"""Application service: Update Cart Item quantity use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.show_cart import require_cart
from storefront.domain.model.pricing import DEFAULT_PRICING, PricingPolicy
from storefront.domain.repository.cart_repository import CartRepository


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        pricing: PricingPolicy = DEFAULT_PRICING,
    ) -> None:
        self._cart_repo = cart_repo
        self._pricing = pricing

    def handle(self, session_id: str, product_id: str, quantity: int) -> CartDTO:
        """Replace the quantity of an item already in the cart (1-99)."""
        cart = require_cart(self._cart_repo, session_id)
        cart.update_quantity(product_id, quantity)
        self._cart_repo.save(cart)
        return cart_to_dto(cart, self._pricing)
