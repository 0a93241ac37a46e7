"""Application service: Cart Summary use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartSummaryDTO, cart_to_summary_dto
from storefront.application.show_cart import require_cart
from storefront.domain.model.pricing import DEFAULT_PRICING, PricingPolicy
from storefront.domain.repository.cart_repository import CartRepository


class CartSummaryHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        pricing: PricingPolicy = DEFAULT_PRICING,
    ) -> None:
        self._cart_repo = cart_repo
        self._pricing = pricing

    def handle(self, session_id: str) -> CartSummaryDTO:
        return cart_to_summary_dto(require_cart(self._cart_repo, session_id), self._pricing)
