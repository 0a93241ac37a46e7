"""Application service: Remove Cart Item use case."""

from __future__ import annotations

import logging

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.application.show_cart import require_cart
from storefront.domain.model.pricing import DEFAULT_PRICING, PricingPolicy
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class RemoveCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        pricing: PricingPolicy = DEFAULT_PRICING,
    ) -> None:
        self._cart_repo = cart_repo
        self._pricing = pricing

    def handle(self, session_id: str, product_id: str) -> CartDTO:
        cart = require_cart(self._cart_repo, session_id)
        removed = cart.remove_item(product_id)
        self._cart_repo.save(cart)
        logger.info("Cart %s: removed %s", cart.session_id, removed.product_name)
        return cart_to_dto(cart, self._pricing)
