"""Application service: Create Cart use case."""

from __future__ import annotations

import logging

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.model.cart import Cart
from storefront.domain.model.pricing import DEFAULT_PRICING, PricingPolicy
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class CreateCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        pricing: PricingPolicy = DEFAULT_PRICING,
    ) -> None:
        self._cart_repo = cart_repo
        self._pricing = pricing

    def handle(self) -> CartDTO:
        """Open a new, empty cart session."""
        cart = Cart.create()
        self._cart_repo.save(cart)
        logger.info("Created cart %s", cart.session_id)
        return cart_to_dto(cart, self._pricing)
