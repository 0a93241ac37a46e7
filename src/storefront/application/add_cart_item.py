"""Application service: Add Cart Item use case.

Coordinates two aggregates: the Product supplies the current price and
stock state, the Cart records a snapshot of that price.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CartDTO, CartItemSpec, cart_to_dto
from storefront.application.show_cart import require_cart
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.pricing import DEFAULT_PRICING, PricingPolicy
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        pricing: PricingPolicy = DEFAULT_PRICING,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._pricing = pricing

    def handle(self, session_id: str, spec: CartItemSpec) -> CartDTO:
        cart = require_cart(self._cart_repo, session_id)

        product = self._product_repo.get_by_id(spec.product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{spec.product_id}' not found")

        item = cart.add_item(product, spec.quantity)
        self._cart_repo.save(cart)

        logger.info(
            "Cart %s: %s quantity now %d", cart.session_id, product.name, item.quantity.value
        )
        return cart_to_dto(cart, self._pricing)
