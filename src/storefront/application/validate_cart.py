"""Application service: Validate Cart use case.

Run before checkout. Re-checks every item against the current catalog,
dropping what can no longer be bought and re-pricing what changed.
"""

from __future__ import annotations

import logging

from storefront.application.dto import CartValidationDTO, cart_to_dto, issue_to_dto
from storefront.application.show_cart import require_cart
from storefront.domain.model.pricing import DEFAULT_PRICING, PricingPolicy
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ValidateCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        pricing: PricingPolicy = DEFAULT_PRICING,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._pricing = pricing

    def handle(self, session_id: str) -> CartValidationDTO:
        cart = require_cart(self._cart_repo, session_id)

        issues = cart.revalidate(self._product_repo.list_all())
        if issues:
            self._cart_repo.save(cart)
            logger.info("Cart %s: validation found %d issue(s)", cart.session_id, len(issues))

        return CartValidationDTO(
            cart=cart_to_dto(cart, self._pricing),
            is_valid=not issues,
            issues=[issue_to_dto(issue) for issue in issues],
            has_changes=bool(issues),
        )
