"""Application service: Quote Totals use case.

Prices ad-hoc line items (e.g. from a request body) without a stored
cart. Every item is validated before anything is computed.
"""

from __future__ import annotations

from storefront.application.dto import CartTotalsDTO, PricedItemSpec, totals_to_dto
from storefront.domain.model.pricing import (
    DEFAULT_PRICING,
    CartLineItem,
    PricingPolicy,
    compute_totals,
)


class QuoteTotalsHandler:

    def __init__(self, pricing: PricingPolicy = DEFAULT_PRICING) -> None:
        self._pricing = pricing

    def handle(self, specs: list[PricedItemSpec]) -> CartTotalsDTO:
        line_items = [CartLineItem.of(spec.unit_price, spec.quantity) for spec in specs]
        return totals_to_dto(compute_totals(line_items, self._pricing))
