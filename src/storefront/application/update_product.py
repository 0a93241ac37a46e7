"""Application services: product price and stock updates."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


def _require_product(product_repo: ProductRepository, product_id: str) -> Product:
    product = product_repo.get_by_id(product_id)
    if product is None:
        raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
    return product


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, new_price: str) -> Product:
        """Update a product's price.

        Carts that already hold the product keep the price they captured.
        """
        product = _require_product(self._product_repo, product_id)
        product.update_price(Money.of(new_price))
        self._product_repo.save(product)
        return product


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, in_stock: bool) -> Product:
        product = _require_product(self._product_repo, product_id)
        if in_stock:
            product.mark_in_stock()
        else:
            product.mark_out_of_stock()
        self._product_repo.save(product)
        return product
