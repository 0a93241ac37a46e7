"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, price: str, in_stock: bool = True) -> Product:
        """Add a new plant, pot or tool to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        name = name.strip()

        if self._product_repo.get_by_name(name) is not None:
            raise ValidationError(f"Product '{name}' already exists")

        product_price = Money.of(price)
        if product_price.is_zero:
            raise ValidationError("Product price must be greater than zero")

        # IDs are sequential integers stored as strings
        existing_ids = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        next_id = str(max(existing_ids) + 1) if existing_ids else "1"

        product = Product(id=next_id, name=name, price=product_price, in_stock=in_stock)
        self._product_repo.save(product)
        return product
