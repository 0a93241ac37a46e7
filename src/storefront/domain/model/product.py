"""Product aggregate.

Products live independently of carts. Prices change and plants go in
and out of stock; carts keep the price they saw when an item was added.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A plant (or pot, or tool) in the nursery catalog."""

    id: str
    name: str
    price: Money
    in_stock: bool = True

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Items already sitting in a cart keep their original price.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def mark_in_stock(self) -> None:
        self.in_stock = True

    def mark_out_of_stock(self) -> None:
        self.in_stock = False
