"""Tests for the product catalog use cases."""

import pytest

from storefront.application.add_product import AddProductHandler
from storefront.application.update_product import SetStockHandler, UpdateProductHandler
from storefront.domain.exceptions import EntityNotFoundError, InvalidInput, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository


class TestAddProduct:

    def test_first_product_gets_id_1(self):
        product = AddProductHandler(FakeProductRepository()).handle("Monstera", "24.99")
        assert product.id == "1"
        assert product.price == Money.of("24.99")
        assert product.in_stock is True

    def test_ids_are_sequential(self):
        repo = FakeProductRepository([Product(id="7", name="Fern", price=Money.of("5"))])
        assert AddProductHandler(repo).handle("Pothos", "12").id == "8"

    def test_duplicate_name_rejected(self):
        repo = FakeProductRepository([Product(id="1", name="Fern", price=Money.of("5"))])
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(repo).handle("fern", "6")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            AddProductHandler(FakeProductRepository()).handle("  ", "6")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            AddProductHandler(FakeProductRepository()).handle("Fern", "0")

    def test_malformed_price_rejected(self):
        with pytest.raises(InvalidInput):
            AddProductHandler(FakeProductRepository()).handle("Fern", "five")

    def test_added_out_of_stock(self):
        product = AddProductHandler(FakeProductRepository()).handle("Bonsai", "120", in_stock=False)
        assert product.in_stock is False


class TestUpdateProduct:

    def test_update_price(self):
        repo = FakeProductRepository([Product(id="1", name="Fern", price=Money.of("5"))])
        UpdateProductHandler(repo).handle("1", "6.50")
        assert repo.get_by_id("1").price == Money.of("6.50")

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(FakeProductRepository()).handle("1", "6.50")

    def test_set_stock(self):
        repo = FakeProductRepository([Product(id="1", name="Fern", price=Money.of("5"))])
        SetStockHandler(repo).handle("1", in_stock=False)
        assert repo.get_by_id("1").in_stock is False
        SetStockHandler(repo).handle("1", in_stock=True)
        assert repo.get_by_id("1").in_stock is True
