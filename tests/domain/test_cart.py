"""Unit tests for the Cart aggregate."""

import uuid

import pytest

from storefront.domain.exceptions import EntityNotFoundError, InvalidInput, ValidationError
from storefront.domain.model.cart import (
    MAX_QUANTITY_PER_ITEM,
    Cart,
    CartIssueType,
    parse_session_id,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def _product(pid: str = "1", name: str = "Monstera", price: str = "24.99", in_stock: bool = True) -> Product:
    return Product(id=pid, name=name, price=Money.of(price), in_stock=in_stock)


class TestCartCreation:

    def test_new_cart_is_empty(self):
        cart = Cart.create()
        assert cart.items == []
        assert cart.item_count == 0

    def test_session_id_is_uuid4(self):
        cart = Cart.create()
        assert uuid.UUID(cart.session_id).version == 4

    def test_each_cart_gets_its_own_session(self):
        assert Cart.create().session_id != Cart.create().session_id


class TestAddItem:

    def test_adds_new_line(self):
        cart = Cart.create()
        cart.add_item(_product(), 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity.value == 2
        assert cart.item_count == 2

    def test_same_product_merges_quantity(self):
        cart = Cart.create()
        cart.add_item(_product(), 2)
        cart.add_item(_product(), 3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity.value == 5

    def test_out_of_stock_rejected(self):
        cart = Cart.create()
        with pytest.raises(ValidationError, match="out of stock"):
            cart.add_item(_product(in_stock=False))

    def test_merged_quantity_over_limit_rejected(self):
        cart = Cart.create()
        cart.add_item(_product(), 98)
        with pytest.raises(ValidationError, match="Maximum quantity per item is 99"):
            cart.add_item(_product(), 2)
        assert cart.items[0].quantity.value == 98

    def test_exactly_limit_accepted(self):
        cart = Cart.create()
        cart.add_item(_product(), MAX_QUANTITY_PER_ITEM)
        assert cart.item_count == MAX_QUANTITY_PER_ITEM

    def test_zero_quantity_rejected(self):
        cart = Cart.create()
        with pytest.raises(InvalidInput, match="must be positive"):
            cart.add_item(_product(), 0)

    def test_price_snapshot_survives_product_price_change(self):
        cart = Cart.create()
        product = _product(price="10.00")
        cart.add_item(product)
        product.update_price(Money.of("99.00"))
        assert cart.items[0].unit_price == Money.of("10.00")


class TestUpdateAndRemove:

    def test_update_replaces_quantity(self):
        cart = Cart.create()
        cart.add_item(_product(), 5)
        cart.update_quantity("1", 2)
        assert cart.item_count == 2

    def test_update_unknown_item(self):
        with pytest.raises(EntityNotFoundError, match="not found in cart"):
            Cart.create().update_quantity("42", 1)

    def test_update_over_limit_rejected(self):
        cart = Cart.create()
        cart.add_item(_product())
        with pytest.raises(ValidationError, match="Maximum quantity"):
            cart.update_quantity("1", 100)

    def test_remove_returns_removed_item(self):
        cart = Cart.create()
        cart.add_item(_product())
        cart.add_item(_product(pid="2", name="Fern"))
        removed = cart.remove_item("1")
        assert removed.product_name == "Monstera"
        assert [i.product_id for i in cart.items] == ["2"]

    def test_remove_unknown_item(self):
        with pytest.raises(EntityNotFoundError):
            Cart.create().remove_item("1")

    def test_clear(self):
        cart = Cart.create()
        cart.add_item(_product(), 3)
        cart.clear()
        assert cart.items == []
        assert cart.totals().total == Money.of("0")

    def test_mutation_touches_updated_at(self):
        cart = Cart.create()
        before = cart.updated_at
        cart.add_item(_product())
        assert cart.updated_at >= before


class TestCartTotals:

    def test_totals_derive_from_items(self):
        cart = Cart.create()
        cart.add_item(_product(price="50"))
        cart.add_item(_product(pid="2", name="Fern", price="30"))
        totals = cart.totals()
        assert totals.subtotal == Money.of("80.00")
        assert totals.total == Money.of("86.80")
        assert totals.free_shipping_eligible is True

    def test_totals_follow_quantity_changes(self):
        cart = Cart.create()
        cart.add_item(_product(price="10"), 2)
        assert cart.totals().total == Money.of("31.69")
        cart.update_quantity("1", 8)
        assert cart.totals().shipping == Money.of("0")


class TestRevalidate:

    def _cart(self) -> Cart:
        cart = Cart.create()
        cart.add_item(_product("1", "Monstera", "50"))
        cart.add_item(_product("2", "Snake Plant", "30"))
        cart.add_item(_product("3", "Fern", "10"), 2)
        return cart

    def test_unchanged_catalog_is_valid(self):
        cart = self._cart()
        before = cart.updated_at
        catalog = [
            _product("1", "Monstera", "50.00"),
            _product("2", "Snake Plant", "30"),
            _product("3", "Fern", "10"),
        ]
        assert cart.revalidate(catalog) == []
        assert len(cart.items) == 3
        assert cart.updated_at == before

    def test_removed_product_is_dropped(self):
        cart = self._cart()
        issues = cart.revalidate([_product("2", "Snake Plant", "30"), _product("3", "Fern", "10")])
        assert [i.type for i in issues] == [CartIssueType.PRODUCT_REMOVED]
        assert issues[0].product_id == "1"
        assert "Monstera is no longer available" in issues[0].message
        assert [i.product_id for i in cart.items] == ["2", "3"]

    def test_out_of_stock_product_is_dropped(self):
        cart = self._cart()
        issues = cart.revalidate([
            _product("1", "Monstera", "50"),
            _product("2", "Snake Plant", "30", in_stock=False),
            _product("3", "Fern", "10"),
        ])
        assert [i.type for i in issues] == [CartIssueType.OUT_OF_STOCK]
        assert "Snake Plant is currently out of stock" in issues[0].message
        assert [i.product_id for i in cart.items] == ["1", "3"]

    def test_price_change_reprices_item(self):
        cart = self._cart()
        issues = cart.revalidate([
            _product("1", "Monstera", "50"),
            _product("2", "Snake Plant", "30"),
            _product("3", "Fern", "12.50"),
        ])
        assert [i.type for i in issues] == [CartIssueType.PRICE_CHANGE]
        assert issues[0].old_price == Money.of("10")
        assert issues[0].new_price == Money.of("12.50")
        assert issues[0].message == "The price of Fern has changed from $10.00 to $12.50"
        fern = cart.items[2]
        assert fern.unit_price == Money.of("12.50")
        assert fern.quantity.value == 2
        assert cart.totals().subtotal == Money.of("105.00")

    def test_reports_every_issue_in_cart_order(self):
        cart = self._cart()
        issues = cart.revalidate([
            _product("2", "Snake Plant", "35"),
            _product("3", "Fern", "10", in_stock=False),
        ])
        assert [(i.product_id, i.type) for i in issues] == [
            ("1", CartIssueType.PRODUCT_REMOVED),
            ("2", CartIssueType.PRICE_CHANGE),
            ("3", CartIssueType.OUT_OF_STOCK),
        ]
        assert [i.product_id for i in cart.items] == ["2"]
        assert cart.item_count == 1


class TestParseSessionId:

    def test_accepts_uuid4(self):
        sid = str(uuid.uuid4())
        assert parse_session_id(sid.upper()) == sid

    def test_rejects_garbage(self):
        with pytest.raises(InvalidInput, match="valid UUID"):
            parse_session_id("not-a-uuid")

    def test_rejects_other_uuid_versions(self):
        with pytest.raises(InvalidInput, match="valid UUID"):
            parse_session_id(str(uuid.uuid1()))
