"""Tests for cart line items and derived totals."""

from dataclasses import replace
from decimal import Decimal

import pytest

from amarna_store.common.models import Product
from amarna_store.services.cart_store import CartStore, parse_price_amount


def _product(pid, price):
    return Product(id=pid, name=f"تمر {pid}", description="", price=price, image="", category="luxury")


@pytest.fixture
def ajwa():
    return _product(1, "185 ج.م / كجم")


@pytest.fixture
def majdool():
    return _product(3, "135 ج.م / كجم")


class TestParsePriceAmount:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("185 ج.م / كجم", 185),
            ("السعر 50 أو 60", 50),
            ("ج.م 1200", 1200),
            ("بدون سعر", 0),
            ("", 0),
        ],
    )
    def test_first_digit_run(self, text, expected):
        assert parse_price_amount(text) == expected

    def test_arabic_indic_digits_are_not_parsed(self):
        assert parse_price_amount("١٨٥ ج.م") == 0


class TestCartStore:
    def test_repeat_add_increments_quantity(self, ajwa):
        cart = CartStore()

        cart.add_to_cart(ajwa)
        cart.add_to_cart(ajwa)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_new_items_are_appended_in_order(self, ajwa, majdool):
        cart = CartStore()

        cart.add_to_cart(majdool)
        cart.add_to_cart(ajwa)

        assert [it.id for it in cart.items] == [3, 1]

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_below_one_removes_item(self, ajwa, quantity):
        cart = CartStore()
        cart.add_to_cart(ajwa)

        cart.update_quantity(ajwa.id, quantity)

        assert cart.items == []

    def test_update_quantity_sets_value(self, ajwa):
        cart = CartStore()
        cart.add_to_cart(ajwa)

        cart.update_quantity(ajwa.id, 4)

        assert cart.items[0].quantity == 4
        assert cart.total_items == 4

    def test_update_unknown_id_does_nothing(self, ajwa):
        cart = CartStore()
        cart.add_to_cart(ajwa)

        cart.update_quantity(99, 5)

        assert [(it.id, it.quantity) for it in cart.items] == [(1, 1)]

    def test_remove_and_clear(self, ajwa, majdool):
        cart = CartStore()
        cart.add_to_cart(ajwa)
        cart.add_to_cart(majdool)

        cart.remove_from_cart(ajwa.id)
        cart.remove_from_cart(42)
        assert [it.id for it in cart.items] == [3]

        cart.clear_cart()
        assert cart.is_empty()
        assert cart.total_items == 0
        assert cart.total_price == Decimal("0")

    def test_totals(self, ajwa, majdool):
        cart = CartStore()
        cart.add_to_cart(ajwa)
        cart.add_to_cart(ajwa)
        cart.add_to_cart(majdool)

        assert cart.total_items == 3
        assert cart.total_price == Decimal(185 * 2 + 135)

    def test_total_price_ignores_add_order(self, ajwa, majdool):
        first, second = CartStore(), CartStore()
        for product in (ajwa, majdool, ajwa):
            first.add_to_cart(product)
        for product in (majdool, ajwa, ajwa):
            second.add_to_cart(product)

        assert first.total_price == second.total_price

    def test_price_without_digits_contributes_zero(self, ajwa):
        cart = CartStore()
        cart.add_to_cart(ajwa)
        cart.add_to_cart(_product(7, "حسب الطلب"))

        assert cart.total_price == Decimal(185)

    def test_items_snapshot_the_product(self, ajwa):
        cart = CartStore()
        cart.add_to_cart(ajwa)

        cart.add_to_cart(replace(ajwa, price="999 ج.م"))

        assert cart.items[0].price == "185 ج.م / كجم"
        assert cart.items[0].quantity == 2

    def test_items_are_copies(self, ajwa):
        cart = CartStore()
        cart.add_to_cart(ajwa)

        cart.items[0].quantity = 50

        assert cart.total_items == 1
