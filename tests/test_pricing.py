"""Tests for the checkout pricing calculation."""

from decimal import Decimal

import pytest

from amarna_store.common.models import StoreSettings
from amarna_store.services.pricing import (
    LOCALITIES,
    delivery_fee,
    format_amount,
    format_number,
    quote_checkout,
)


def test_default_settings_cairo():
    quote = quote_checkout(300, StoreSettings(), "القاهرة")

    assert quote.delivery_fee == Decimal(60)
    assert quote.discount_amount == Decimal(0)
    assert quote.final_total == Decimal(360)


def test_active_discount_with_90_delivery():
    settings = StoreSettings(discount_percentage=25, is_discount_active=True)

    quote = quote_checkout(300, settings, "الإسكندرية")

    assert quote.delivery_fee == Decimal(90)
    assert quote.discount_amount == Decimal(75)
    assert quote.final_total == Decimal(315)


@pytest.mark.parametrize("city", ["أخرى", "أسوان", "", "cairo"])
def test_unlisted_city_uses_others_rate(city):
    assert delivery_fee(StoreSettings(), city) == Decimal(100)


def test_every_locality_maps_to_its_rate():
    settings = StoreSettings()

    for city, key in LOCALITIES.items():
        assert delivery_fee(settings, city) == Decimal(settings.delivery_rates[key])


def test_fractional_discount_keeps_precision():
    settings = StoreSettings(discount_percentage=25, is_discount_active=True)

    quote = quote_checkout(145, settings, "القاهرة")

    assert quote.discount_amount == Decimal("36.25")
    assert quote.to_dict()["final_total"] == "168.75 ج.م"


@pytest.mark.parametrize(
    "value,expected",
    [(Decimal("360"), "360"), (Decimal("36.250"), "36.25"), (60.0, "60"), (0, "0")],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_amount_suffix():
    assert format_amount(Decimal("315")) == "315 ج.م"
