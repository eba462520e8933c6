"""Checkout price calculation: subtotal, delivery fee and discount."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Union

from ..common.models import StoreSettings

CURRENCY_SUFFIX = "ج.م"

# Localities offered at checkout, in display order, mapped to their rate key.
LOCALITIES: Dict[str, str] = {
    "القاهرة": "cairo",
    "الجيزة": "giza",
    "6 أكتوبر": "october",
    "الهرم": "haram",
    "مدينة الرحاب": "rehab",
    "مدينتي": "madinaty",
    "الإسماعيلية": "ismailia",
    "الإسكندرية": "alex",
    "طنطا": "tanta",
    "المنصورة": "mansoura",
}
OTHER_LOCALITIES = "أخرى"
FALLBACK_RATE_KEY = "others"

Number = Union[int, float, Decimal]


def _dec(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


@dataclass(frozen=True)
class CheckoutQuote:
    subtotal: Decimal
    delivery_fee: Decimal
    discount_amount: Decimal
    final_total: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            "subtotal": format_amount(self.subtotal),
            "delivery_fee": format_amount(self.delivery_fee),
            "discount_amount": format_amount(self.discount_amount),
            "final_total": format_amount(self.final_total),
        }


def delivery_fee(settings: StoreSettings, city: str) -> Decimal:
    key = LOCALITIES.get(city, FALLBACK_RATE_KEY)
    return _dec(settings.delivery_rates[key])


def discount_amount(settings: StoreSettings, subtotal: Number) -> Decimal:
    if not settings.is_discount_active:
        return Decimal("0")
    return _dec(subtotal) * _dec(settings.discount_percentage) / Decimal(100)


def quote_checkout(subtotal: Number, settings: StoreSettings, city: str) -> CheckoutQuote:
    sub = _dec(subtotal)
    fee = delivery_fee(settings, city)
    discount = discount_amount(settings, sub)
    return CheckoutQuote(
        subtotal=sub,
        delivery_fee=fee,
        discount_amount=discount,
        final_total=sub + fee - discount,
    )


def format_number(value: Number) -> str:
    """``Decimal('360')`` -> ``'360'``, ``Decimal('36.250')`` -> ``'36.25'``."""

    text = f"{_dec(value):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def format_amount(value: Number) -> str:
    return f"{format_number(value)} {CURRENCY_SUFFIX}"
