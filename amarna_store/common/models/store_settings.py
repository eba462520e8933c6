"""商店設定（運費表與折扣）資料模型。"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field
from typing import Any, Dict

RATE_KEYS = (
    "cairo",
    "giza",
    "october",
    "haram",
    "rehab",
    "madinaty",
    "ismailia",
    "alex",
    "tanta",
    "mansoura",
    "others",
)

DEFAULT_DELIVERY_RATES: Dict[str, float] = {
    "cairo": 60,
    "giza": 60,
    "october": 65,
    "haram": 65,
    "rehab": 70,
    "madinaty": 70,
    "ismailia": 75,
    "alex": 90,
    "tanta": 90,
    "mansoura": 90,
    "others": 100,
}


def _number(value: Any, name: str) -> float:
    # bool is an int subclass; a flag in a numeric slot is a schema mismatch
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number")
    return value


@dataclass
class StoreSettings:
    delivery_rates: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_DELIVERY_RATES))
    discount_percentage: float = 25
    is_discount_active: bool = False

    def validate(self) -> None:
        for key in RATE_KEYS:
            if key not in self.delivery_rates:
                raise ValueError(f"delivery rate missing: {key}")
            if _number(self.delivery_rates[key], key) < 0:
                raise ValueError(f"delivery rate must be >= 0: {key}")
        pct = _number(self.discount_percentage, "discountPercentage")
        if pct < 0 or pct > 100:
            raise ValueError("discountPercentage must be between 0 and 100")
        if not isinstance(self.is_discount_active, bool):
            raise ValueError("isDiscountActive must be a boolean")

    def copy(self) -> "StoreSettings":
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deliveryRates": {k: self.delivery_rates[k] for k in RATE_KEYS},
            "discountPercentage": self.discount_percentage,
            "isDiscountActive": self.is_discount_active,
        }

    @classmethod
    def merged_over_defaults(cls, payload: Dict[str, Any]) -> "StoreSettings":
        """Overlay a saved payload on the defaults, top level and rate table.

        Keys outside the known schema are dropped; keys the payload lacks keep
        their default value. Raises ``ValueError`` when the result is invalid.
        """

        if not isinstance(payload, dict):
            raise ValueError("settings payload must be an object")
        defaults = cls()
        saved_rates = payload.get("deliveryRates") or {}
        if not isinstance(saved_rates, dict):
            raise ValueError("deliveryRates must be an object")
        rates = dict(defaults.delivery_rates)
        rates.update({k: v for k, v in saved_rates.items() if k in RATE_KEYS})
        settings = cls(
            delivery_rates=rates,
            discount_percentage=payload.get("discountPercentage", defaults.discount_percentage),
            is_discount_active=payload.get("isDiscountActive", defaults.is_discount_active),
        )
        settings.validate()
        return settings

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StoreSettings":
        """Strict parse of a complete settings payload (no defaults filled in)."""

        if not isinstance(payload, dict):
            raise ValueError("settings payload must be an object")
        rates = payload.get("deliveryRates")
        if not isinstance(rates, dict):
            raise ValueError("deliveryRates must be an object")
        for name in ("discountPercentage", "isDiscountActive"):
            if name not in payload:
                raise ValueError(f"{name} required")
        settings = cls(
            delivery_rates={k: rates.get(k) for k in RATE_KEYS},
            discount_percentage=payload["discountPercentage"],
            is_discount_active=payload["isDiscountActive"],
        )
        settings.validate()
        return settings
