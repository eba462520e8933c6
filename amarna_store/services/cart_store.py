"""購物車狀態：每位訪客一份。"""

from __future__ import annotations

import re
from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from ..common.models import CartItem, Product

_DIGITS = re.compile(r"[0-9]+")


def parse_price_amount(price_text: str) -> int:
    """Per-unit amount from display text: the first run of digits, else 0."""

    match = _DIGITS.search(price_text or "")
    return int(match.group(0)) if match else 0


class CartStore:
    """Line items keyed by product id, in insertion order."""

    def __init__(self, items: Optional[Iterable[CartItem]] = None) -> None:
        self._items: List[CartItem] = [replace(it) for it in (items or [])]

    def to_dicts(self) -> List[Dict]:
        return [it.to_dict() for it in self._items]

    @property
    def items(self) -> List[CartItem]:
        return [replace(it) for it in self._items]

    def _find(self, product_id: int) -> Optional[CartItem]:
        for it in self._items:
            if it.id == product_id:
                return it
        return None

    def add_to_cart(self, product: Product) -> None:
        existing = self._find(product.id)
        if existing:
            existing.quantity += 1
        else:
            self._items.append(CartItem.from_product(product))

    def remove_from_cart(self, product_id: int) -> None:
        self._items = [it for it in self._items if it.id != product_id]

    def update_quantity(self, product_id: int, quantity: int) -> None:
        if quantity < 1:
            self.remove_from_cart(product_id)
            return
        existing = self._find(product_id)
        if existing:
            existing.quantity = quantity

    def clear_cart(self) -> None:
        self._items = []

    @property
    def total_items(self) -> int:
        return sum(it.quantity for it in self._items)

    @property
    def total_price(self) -> Decimal:
        return sum(
            (Decimal(parse_price_amount(it.price)) * it.quantity for it in self._items),
            Decimal("0"),
        )

    def is_empty(self) -> bool:
        return not self._items
