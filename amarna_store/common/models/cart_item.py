from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .product import Product


@dataclass
class CartItem:
    """Line item holding a snapshot of the product taken when it was added."""

    id: int
    name: str
    description: str
    price: str
    image: str
    category: str
    quantity: int = 1

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartItem":
        return cls(quantity=quantity, **product.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
