"""商品資料模型。"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

CATEGORIES = ("luxury", "daily", "stuffed")

_REQUIRED_FIELDS = ("name", "description", "price", "image", "category")


@dataclass
class Product:
    """A sellable item; ``price`` is display text such as ``"185 ج.م / كجم"``."""

    id: int
    name: str
    description: str
    price: str
    image: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        if not isinstance(data, dict):
            raise ValueError("product entry must be an object")
        if "id" not in data:
            raise ValueError("product id required")
        missing = [f for f in _REQUIRED_FIELDS if f not in data]
        if missing:
            raise ValueError(f"product fields missing: {', '.join(missing)}")
        category = str(data["category"])
        if category not in CATEGORIES:
            raise ValueError(f"unknown category: {category}")
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            description=str(data["description"]),
            price=str(data["price"]),
            image=str(data["image"]),
            category=category,
        )
