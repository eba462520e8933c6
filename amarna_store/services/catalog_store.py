"""商品目錄與商店設定的儲存模組。"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..common.db import KeyValueStorage
from ..common.models import Product, StoreSettings, default_products, default_settings
from ..common.services.logging import log_event

PRODUCTS_KEY = "store_products"
SETTINGS_KEY = "store_settings"

logger = logging.getLogger(__name__)


class CatalogStore:
    """Owns the product list and the store-wide settings.

    Both collections are read from key-value storage once, at construction, and
    written back in full after every mutation. Anything unreadable in storage is
    replaced by the built-in defaults without surfacing an error. One lock covers
    id assignment, the list change and the write-back, since request threads
    share a single instance.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage
        self._lock = threading.Lock()
        self._products: List[Product] = self._load_products()
        self._settings: StoreSettings = self._load_settings()

    # Products -------------------------------------------------------------------

    def list_products(self) -> List[Product]:
        """目前所有商品（保持新增順序）。"""

        with self._lock:
            return [replace(p) for p in self._products]

    def get_product(self, product_id: int) -> Optional[Product]:
        with self._lock:
            for item in self._products:
                if item.id == product_id:
                    return replace(item)
        return None

    def add_product(
        self,
        *,
        name: str,
        description: str,
        price: str,
        image: str,
        category: str,
    ) -> Product:
        """Append a product; its id is one more than the largest id in use."""

        with self._lock:
            new_id = max((p.id for p in self._products), default=0) + 1
            product = Product.from_dict(
                {
                    "id": new_id,
                    "name": name,
                    "description": description,
                    "price": price,
                    "image": image,
                    "category": category,
                }
            )
            self._products.append(product)
            self._save_products()
        log_event("info", "catalog.product_added", product_id=new_id, name=name)
        return replace(product)

    def update_product(self, product: Product) -> None:
        """Replace the entry with the same id; unknown ids are ignored."""

        with self._lock:
            for i, entry in enumerate(self._products):
                if entry.id == product.id:
                    self._products[i] = replace(product)
                    self._save_products()
                    break
            else:
                return None
        log_event("info", "catalog.product_updated", product_id=product.id)
        return None

    def delete_product(self, product_id: int) -> None:
        with self._lock:
            remaining = [p for p in self._products if p.id != product_id]
            if len(remaining) == len(self._products):
                return None
            self._products = remaining
            self._save_products()
        log_event("info", "catalog.product_deleted", product_id=product_id)
        return None

    # Settings -------------------------------------------------------------------

    def get_settings(self) -> StoreSettings:
        with self._lock:
            return self._settings.copy()

    def update_settings(self, settings: StoreSettings) -> None:
        """Replace the settings wholesale. Raises ``ValueError`` on out-of-range values."""

        settings.validate()
        with self._lock:
            self._settings = settings.copy()
            self._save_settings()
        log_event(
            "info",
            "settings.updated",
            discount_active=settings.is_discount_active,
            discount_percentage=settings.discount_percentage,
        )

    # Persistence ----------------------------------------------------------------

    def _read(self, key: str) -> Optional[str]:
        try:
            return self._storage.get_item(key)
        except SQLAlchemyError as exc:
            logger.warning("讀取 %s 失敗，改用預設值: %s", key, exc)
            return None

    def _load_products(self) -> List[Product]:
        text = self._read(PRODUCTS_KEY)
        if not text:
            return default_products()
        try:
            payload = json.loads(text)
            if not isinstance(payload, list):
                raise ValueError("products payload must be an array")
            products = [Product.from_dict(item) for item in payload]
        except (ValueError, TypeError) as exc:
            logger.warning("商品資料格式錯誤，改用預設商品: %s", exc)
            return default_products()
        if len({p.id for p in products}) != len(products):
            logger.warning("商品 id 重複，改用預設商品")
            return default_products()
        return products

    def _load_settings(self) -> StoreSettings:
        text = self._read(SETTINGS_KEY)
        if not text:
            return default_settings()
        try:
            return StoreSettings.merged_over_defaults(json.loads(text))
        except (ValueError, TypeError) as exc:
            logger.warning("設定資料格式錯誤，改用預設設定: %s", exc)
            return default_settings()

    def _save_products(self) -> None:
        content = json.dumps([p.to_dict() for p in self._products], ensure_ascii=False)
        self._storage.set_item(PRODUCTS_KEY, content)

    def _save_settings(self) -> None:
        content = json.dumps(self._settings.to_dict(), ensure_ascii=False)
        self._storage.set_item(SETTINGS_KEY, content)
