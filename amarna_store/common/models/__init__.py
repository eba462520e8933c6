from .cart_item import CartItem
from .defaults import default_products, default_settings
from .kv_entry import KeyValueEntry
from .product import CATEGORIES, Product
from .store_settings import DEFAULT_DELIVERY_RATES, RATE_KEYS, StoreSettings

__all__ = [
    "CATEGORIES",
    "CartItem",
    "DEFAULT_DELIVERY_RATES",
    "KeyValueEntry",
    "Product",
    "RATE_KEYS",
    "StoreSettings",
    "default_products",
    "default_settings",
]
