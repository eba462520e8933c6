"""商店服務模組入口。"""

from .admin_auth import AdminAuthenticator
from .cart_store import CartStore, parse_price_amount
from .catalog_store import CatalogStore
from .form_relay import ContactService, FormRelayClient, OrderService
from .visitor_state import VisitorRegistry

__all__ = [
    "AdminAuthenticator",
    "CartStore",
    "CatalogStore",
    "ContactService",
    "FormRelayClient",
    "OrderService",
    "VisitorRegistry",
    "parse_price_amount",
]
