"""訂單與聯絡表單：轉送至第三方表單服務（單次嘗試，不重試）。"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from ..common.models import StoreSettings
from ..common.services.logging import log_event
from .cart_store import CartStore
from .pricing import CheckoutQuote, format_amount, quote_checkout

logger = logging.getLogger(__name__)

STORE_NAME = "تمور العمارنة"
ORDER_REJECTED_MESSAGE = "حدث خطأ أثناء إرسال الطلب. يرجى المحاولة مرة أخرى."
ORDER_NETWORK_MESSAGE = "حدث خطأ أثناء إرسال الطلب. تأكد من اتصالك بالإنترنت."
EMPTY_CART_MESSAGE = "سلة التسوق فارغة"


@dataclass(frozen=True)
class RelayResult:
    success: bool
    error_reason: Optional[str] = None


class FormRelayClient:
    """POSTs multipart form fields to the relay endpoint and reports the outcome."""

    def __init__(self, endpoint_url: str, timeout: float = 15.0) -> None:
        self._endpoint_url = endpoint_url
        self._timeout = timeout

    def post_form(self, fields: Dict[str, str]) -> RelayResult:
        # (None, value) tuples force multipart/form-data without file parts
        files = {name: (None, value) for name, value in fields.items()}
        try:
            response = requests.post(
                self._endpoint_url,
                files=files,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.error("表單轉送連線失敗: %s", exc)
            return RelayResult(success=False, error_reason="network")
        if response.ok:
            return RelayResult(success=True)
        logger.error("表單轉送被拒絕: HTTP %s %s", response.status_code, response.text[:300])
        return RelayResult(success=False, error_reason=f"http_{response.status_code}")


@dataclass
class CustomerDetails:
    name: str
    phone: str
    city: str
    address: str

    @classmethod
    def from_payload(cls, payload: Dict) -> "CustomerDetails":
        values = {k: str(payload.get(k) or "").strip() for k in ("name", "phone", "city", "address")}
        missing = [k for k, v in values.items() if not v]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")
        return cls(**values)


@dataclass(frozen=True)
class OrderOutcome:
    success: bool
    order_number: Optional[str] = None
    quote: Optional[CheckoutQuote] = None
    error_message: Optional[str] = None


def _generate_order_number() -> str:
    return str(random.randint(10000, 99999))


class OrderService:
    """Builds the order form for the current cart and submits it once."""

    def __init__(self, relay: FormRelayClient, number_factory=_generate_order_number) -> None:
        self._relay = relay
        self._number_factory = number_factory

    @staticmethod
    def build_fields(
        order_number: str,
        cart: CartStore,
        quote: CheckoutQuote,
        customer: CustomerDetails,
    ) -> Dict[str, str]:
        lines = "\n".join(
            f"- {it.name} | الكمية: {it.quantity} | السعر: {it.price}" for it in cart.items
        )
        return {
            "OrderNumber": f"#{order_number}",
            "CustomerName": customer.name,
            "Phone": customer.phone,
            "City": customer.city,
            "Address": customer.address,
            "Products": lines,
            "Subtotal": format_amount(quote.subtotal),
            "DeliveryFee": format_amount(quote.delivery_fee),
            "Discount": format_amount(quote.discount_amount),
            "TotalAmount": format_amount(quote.final_total),
            "_subject": f"طلب جديد #{order_number}: {customer.name} - {STORE_NAME}",
        }

    def submit_order(
        self,
        cart: CartStore,
        settings: StoreSettings,
        customer: CustomerDetails,
    ) -> OrderOutcome:
        """Submit the order; on success the cart is cleared in place."""

        if cart.is_empty():
            return OrderOutcome(success=False, error_message=EMPTY_CART_MESSAGE)
        order_number = self._number_factory()
        quote = quote_checkout(cart.total_price, settings, customer.city)
        result = self._relay.post_form(self.build_fields(order_number, cart, quote, customer))
        if not result.success:
            log_event("error", "order.failed", order_number=order_number, reason=result.error_reason)
            message = ORDER_NETWORK_MESSAGE if result.error_reason == "network" else ORDER_REJECTED_MESSAGE
            return OrderOutcome(success=False, quote=quote, error_message=message)
        log_event(
            "info",
            "order.submitted",
            order_number=order_number,
            items=cart.total_items,
            total=str(quote.final_total),
        )
        cart.clear_cart()
        return OrderOutcome(success=True, order_number=order_number, quote=quote)


class ContactStatus:
    SUCCESS = "success"
    ERROR = "error"


class ContactService:
    FIELDS = ("name", "email", "phone", "message")

    def __init__(self, relay: FormRelayClient) -> None:
        self._relay = relay

    def submit(self, payload: Dict) -> str:
        """Returns the final :class:`ContactStatus` (``success`` or ``error``)."""

        fields = {k: str(payload.get(k) or "").strip() for k in self.FIELDS}
        if not fields["name"] or not fields["email"] or not fields["message"]:
            raise ValueError("name, email and message are required")
        log_event("info", "contact.submitting", email=fields["email"])
        result = self._relay.post_form(fields)
        if result.success:
            return ContactStatus.SUCCESS
        log_event("error", "contact.failed", reason=result.error_reason)
        return ContactStatus.ERROR
