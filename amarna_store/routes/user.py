"""前台路由：商品、購物車、結帳與聯絡表單。"""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import uuid4

from flask import Blueprint, current_app, jsonify, make_response, request, session

from ..common.models import CATEGORIES
from ..services.cart_store import CartStore
from ..services.form_relay import ContactStatus, CustomerDetails
from ..services.pricing import LOCALITIES, OTHER_LOCALITIES, format_amount, quote_checkout
from ..services.visitor_state import VisitorState

user_bp = Blueprint("store", __name__)

CONSENT_COOKIE = "cookieConsent"
PRODUCT_NOT_FOUND_MESSAGE = "المنتج غير موجود"
CONTACT_ERROR_MESSAGE = "حدث خطأ أثناء إرسال الرسالة. يرجى المحاولة مرة أخرى."


def _components() -> Dict[str, Any]:
    return current_app.extensions["store_components"]


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else request.form.to_dict()


def _visitor() -> VisitorState:
    visitor_id = session.get("visitor_id")
    if not visitor_id:
        visitor_id = uuid4().hex
        session["visitor_id"] = visitor_id
    return _components()["visitors"].get(visitor_id)


def _known_visitor() -> Optional[VisitorState]:
    return _components()["visitors"].find(session.get("visitor_id"))


def _whole_number(value: Any) -> Optional[int]:
    """JSON ints or form digit strings; floats and bools are rejected."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return None


def _cart_view(cart: CartStore) -> Dict[str, Any]:
    return {
        "items": cart.to_dicts(),
        "total_items": cart.total_items,
        "total_price": format_amount(cart.total_price),
    }


@user_bp.get("/")
def storefront_home():
    catalog = _components()["catalog"]
    visitor = _known_visitor()
    settings = catalog.get_settings()
    return jsonify(
        {
            "products": [p.to_dict() for p in catalog.list_products()],
            "categories": list(CATEGORIES),
            "discount": {
                "active": settings.is_discount_active,
                "percentage": settings.discount_percentage,
            },
            "cart_items": visitor.cart.total_items if visitor else 0,
            "consent": request.cookies.get(CONSENT_COOKIE) == "true",
        }
    )


@user_bp.get("/products")
def list_products():
    category = request.args.get("category", "").strip()
    if category and category not in CATEGORIES:
        return jsonify({"error": f"unknown category: {category}"}), 400
    products = _components()["catalog"].list_products()
    if category:
        products = [p for p in products if p.category == category]
    return jsonify({"products": [p.to_dict() for p in products]})


@user_bp.get("/localities")
def list_localities():
    return jsonify({"localities": list(LOCALITIES) + [OTHER_LOCALITIES]})


@user_bp.get("/cart")
def view_cart():
    visitor = _known_visitor()
    return jsonify(_cart_view(visitor.cart if visitor else CartStore()))


@user_bp.post("/cart/items")
def add_cart_item():
    payload = _payload()
    product_id = _whole_number(payload.get("product_id"))
    if product_id is None:
        return jsonify({"error": "product_id required"}), 400
    product = _components()["catalog"].get_product(product_id)
    if product is None:
        return jsonify({"error": PRODUCT_NOT_FOUND_MESSAGE}), 404
    cart = _visitor().cart
    cart.add_to_cart(product)
    body = _cart_view(cart)
    body["message"] = f'تم إضافة "{product.name}" إلى السلة'
    return jsonify(body)


@user_bp.patch("/cart/items/<int:product_id>")
def update_cart_item(product_id: int):
    quantity = _whole_number(_payload().get("quantity"))
    if quantity is None:
        return jsonify({"error": "quantity must be an integer"}), 400
    cart = _visitor().cart
    cart.update_quantity(product_id, quantity)
    return jsonify(_cart_view(cart))


@user_bp.delete("/cart/items/<int:product_id>")
def remove_cart_item(product_id: int):
    cart = _visitor().cart
    cart.remove_from_cart(product_id)
    return jsonify(_cart_view(cart))


@user_bp.delete("/cart")
def clear_cart():
    cart = _visitor().cart
    cart.clear_cart()
    return jsonify(_cart_view(cart))


@user_bp.post("/checkout/quote")
def checkout_quote():
    city = str(_payload().get("city") or next(iter(LOCALITIES)))
    settings = _components()["catalog"].get_settings()
    visitor = _known_visitor()
    cart = visitor.cart if visitor else CartStore()
    quote = quote_checkout(cart.total_price, settings, city)
    body = quote.to_dict()
    body["city"] = city
    body["discount_active"] = settings.is_discount_active
    body["discount_percentage"] = settings.discount_percentage
    return jsonify(body)


@user_bp.post("/checkout")
def checkout():
    try:
        customer = CustomerDetails.from_payload(_payload())
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    settings = _components()["catalog"].get_settings()
    outcome = _components()["order_service"].submit_order(_visitor().cart, settings, customer)
    if not outcome.success:
        status = 400 if outcome.quote is None else 502
        return jsonify({"error": outcome.error_message}), status
    return jsonify(
        {
            "status": "ok",
            "order_number": outcome.order_number,
            "totals": outcome.quote.to_dict(),
        }
    )


@user_bp.post("/contact")
def contact():
    try:
        status = _components()["contact_service"].submit(_payload())
    except ValueError as exc:
        return jsonify({"status": "error", "error": str(exc)}), 400
    if status != ContactStatus.SUCCESS:
        return jsonify({"status": status, "error": CONTACT_ERROR_MESSAGE}), 502
    return jsonify({"status": status})


@user_bp.get("/consent")
def consent_status():
    return jsonify({"consent": request.cookies.get(CONSENT_COOKIE) == "true"})


@user_bp.post("/consent")
def accept_consent():
    response = make_response(jsonify({"consent": True}))
    response.set_cookie(CONSENT_COOKIE, "true", max_age=365 * 24 * 3600, samesite="Lax")
    return response
