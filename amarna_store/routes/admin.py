"""管理後台路由：商品維護與商店設定。"""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request, session

from ..common.models import Product, StoreSettings
from ..common.services.logging import log_event
from ..services.admin_auth import LOGIN_ERROR_MESSAGE

admin_bp = Blueprint("store_admin", __name__, url_prefix="/admin")

SESSION_FLAG = "store_admin"
PRODUCT_FIELDS = ("name", "description", "price", "image", "category")


def _components() -> Dict[str, Any]:
    return current_app.extensions["store_components"]


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else request.form.to_dict()


def _is_authenticated() -> bool:
    return bool(session.get(SESSION_FLAG))


@admin_bp.before_request
def guard_private_routes():
    public = {
        "store_admin.login_submit",
        "store_admin.session_status",
    }
    if request.endpoint and request.endpoint not in public and not _is_authenticated():
        return jsonify({"error": "unauthorized"}), 401
    return None


@admin_bp.get("/session")
def session_status():
    return jsonify({"authenticated": _is_authenticated()})


@admin_bp.post("/login")
def login_submit():
    password = str(_payload().get("password", ""))
    if _components()["admin_auth"].verify(password):
        session[SESSION_FLAG] = True
        log_event("info", "admin.login")
        return jsonify({"status": "ok"})
    log_event("warning", "admin.login_rejected", remote_addr=request.remote_addr)
    return jsonify({"error": LOGIN_ERROR_MESSAGE}), 401


@admin_bp.post("/logout")
def logout():
    session.pop(SESSION_FLAG, None)
    return jsonify({"status": "ok"})


@admin_bp.get("/products")
def list_products():
    products = _components()["catalog"].list_products()
    return jsonify({"products": [p.to_dict() for p in products]})


@admin_bp.post("/products")
def create_product():
    payload = _payload()
    fields = {k: str(payload.get(k) or "").strip() for k in PRODUCT_FIELDS}
    missing = [k for k, v in fields.items() if not v]
    if missing:
        return jsonify({"error": f"missing fields: {', '.join(missing)}"}), 400
    try:
        product = _components()["catalog"].add_product(**fields)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"status": "ok", "product": product.to_dict()}), 201


@admin_bp.put("/products/<int:product_id>")
def update_product(product_id: int):
    catalog = _components()["catalog"]
    if catalog.get_product(product_id) is None:
        return jsonify({"error": "product not found"}), 404
    payload = dict(_payload())
    payload["id"] = product_id
    try:
        product = Product.from_dict(payload)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    catalog.update_product(product)
    return jsonify({"status": "ok", "product": product.to_dict()})


@admin_bp.delete("/products/<int:product_id>")
def delete_product(product_id: int):
    _components()["catalog"].delete_product(product_id)
    return jsonify({"status": "ok"})


@admin_bp.get("/settings")
def get_settings():
    settings = _components()["catalog"].get_settings()
    return jsonify({"status": "ok", "settings": settings.to_dict()})


@admin_bp.put("/settings")
def update_settings():
    payload = _payload()
    try:
        settings = StoreSettings.from_dict(payload.get("settings", payload))
        _components()["catalog"].update_settings(settings)
    except ValueError as exc:
        return jsonify({"status": "error", "message": str(exc)}), 400
    return jsonify(
        {
            "status": "ok",
            "message": "تم حفظ الإعدادات بنجاح",
            "settings": settings.to_dict(),
        }
    )
