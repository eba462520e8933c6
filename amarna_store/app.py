"""تمور العمارنة 線上商店 Flask 應用。"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify

from .common.db import KeyValueStorage, create_session_factory
from .common.services.gemini_service import GeminiService
from .config import StoreConfig
from .routes import admin, api, user
from .services import (
    AdminAuthenticator,
    CatalogStore,
    ContactService,
    FormRelayClient,
    OrderService,
    VisitorRegistry,
)


def build_components(config: StoreConfig) -> Dict[str, Any]:
    session_factory = create_session_factory(config.database_url)
    relay = FormRelayClient(config.form_relay_url, timeout=config.http_timeout)
    return {
        "catalog": CatalogStore(KeyValueStorage(session_factory)),
        "visitors": VisitorRegistry(),
        "order_service": OrderService(relay),
        "contact_service": ContactService(relay),
        "gemini": GeminiService(api_key=config.gemini_api_key, llm_model_name=config.gemini_model),
        "admin_auth": AdminAuthenticator(config.admin_password),
    }


def create_app(config: Optional[StoreConfig] = None, components: Optional[Dict[str, Any]] = None) -> Flask:
    config = config or StoreConfig.load()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = Flask(__name__)
    app.config["SECRET_KEY"] = config.secret_key
    app.config["STORE_CONFIG"] = config
    app.json.ensure_ascii = False

    resolved = build_components(config)
    resolved.update(components or {})
    app.extensions["store_components"] = resolved

    app.register_blueprint(user.user_bp)
    app.register_blueprint(admin.admin_bp)
    app.register_blueprint(api.api_bp)

    @app.errorhandler(404)
    def not_found(_exc):
        return jsonify({"error": "الصفحة غير موجودة"}), 404

    return app


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=6055, debug=False)


if __name__ == "__main__":
    main()
