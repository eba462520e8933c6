"""AI 功能 API：食譜產生與客服聊天。"""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import uuid4

from flask import Blueprint, current_app, jsonify, request, session

from ..services.visitor_state import VisitorState

api_bp = Blueprint("store_api", __name__, url_prefix="/api")


def _components() -> Dict[str, Any]:
    return current_app.extensions["store_components"]


def _payload() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _visitor() -> VisitorState:
    visitor_id = session.get("visitor_id")
    if not visitor_id:
        visitor_id = uuid4().hex
        session["visitor_id"] = visitor_id
    return _components()["visitors"].get(visitor_id)


def _known_visitor() -> Optional[VisitorState]:
    return _components()["visitors"].find(session.get("visitor_id"))


@api_bp.post("/recipe")
def generate_recipe():
    payload = _payload()
    date_type = str(payload.get("date_type", "سكري"))
    difficulty = str(payload.get("difficulty", "easy"))
    try:
        result = _components()["gemini"].generate_recipe(date_type, difficulty)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    if result.get("status") != "ok":
        return jsonify({"error": result.get("message")}), 502
    return jsonify(result)


@api_bp.get("/chat")
def chat_history():
    visitor = _known_visitor() or VisitorState()
    return jsonify({"messages": list(visitor.chat_history)})


@api_bp.post("/chat")
def send_chat_message():
    payload = _payload()
    message = str(payload.get("message", "")).strip()
    if not message:
        return jsonify({"error": "message required"}), 400

    visitor = _visitor()
    catalog = _components()["catalog"]
    prior_turns = list(visitor.chat_history)
    visitor.append_turn("user", message)
    reply = _components()["gemini"].chat(
        message,
        prior_turns,
        catalog.list_products(),
        catalog.get_settings(),
    )
    visitor.append_turn("bot", reply)
    return jsonify({"reply": reply, "messages": list(visitor.chat_history)})


@api_bp.delete("/chat")
def reset_chat():
    visitor = _visitor()
    visitor.reset_chat()
    return jsonify({"messages": list(visitor.chat_history)})
