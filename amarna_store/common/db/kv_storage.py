"""Durable string key-value storage on top of the ``kv_entry`` table."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ..models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """Origin-wide key/value store; values are opaque strings (usually JSON)."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        """Best-effort write; failures are logged and not raised."""
        try:
            with self._session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                if entry:
                    entry.value = value
                else:
                    session.add(KeyValueEntry(key=key, value=value))
        except SQLAlchemyError as exc:
            logger.error("kv write failed for %s: %s", key, exc)

    def remove_item(self, key: str) -> None:
        try:
            with self._session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                if entry:
                    session.delete(entry)
        except SQLAlchemyError as exc:
            logger.error("kv delete failed for %s: %s", key, exc)
