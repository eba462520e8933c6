"""商店應用設定模組。"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class StoreConfig:
    """封裝商店服務的設定值。"""

    secret_key: str
    admin_password: str
    database_url: str
    form_relay_url: str
    gemini_api_key: str
    gemini_model: str
    log_level: str
    http_timeout: float

    @classmethod
    def load(cls) -> "StoreConfig":
        """從環境變數（含 .env）建構設定。"""

        load_dotenv()
        default_db = f"sqlite:///{cls._default_data_dir() / 'store.db'}"
        timeout_raw = os.environ.get("HTTP_TIMEOUT", "15")
        try:
            http_timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"HTTP_TIMEOUT must be a number, got {timeout_raw!r}") from None

        return cls(
            secret_key=os.environ.get("STORE_SECRET_KEY", "amarna-store-dev"),
            admin_password=os.environ.get("STORE_ADMIN_PASS", "Ad123###"),
            database_url=os.environ.get("DATABASE_URL", default_db),
            form_relay_url=os.environ.get("FORM_RELAY_URL", "https://formspree.io/f/xkglkljq"),
            gemini_api_key=os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY", ""),
            gemini_model=os.environ.get("GEMINI_LLM", "gemini-2.5-flash"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            http_timeout=http_timeout,
        )

    @staticmethod
    def _default_data_dir() -> Path:
        return Path(__file__).resolve().parent.parent / "data"
