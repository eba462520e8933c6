"""Pytest fixtures for the storefront tests."""

import pytest

from amarna_store.app import create_app
from amarna_store.common.db import KeyValueStorage, create_session_factory
from amarna_store.common.services.gemini_service import GeminiService
from amarna_store.config import StoreConfig

from .fakes import FakeGeminiClient


@pytest.fixture
def storage(tmp_path):
    return KeyValueStorage(create_session_factory(f"sqlite:///{tmp_path / 'kv.db'}"))


@pytest.fixture
def store_config(tmp_path):
    return StoreConfig(
        secret_key="test-secret-key",
        admin_password="Ad123###",
        database_url=f"sqlite:///{tmp_path / 'store.db'}",
        form_relay_url="https://relay.test/f/abc",
        gemini_api_key="",
        gemini_model="gemini-2.5-flash",
        log_level="WARNING",
        http_timeout=5.0,
    )


@pytest.fixture
def gemini_client():
    return FakeGeminiClient(text="أهلاً! 🌴")


@pytest.fixture
def app(store_config, gemini_client):
    app = create_app(
        store_config,
        components={"gemini": GeminiService(api_key=None, client=gemini_client)},
    )
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
