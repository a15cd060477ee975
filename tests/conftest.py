"""
Pytest fixtures for Sentri tests. Each test gets a fresh in-memory compliance store
and a clean config environment.
"""

from __future__ import annotations

import pytest

CONFIG_ENV_VARS = (
    "API_HOST",
    "API_PORT",
    "SENTRI_LEDGER_LABEL",
    "COMPLIANCE_STORE_CAPACITY",
    "DASHBOARD_RECENT_LIMIT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Unset config variables so defaults apply unless a test sets them."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store():
    """Reset the process-wide store and return the fresh instance."""
    from backend_sentri.api_server import compliance_store

    compliance_store.reset_store_for_test()
    yield compliance_store.get_store()
    compliance_store.reset_store_for_test()


@pytest.fixture
def client(store):
    """FastAPI TestClient (runs lifespan). Depends on store so it starts empty."""
    from fastapi.testclient import TestClient

    from backend_sentri.api_server.server import app

    with TestClient(app) as c:
        yield c
