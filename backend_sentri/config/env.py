"""
Environment variable loading for Sentri.

- API_HOST / API_PORT: HTTP bind address (default 0.0.0.0:8000)
- LOG_LEVEL: structlog filter level (default INFO)
- SENTRI_LEDGER_LABEL: storage-medium label attached to each check
- COMPLIANCE_STORE_CAPACITY: max checks kept in memory (default 100)
- DASHBOARD_RECENT_LIMIT: recent checks returned by the dashboard (default 10)
- Loads .env from project root when available.

Nothing here is ever an input to scoring or hashing.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is backend_sentri/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_BACKEND_DIR = _CONFIG_DIR.parent
_ROOT = _BACKEND_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LEDGER_LABEL = "Arweave (mocked test write)"
DEFAULT_STORE_CAPACITY = 100
DEFAULT_RECENT_LIMIT = 10


def load_sentri_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides set variables."""
    load_dotenv(_ENV_PATH, override=False)


def _get_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def get_api_host() -> str:
    load_sentri_env()
    return (os.getenv("API_HOST") or DEFAULT_API_HOST).strip() or DEFAULT_API_HOST


def get_api_port() -> int:
    load_sentri_env()
    return _get_int("API_PORT", DEFAULT_API_PORT, minimum=1)


def get_log_level() -> str:
    load_sentri_env()
    return (os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL


def get_ledger_label() -> str:
    """
    Return the storage-medium label attached to checks.
    Advisory metadata only; no write happens anywhere.
    """
    load_sentri_env()
    return (os.getenv("SENTRI_LEDGER_LABEL") or DEFAULT_LEDGER_LABEL).strip() or DEFAULT_LEDGER_LABEL


def get_store_capacity() -> int:
    load_sentri_env()
    return _get_int("COMPLIANCE_STORE_CAPACITY", DEFAULT_STORE_CAPACITY, minimum=1)


def get_recent_checks_limit() -> int:
    load_sentri_env()
    return _get_int("DASHBOARD_RECENT_LIMIT", DEFAULT_RECENT_LIMIT, minimum=1)
