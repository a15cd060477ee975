"""
Application settings.

Collects the env getters into one frozen Settings object for the API server,
entrypoint and store. Read fresh on every get_settings() call so tests can
monkeypatch the environment.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend_sentri.config.env import (
    get_api_host,
    get_api_port,
    get_ledger_label,
    get_log_level,
    get_recent_checks_limit,
    get_store_capacity,
)


@dataclass(frozen=True)
class Settings:
    api_host: str
    api_port: int
    log_level: str
    ledger_label: str
    store_capacity: int
    recent_checks_limit: int


def get_settings() -> Settings:
    """
    Return the current application settings.

    Raises:
        ValueError: when a numeric variable is set but malformed.
    """
    return Settings(
        api_host=get_api_host(),
        api_port=get_api_port(),
        log_level=get_log_level(),
        ledger_label=get_ledger_label(),
        store_capacity=get_store_capacity(),
        recent_checks_limit=get_recent_checks_limit(),
    )
