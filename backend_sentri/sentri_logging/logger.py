"""
Structured JSON logging: timestamp, wallet_id, event_type.

structlog with ISO timestamps, log level and stable keys so API, pipeline and
CLI output can be aggregated the same way. All modules use get_logger() and
log a snake_case event_type plus keyword context.

Uses only Python stdlib logging and structlog; no backend_sentri imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# JSON output by default (LOG_FORMAT=json); anything else renders for the console
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

# Wallet prefix kept in log lines; full addresses stay out of aggregated logs
WALLET_LOG_CHARS = 16


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601, UTC)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_structlog() -> None:
    """Configure structlog once at import: JSON, timestamp, level, event_type."""
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if LOG_FORMAT == "json":
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        # stderr keeps stdout clean for the CLI's JSON lines
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

    Log with event_type (first arg) and keyword context; bind the wallet once
    with bind_wallet() so every line of a check carries the same wallet_id:
        logger = get_logger(__name__)
        bind_wallet(logger, addr).info("compliance_check_done", final_score=85, status="APPROVED")
    Output (JSON): {"event_type": "compliance_check_done", "wallet_id": "0x742d35cc6634c0...",
                    "final_score": 85, ..., "timestamp": "...", "level": "info", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)


def short_wallet(wallet: str) -> str:
    """Wallet as it appears in logs: the first WALLET_LOG_CHARS characters, then '...'."""
    if len(wallet) <= WALLET_LOG_CHARS:
        return wallet
    return wallet[:WALLET_LOG_CHARS] + "..."


def bind_wallet(logger: structlog.BoundLogger, wallet: str) -> structlog.BoundLogger:
    """Return logger with wallet_id (shortened) bound to all subsequent log calls."""
    return logger.bind(wallet_id=short_wallet(wallet))
