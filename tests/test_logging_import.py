"""
Test that sentri_logging can be imported without circular import and logger works.
"""

from __future__ import annotations

from structlog.testing import capture_logs


def test_logging_import():
    """Import get_logger from sentri_logging and use the logger."""
    from backend_sentri.sentri_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_short_wallet():
    from backend_sentri.sentri_logging import short_wallet

    assert short_wallet("0xabc") == "0xabc"
    assert short_wallet("0x" + "ab" * 7) == "0x" + "ab" * 7
    assert short_wallet("0x" + "ab" * 20) == "0xababababababab..."


def test_bind_wallet_adds_short_wallet_id():
    from backend_sentri.sentri_logging import bind_wallet, get_logger

    with capture_logs() as logs:
        bind_wallet(get_logger("test"), "0x" + "ab" * 20).info("bound_message", final_score=42)
    assert len(logs) == 1
    assert logs[0]["event"] == "bound_message"
    assert logs[0]["wallet_id"] == "0xababababababab..."
    assert logs[0]["final_score"] == 42
