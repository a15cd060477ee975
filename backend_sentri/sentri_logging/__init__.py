"""
Structured logging for Backend Sentri.

JSON logs with timestamp, wallet_id and event_type.
Use get_logger() in every module and bind_wallet() for per-wallet context.
"""

from backend_sentri.sentri_logging.logger import bind_wallet, get_logger, short_wallet

__all__ = ["bind_wallet", "get_logger", "short_wallet"]
