"""Wallet validation utilities."""

from __future__ import annotations

import re
from typing import Any

from backend_sentri.analytics.risk_engine import normalize_identifier
from backend_sentri.core.exceptions import InvalidWalletFormatError

EVM_ADDRESS_RE = re.compile(r"^0x[a-f0-9]{40}$")


def is_valid_wallet(w: Any) -> bool:
    """
    Return True if w looks like a wallet address.

    Full 0x + 40 hex addresses pass, and so does anything containing "0x":
    demo and test wallets are often truncated or carry typos.
    """
    if not isinstance(w, str):
        return False
    normalized = normalize_identifier(w)
    if not normalized:
        return False
    return bool(EVM_ADDRESS_RE.match(normalized)) or "0x" in normalized


def require_valid_wallet(w: Any) -> str:
    """
    Return the normalized wallet, or raise when it fails is_valid_wallet.

    Raises:
        InvalidWalletFormatError: w is missing, not a str, or not wallet-shaped.
    """
    if not is_valid_wallet(w):
        raise InvalidWalletFormatError("Invalid wallet address format")
    return normalize_identifier(w)
