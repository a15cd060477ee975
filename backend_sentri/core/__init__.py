"""
Core utilities — shared exceptions and cross-cutting concerns.
"""

from backend_sentri.core.exceptions import (
    CanonicalizationError,
    InvalidIdentifierError,
    InvalidWalletFormatError,
    SentriError,
)

__all__ = [
    "CanonicalizationError",
    "InvalidIdentifierError",
    "InvalidWalletFormatError",
    "SentriError",
]
