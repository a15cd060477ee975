"""
Application-level exceptions.

Scoring and hashing are pure, so the taxonomy is small: wrong input type,
a payload that cannot be canonicalized, and a wallet string rejected by the
caller-side format check. Each also subclasses the matching builtin so
callers catching TypeError / ValueError keep working.
"""

from __future__ import annotations


class SentriError(Exception):
    """Base class for all Sentri errors."""


class InvalidIdentifierError(SentriError, TypeError):
    """Raised when score() receives something other than a str."""


class CanonicalizationError(SentriError, ValueError):
    """Raised when a provenance payload cannot be serialized deterministically."""


class InvalidWalletFormatError(SentriError, ValueError):
    """Raised when a wallet string fails the caller-side format check."""
