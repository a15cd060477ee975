"""
Pytest tests for the analytics pipeline (check_compliance) and wallet format checks.
"""

from __future__ import annotations

import pytest

from backend_sentri.analytics import check_compliance
from backend_sentri.core.exceptions import InvalidIdentifierError, InvalidWalletFormatError

KNOWN_WALLET_MIXED = "0x742d35Cc6634C0532925a3b844Bc9e7595f0bEb"
KNOWN_WALLET = KNOWN_WALLET_MIXED.lower()
KNOWN_TOKEN = "AR_5d7b26207880e0c7cfca5313afe72922aafb2374bac"


# --- check_compliance ---


def test_check_compliance_attaches_token_and_default_ledger():
    check = check_compliance(KNOWN_WALLET_MIXED)
    assert check.wallet == KNOWN_WALLET
    assert check.token == KNOWN_TOKEN
    assert check.ledger == "Arweave (mocked test write)"
    assert check.result.final_score == 19
    assert check.result.status.value == "BLOCKED"


def test_check_compliance_ledger_from_env(monkeypatch):
    monkeypatch.setenv("SENTRI_LEDGER_LABEL", "local dry run")
    assert check_compliance(KNOWN_WALLET).ledger == "local dry run"


def test_check_compliance_ledger_override_does_not_touch_token():
    check = check_compliance(KNOWN_WALLET, ledger_label="custom label")
    assert check.ledger == "custom label"
    assert check.token == KNOWN_TOKEN


def test_check_compliance_is_deterministic():
    first = check_compliance(KNOWN_WALLET_MIXED)
    second = check_compliance("  " + KNOWN_WALLET + "  ")
    assert first.result.decision_fields() == second.result.decision_fields()
    assert first.provenance == second.provenance


def test_check_compliance_to_dict():
    d = check_compliance(KNOWN_WALLET).to_dict()
    assert d["wallet"] == KNOWN_WALLET
    assert d["token"] == KNOWN_TOKEN
    assert d["content_hash"].startswith(KNOWN_TOKEN[3:])
    assert d["ledger"]
    assert "payload" not in d
    d2 = check_compliance(KNOWN_WALLET).to_dict(include_payload=True)
    assert d2["payload"]["wallet"] == KNOWN_WALLET
    assert d2["payload"]["deterministicHash"] == d2["content_hash"]


def test_check_compliance_rejects_non_string():
    with pytest.raises(InvalidIdentifierError):
        check_compliance(42)


def test_check_compliance_accepts_empty_string():
    check = check_compliance("")
    assert check.wallet == ""
    assert check.token == "AR_23d2d3994a5843aadbe8cf216359df01117273ac4eb"


# --- wallet format ---


@pytest.mark.parametrize(
    "wallet,expected",
    [
        (KNOWN_WALLET_MIXED, True),  # 39 hex chars: fails the strict pattern, passes on "0x"
        ("0x" + "a" * 40, True),
        ("  0X" + "A" * 40 + "  ", True),
        ("0x8ba1f109551bD432803012645Hac136c22C1729", True),
        ("abc0xdef", True),
        ("0x", True),
        ("not-a-wallet", False),
        ("", False),
        ("   ", False),
        (None, False),
        (123, False),
    ],
)
def test_is_valid_wallet(wallet, expected):
    from backend_sentri.utils.wallet_utils import is_valid_wallet

    assert is_valid_wallet(wallet) is expected


def test_require_valid_wallet():
    from backend_sentri.utils.wallet_utils import require_valid_wallet

    assert require_valid_wallet("  0xABC ") == "0xabc"
    with pytest.raises(InvalidWalletFormatError, match="Invalid wallet address format"):
        require_valid_wallet("bitcoin1")
    with pytest.raises(ValueError):
        require_valid_wallet(None)
