"""
Analytics pipeline: run a full compliance check (score -> provenance -> label).

Single entrypoint for the API server and the batch CLI: score the wallet,
build its provenance record, attach the token and the ledger label. The
label is advisory metadata; nothing is written anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from backend_sentri.analytics.provenance import ProvenanceRecord, build_record
from backend_sentri.analytics.risk_engine import ScoreResult, score
from backend_sentri.config.env import get_ledger_label
from backend_sentri.sentri_logging import bind_wallet, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ComplianceCheck:
    """A score result with its provenance record and ledger label attached."""

    result: ScoreResult
    provenance: ProvenanceRecord
    ledger: str

    @property
    def wallet(self) -> str:
        return self.result.identifier

    @property
    def token(self) -> str:
        return self.provenance.token

    def to_dict(self, *, include_payload: bool = False) -> dict[str, Any]:
        out = self.result.to_dict()
        out["token"] = self.provenance.token
        out["content_hash"] = self.provenance.payload.content_hash
        out["ledger"] = self.ledger
        if include_payload:
            out["payload"] = self.provenance.payload.to_dict()
        return out


def check_compliance(wallet: str, *, ledger_label: str | None = None) -> ComplianceCheck:
    """
    Score wallet and attach its deterministic provenance token.

    Same wallet (after strip/lower) -> same scores, status, content hash and token.
    Only result.created_at differs between calls.

    Raises:
        InvalidIdentifierError: wallet is not a str.
    """
    result = score(wallet)
    provenance = build_record(result)
    ledger = ledger_label if ledger_label is not None else get_ledger_label()

    bind_wallet(logger, result.identifier).info(
        "compliance_check_done",
        final_score=result.final_score,
        status=result.status.value,
        token=provenance.token,
    )
    return ComplianceCheck(result=result, provenance=provenance, ledger=ledger)
