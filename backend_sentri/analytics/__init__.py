"""
Sentri analytics engine.

Pure scoring core (risk_engine), provenance hashing (provenance) and the
caller-side composition used by the API and CLI (analytics_pipeline).
"""

from backend_sentri.analytics.risk_engine import (
    AGENTS,
    ComplianceStatus,
    ScoreResult,
    classify_status,
    hash_to_range,
    score,
)
from backend_sentri.analytics.provenance import (
    ProvenancePayload,
    ProvenanceRecord,
    build_payload,
    build_record,
    token_from_payload,
    tokens_match,
    verify_token,
)
from backend_sentri.analytics.analytics_pipeline import ComplianceCheck, check_compliance

__all__ = [
    "AGENTS",
    "ComplianceStatus",
    "ScoreResult",
    "classify_status",
    "hash_to_range",
    "score",
    "ProvenancePayload",
    "ProvenanceRecord",
    "build_payload",
    "build_record",
    "token_from_payload",
    "tokens_match",
    "verify_token",
    "ComplianceCheck",
    "check_compliance",
]
