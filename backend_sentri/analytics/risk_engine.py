"""
Risk engine: deterministic compliance scoring for a wallet identifier.

Three agents (sanctions, behavioral, reputation) share one keyed hash that maps
the normalized identifier to 0-100. Their weighted sum is rounded into the
final score, which alone decides the status:

    final < 30        -> BLOCKED
    30 <= final < 70  -> WARNING
    final >= 70       -> APPROVED

Every field except created_at is a pure function of the identifier. The hash
runs over UTF-16 code units with explicit 32-bit signed wraparound so the
output matches scores already issued by the JavaScript engine bit for bit.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from backend_sentri.core.exceptions import InvalidIdentifierError
from backend_sentri.sentri_logging import bind_wallet, get_logger

logger = get_logger(__name__)

INT32_MASK = 0xFFFFFFFF
INT32_SIGN_BIT = 0x80000000
INT32_MODULUS = 0x100000000
HASH_RANGE = 101  # abs(acc) % 101 -> 0..100

# ECMAScript trim set; bare str.strip() also eats \x1c-\x1f and \x85 but keeps \ufeff.
IDENTIFIER_WHITESPACE = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005"
    "\u2006\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

SCORE_MIN = 0
SCORE_MAX = 100
BLOCKED_BELOW = 30
APPROVED_FROM = 70


class ComplianceStatus(str, Enum):
    BLOCKED = "BLOCKED"
    WARNING = "WARNING"
    APPROVED = "APPROVED"


@dataclass(frozen=True)
class Agent:
    """One weighted scoring aspect: a name, a hash key and its share of the final score."""

    name: str
    key: int
    weight: float


# Order matters: aggregation sums in this order, same as the reference engine.
AGENTS: tuple[Agent, ...] = (
    Agent(name="sanctions", key=11, weight=0.5),
    Agent(name="behavioral", key=29, weight=0.3),
    Agent(name="reputation", key=53, weight=0.2),
)


def to_int32(value: int) -> int:
    """Wrap an unbounded int into the signed 32-bit range (two's complement)."""
    value &= INT32_MASK
    if value & INT32_SIGN_BIT:
        return value - INT32_MODULUS
    return value


def _utf16_code_units(text: str) -> Iterator[int]:
    # Astral characters contribute two surrogate units, lone surrogates pass through.
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def accumulate(text: str, key: int) -> int:
    """
    Return the signed 32-bit accumulator for text under key.

    acc = int32((acc << 5) - acc + unit + key) for each UTF-16 code unit.
    """
    acc = 0
    for unit in _utf16_code_units(text):
        acc = to_int32((acc << 5) - acc + unit + key)
    return acc


def hash_to_range(text: str, key: int) -> int:
    """Map text to an integer in [0, 100] under the given key."""
    return abs(accumulate(text, key)) % HASH_RANGE


def normalize_identifier(identifier: Any) -> str:
    """
    Trim surrounding whitespace and lowercase.

    Raises:
        InvalidIdentifierError: identifier is not a str. Never coerced.
    """
    if not isinstance(identifier, str):
        raise InvalidIdentifierError(
            f"identifier must be str, got {type(identifier).__name__}"
        )
    return identifier.strip(IDENTIFIER_WHITESPACE).lower()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero, on the exact binary value."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def weighted_score(sub_scores: dict[str, int]) -> float:
    """Weighted sum of sub-scores keyed by agent name (unrounded)."""
    return sum(agent.weight * sub_scores[agent.name] for agent in AGENTS)


def classify_status(final_score: int) -> ComplianceStatus:
    if final_score < BLOCKED_BELOW:
        return ComplianceStatus.BLOCKED
    if final_score < APPROVED_FROM:
        return ComplianceStatus.WARNING
    return ComplianceStatus.APPROVED


@dataclass(frozen=True)
class ScoreResult:
    """
    Result of one evaluation.

    created_at is metadata only; it never feeds scoring, canonicalization or hashing.
    """

    identifier: str
    sanctions_score: int
    behavioral_score: int
    reputation_score: int
    final_score: int
    status: ComplianceStatus
    created_at: str

    @property
    def sub_scores(self) -> dict[str, int]:
        return {
            "sanctions": self.sanctions_score,
            "behavioral": self.behavioral_score,
            "reputation": self.reputation_score,
        }

    def decision_fields(self) -> tuple[str, int, int, int, int, str]:
        """Everything except created_at; equal tuples mean equal decisions."""
        return (
            self.identifier,
            self.sanctions_score,
            self.behavioral_score,
            self.reputation_score,
            self.final_score,
            self.status.value,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "wallet": self.identifier,
            "sanctions_score": self.sanctions_score,
            "behavioral_score": self.behavioral_score,
            "reputation_score": self.reputation_score,
            "final_score": self.final_score,
            "status": self.status.value,
            "created_at": self.created_at,
        }


def score(identifier: str) -> ScoreResult:
    """
    Score a wallet identifier.

    Any str is accepted, including "". The identifier is normalized (strip, lower)
    before hashing, so case and surrounding whitespace never change the result.

    Raises:
        InvalidIdentifierError: identifier is not a str.
    """
    normalized = normalize_identifier(identifier)

    sub_scores = {agent.name: hash_to_range(normalized, agent.key) for agent in AGENTS}
    raw = weighted_score(sub_scores)
    final_score = max(SCORE_MIN, min(SCORE_MAX, round_half_up(raw)))
    status = classify_status(final_score)

    bind_wallet(logger, normalized).debug(
        "risk_engine_result",
        sub_scores=sub_scores,
        final_score=final_score,
        status=status.value,
    )
    return ScoreResult(
        identifier=normalized,
        sanctions_score=sub_scores["sanctions"],
        behavioral_score=sub_scores["behavioral"],
        reputation_score=sub_scores["reputation"],
        final_score=final_score,
        status=status,
        created_at=datetime.now(timezone.utc).isoformat(),
    )
