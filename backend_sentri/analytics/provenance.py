"""
Provenance: canonical payload, SHA-256 content hash and AR_ token for a ScoreResult.

Rules:
- The payload covers a fixed field set: protocol tag, wallet, the three
  sub-scores, finalScore and status. created_at is never included.
- Serialization is canonical JSON: sorted keys, compact separators, UTF-8,
  unicode preserved, no NaN/Infinity. Unpaired surrogates are written as
  lowercase \\uXXXX escapes so every identifier has a UTF-8 form.
- content_hash is attached to the payload but is not part of its own input.
- token = "AR_" + first 43 hex chars of content_hash.

Wire keys are camelCase because tokens issued before this service existed were
computed over exactly these keys; renaming any of them changes every token.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import re
from dataclasses import dataclass
from typing import Any

from backend_sentri.analytics.risk_engine import ScoreResult
from backend_sentri.core.exceptions import CanonicalizationError
from backend_sentri.sentri_logging import bind_wallet, get_logger

logger = get_logger(__name__)

PROTOCOL_TAG = "SentriAI"
TOKEN_PREFIX = "AR_"
TOKEN_HASH_CHARS = 43
TOKEN_LENGTH = len(TOKEN_PREFIX) + TOKEN_HASH_CHARS

_SURROGATE_RE = re.compile("[%s-%s]" % (chr(0xD800), chr(0xDFFF)))


def escape_lone_surrogates(text: str) -> str:
    """
    Replace unpaired UTF-16 surrogates in text with "\\uXXXX" (lowercase hex).

    Adjacent high/low halves are joined into one character first, so only
    surrogates that cannot form a pair are escaped.
    """
    if not _SURROGATE_RE.search(text):
        return text
    text = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
    return _SURROGATE_RE.sub(lambda m: "\\u%04x" % ord(m.group()), text)


def canonical_dumps(obj: Any) -> str:
    """Return a canonical JSON string for obj (sorted keys, no whitespace, unicode kept)."""
    try:
        text = json.dumps(
            obj,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise CanonicalizationError(f"canonical_dumps: non-serializable input: {e}") from None
    # surrogates only occur inside JSON strings, where the escape is valid
    return escape_lone_surrogates(text)


def sha256_hex(text: str) -> str:
    """Return SHA-256 hex digest of UTF-8 encoded text."""
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CanonicalizationError(f"sha256_hex: text is not valid UTF-8: {e}") from None
    return hashlib.sha256(data).hexdigest()

@dataclass(frozen=True)
class ProvenancePayload:
    protocol: str
    wallet: str
    sanctions_score: int
    behavioral_score: int
    reputation_score: int
    final_score: int
    status: str
    content_hash: str

    def canonical_fields(self) -> dict[str, Any]:
        """The hashed document, keyed by wire name. Excludes content_hash."""
        return {
            "protocol": self.protocol,
            "wallet": self.wallet,
            "sanctionsScore": self.sanctions_score,
            "behavioralScore": self.behavioral_score,
            "reputationScore": self.reputation_score,
            "finalScore": self.final_score,
            "status": self.status,
        }

    def to_dict(self) -> dict[str, Any]:
        out = self.canonical_fields()
        out["deterministicHash"] = self.content_hash
        return out


@dataclass(frozen=True)
class ProvenanceRecord:
    payload: ProvenancePayload
    token: str

    def to_dict(self) -> dict[str, Any]:
        return {"payload": self.payload.to_dict(), "token": self.token}


def _extract_fields(result: ScoreResult) -> dict[str, Any]:
    return {
        "protocol": PROTOCOL_TAG,
        "wallet": result.identifier,
        "sanctionsScore": result.sanctions_score,
        "behavioralScore": result.behavioral_score,
        "reputationScore": result.reputation_score,
        "finalScore": result.final_score,
        "status": result.status.value,
    }


def build_payload(result: ScoreResult) -> ProvenancePayload:
    """
    Build the canonical provenance payload for a score result.

    Raises:
        CanonicalizationError: the fields cannot be serialized deterministically.
    """
    fields = _extract_fields(result)
    content_hash = sha256_hex(canonical_dumps(fields))
    return ProvenancePayload(
        protocol=fields["protocol"],
        wallet=fields["wallet"],
        sanctions_score=fields["sanctionsScore"],
        behavioral_score=fields["behavioralScore"],
        reputation_score=fields["reputationScore"],
        final_score=fields["finalScore"],
        status=fields["status"],
        content_hash=content_hash,
    )


def token_from_payload(payload: ProvenancePayload) -> str:
    return TOKEN_PREFIX + payload.content_hash[:TOKEN_HASH_CHARS]


def build_record(result: ScoreResult) -> ProvenanceRecord:
    """Payload plus token for a score result. Single entry point for collaborators."""
    payload = build_payload(result)
    token = token_from_payload(payload)
    bind_wallet(logger, payload.wallet).debug(
        "provenance_record_built",
        content_hash=payload.content_hash,
        token=token,
    )
    return ProvenanceRecord(payload=payload, token=token)


def tokens_match(expected: str, token: Any) -> bool:
    """Constant-time comparison of a presented token with the expected one."""
    if not isinstance(token, str):
        return False
    return hmac.compare_digest(expected.encode("utf-8"), token.encode("utf-8", "surrogatepass"))


def verify_token(result: ScoreResult, token: str) -> bool:
    """Return True if token is the provenance token for result's decision fields."""
    return tokens_match(build_record(result).token, token)
