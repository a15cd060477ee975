"""
FastAPI server — compliance checks, stored results, dashboard and token verification.

Routes:
  POST /api/compliance            score a wallet, store and return the check
  GET  /api/compliance/{wallet}   latest stored check for a wallet
  GET  /api/dashboard             stats plus the most recent checks
  POST /api/provenance/verify     recompute a wallet's token and compare
  GET  /health                    liveness

Format validation happens here, before scoring. Scoring and hashing live in
backend_sentri.analytics and never see the request.
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend_sentri import __version__
from backend_sentri.analytics.analytics_pipeline import check_compliance
from backend_sentri.analytics.provenance import build_record, escape_lone_surrogates, tokens_match
from backend_sentri.analytics.risk_engine import score
from backend_sentri.api_server.compliance_store import get_store
from backend_sentri.config import get_settings
from backend_sentri.core.exceptions import InvalidWalletFormatError
from backend_sentri.sentri_logging import bind_wallet, get_logger
from backend_sentri.utils.wallet_utils import require_valid_wallet

logger = get_logger(__name__)

ERROR_WALLET_REQUIRED = "Wallet address is required"
ERROR_INTERNAL = "Internal server error"


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------


class ComplianceRequest(BaseModel):
    """POST /api/compliance body. wallet is typed Any so non-strings get our 400, not a 422."""

    wallet: Any = Field(None, description="Wallet address (0x...)")


class ComplianceResponse(BaseModel):
    wallet: str = Field(..., description="Normalized wallet address")
    sanctions_score: int = Field(..., ge=0, le=100)
    behavioral_score: int = Field(..., ge=0, le=100)
    reputation_score: int = Field(..., ge=0, le=100)
    final_score: int = Field(..., ge=0, le=100)
    status: str = Field(..., description="BLOCKED | WARNING | APPROVED")
    created_at: str = Field(..., description="ISO 8601 UTC; metadata only")
    token: str = Field(..., description="AR_ + 43 hex chars of the content hash")
    content_hash: str = Field(..., description="SHA-256 of the canonical payload")
    ledger: str = Field(..., description="Storage-medium label (advisory)")


class DashboardResponse(BaseModel):
    stats: dict[str, Any]
    recent_checks: list[ComplianceResponse]


class VerifyRequest(BaseModel):
    wallet: Any = Field(None, description="Wallet address the token was issued for")
    token: str = Field(..., min_length=1, max_length=128, description="Token to check")


class VerifyResponse(BaseModel):
    wallet: str
    token: str
    expected_token: str
    valid: bool


class WalletJSONResponse(JSONResponse):
    """JSONResponse that writes unpaired surrogates in wallets as \\uXXXX escapes instead of failing to encode."""

    def render(self, content: Any) -> bytes:
        text = json.dumps(content, ensure_ascii=False, allow_nan=False, indent=None, separators=(",", ":"))
        return escape_lone_surrogates(text).encode("utf-8")


def _require_wallet(value: Any) -> str:
    if not value or not isinstance(value, str):
        raise HTTPException(status_code=400, detail=ERROR_WALLET_REQUIRED)
    try:
        return require_valid_wallet(value)
    except InvalidWalletFormatError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


# -----------------------------------------------------------------------------
# Lifespan
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    store = get_store()
    logger.info(
        "api_started",
        store_capacity=store.capacity,
        ledger_label=settings.ledger_label,
    )
    yield
    logger.info("api_stopped", stored_checks=len(store))


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Backend Sentri API",
    description="Deterministic wallet compliance scores with content-addressed provenance tokens.",
    version=__version__,
    lifespan=lifespan,
)


@app.post("/api/compliance", response_model=ComplianceResponse)
def post_compliance(body: ComplianceRequest) -> JSONResponse:
    """Score a wallet, store the check (last write wins) and return it."""
    wallet = _require_wallet(body.wallet)
    try:
        check = check_compliance(wallet)
        get_store().put(check)
    except Exception:
        bind_wallet(logger, wallet).exception("compliance_check_error")
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL) from None
    return WalletJSONResponse(check.to_dict())


@app.get("/api/compliance/{wallet}", response_model=ComplianceResponse)
def get_compliance(wallet: str) -> JSONResponse:
    """Latest stored check for a wallet. 404 if it was never checked (or was evicted)."""
    check = get_store().get(wallet)
    if check is None:
        raise HTTPException(status_code=404, detail=f"No compliance check found for wallet {wallet[:10]}...")
    return WalletJSONResponse(check.to_dict())


@app.get("/api/dashboard", response_model=DashboardResponse)
def get_dashboard() -> JSONResponse:
    store = get_store()
    try:
        stats = store.stats()
        recent = store.list_recent(limit=get_settings().recent_checks_limit)
    except Exception:
        logger.exception("dashboard_error")
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL) from None
    return WalletJSONResponse({
        "stats": stats.to_dict(),
        "recent_checks": [c.to_dict() for c in recent],
    })


@app.post("/api/provenance/verify", response_model=VerifyResponse)
def post_verify(body: VerifyRequest) -> JSONResponse:
    """Recompute the wallet's decision and compare its token with the one supplied."""
    wallet = _require_wallet(body.wallet)
    log = bind_wallet(logger, wallet)
    try:
        result = score(wallet)
        expected = build_record(result).token
    except Exception:
        log.exception("provenance_verify_error")
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL) from None
    valid = tokens_match(expected, body.token)
    log.info("provenance_verified", valid=valid)
    return WalletJSONResponse({
        "wallet": result.identifier,
        "token": body.token,
        "expected_token": expected,
        "valid": valid,
    })


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}
