"""
In-memory compliance store — recent checks keyed by normalized wallet, plus dashboard stats.

Process-local and bounded; nothing is persisted. Overwrites are last-write-wins
and keep the entry's position; once capacity is exceeded the oldest entry goes.
Two checks of the same wallet only differ in created_at, so overwriting never
changes a decision.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

from backend_sentri.analytics.analytics_pipeline import ComplianceCheck
from backend_sentri.analytics.risk_engine import ComplianceStatus, normalize_identifier
from backend_sentri.config.env import get_store_capacity
from backend_sentri.sentri_logging import bind_wallet, get_logger

logger = get_logger(__name__)

# Notional volume screened per check, for the dashboard only
VOLUME_PER_CHECK = 2000


@dataclass(frozen=True)
class DashboardStats:
    wallets_screened: int
    approved: int
    warning: int
    blocked: int
    approved_rate: float
    """Percent of screened wallets APPROVED (0.0 when nothing screened)."""
    volume_protected: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _created_on_or_after(check: ComplianceCheck, cutoff: datetime) -> bool:
    try:
        created = datetime.fromisoformat(check.result.created_at)
    except ValueError:
        return False
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created >= cutoff


class ComplianceStore:
    """Thread-safe bounded map of wallet -> latest ComplianceCheck, in insertion order."""

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._checks: OrderedDict[str, ComplianceCheck] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._checks)

    def put(self, check: ComplianceCheck) -> None:
        key = check.wallet
        with self._lock:
            replaced = key in self._checks
            self._checks[key] = check
            evicted = []
            while len(self._checks) > self.capacity:
                evicted.append(self._checks.popitem(last=False)[0])
        bind_wallet(logger, key).debug(
            "compliance_store_put",
            replaced=replaced,
            evicted=len(evicted),
        )

    def get(self, wallet: str) -> ComplianceCheck | None:
        key = normalize_identifier(wallet)
        with self._lock:
            return self._checks.get(key)

    def list_recent(self, limit: int | None = None) -> list[ComplianceCheck]:
        """Checks newest first (by insertion; overwrites keep their slot)."""
        with self._lock:
            checks = list(reversed(self._checks.values()))
        if limit is not None:
            checks = checks[: max(0, limit)]
        return checks

    def clear(self) -> None:
        with self._lock:
            self._checks.clear()

    def stats(self, now: datetime | None = None) -> DashboardStats:
        """
        Dashboard counts over today's checks (since UTC midnight), or over all
        checks when none were made today.
        """
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        midnight = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)

        checks = self.list_recent()
        today = [c for c in checks if _created_on_or_after(c, midnight)]
        window = today or checks

        counts = {status: 0 for status in ComplianceStatus}
        for c in window:
            counts[c.result.status] += 1
        total = len(window)
        approved = counts[ComplianceStatus.APPROVED]
        return DashboardStats(
            wallets_screened=total,
            approved=approved,
            warning=counts[ComplianceStatus.WARNING],
            blocked=counts[ComplianceStatus.BLOCKED],
            approved_rate=(approved / total) * 100 if total else 0.0,
            volume_protected=total * VOLUME_PER_CHECK,
        )


_store: ComplianceStore | None = None
_store_lock = threading.Lock()


def get_store() -> ComplianceStore:
    """Process-wide store, sized from COMPLIANCE_STORE_CAPACITY on first use."""
    global _store
    with _store_lock:
        if _store is None:
            _store = ComplianceStore(capacity=get_store_capacity())
            logger.info("compliance_store_created", capacity=_store.capacity)
        return _store


def reset_store_for_test() -> None:
    """Drop the process-wide store so the next get_store() re-reads config."""
    global _store
    with _store_lock:
        _store = None
