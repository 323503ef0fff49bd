from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import EPOCH, isoformat_or_none, parse_resync_from
from ..common.validators import coerce_int
from ..core.constants import DEFAULT_SYNC_SCOPE
from ..core.enums import SkipReason, SyncMode


@dataclass(frozen=True)
class SyncState:
    """Durable cursor, one row per scope."""

    scope: str = DEFAULT_SYNC_SCOPE
    last_synced_at: datetime = EPOCH
    last_emp_code: Optional[str] = None
    last_device_id: Optional[str] = None
    last_log_timestamp: Optional[datetime] = None
    meta: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scope": self.scope,
            "last_synced_at": isoformat_or_none(self.last_synced_at),
            "last_emp_code": self.last_emp_code,
            "last_device_id": self.last_device_id,
            "last_log_timestamp": isoformat_or_none(self.last_log_timestamp),
            "meta": self.meta,
        }


@dataclass(frozen=True)
class SyncOptions:
    manual_trigger: bool = False
    force_resync: bool = False
    resync_from: Optional[datetime] = None
    lookback_days: Optional[int] = None
    # Operator input kept verbatim so an unparseable value can be reported back.
    resync_from_raw: Optional[str] = None

    @classmethod
    def from_trigger(
        cls,
        *,
        mode: Optional[str] = None,
        days: Any = None,
        from_value: Optional[str] = None,
        tz_offset_minutes: int = 0,
        manual_trigger: bool = True,
    ) -> "SyncOptions":
        """Build options from the manual trigger inputs (query string or CLI)."""

        force = (mode or "").strip().lower() == SyncMode.FULL.value
        lookback = coerce_int(days, 0) if days not in (None, "") else 0
        raw_from = (from_value or "").strip() or None
        return cls(
            manual_trigger=manual_trigger,
            force_resync=force,
            resync_from=parse_resync_from(raw_from, tz_offset_minutes),
            lookback_days=lookback if lookback > 0 else None,
            resync_from_raw=raw_from,
        )


@dataclass
class SyncCounters:
    rows_fetched: int = 0
    grouped_buckets: int = 0
    processed_records: int = 0
    created_records: int = 0
    updated_records: int = 0
    unchanged_records: int = 0
    skipped_records: int = 0
    leave_locked: int = 0
    no_user_matches: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class SkipDetail:
    emp_code: str
    date: date
    reason: SkipReason

    def to_dict(self) -> Dict[str, Any]:
        return {"emp_code": self.emp_code, "date": self.date.isoformat(), "reason": self.reason.value}


@dataclass
class SyncResult:
    """Structured summary of one pass; returned instead of raising."""

    success: bool
    message: str
    counters: SyncCounters = field(default_factory=SyncCounters)
    last_synced_at: Optional[datetime] = None
    effective_since: Optional[datetime] = None
    force_resync_applied: bool = False
    lookback_days: Optional[int] = None
    skipped_details: List[SkipDetail] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    already_running: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "counters": self.counters.to_dict(),
            "last_synced_at": isoformat_or_none(self.last_synced_at),
            "effective_since": isoformat_or_none(self.effective_since),
            "force_resync_applied": self.force_resync_applied,
            "lookback_days": self.lookback_days,
            "skipped_details": [d.to_dict() for d in self.skipped_details],
            "warnings": list(self.warnings),
            "already_running": self.already_running,
        }
