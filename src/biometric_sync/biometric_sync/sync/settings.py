from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import coerce_int
from ..core.constants import (
    DEFAULT_DEVICE_TZ_OFFSET_MINUTES,
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_MAX_LOGS_PER_PASS,
    DEFAULT_SCHEDULER_INITIAL_DELAY_SECONDS,
    DEFAULT_SYNC_INTERVAL_MINUTES,
    DEFAULT_SYNC_SCOPE,
)


@dataclass(frozen=True)
class SyncSettings:
    scope: str = DEFAULT_SYNC_SCOPE
    lookback_days: int = DEFAULT_LOOKBACK_DAYS
    interval_minutes: int = DEFAULT_SYNC_INTERVAL_MINUTES
    max_rows: int = DEFAULT_MAX_LOGS_PER_PASS
    tz_offset_minutes: int = DEFAULT_DEVICE_TZ_OFFSET_MINUTES
    initial_delay_seconds: int = DEFAULT_SCHEDULER_INITIAL_DELAY_SECONDS
    scheduler_enabled: bool = True
    distributed_lock: bool = False

    @classmethod
    def from_mapping(cls, cfg: Optional[dict]) -> "SyncSettings":
        cfg = cfg or {}
        return cls(
            scope=str(cfg.get("scope") or DEFAULT_SYNC_SCOPE),
            lookback_days=coerce_int(cfg.get("lookback_days"), DEFAULT_LOOKBACK_DAYS, minimum=1),
            interval_minutes=coerce_int(cfg.get("interval_minutes"), DEFAULT_SYNC_INTERVAL_MINUTES, minimum=1),
            max_rows=coerce_int(cfg.get("max_rows"), DEFAULT_MAX_LOGS_PER_PASS, minimum=1),
            tz_offset_minutes=coerce_int(cfg.get("tz_offset_minutes"), DEFAULT_DEVICE_TZ_OFFSET_MINUTES),
            initial_delay_seconds=coerce_int(
                cfg.get("initial_delay_seconds"), DEFAULT_SCHEDULER_INITIAL_DELAY_SECONDS, minimum=0
            ),
            scheduler_enabled=bool(cfg.get("scheduler_enabled", True)),
            distributed_lock=bool(cfg.get("distributed_lock", False)),
        )
