from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.validators import coerce_int
from ..core.constants import (
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_DEVICE_TZ_OFFSET_MINUTES,
    DEFAULT_LOG_TABLE,
    DEFAULT_POOL_SIZE,
    DEFAULT_REQUEST_TIMEOUT_MS,
)
from .model import RawLogEntry


@dataclass(frozen=True)
class LogSourceConfig:
    """Connection settings for the external terminal log database."""

    host: Optional[str]
    database: Optional[str]
    user: Optional[str]
    password: Optional[str]
    port: int = 3306
    table: str = DEFAULT_LOG_TABLE
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT_SECONDS
    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    pool_size: int = DEFAULT_POOL_SIZE
    tz_offset_minutes: int = DEFAULT_DEVICE_TZ_OFFSET_MINUTES

    @property
    def is_configured(self) -> bool:
        # An empty password is allowed, a missing one is not.
        return bool(self.host and self.database and self.user and self.password is not None)

    @classmethod
    def from_mapping(cls, cfg: Optional[dict], *, tz_offset_minutes: int = DEFAULT_DEVICE_TZ_OFFSET_MINUTES) -> "LogSourceConfig":
        cfg = cfg or {}
        return cls(
            host=cfg.get("host") or None,
            database=cfg.get("database") or None,
            user=cfg.get("user") or None,
            password=cfg.get("password"),
            port=coerce_int(cfg.get("port"), 3306, minimum=1),
            table=str(cfg.get("table") or DEFAULT_LOG_TABLE),
            connect_timeout=coerce_int(cfg.get("connect_timeout"), DEFAULT_CONNECT_TIMEOUT_SECONDS, minimum=1),
            request_timeout_ms=coerce_int(cfg.get("request_timeout_ms"), DEFAULT_REQUEST_TIMEOUT_MS, minimum=1),
            pool_size=coerce_int(cfg.get("pool_size"), DEFAULT_POOL_SIZE, minimum=1),
            tz_offset_minutes=int(tz_offset_minutes),
        )


class LogSource(Protocol):
    """Read-only view over the terminal punch table."""

    def is_configured(self) -> bool:
        raise NotImplementedError

    def fetch_since(self, since: datetime, max_rows: int) -> Sequence[RawLogEntry]:
        """Rows strictly after ``since``, oldest first, at most ``max_rows``."""

        raise NotImplementedError

    def invalidate(self) -> None:
        """Drop any shared connection so the next call reconnects."""

        raise NotImplementedError
