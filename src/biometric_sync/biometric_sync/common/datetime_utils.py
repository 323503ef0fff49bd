from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current instant as an aware UTC datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def device_timezone(offset_minutes: int) -> timezone:
    """Fixed-offset zone of the terminals (no DST handling)."""
    return timezone(timedelta(minutes=int(offset_minutes)))


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive values read from MySQL DATETIME columns."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """MySQL DATETIME has no zone; we always store UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_local_date(instant: datetime, offset_minutes: int) -> date:
    return instant.astimezone(device_timezone(offset_minutes)).date()


def local_midnight(instant: datetime, offset_minutes: int) -> datetime:
    """Start of the device-local day containing ``instant``, as UTC."""
    tz = device_timezone(offset_minutes)
    local_day = instant.astimezone(tz).date()
    return datetime.combine(local_day, time.min, tzinfo=tz).astimezone(timezone.utc)


def combine_local(day: date, clock: time, offset_minutes: int) -> datetime:
    """Device wall-clock date + time -> aware UTC instant."""
    tz = device_timezone(offset_minutes)
    return datetime.combine(day, clock.replace(tzinfo=None), tzinfo=tz).astimezone(timezone.utc)


def parse_resync_from(value: Optional[str], offset_minutes: int) -> Optional[datetime]:
    """Parse an operator supplied resync start.

    Accepts YYYY-MM-DD (device-local midnight) or a full ISO-8601 timestamp
    (naive values are read as device-local). Returns None when unparseable.
    """
    v = (value or "").strip()
    if not v:
        return None

    tz = device_timezone(offset_minutes)
    try:
        day = parse_iso_date(v)
        return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)
    except ValueError:
        pass

    try:
        parsed = datetime.fromisoformat(v.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed.astimezone(timezone.utc)


def isoformat_or_none(value: Optional[datetime | date]) -> Optional[str]:
    return value.isoformat() if value is not None else None
