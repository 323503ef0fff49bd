from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class RawLogEntry:
    """One punch row as read from the terminal log table.

    ``timestamp`` is an aware UTC instant, or None when the row carried no
    usable date/time. Malformed rows are dropped by the bucketer.
    """

    emp_code: Optional[str]
    direction: Optional[str]
    device_id: Optional[str]
    timestamp: Optional[datetime]


@dataclass(frozen=True)
class DailyBucket:
    """All punches of one employee on one device-local calendar day."""

    emp_code: str
    local_date: date
    first_in: Optional[datetime]
    last_out: Optional[datetime]
    earliest_log: datetime
    latest_log: datetime
    logs_count: int
    device_id: Optional[str] = None

    @property
    def candidate_check_in(self) -> datetime:
        if self.first_in is not None and self.first_in < self.earliest_log:
            return self.first_in
        return self.earliest_log

    @property
    def candidate_check_out(self) -> datetime:
        if self.last_out is not None and self.last_out > self.latest_log:
            return self.last_out
        return self.latest_log
