from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from ..common.datetime_utils import to_local_date
from ..core.enums import PunchDirection
from .model import DailyBucket, RawLogEntry

_VALID_DIRECTIONS = {PunchDirection.IN.value, PunchDirection.OUT.value}


@dataclass
class _BucketBuilder:
    emp_code: str
    local_date: date
    earliest_log: datetime
    latest_log: datetime
    device_id: Optional[str]
    first_in: Optional[datetime] = None
    last_out: Optional[datetime] = None
    logs_count: int = 0

    def add(self, direction: str, ts: datetime, device_id: Optional[str]) -> None:
        self.logs_count += 1

        if ts < self.earliest_log:
            self.earliest_log = ts

        if self.device_id is None and device_id is not None:
            self.device_id = device_id

        if ts > self.latest_log:
            self.latest_log = ts
            if device_id is not None:
                self.device_id = device_id

        if direction == PunchDirection.IN.value:
            if self.first_in is None or ts < self.first_in:
                self.first_in = ts
        elif self.last_out is None or ts > self.last_out:
            self.last_out = ts

    def build(self) -> DailyBucket:
        return DailyBucket(
            emp_code=self.emp_code,
            local_date=self.local_date,
            first_in=self.first_in,
            last_out=self.last_out,
            earliest_log=self.earliest_log,
            latest_log=self.latest_log,
            logs_count=self.logs_count,
            device_id=self.device_id,
        )


class LogBucketer:
    """Groups raw punches per employee and device-local calendar day.

    The local day uses a fixed UTC offset; daylight-saving transitions are
    not modelled.
    """

    def __init__(self, tz_offset_minutes: int = 0):
        self._tz_offset_minutes = int(tz_offset_minutes)

    @property
    def tz_offset_minutes(self) -> int:
        return self._tz_offset_minutes

    def bucket(self, entries: Iterable[RawLogEntry], tz_offset_minutes: Optional[int] = None) -> List[DailyBucket]:
        offset = self._tz_offset_minutes if tz_offset_minutes is None else int(tz_offset_minutes)
        builders: Dict[Tuple[str, date], _BucketBuilder] = {}

        for entry in entries:
            emp_code = (entry.emp_code or "").strip()
            direction = (entry.direction or "").strip().lower()
            ts = entry.timestamp
            if not emp_code or ts is None or direction not in _VALID_DIRECTIONS:
                continue

            local_date = to_local_date(ts, offset)
            key = (emp_code, local_date)
            builder = builders.get(key)
            if builder is None:
                builder = _BucketBuilder(
                    emp_code=emp_code,
                    local_date=local_date,
                    earliest_log=ts,
                    latest_log=ts,
                    device_id=entry.device_id,
                )
                builders[key] = builder
            builder.add(direction, ts, entry.device_id)

        return [b.build() for b in builders.values()]
