from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..common.datetime_utils import as_utc, isoformat_or_none
from ..core.enums import AttendanceSource, AttendanceStatus


@dataclass(frozen=True)
class DeviceSyncMeta:
    """Provenance block embedded in device-sourced attendance records."""

    emp_code: str
    device_id: Optional[str]
    logs_count: int
    last_log_timestamp: Optional[datetime]
    manual_trigger: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "emp_code": self.emp_code,
            "device_id": self.device_id,
            "logs_count": self.logs_count,
            "last_log_timestamp": isoformat_or_none(self.last_log_timestamp),
            "manual_trigger": self.manual_trigger,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["DeviceSyncMeta"]:
        if not data:
            return None
        raw_ts = data.get("last_log_timestamp")
        return cls(
            emp_code=str(data.get("emp_code") or ""),
            device_id=data.get("device_id"),
            logs_count=int(data.get("logs_count") or 0),
            last_log_timestamp=as_utc(datetime.fromisoformat(raw_ts)) if raw_ts else None,
            manual_trigger=bool(data.get("manual_trigger", False)),
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one work date.

    ``attendance_id`` is None until the record has been persisted.
    """

    attendance_id: Optional[int]
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    working_hours: float
    status: AttendanceStatus
    source: AttendanceSource
    device_sync_meta: Optional[DeviceSyncMeta] = None
    note: Optional[str] = None

    @property
    def is_leave_locked(self) -> bool:
        return self.source == AttendanceSource.LEAVE

    @classmethod
    def new_for_device(cls, *, employee_id: int, work_date: date) -> "AttendanceRecord":
        return cls(
            attendance_id=None,
            employee_id=employee_id,
            work_date=work_date,
            check_in=None,
            check_out=None,
            working_hours=0.0,
            status=AttendanceStatus.ABSENT,
            source=AttendanceSource.DEVICE,
        )
