from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert or update by (employee_id, work_date); returns the stored record.

        Implementations must never overwrite a row whose source is ``leave``.
        """

        raise NotImplementedError
