from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..core.enums import AttendanceSource, AttendanceStatus, SkipReason
from ..device_logs.model import DailyBucket
from ..employees.model import Employee
from .model import AttendanceRecord, DeviceSyncMeta
from .policies import derive_status, repair_check_order, widen, working_hours
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileOutcome:
    """Result of merging one bucket.

    Either ``skip_reason`` is set (nothing written), or ``record`` holds the
    merged record and ``created``/``changed`` classify it for the pass summary.
    """

    record: Optional[AttendanceRecord]
    skip_reason: Optional[SkipReason] = None
    created: bool = False
    changed: bool = False

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None

    @property
    def classification(self) -> str:
        if self.skipped:
            return "skipped"
        if self.created:
            return "created"
        return "updated" if self.changed else "unchanged"


class AttendanceReconciler:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def reconcile(
        self,
        bucket: DailyBucket,
        employee: Employee,
        existing: Optional[AttendanceRecord],
        *,
        manual_trigger: bool = False,
    ) -> ReconcileOutcome:
        """Merge ``bucket`` into ``existing`` (or a fresh record). No I/O."""

        if existing is not None and existing.is_leave_locked:
            return ReconcileOutcome(record=None, skip_reason=SkipReason.LEAVE_LOCK)

        base = existing or AttendanceRecord.new_for_device(employee_id=employee.employee_id, work_date=bucket.local_date)

        check_in, check_out = widen(
            (base.check_in, base.check_out),
            (bucket.candidate_check_in, bucket.candidate_check_out),
        )
        check_in, check_out = repair_check_order(
            check_in,
            check_out,
            earliest_log=bucket.earliest_log,
            latest_log=bucket.latest_log,
        )

        hours = base.working_hours
        status = base.status
        if check_in is not None and check_out is not None:
            hours = working_hours(check_in, check_out)
            status = derive_status(hours)
        elif check_in is not None:
            # Open day: wait for a later pass to observe the check-out.
            hours = 0.0
            status = AttendanceStatus.ABSENT

        merged = replace(
            base,
            check_in=check_in,
            check_out=check_out,
            working_hours=hours,
            status=status,
            source=AttendanceSource.DEVICE,
            device_sync_meta=DeviceSyncMeta(
                emp_code=bucket.emp_code,
                device_id=bucket.device_id,
                logs_count=bucket.logs_count,
                last_log_timestamp=bucket.latest_log,
                manual_trigger=manual_trigger,
            ),
        )

        created = existing is None
        changed = not created and (existing.check_in != check_in or existing.check_out != check_out)
        return ReconcileOutcome(record=merged, created=created, changed=changed)

    def apply(self, bucket: DailyBucket, employee: Employee, *, manual_trigger: bool = False) -> ReconcileOutcome:
        """Load the current record, reconcile and persist it."""

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, bucket.local_date)
        outcome = self.reconcile(bucket, employee, existing, manual_trigger=manual_trigger)
        if outcome.skipped:
            logger.debug(
                "Skipping %s on %s for employee %s: %s",
                bucket.emp_code, bucket.local_date, employee.employee_id, outcome.skip_reason.value,
            )
            return outcome

        stored = self._attendance.upsert(outcome.record)
        if stored.is_leave_locked:
            # The leave workflow took the row between our read and the write.
            logger.info(
                "Leave approval landed on %s for employee %s during sync; skipping",
                bucket.local_date, employee.employee_id,
            )
            return ReconcileOutcome(record=None, skip_reason=SkipReason.LEAVE_LOCK)
        return replace(outcome, record=stored)
