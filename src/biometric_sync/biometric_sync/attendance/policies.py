"""Pure rules applied when merging device punches into attendance.

Kept free of I/O so each rule (widening, ordering repair, hours, status
bands) can be tested on its own.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

from ..core.constants import FULL_DAY_MIN_HOURS, HALF_DAY_MIN_HOURS
from ..core.enums import AttendanceStatus

CheckPair = Tuple[Optional[datetime], Optional[datetime]]


def earliest(*values: Optional[datetime]) -> Optional[datetime]:
    present = [v for v in values if v is not None]
    return min(present) if present else None


def latest(*values: Optional[datetime]) -> Optional[datetime]:
    present = [v for v in values if v is not None]
    return max(present) if present else None


def widen(existing: CheckPair, candidate: CheckPair) -> CheckPair:
    """Merge without narrowing: check-in only moves earlier, check-out only later."""

    existing_in, existing_out = existing
    candidate_in, candidate_out = candidate
    return earliest(existing_in, candidate_in), latest(existing_out, candidate_out)


def repair_check_order(
    check_in: Optional[datetime],
    check_out: Optional[datetime],
    *,
    earliest_log: Optional[datetime],
    latest_log: Optional[datetime],
) -> CheckPair:
    """Fix an inverted pair (check-out before check-in).

    1. use the bucket's latest log as check-out if it is not before check-in;
    2. otherwise use the bucket's earliest log as check-in if it is not after check-out;
    3. if still inverted, drop check-out and leave the day open.
    """

    if check_in is None or check_out is None or check_out >= check_in:
        return check_in, check_out

    if latest_log is not None and latest_log >= check_in:
        check_out = latest_log
    elif earliest_log is not None and earliest_log <= check_out:
        check_in = earliest_log

    if check_out < check_in:
        check_out = None
    return check_in, check_out


def working_hours(check_in: Optional[datetime], check_out: Optional[datetime]) -> float:
    """Hours between the pair, rounded half-up to two decimals; 0 when incomplete."""

    if check_in is None or check_out is None:
        return 0.0

    seconds = Decimal(str((check_out - check_in).total_seconds()))
    centi_hours = (seconds / Decimal(36)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(float(centi_hours) / 100, 0.0)


def derive_status(hours: float) -> AttendanceStatus:
    # Lower bound of each band is inclusive.
    if not hours or hours < HALF_DAY_MIN_HOURS:
        return AttendanceStatus.ABSENT
    if hours < FULL_DAY_MIN_HOURS:
        return AttendanceStatus.HALF_DAY
    return AttendanceStatus.PRESENT
