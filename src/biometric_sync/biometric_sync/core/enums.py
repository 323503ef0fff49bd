from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Session role used to guard operator endpoints."""

    ADMIN = "admin"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Daily attendance status stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"
    ON_LEAVE = "on-leave"
    HOLIDAY = "holiday"


class AttendanceSource(str, Enum):
    """Which process owns an attendance record.

    DEVICE records are written by the biometric sync; LEAVE records belong to
    the leave approval workflow and are never touched by the sync.
    """

    DEVICE = "device"
    LEAVE = "leave"
    MANUAL = "manual"


class PunchDirection(str, Enum):
    IN = "in"
    OUT = "out"


class SkipReason(str, Enum):
    EMPLOYEE_NOT_FOUND = "employee-not-found"
    LEAVE_LOCK = "leave-lock"


class SyncMode(str, Enum):
    INCREMENTAL = "incremental"
    FULL = "full"
