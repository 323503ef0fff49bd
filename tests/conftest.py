from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone
from types import SimpleNamespace
from typing import Optional

import pytest

from src.biometric_sync.biometric_sync.attendance.model import AttendanceRecord
from src.biometric_sync.biometric_sync.attendance.reconciler import AttendanceReconciler
from src.biometric_sync.biometric_sync.core.exceptions import LogSourceError
from src.biometric_sync.biometric_sync.device_logs.bucketer import LogBucketer
from src.biometric_sync.biometric_sync.device_logs.model import RawLogEntry
from src.biometric_sync.biometric_sync.employees.model import Employee
from src.biometric_sync.biometric_sync.employees.resolver import EmployeeResolver
from src.biometric_sync.biometric_sync.sync.model import SyncState
from src.biometric_sync.biometric_sync.sync.orchestrator import SyncOrchestrator
from src.biometric_sync.biometric_sync.sync.settings import SyncSettings

DAY = date(2026, 3, 2)


class InMemoryEmployees:
    def __init__(self, employees):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self.lookups: list[tuple[str, str]] = []

    def get_by_code(self, code: str, *, case_sensitive: bool = True) -> Optional[Employee]:
        self.lookups.append(("code" if case_sensitive else "code-ci", code))
        for e in self._by_id.values():
            if case_sensitive and e.employee_code == code:
                return e
            if not case_sensitive and e.employee_code.upper() == code.upper():
                return e
        return None

    def get_by_biometric_code(self, code: str) -> Optional[Employee]:
        self.lookups.append(("biometric", code))
        for e in self._by_id.values():
            if e.biometric_code == code:
                return e
        return None

    def list_all(self):
        return list(self._by_id.values())

    def set_biometric_code(self, employee_id: int, biometric_code: str) -> bool:
        e = self._by_id.get(employee_id)
        if not e:
            return False
        self._by_id[employee_id] = replace(e, biometric_code=biometric_code)
        return True

    def get(self, employee_id: int) -> Employee:
        return self._by_id[employee_id]


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.upserts = 0

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        self.upserts += 1
        key = (record.employee_id, record.work_date)
        current = self._by_key.get(key)
        if current is not None and current.is_leave_locked:
            return current
        if current is not None:
            record = replace(record, attendance_id=current.attendance_id)
        else:
            self._id += 1
            record = replace(record, attendance_id=self._id)
        self._by_key[key] = record
        return record

    def put(self, record: AttendanceRecord) -> AttendanceRecord:
        """Seed a row as another process (e.g. the leave workflow) would."""
        self._id += 1
        record = replace(record, attendance_id=self._id)
        self._by_key[(record.employee_id, record.work_date)] = record
        return record

    def all(self):
        return list(self._by_key.values())


class InMemorySyncState:
    def __init__(self, state: Optional[SyncState] = None):
        self._by_scope: dict[str, SyncState] = {}
        if state is not None:
            self._by_scope[state.scope] = state
        self.writes = 0

    def get(self, scope: str) -> Optional[SyncState]:
        return self._by_scope.get(scope)

    def upsert(self, state: SyncState) -> SyncState:
        self.writes += 1
        self._by_scope[state.scope] = state
        return state

    def list_all(self):
        return [self._by_scope[k] for k in sorted(self._by_scope)]


class FakeLogSource:
    """Behaves like the device table: strictly-after filter, ascending, capped."""

    def __init__(self, entries=(), *, configured: bool = True):
        self.entries = list(entries)
        self.configured = configured
        self.calls: list[tuple[datetime, int]] = []
        self.invalidations = 0
        self.fail_with: Optional[Exception] = None

    def is_configured(self) -> bool:
        return self.configured

    def fetch_since(self, since: datetime, max_rows: int):
        self.calls.append((since, max_rows))
        if self.fail_with is not None:
            raise self.fail_with
        rows = [e for e in self.entries if e.timestamp is None or e.timestamp > since]
        rows.sort(key=lambda e: e.timestamp or datetime.min.replace(tzinfo=timezone.utc))
        return rows[:max_rows]

    def invalidate(self) -> None:
        self.invalidations += 1


def _at(hour: int, minute: int = 0, *, day: date = DAY, offset_minutes: int = 0) -> datetime:
    tz = timezone(timedelta(minutes=offset_minutes))
    return datetime.combine(day, time(hour, minute), tzinfo=tz).astimezone(timezone.utc)


@pytest.fixture
def at():
    """Device-local wall clock -> aware UTC instant."""
    return _at


@pytest.fixture
def punch():
    def make(emp_code, direction, hour, minute=0, *, day=DAY, device_id="D1", offset_minutes=0):
        return RawLogEntry(
            emp_code=emp_code,
            direction=direction,
            device_id=device_id,
            timestamp=_at(hour, minute, day=day, offset_minutes=offset_minutes),
        )

    return make


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 3, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(employee_id=1, employee_code="EMP-001", full_name="Asha Rao", biometric_code="EMP-001"),
            Employee(employee_id=2, employee_code="emp002", full_name="Ben Ode", biometric_code="EMP002"),
            Employee(employee_id=3, employee_code="HR7", full_name="Chen Li", biometric_code="T-0042"),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def make_sync(employees, attendance_repo, fixed_now):
    """Build an orchestrator over in-memory collaborators."""

    def build(entries=(), *, state=None, settings=None, configured=True, pass_lock=None, now=None):
        parts = SimpleNamespace(
            employees=employees,
            attendance=attendance_repo,
            state=InMemorySyncState(state),
            source=FakeLogSource(entries, configured=configured),
            settings=settings or SyncSettings(),
        )
        parts.orchestrator = SyncOrchestrator(
            state_store=parts.state,
            log_source=parts.source,
            resolver=EmployeeResolver(employees),
            reconciler=AttendanceReconciler(attendance_repo),
            bucketer=LogBucketer(parts.settings.tz_offset_minutes),
            settings=parts.settings,
            pass_lock=pass_lock,
            clock=lambda: now or fixed_now,
        )
        return parts

    return build


@pytest.fixture
def log_source_error():
    return LogSourceError("Biometric log query failed: 2003 (HY000): Can't connect to MySQL server")


@pytest.fixture
def employee_repo():
    """Factory for a custom in-memory identity master."""
    return InMemoryEmployees
