from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconciler import AttendanceReconciler
from .database.connection import DBConfig, DatabaseConnection
from .device_logs.bucketer import LogBucketer
from .device_logs.mysql_log_source import MySQLDeviceLogSource
from .device_logs.source import LogSourceConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.resolver import EmployeeResolver
from .employees.service import EmployeeDirectoryService
from .sync.locks import InProcessPassLock, MySQLAdvisoryLock
from .sync.mysql_state_repository import MySQLSyncStateRepository
from .sync.orchestrator import SyncOrchestrator
from .sync.scheduler import SyncScheduler
from .sync.settings import SyncSettings


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    sync_state_repo: MySQLSyncStateRepository
    log_source: MySQLDeviceLogSource

    sync_settings: SyncSettings
    employee_resolver: EmployeeResolver
    employee_directory_service: EmployeeDirectoryService
    attendance_reconciler: AttendanceReconciler
    sync_orchestrator: SyncOrchestrator
    sync_scheduler: SyncScheduler


def build_container(*, db_config: dict, device_db_config: Optional[dict] = None, sync_config: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
    sync_settings = SyncSettings.from_mapping(sync_config)

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    sync_state_repo = MySQLSyncStateRepository(conn)
    log_source = MySQLDeviceLogSource(
        LogSourceConfig.from_mapping(device_db_config, tz_offset_minutes=sync_settings.tz_offset_minutes)
    )

    employee_resolver = EmployeeResolver(employees_repo)
    employee_directory_service = EmployeeDirectoryService(employees_repo)
    attendance_reconciler = AttendanceReconciler(attendance_repo)
    pass_lock = MySQLAdvisoryLock(conn) if sync_settings.distributed_lock else InProcessPassLock()

    sync_orchestrator = SyncOrchestrator(
        state_store=sync_state_repo,
        log_source=log_source,
        resolver=employee_resolver,
        reconciler=attendance_reconciler,
        bucketer=LogBucketer(sync_settings.tz_offset_minutes),
        settings=sync_settings,
        pass_lock=pass_lock,
    )
    sync_scheduler = SyncScheduler(
        sync_orchestrator,
        interval_seconds=sync_settings.interval_minutes * 60,
        initial_delay_seconds=sync_settings.initial_delay_seconds,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        sync_state_repo=sync_state_repo,
        log_source=log_source,
        sync_settings=sync_settings,
        employee_resolver=employee_resolver,
        employee_directory_service=employee_directory_service,
        attendance_reconciler=attendance_reconciler,
        sync_orchestrator=sync_orchestrator,
        sync_scheduler=sync_scheduler,
    )


def build_container_from_settings(settings) -> Container:
    """Wire from a settings module (see ``config.get_settings_module``)."""

    return build_container(
        db_config=dict(getattr(settings, "DB_CONFIG")),
        device_db_config=dict(getattr(settings, "DEVICE_DB_CONFIG", {}) or {}),
        sync_config=dict(getattr(settings, "SYNC_CONFIG", {}) or {}),
    )
