from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional

from ..common.datetime_utils import as_utc, to_naive_utc
from ..core.enums import AttendanceSource, AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchone, load_json
from .model import AttendanceRecord, DeviceSyncMeta
from .repository import AttendanceRepository


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=as_utc(r.get("check_in")),
        check_out=as_utc(r.get("check_out")),
        working_hours=float(r.get("working_hours") or 0),
        status=AttendanceStatus(r["status"]),
        source=AttendanceSource(r["source"]),
        device_sync_meta=DeviceSyncMeta.from_dict(load_json(r.get("device_sync_meta"))),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, check_in, check_out,
                       working_hours, status, source, device_sync_meta, note
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        meta = record.device_sync_meta.to_dict() if record.device_sync_meta else None

        # A leave approval can land between our read and this write; the IF()
        # guards keep leave-owned rows intact. `source` must be assigned last.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    employee_id, work_date, check_in, check_out, working_hours,
                    status, source, device_sync_meta, note
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    attendance_id=LAST_INSERT_ID(attendance_id),
                    check_in=IF(source='leave', check_in, VALUES(check_in)),
                    check_out=IF(source='leave', check_out, VALUES(check_out)),
                    working_hours=IF(source='leave', working_hours, VALUES(working_hours)),
                    status=IF(source='leave', status, VALUES(status)),
                    device_sync_meta=IF(source='leave', device_sync_meta, VALUES(device_sync_meta)),
                    note=IF(source='leave', note, VALUES(note)),
                    source=IF(source='leave', source, VALUES(source))
                """,
                (
                    int(record.employee_id),
                    record.work_date,
                    to_naive_utc(record.check_in),
                    to_naive_utc(record.check_out),
                    round(float(record.working_hours), 2),
                    record.status.value,
                    record.source.value,
                    dump_json(meta),
                    record.note,
                ),
            )
            attendance_id = int(cur.lastrowid)
            # Re-read so the caller sees what was stored, including a leave row we backed off from.
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, check_in, check_out,
                       working_hours, status, source, device_sync_meta, note
                FROM attendance_records
                WHERE attendance_id=%s
                """,
                (attendance_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else replace(record, attendance_id=attendance_id)
