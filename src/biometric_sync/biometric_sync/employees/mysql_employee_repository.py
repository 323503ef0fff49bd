from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, employee_code, biometric_code, full_name, is_active"


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        employee_code=r["employee_code"],
        full_name=r["full_name"],
        biometric_code=r.get("biometric_code"),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str, *, case_sensitive: bool = True) -> Optional[Employee]:
        # The table collation is case-insensitive; BINARY forces a byte-wise compare.
        where = "BINARY employee_code=%s" if case_sensitive else "UPPER(employee_code)=UPPER(%s)"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE {where}
                ORDER BY employee_id ASC
                LIMIT 1
                """,
                (code,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_biometric_code(self, code: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE biometric_code=%s
                ORDER BY employee_id ASC
                LIMIT 1
                """,
                (code,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def set_biometric_code(self, employee_id: int, biometric_code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET biometric_code=%s WHERE employee_id=%s",
                (biometric_code, int(employee_id)),
            )
            return cur.rowcount > 0
