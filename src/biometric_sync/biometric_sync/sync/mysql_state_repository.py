from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import EPOCH, as_utc, to_naive_utc
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import SyncState
from .state_repository import SyncStateRepository

_COLUMNS = "scope, last_synced_at, last_emp_code, last_device_id, last_log_timestamp, meta"


def _to_state(r: Dict[str, Any]) -> SyncState:
    return SyncState(
        scope=r["scope"],
        last_synced_at=as_utc(r.get("last_synced_at")) or EPOCH,
        last_emp_code=r.get("last_emp_code"),
        last_device_id=r.get("last_device_id"),
        last_log_timestamp=as_utc(r.get("last_log_timestamp")),
        meta=load_json(r.get("meta")),
    )


class MySQLSyncStateRepository(SyncStateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, scope: str) -> Optional[SyncState]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM biometric_sync_state WHERE scope=%s", (scope,))
            r = fetchone(cur)
            return _to_state(r) if r else None

    def upsert(self, state: SyncState) -> SyncState:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO biometric_sync_state(
                    scope, last_synced_at, last_emp_code, last_device_id, last_log_timestamp, meta
                )
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    last_synced_at=VALUES(last_synced_at),
                    last_emp_code=VALUES(last_emp_code),
                    last_device_id=VALUES(last_device_id),
                    last_log_timestamp=VALUES(last_log_timestamp),
                    meta=VALUES(meta)
                """,
                (
                    state.scope,
                    to_naive_utc(state.last_synced_at),
                    state.last_emp_code,
                    state.last_device_id,
                    to_naive_utc(state.last_log_timestamp),
                    dump_json(state.meta),
                ),
            )
        return state

    def list_all(self) -> Sequence[SyncState]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM biometric_sync_state ORDER BY scope ASC")
            return [_to_state(r) for r in fetchall(cur)]
