from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import combine_local, device_timezone
from ..common.validators import quote_table_name
from ..core.exceptions import ConfigurationMissingError, LogSourceError
from ..database.mysql_base import fetchall, normalize_mysql_time
from .model import RawLogEntry
from .pool import DeviceConnectionPool
from .source import LogSource, LogSourceConfig

logger = logging.getLogger(__name__)

# Terminal software stores the punch as separate DATE and TIME columns in device-local time.
_LOG_DATETIME = "TIMESTAMP(`Log_Date`, `Log_Time`)"
_SELECT_COLUMNS = """
    `Emp_Code` AS emp_code,
    `Direction` AS direction,
    `Device_Id` AS device_id,
    `Log_Date` AS log_date,
    `Log_Time` AS log_time
"""


def build_since_query(table_name: str, *, request_timeout_ms: int) -> str:
    table = quote_table_name(table_name)
    return f"""
        SELECT /*+ MAX_EXECUTION_TIME({int(request_timeout_ms)}) */
            {_SELECT_COLUMNS}
        FROM {table}
        WHERE {_LOG_DATETIME} > %s
        ORDER BY {_LOG_DATETIME} ASC
        LIMIT %s
    """


def build_latest_query(table_name: str, *, request_timeout_ms: int) -> str:
    table = quote_table_name(table_name)
    return f"""
        SELECT /*+ MAX_EXECUTION_TIME({int(request_timeout_ms)}) */
            {_SELECT_COLUMNS}
        FROM {table}
        ORDER BY `Log_Date` DESC, `Log_Time` DESC
        LIMIT %s
    """


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    return str(value)


def row_to_entry(row: Dict[str, Any], *, tz_offset_minutes: int) -> RawLogEntry:
    """Map a result row to a RawLogEntry; bad date/time yields ``timestamp=None``."""

    timestamp: Optional[datetime] = None
    log_date = row.get("log_date")
    if isinstance(log_date, datetime):
        log_date = log_date.date()
    try:
        log_time = normalize_mysql_time(row.get("log_time"))
    except (TypeError, ValueError):
        log_time = None
    if isinstance(log_date, date) and log_time is not None:
        timestamp = combine_local(log_date, log_time, tz_offset_minutes)

    return RawLogEntry(
        emp_code=_as_text(row.get("emp_code")),
        direction=_as_text(row.get("direction")),
        device_id=_as_text(row.get("device_id")),
        timestamp=timestamp,
    )


class MySQLDeviceLogSource(LogSource):
    def __init__(self, config: LogSourceConfig, pool: Optional[DeviceConnectionPool] = None):
        self._config = config
        self._pool = pool or DeviceConnectionPool(config)

    def is_configured(self) -> bool:
        return self._config.is_configured

    def invalidate(self) -> None:
        self._pool.invalidate()

    def _query(self, sql: str, params: tuple) -> list[Dict[str, Any]]:
        if not self._config.is_configured:
            raise ConfigurationMissingError("Biometric log source configuration is missing")

        try:
            conn = self._pool.get_connection()
            try:
                cur = conn.cursor(dictionary=True)
                try:
                    cur.execute(sql, params)
                    return fetchall(cur)
                finally:
                    cur.close()
            finally:
                # Pooled connections go back to the pool on close.
                conn.close()
        except mysql.connector.Error as e:
            self._pool.invalidate()
            raise LogSourceError(f"Biometric log query failed: {e}") from e

    def fetch_since(self, since: datetime, max_rows: int) -> Sequence[RawLogEntry]:
        sql = build_since_query(self._config.table, request_timeout_ms=self._config.request_timeout_ms)
        # The table holds device wall-clock times, so compare in that zone.
        local_since = since.astimezone(device_timezone(self._config.tz_offset_minutes)).replace(tzinfo=None)
        rows = self._query(sql, (local_since, int(max_rows)))
        logger.debug("Fetched %s biometric log row(s) since %s", len(rows), since.isoformat())
        return [row_to_entry(r, tz_offset_minutes=self._config.tz_offset_minutes) for r in rows]

    def fetch_latest(self, limit: int = 20) -> Sequence[RawLogEntry]:
        """Most recent rows, newest first (operator diagnostics)."""

        sql = build_latest_query(self._config.table, request_timeout_ms=self._config.request_timeout_ms)
        rows = self._query(sql, (int(limit),))
        return [row_to_entry(r, tz_offset_minutes=self._config.tz_offset_minutes) for r in rows]
