from __future__ import annotations

import logging
import threading
from typing import Optional

from mysql.connector import pooling

from ..core.exceptions import ConfigurationMissingError
from .source import LogSourceConfig

logger = logging.getLogger(__name__)


class DeviceConnectionPool:
    """Lazily created connection pool to the terminal log database.

    Lifecycle: created on first use, discarded by ``invalidate()`` after any
    failure, recreated on the next ``get_connection()``. It is never retried
    in place.
    """

    _pool_seq = 0

    def __init__(self, config: LogSourceConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    def _create_pool(self) -> pooling.MySQLConnectionPool:
        if not self._config.is_configured:
            raise ConfigurationMissingError("Biometric log source configuration is missing")

        # Pool names must be unique per process; a recreated pool gets a new one.
        DeviceConnectionPool._pool_seq += 1
        pool = pooling.MySQLConnectionPool(
            pool_name=f"biometric_logs_{DeviceConnectionPool._pool_seq}",
            pool_size=self._config.pool_size,
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password or "",
            database=self._config.database,
            connection_timeout=self._config.connect_timeout,
        )
        logger.info(
            "Connected to biometric log database %s@%s:%s/%s",
            self._config.user, self._config.host, self._config.port, self._config.database,
        )
        return pool

    def get_connection(self):
        with self._lock:
            if self._pool is None:
                self._pool = self._create_pool()
            pool = self._pool
        return pool.get_connection()

    def invalidate(self) -> None:
        with self._lock:
            if self._pool is not None:
                logger.warning("Discarding biometric log database pool; it will be recreated on next use")
            self._pool = None
