from __future__ import annotations

import logging
import threading
from typing import Dict, Protocol

from ..database.connection import DatabaseConnection

logger = logging.getLogger(__name__)


class PassLock(Protocol):
    """At most one sync pass per scope."""

    def acquire(self, scope: str) -> bool:
        """Non-blocking; False when another pass holds the scope."""

        raise NotImplementedError

    def release(self, scope: str) -> None:
        raise NotImplementedError


class InProcessPassLock(PassLock):
    """Single-instance deployments: one ``threading.Lock`` per scope."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.Lock] = {}

    def _lock_for(self, scope: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(scope, threading.Lock())

    def acquire(self, scope: str) -> bool:
        return self._lock_for(scope).acquire(blocking=False)

    def release(self, scope: str) -> None:
        lock = self._lock_for(scope)
        if lock.locked():
            lock.release()


class MySQLAdvisoryLock(PassLock):
    """Multi-instance deployments: MySQL ``GET_LOCK`` keyed by scope.

    Named locks belong to the session that took them, so the connection is
    kept open until ``release``.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, prefix: str = "biometric_sync"):
        self._conn_factory = conn_factory
        self._prefix = prefix
        self._guard = threading.Lock()
        self._held: Dict[str, object] = {}

    def lock_name(self, scope: str) -> str:
        return f"{self._prefix}:{scope}"

    def acquire(self, scope: str) -> bool:
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT GET_LOCK(%s, 0)", (self.lock_name(scope),))
                row = cur.fetchone()
            finally:
                cur.close()
        except Exception:
            conn.close()
            raise

        if not row or row[0] != 1:
            conn.close()
            return False

        with self._guard:
            self._held[scope] = conn
        return True

    def release(self, scope: str) -> None:
        with self._guard:
            conn = self._held.pop(scope, None)
        if conn is None:
            return

        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT RELEASE_LOCK(%s)", (self.lock_name(scope),))
                cur.fetchone()
            finally:
                cur.close()
        finally:
            # Closing the session releases the lock even if RELEASE_LOCK failed.
            conn.close()
