from __future__ import annotations

import pytest

from src.biometric_sync.biometric_sync.sync.locks import InProcessPassLock, MySQLAdvisoryLock


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self._row = None

    def execute(self, sql, params=None):
        self._conn.statements.append((sql, params))
        if self._conn.fail:
            raise RuntimeError("server has gone away")
        if sql.startswith("SELECT GET_LOCK"):
            self._row = (self._conn.grant,)
        else:
            self._row = (1,)

    def fetchone(self):
        return self._row

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, grant=1, fail=False):
        self.grant = grant
        self.fail = fail
        self.statements = []
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.connections = []

    def connect(self):
        conn = FakeConnection(**self.kwargs)
        self.connections.append(conn)
        return conn


def test_in_process_lock_is_per_scope():
    lock = InProcessPassLock()

    assert lock.acquire("attendance")
    assert not lock.acquire("attendance")
    assert lock.acquire("night-shift")

    lock.release("attendance")
    assert lock.acquire("attendance")


def test_in_process_release_without_acquire_is_harmless():
    InProcessPassLock().release("attendance")


def test_advisory_lock_holds_session_until_release():
    factory = FakeFactory()
    lock = MySQLAdvisoryLock(factory)

    assert lock.acquire("attendance")
    (conn,) = factory.connections
    assert conn.statements == [("SELECT GET_LOCK(%s, 0)", ("biometric_sync:attendance",))]
    assert not conn.closed

    lock.release("attendance")

    assert conn.statements[-1] == ("SELECT RELEASE_LOCK(%s)", ("biometric_sync:attendance",))
    assert conn.closed


def test_advisory_lock_busy_closes_connection():
    factory = FakeFactory(grant=0)
    lock = MySQLAdvisoryLock(factory, prefix="hr")

    assert not lock.acquire("attendance")
    assert factory.connections[0].closed
    assert lock.lock_name("attendance") == "hr:attendance"

    lock.release("attendance")
    assert len(factory.connections[0].statements) == 1


def test_advisory_lock_error_propagates_and_closes():
    factory = FakeFactory(fail=True)

    with pytest.raises(RuntimeError):
        MySQLAdvisoryLock(factory).acquire("attendance")

    assert factory.connections[0].closed
