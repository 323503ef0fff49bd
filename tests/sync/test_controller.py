from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.biometric_sync.biometric_sync.sync import controller
from src.biometric_sync.biometric_sync.sync.model import SyncResult, SyncState
from src.biometric_sync.biometric_sync.sync.settings import SyncSettings


class RecordingOrchestrator:
    def __init__(self, result=None, *, configured=True):
        self.result = result or SyncResult(success=True, message="Processed 2 biometric buckets")
        self.configured = configured
        self.settings = SyncSettings(tz_offset_minutes=60)
        self.options = []

    def is_configured(self):
        return self.configured

    def run_pass(self, options=None):
        self.options.append(options)
        return self.result


class StateList:
    def list_all(self):
        return [SyncState(scope="attendance"), SyncState(scope="night-shift")]


def _make_client(orchestrator, *, role="admin"):
    app = Flask(__name__)
    app.secret_key = "test"
    app.config["TESTING"] = True
    controller.register(app, SimpleNamespace(sync_orchestrator=orchestrator, sync_state_repo=StateList()))
    client = app.test_client()
    if role is not None:
        with client.session_transaction() as sess:
            sess["user_id"] = 1
            sess["role"] = role
    return client


def test_requires_login():
    client = _make_client(RecordingOrchestrator(), role=None)

    res = client.post("/api/attendance/device-sync")

    assert res.status_code == 401


def test_requires_admin_role():
    orchestrator = RecordingOrchestrator()
    client = _make_client(orchestrator, role="staff")

    res = client.post("/api/attendance/device-sync")

    assert res.status_code == 403
    assert orchestrator.options == []


def test_manual_trigger_passes_query_options():
    orchestrator = RecordingOrchestrator()
    client = _make_client(orchestrator)

    res = client.post("/api/attendance/device-sync?mode=full&days=7&from=2026-03-01")

    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["message"] == "Processed 2 biometric buckets"
    assert body["data"]["counters"]["processed_records"] == 0

    (options,) = orchestrator.options
    assert options.manual_trigger is True
    assert options.force_resync is True
    assert options.lookback_days == 7
    # Local midnight at UTC+1.
    assert options.resync_from.isoformat() == "2026-02-28T23:00:00+00:00"


def test_invalid_days_fall_back_to_default():
    orchestrator = RecordingOrchestrator()
    client = _make_client(orchestrator)

    client.post("/api/attendance/device-sync?days=soon")

    (options,) = orchestrator.options
    assert options.force_resync is False
    assert options.lookback_days is None


def test_unconfigured_source_is_bad_request():
    orchestrator = RecordingOrchestrator(configured=False)
    client = _make_client(orchestrator)

    res = client.post("/api/attendance/device-sync")

    assert res.status_code == 400
    assert res.get_json()["success"] is False
    assert orchestrator.options == []


@pytest.mark.parametrize(
    "result, status",
    [
        (SyncResult(success=False, message="already running", already_running=True), 409),
        (SyncResult(success=False, message="Biometric log query failed"), 500),
    ],
)
def test_failed_pass_maps_to_status(result, status):
    client = _make_client(RecordingOrchestrator(result))

    res = client.post("/api/attendance/device-sync")

    assert res.status_code == status
    assert res.get_json()["message"] == result.message


def test_state_endpoint_lists_cursors():
    client = _make_client(RecordingOrchestrator())

    res = client.get("/api/attendance/device-sync/state")

    assert res.status_code == 200
    assert [s["scope"] for s in res.get_json()["data"]] == ["attendance", "night-shift"]
    assert res.get_json()["data"][0]["last_synced_at"] == "1970-01-01T00:00:00+00:00"
