from __future__ import annotations

import threading

from src.biometric_sync.biometric_sync.sync.model import SyncResult
from src.biometric_sync.biometric_sync.sync.scheduler import SyncScheduler


class StubOrchestrator:
    def __init__(self, *, configured=True, results=None):
        self.configured = configured
        self.results = list(results or [])
        self.calls = []
        self.ran = threading.Event()

    def is_configured(self):
        return self.configured

    def run_pass(self, options=None):
        self.calls.append(options)
        self.ran.set()
        if self.results:
            outcome = self.results.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return SyncResult(success=True, message="No new biometric logs to process")


def test_start_runs_a_pass_after_initial_delay_then_stops():
    orchestrator = StubOrchestrator()
    scheduler = SyncScheduler(orchestrator, interval_seconds=60, initial_delay_seconds=0)

    assert scheduler.start() is True
    assert orchestrator.ran.wait(2)
    assert scheduler.is_running

    scheduler.stop(timeout=2)

    assert not scheduler.is_running
    assert len(orchestrator.calls) == 1
    assert orchestrator.calls[0].manual_trigger is False


def test_second_start_is_a_no_op():
    scheduler = SyncScheduler(StubOrchestrator(), interval_seconds=60, initial_delay_seconds=60)

    assert scheduler.start() is True
    assert scheduler.start() is False

    scheduler.stop(timeout=2)


def test_unconfigured_source_never_starts():
    orchestrator = StubOrchestrator(configured=False)
    scheduler = SyncScheduler(orchestrator, interval_seconds=60, initial_delay_seconds=0)

    assert scheduler.start() is False
    assert not scheduler.is_running
    assert orchestrator.calls == []


def test_stop_before_initial_delay_skips_the_pass():
    orchestrator = StubOrchestrator()
    scheduler = SyncScheduler(orchestrator, interval_seconds=60, initial_delay_seconds=30)

    scheduler.start()
    scheduler.stop(timeout=2)

    assert orchestrator.calls == []


def test_run_once_survives_failures():
    failed = SyncResult(success=False, message="Biometric log query failed")
    orchestrator = StubOrchestrator(results=[RuntimeError("boom"), failed])
    scheduler = SyncScheduler(orchestrator, interval_seconds=60)

    assert scheduler.run_once() is None
    assert scheduler.run_once() is failed
    assert scheduler.run_once().success
