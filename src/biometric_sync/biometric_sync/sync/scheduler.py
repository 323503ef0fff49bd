from __future__ import annotations

import logging
import threading
from typing import Optional

from .model import SyncOptions, SyncResult
from .orchestrator import SyncOrchestrator

logger = logging.getLogger(__name__)


class SyncScheduler:
    """Runs a pass shortly after start, then on a fixed interval.

    A failed pass is logged and the next interval runs regardless.
    """

    def __init__(self, orchestrator: SyncOrchestrator, *, interval_seconds: float, initial_delay_seconds: float = 10):
        self._orchestrator = orchestrator
        self._interval = float(interval_seconds)
        self._initial_delay = float(initial_delay_seconds)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._start_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        """Start the background thread; False if already running or unconfigured."""

        with self._start_lock:
            if self._thread is not None:
                return False

            if not self._orchestrator.is_configured():
                logger.warning("Biometric sync scheduler skipped. Missing log source configuration.")
                return False

            self._stop.clear()
            self._thread = threading.Thread(target=self._loop, name="biometric-sync", daemon=True)
            self._thread.start()

        logger.info("Biometric sync scheduler started (every %.0f second(s))", self._interval)
        return True

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._start_lock:
            thread = self._thread
            self._thread = None
        if thread is None:
            return

        self._stop.set()
        thread.join(timeout)
        logger.info("Biometric sync scheduler stopped")

    def run_once(self) -> Optional[SyncResult]:
        try:
            result = self._orchestrator.run_pass(SyncOptions())
        except Exception:
            # run_pass should not raise; keep the schedule alive if it ever does.
            logger.exception("Scheduled biometric sync failed")
            return None

        if result.success:
            logger.info("Scheduled biometric sync: %s", result.message)
        else:
            logger.error("Scheduled biometric sync failed: %s", result.message)
        return result

    def _loop(self) -> None:
        if self._stop.wait(self._initial_delay):
            return
        while True:
            self.run_once()
            if self._stop.wait(self._interval):
                return
