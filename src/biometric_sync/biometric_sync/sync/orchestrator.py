from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from ..attendance.reconciler import AttendanceReconciler
from ..common.datetime_utils import local_midnight, now_utc
from ..core.constants import CURSOR_OVERLAP_SECONDS, MAX_SKIPPED_DETAILS
from ..core.enums import SkipReason
from ..device_logs.bucketer import LogBucketer
from ..device_logs.model import DailyBucket
from ..device_logs.source import LogSource
from ..employees.resolver import EmployeeResolver
from .locks import InProcessPassLock, PassLock
from .model import SkipDetail, SyncCounters, SyncOptions, SyncResult, SyncState
from .settings import SyncSettings
from .state_repository import SyncStateRepository

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Biometric log source configuration missing. Device sync skipped."


class SyncOrchestrator:
    """Drives one synchronization pass: fetch -> bucket -> reconcile -> advance cursor.

    ``run_pass`` is the single entry point for both the scheduler and manual
    triggers. It never raises; every failure comes back as a ``SyncResult``
    with ``success=False``.
    """

    def __init__(
        self,
        *,
        state_store: SyncStateRepository,
        log_source: LogSource,
        resolver: EmployeeResolver,
        reconciler: AttendanceReconciler,
        bucketer: LogBucketer,
        settings: SyncSettings,
        pass_lock: Optional[PassLock] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._state = state_store
        self._log_source = log_source
        self._resolver = resolver
        self._reconciler = reconciler
        self._bucketer = bucketer
        self._settings = settings
        self._pass_lock = pass_lock or InProcessPassLock()
        self._clock = clock

    @property
    def settings(self) -> SyncSettings:
        return self._settings

    def is_configured(self) -> bool:
        return self._log_source.is_configured()

    def resolve_cursor(self, options: SyncOptions, state: Optional[SyncState]) -> Tuple[datetime, int]:
        """Return (cursor to start from, effective lookback days)."""

        lookback_days = max(int(options.lookback_days or self._settings.lookback_days), 1)
        fallback_since = local_midnight(
            self._clock() - timedelta(days=lookback_days), self._settings.tz_offset_minutes
        )

        if options.force_resync and options.resync_from is not None:
            return options.resync_from, lookback_days
        if options.force_resync:
            return fallback_since, lookback_days
        if state is not None:
            return state.last_synced_at, lookback_days
        return fallback_since, lookback_days

    def run_pass(self, options: Optional[SyncOptions] = None) -> SyncResult:
        options = options or SyncOptions()
        scope = self._settings.scope

        if not self._log_source.is_configured():
            logger.warning(NOT_CONFIGURED_MESSAGE)
            return SyncResult(success=False, message=NOT_CONFIGURED_MESSAGE)

        try:
            acquired = self._pass_lock.acquire(scope)
        except Exception as e:
            logger.exception("Could not take the sync lock for scope %r", scope)
            return SyncResult(success=False, message=f"Could not acquire sync lock: {e}")

        if not acquired:
            logger.info("Biometric sync for scope %r is already running; skipping", scope)
            return SyncResult(
                success=False,
                message=f"A biometric sync pass is already running for scope '{scope}'",
                already_running=True,
            )

        try:
            return self._run(options)
        except Exception as e:
            logger.exception("Biometric sync pass failed")
            self._log_source.invalidate()
            return SyncResult(success=False, message=str(e) or e.__class__.__name__)
        finally:
            try:
                self._pass_lock.release(scope)
            except Exception:
                logger.exception("Could not release the sync lock for scope %r", scope)

    def _run(self, options: SyncOptions) -> SyncResult:
        scope = self._settings.scope
        state = self._state.get(scope)
        since, lookback_days = self.resolve_cursor(options, state)

        warnings: List[str] = []
        if options.resync_from_raw and options.resync_from is None:
            warnings.append(f"Ignored unparseable resync start {options.resync_from_raw!r}")

        logger.info(
            "Biometric sync pass started (scope=%s, since=%s, manual=%s, force=%s)",
            scope, since.isoformat(), options.manual_trigger, options.force_resync,
        )

        query_since = since - timedelta(seconds=CURSOR_OVERLAP_SECONDS)
        entries = self._log_source.fetch_since(query_since, self._settings.max_rows)

        if not entries:
            return SyncResult(
                success=True,
                message="No new biometric logs to process",
                last_synced_at=state.last_synced_at if state else None,
                effective_since=since,
                force_resync_applied=options.force_resync,
                lookback_days=lookback_days,
                warnings=warnings,
            )

        buckets = self._bucketer.bucket(entries)
        counters = SyncCounters(rows_fetched=len(entries), grouped_buckets=len(buckets))
        details: List[SkipDetail] = []

        latest_log = since
        latest_bucket: Optional[DailyBucket] = None

        for bucket in buckets:
            if bucket.latest_log > latest_log:
                latest_log = bucket.latest_log
                latest_bucket = bucket

            employee = self._resolver.resolve(bucket.emp_code)
            if employee is None:
                counters.no_user_matches += 1
                counters.skipped_records += 1
                self._note_skip(details, bucket, SkipReason.EMPLOYEE_NOT_FOUND)
                continue

            outcome = self._reconciler.apply(bucket, employee, manual_trigger=options.manual_trigger)
            if outcome.skip_reason == SkipReason.LEAVE_LOCK:
                counters.leave_locked += 1
                counters.skipped_records += 1
                self._note_skip(details, bucket, SkipReason.LEAVE_LOCK)
                continue

            counters.processed_records += 1
            if outcome.created:
                counters.created_records += 1
            elif outcome.changed:
                counters.updated_records += 1
            else:
                counters.unchanged_records += 1

        cursor = state.last_synced_at if state else None
        new_cursor = latest_log
        if options.force_resync and options.resync_from is None and state is not None:
            # A lookback resync replays history; only an explicit start date may rewind the cursor.
            new_cursor = max(latest_log, state.last_synced_at)
        if latest_bucket is not None:
            saved = self._state.upsert(
                SyncState(
                    scope=scope,
                    last_synced_at=new_cursor,
                    last_emp_code=latest_bucket.emp_code,
                    last_device_id=latest_bucket.device_id,
                    last_log_timestamp=latest_log,
                    meta={
                        "processed_buckets": len(buckets),
                        "rows_fetched": len(entries),
                        "manual_trigger": options.manual_trigger,
                        "force_resync": options.force_resync,
                        "lookback_days": lookback_days,
                    },
                )
            )
            cursor = saved.last_synced_at
            logger.info("Biometric sync cursor for scope %r advanced to %s", scope, cursor.isoformat())

        if counters.processed_records:
            message = f"Processed {counters.processed_records} biometric buckets"
        elif counters.no_user_matches and counters.leave_locked:
            message = "Biometric logs fetched but no bucket could be applied"
        elif counters.no_user_matches:
            message = "Biometric logs fetched but no employee matches found"
        else:
            message = "Biometric logs fetched but every matching day is locked by leave"

        logger.info("Biometric sync pass finished: %s %s", message, counters.to_dict())
        return SyncResult(
            success=True,
            message=message,
            counters=counters,
            last_synced_at=cursor,
            effective_since=since,
            force_resync_applied=options.force_resync,
            lookback_days=lookback_days,
            skipped_details=details,
            warnings=warnings,
        )

    @staticmethod
    def _note_skip(details: List[SkipDetail], bucket: DailyBucket, reason: SkipReason) -> None:
        if len(details) < MAX_SKIPPED_DETAILS:
            details.append(SkipDetail(emp_code=bucket.emp_code, date=bucket.local_date, reason=reason))
