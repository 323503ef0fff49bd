"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SYNC_SCOPE = "attendance"
DEFAULT_LOOKBACK_DAYS = 3
DEFAULT_SYNC_INTERVAL_MINUTES = 5
DEFAULT_MAX_LOGS_PER_PASS = 5000
DEFAULT_DEVICE_TZ_OFFSET_MINUTES = 0
DEFAULT_SCHEDULER_INITIAL_DELAY_SECONDS = 10

DEFAULT_LOG_TABLE = "punch_logs"
DEFAULT_CONNECT_TIMEOUT_SECONDS = 15
DEFAULT_REQUEST_TIMEOUT_MS = 30000
DEFAULT_POOL_SIZE = 2

CURSOR_OVERLAP_SECONDS = 1
MAX_SKIPPED_DETAILS = 25

HALF_DAY_MIN_HOURS = 5.0
FULL_DAY_MIN_HOURS = 7.5
