"""Environment variables shared by every settings module."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def app_db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "hr_attendance"),
    }


def device_db_config() -> dict:
    # Missing host/name/user (or an unset password) leaves the log source unconfigured.
    return {
        "host": os.getenv("BIOMETRIC_DB_HOST"),
        "port": os.getenv("BIOMETRIC_DB_PORT", "3306"),
        "user": os.getenv("BIOMETRIC_DB_USER"),
        "password": os.getenv("BIOMETRIC_DB_PASSWORD"),
        "database": os.getenv("BIOMETRIC_DB_NAME"),
        "table": os.getenv("BIOMETRIC_DB_TABLE", "punch_logs"),
        "connect_timeout": os.getenv("BIOMETRIC_DB_CONNECT_TIMEOUT", "15"),
        "request_timeout_ms": os.getenv("BIOMETRIC_DB_REQUEST_TIMEOUT_MS", "30000"),
        "pool_size": os.getenv("BIOMETRIC_DB_POOL_SIZE", "2"),
    }


def sync_config(*, scheduler_default: str = "1") -> dict:
    return {
        "scope": os.getenv("BIOMETRIC_SYNC_SCOPE", "attendance"),
        "lookback_days": os.getenv("BIOMETRIC_SYNC_LOOKBACK_DAYS", "3"),
        "interval_minutes": os.getenv("BIOMETRIC_SYNC_INTERVAL_MINUTES", "5"),
        "max_rows": os.getenv("BIOMETRIC_SYNC_MAX_LOGS", "5000"),
        "tz_offset_minutes": os.getenv("BIOMETRIC_TIMEZONE_OFFSET_MINUTES", "0"),
        "initial_delay_seconds": os.getenv("BIOMETRIC_SYNC_INITIAL_DELAY_SECONDS", "10"),
        "scheduler_enabled": env_flag("BIOMETRIC_SYNC_SCHEDULER", scheduler_default),
        "distributed_lock": env_flag("BIOMETRIC_SYNC_DISTRIBUTED_LOCK", "0"),
    }
