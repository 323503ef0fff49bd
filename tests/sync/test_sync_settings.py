from __future__ import annotations

from src.biometric_sync.biometric_sync.device_logs.source import LogSourceConfig
from src.biometric_sync.biometric_sync.sync.model import SyncOptions
from src.biometric_sync.biometric_sync.sync.settings import SyncSettings


def test_defaults():
    settings = SyncSettings.from_mapping(None)

    assert settings.scope == "attendance"
    assert settings.lookback_days == 3
    assert settings.interval_minutes == 5
    assert settings.max_rows == 5000
    assert settings.tz_offset_minutes == 0
    assert settings.initial_delay_seconds == 10
    assert settings.distributed_lock is False


def test_values_are_coerced_and_clamped():
    settings = SyncSettings.from_mapping(
        {"lookback_days": "0", "interval_minutes": "abc", "max_rows": "-4", "tz_offset_minutes": "-300", "scheduler_enabled": False}
    )

    assert settings.lookback_days == 1
    assert settings.interval_minutes == 5
    assert settings.max_rows == 1
    assert settings.tz_offset_minutes == -300
    assert settings.scheduler_enabled is False


def test_log_source_needs_host_database_user_and_password():
    base = {"host": "10.0.0.5", "database": "att", "user": "reader", "password": ""}

    assert LogSourceConfig.from_mapping(base).is_configured
    assert not LogSourceConfig.from_mapping({**base, "password": None}).is_configured
    assert not LogSourceConfig.from_mapping({**base, "host": ""}).is_configured
    assert not LogSourceConfig.from_mapping(None).is_configured


def test_log_source_defaults():
    cfg = LogSourceConfig.from_mapping({"port": "x", "request_timeout_ms": "0"}, tz_offset_minutes=330)

    assert cfg.port == 3306
    assert cfg.table == "punch_logs"
    assert cfg.request_timeout_ms == 1
    assert cfg.tz_offset_minutes == 330


def test_trigger_options_default_to_incremental():
    options = SyncOptions.from_trigger()

    assert options.manual_trigger is True
    assert options.force_resync is False
    assert options.resync_from is None
    assert options.lookback_days is None


def test_trigger_mode_is_case_insensitive_and_days_must_be_positive():
    options = SyncOptions.from_trigger(mode=" FULL ", days="-2")

    assert options.force_resync is True
    assert options.lookback_days is None


def test_unparseable_from_is_kept_for_reporting():
    options = SyncOptions.from_trigger(mode="full", from_value="  soon ")

    assert options.resync_from is None
    assert options.resync_from_raw == "soon"
