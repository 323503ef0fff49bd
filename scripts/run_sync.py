"""Run one biometric sync pass from the command line.

Usage: python scripts/run_sync.py [incremental|full] [days] [from]
"""

from __future__ import annotations

import argparse
import json

from _bootstrap import load_container

from src.biometric_sync.biometric_sync.sync.model import SyncOptions


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pull biometric punch logs into attendance records.")
    parser.add_argument("mode", nargs="?", default="incremental", choices=["incremental", "full"])
    parser.add_argument("days", nargs="?", default=None, help="lookback window in days")
    parser.add_argument("from_value", nargs="?", default=None, metavar="from", help="resync start (YYYY-MM-DD)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    container = load_container()

    options = SyncOptions.from_trigger(
        mode=args.mode,
        days=args.days,
        from_value=args.from_value,
        tz_offset_minutes=container.sync_settings.tz_offset_minutes,
    )
    result = container.sync_orchestrator.run_pass(options)
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
