"""Print the newest rows of the terminal log table (connectivity check)."""

from __future__ import annotations

import argparse

from _bootstrap import load_container


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--limit", type=int, default=20)
    args = parser.parse_args(argv)

    container = load_container()
    if not container.log_source.is_configured():
        raise SystemExit("Biometric log source is not configured (BIOMETRIC_DB_* variables).")

    for entry in container.log_source.fetch_latest(limit=args.limit):
        ts = entry.timestamp.isoformat() if entry.timestamp else "-"
        print(f"{entry.emp_code or '-':<12} {entry.direction or '-':<4} {entry.device_id or '-':<8} {ts}")


if __name__ == "__main__":
    main()
