from __future__ import annotations

from _bootstrap import load_container


def main() -> None:
    container = load_container()
    updated = container.employee_directory_service.backfill_biometric_codes()
    print(f"Updated biometric codes for {updated} employee(s).")


if __name__ == "__main__":
    main()
