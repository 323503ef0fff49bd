from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import InvalidTableNameError

_SAFE_IDENTIFIER = re.compile(r"^[A-Za-z0-9_.]+$")


def quote_table_name(table_name: str) -> str:
    """Validate a (schema-qualified) table name and back-quote each part.

    Only letters, digits, underscores and dots are accepted since the name is
    interpolated into SQL.
    """

    trimmed = (table_name or "").strip()
    if not _SAFE_IDENTIFIER.match(trimmed):
        raise InvalidTableNameError(f"Invalid device log table name: {table_name!r}")

    parts = trimmed.split(".")
    if any(not part for part in parts):
        raise InvalidTableNameError(f"Invalid device log table name: {table_name!r}")
    return ".".join(f"`{part}`" for part in parts)


def coerce_int(value, fallback: int, *, minimum: Optional[int] = None) -> int:
    """Parse config/query values, falling back on garbage and clamping to ``minimum``."""

    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = fallback
    if minimum is not None:
        parsed = max(parsed, minimum)
    return parsed
