from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


@dataclass(frozen=True)
class Employee:
    """Domain entity: canonical identity from the HR directory."""

    employee_id: int
    employee_code: str
    full_name: str
    biometric_code: Optional[str] = None
    is_active: bool = True


def normalize_code(raw_code: str) -> str:
    """Trim + upper-case, the form terminals usually agree on."""
    return (raw_code or "").strip().upper()


def strip_code(raw_code: str) -> str:
    """Normalized code with every non-alphanumeric character removed."""
    return _NON_ALNUM.sub("", normalize_code(raw_code))
