from __future__ import annotations

from typing import Optional

from ..model import Employee, normalize_code
from ..repository import EmployeeRepository
from .base import ResolutionStrategy


class NormalizedCodeStrategy(ResolutionStrategy):
    """Trimmed, upper-cased variant against the primary code."""

    name = "normalized"

    def find(self, employees: EmployeeRepository, raw_code: str) -> Optional[Employee]:
        normalized = normalize_code(raw_code)
        if not normalized:
            return None
        return employees.get_by_code(normalized, case_sensitive=True)
