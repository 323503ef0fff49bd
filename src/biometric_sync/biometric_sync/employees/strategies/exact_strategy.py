from __future__ import annotations

from typing import Optional

from ..model import Employee
from ..repository import EmployeeRepository
from .base import ResolutionStrategy


class ExactCodeStrategy(ResolutionStrategy):
    """Primary code, byte-for-byte (surrounding whitespace ignored)."""

    name = "exact"

    def find(self, employees: EmployeeRepository, raw_code: str) -> Optional[Employee]:
        code = (raw_code or "").strip()
        if not code:
            return None
        return employees.get_by_code(code, case_sensitive=True)
