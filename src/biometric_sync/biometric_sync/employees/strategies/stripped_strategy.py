from __future__ import annotations

from typing import Optional

from ..model import Employee, strip_code
from ..repository import EmployeeRepository
from .base import ResolutionStrategy


class StrippedCodeStrategy(ResolutionStrategy):
    """Punctuation-free variant ("EMP-0042" -> "EMP0042") against the primary code."""

    name = "stripped"

    def find(self, employees: EmployeeRepository, raw_code: str) -> Optional[Employee]:
        stripped = strip_code(raw_code)
        if not stripped:
            return None
        return employees.get_by_code(stripped, case_sensitive=False)
