from __future__ import annotations

from typing import Optional

from ..model import Employee, normalize_code, strip_code
from ..repository import EmployeeRepository
from .base import ResolutionStrategy


class BiometricCodeStrategy(ResolutionStrategy):
    """Secondary ``biometric_code`` field kept in sync by the HR directory."""

    name = "biometric-code"

    def find(self, employees: EmployeeRepository, raw_code: str) -> Optional[Employee]:
        normalized = normalize_code(raw_code)
        if not normalized:
            return None

        found = employees.get_by_biometric_code(normalized)
        if found:
            return found

        stripped = strip_code(raw_code)
        if stripped and stripped != normalized:
            return employees.get_by_biometric_code(stripped)
        return None
