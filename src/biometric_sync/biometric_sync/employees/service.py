from __future__ import annotations

import logging

from .model import normalize_code
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeDirectoryService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def backfill_biometric_codes(self) -> int:
        """Re-derive ``biometric_code`` from ``employee_code`` where it drifted.

        Returns the number of employees updated.
        """

        updated = 0
        for employee in self._employees.list_all():
            normalized = normalize_code(employee.employee_code)
            if normalized and employee.biometric_code != normalized:
                if self._employees.set_biometric_code(employee.employee_id, normalized):
                    updated += 1

        logger.info("Backfilled biometric codes for %s employee(s)", updated)
        return updated
