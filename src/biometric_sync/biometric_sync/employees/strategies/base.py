from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import Employee
from ..repository import EmployeeRepository


class ResolutionStrategy(ABC):
    """Strategy Pattern: one way of matching a terminal code to an employee."""

    name: str = "base"

    @abstractmethod
    def find(self, employees: EmployeeRepository, raw_code: str) -> Optional[Employee]:
        raise NotImplementedError
