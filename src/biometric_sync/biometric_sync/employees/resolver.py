from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .model import Employee
from .repository import EmployeeRepository
from .strategies.base import ResolutionStrategy
from .strategies.biometric_code_strategy import BiometricCodeStrategy
from .strategies.case_insensitive_strategy import CaseInsensitiveCodeStrategy
from .strategies.exact_strategy import ExactCodeStrategy
from .strategies.normalized_strategy import NormalizedCodeStrategy
from .strategies.stripped_strategy import StrippedCodeStrategy

logger = logging.getLogger(__name__)


def default_strategies() -> list[ResolutionStrategy]:
    """Resolution order; the first strategy that finds an employee wins."""

    return [
        ExactCodeStrategy(),
        CaseInsensitiveCodeStrategy(),
        NormalizedCodeStrategy(),
        StrippedCodeStrategy(),
        BiometricCodeStrategy(),
    ]


@dataclass(frozen=True)
class Resolution:
    employee: Employee
    strategy: str


class EmployeeResolver:
    """Maps raw terminal employee codes to canonical employees.

    Terminal exports drift from the HR directory (case, whitespace, dashes),
    so several strategies are tried in order.
    """

    def __init__(self, employees: EmployeeRepository, strategies: Optional[Sequence[ResolutionStrategy]] = None):
        self._employees = employees
        self._strategies = list(strategies) if strategies is not None else default_strategies()

    @property
    def strategies(self) -> Sequence[ResolutionStrategy]:
        return tuple(self._strategies)

    def resolve_with_strategy(self, raw_code: str) -> Optional[Resolution]:
        if not raw_code or not raw_code.strip():
            return None

        for strategy in self._strategies:
            employee = strategy.find(self._employees, raw_code)
            if employee:
                logger.debug("Resolved %r -> employee %s via %s", raw_code, employee.employee_id, strategy.name)
                return Resolution(employee=employee, strategy=strategy.name)
        return None

    def resolve(self, raw_code: str) -> Optional[Employee]:
        resolution = self.resolve_with_strategy(raw_code)
        return resolution.employee if resolution else None
