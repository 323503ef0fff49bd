from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Read access to the identity master.

    Note (DIP): the resolver depends on this interface, not on a concrete DB.
    """

    def get_by_code(self, code: str, *, case_sensitive: bool = True) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_biometric_code(self, code: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def set_biometric_code(self, employee_id: int, biometric_code: str) -> bool:
        raise NotImplementedError
