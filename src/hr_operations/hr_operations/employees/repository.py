from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus, Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note: services depend on this interface, not on a concrete database.
    """

    def get(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def list(self, *, role: Optional[Role] = None, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def list_active_by_role(self, role: Role) -> Sequence[Employee]:
        raise NotImplementedError

    def count_active_by_role(self, role: Role) -> int:
        raise NotImplementedError

    def insert(self, employee: Employee) -> Employee:
        raise NotImplementedError

    def save(self, employee: Employee) -> Employee:
        raise NotImplementedError
