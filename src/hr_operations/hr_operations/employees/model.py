from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EmployeeStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``role`` doubles as the employee's department key.
    """

    id: str
    name: str
    email: str
    role: Role
    emp_code: str = ""
    phone: str = ""
    designation: str = ""
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
