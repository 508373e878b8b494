from __future__ import annotations

import dataclasses
import logging
import re
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import utcnow
from ..common.validators import optional_text, require_choice, require_non_empty, require_object_id
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _require_email(value: Any) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, *, role: Optional[str] = None, status: Optional[str] = None) -> Sequence[Employee]:
        role_filter = require_choice(role, Role, "role") if role else None
        if status in (None, ""):
            status_filter: Optional[EmployeeStatus] = EmployeeStatus.ACTIVE
        elif status == "all":
            status_filter = None
        else:
            status_filter = require_choice(status, EmployeeStatus, "status")
        return self._employees.list(role=role_filter, status=status_filter)

    def get_employee(self, employee_id: str) -> Employee:
        require_object_id(employee_id, "employee")
        employee = self._employees.get(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create_employee(
        self,
        *,
        name: Any,
        email: Any,
        role: Any,
        emp_code: Any = None,
        phone: Any = None,
        designation: Any = None,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        email = _require_email(email)
        role_value = require_choice(role, Role, "role")

        if self._employees.find_by_email(email):
            raise ConflictError("An employee with this email already exists")

        now = utcnow()
        employee = Employee(
            id="",
            name=name,
            email=email,
            role=role_value,
            emp_code=optional_text(emp_code, "Employee code", max_len=50),
            phone=optional_text(phone, "Phone", max_len=30),
            designation=optional_text(designation, "Designation", max_len=100),
            status=EmployeeStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
        created = self._employees.insert(employee)
        logger.info("Employee created: %s (%s)", created.email, created.role.value)
        return created

    def update_employee(self, employee_id: str, changes: Mapping[str, Any]) -> Employee:
        employee = self.get_employee(employee_id)
        updates: dict[str, Any] = {}

        if "name" in changes:
            updates["name"] = require_non_empty(changes.get("name"), "Name")
        if "email" in changes:
            email = _require_email(changes.get("email"))
            existing = self._employees.find_by_email(email)
            if existing and existing.id != employee.id:
                raise ConflictError("An employee with this email already exists")
            updates["email"] = email
        if "role" in changes:
            updates["role"] = require_choice(changes.get("role"), Role, "role")
        for field, label, max_len in (
            ("emp_code", "Employee code", 50),
            ("phone", "Phone", 30),
            ("designation", "Designation", 100),
        ):
            if field in changes:
                updates[field] = optional_text(changes.get(field), label, max_len=max_len)

        if not updates:
            raise ValidationError("No updatable fields provided")
        return self._employees.save(dataclasses.replace(employee, updated_at=utcnow(), **updates))

    def set_status(self, employee_id: str, status: Any) -> Employee:
        employee = self.get_employee(employee_id)
        new_status = require_choice(status, EmployeeStatus, "status")
        saved = self._employees.save(dataclasses.replace(employee, status=new_status, updated_at=utcnow()))
        logger.info("Employee %s status set to %s", saved.id, new_status.value)
        return saved
