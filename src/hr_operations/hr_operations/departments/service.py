from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import utcnow
from ..common.validators import optional_text, require_non_empty, require_object_id
from ..core.constants import COMPANY_SUFFIX, DEFAULT_DEPARTMENTS, DEPARTMENT_CODES, DEPARTMENT_LABELS
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Department
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)


def department_code(name: str) -> str:
    """Known names map to their short code; anything else uses upper-cased word initials."""
    for known, code in DEPARTMENT_CODES.items():
        if known.lower() == name.strip().lower():
            return code
    initials = "".join(word[0] for word in name.split() if word[:1].isalnum())
    return (initials or name[:3]).upper()


def generate_dept_id(name: str, is_taken: Callable[[str], bool]) -> str:
    code = department_code(name)
    candidate = f"{code}{COMPANY_SUFFIX}"
    n = 2
    while is_taken(candidate):
        candidate = f"{code}{n}{COMPANY_SUFFIX}"
        n += 1
    return candidate


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository):
        self._departments = departments
        self._employees = employees

    def list_active(self) -> Sequence[Department]:
        return self._departments.list_active()

    def catalog(self) -> list[dict]:
        """Built-in department keys (one per role) with labels and active head count."""
        rows = []
        for role in Role:
            label = DEPARTMENT_LABELS[role]
            rows.append(
                {
                    "id": role.value,
                    "name": label,
                    "code": department_code(label),
                    "employee_count": self._employees.count_active_by_role(role),
                }
            )
        return rows

    def get(self, department_id: str) -> Department:
        require_object_id(department_id, "department")
        department = self._departments.get(department_id)
        if not department:
            raise NotFoundError("Department not found")
        return department

    def create(self, *, name: Any, description: Any = None, created_by: Optional[str] = None) -> Department:
        name = require_non_empty(name, "Department name")
        description = optional_text(description, "Description", max_len=500)

        if self._departments.find_by_name(name):
            raise ConflictError("Department already exists")

        now = utcnow()
        department = Department(
            id="",
            dept_id=generate_dept_id(name, self._departments.dept_id_exists),
            name=name,
            description=description,
            is_active=True,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        created = self._departments.insert(department)
        logger.info("Department created: %s (%s)", created.name, created.dept_id)
        return created

    def update(self, department_id: str, changes: Mapping[str, Any]) -> Department:
        department = self.get(department_id)
        updates: dict[str, Any] = {}

        if "name" in changes:
            name = require_non_empty(changes.get("name"), "Department name")
            existing = self._departments.find_by_name(name)
            if existing and existing.id != department.id:
                raise ConflictError("Department already exists")
            updates["name"] = name
        if "description" in changes:
            updates["description"] = optional_text(changes.get("description"), "Description", max_len=500)
        if "is_active" in changes:
            if not isinstance(changes.get("is_active"), bool):
                raise ValidationError("is_active must be true or false")
            updates["is_active"] = changes["is_active"]

        if not updates:
            raise ValidationError("No updatable fields provided")

        updated = dataclasses.replace(department, updated_at=utcnow(), **updates)
        return self._departments.save(updated)

    def deactivate(self, department_id: str) -> Department:
        department = self.get(department_id)
        updated = dataclasses.replace(department, is_active=False, updated_at=utcnow())
        saved = self._departments.save(updated)
        logger.info("Department deactivated: %s", saved.name)
        return saved

    def seed_defaults(self) -> int:
        """Create the default departments that are missing. Returns how many were created."""
        created = 0
        for name, description in DEFAULT_DEPARTMENTS:
            if self._departments.find_by_name(name):
                continue
            self.create(name=name, description=description)
            created += 1
        return created
