from __future__ import annotations

import pytest

from src.hr_operations.hr_operations.core.enums import EmployeeStatus, Role
from src.hr_operations.hr_operations.core.exceptions import ConflictError, NotFoundError, ValidationError


def test_create_normalizes_email_and_rejects_duplicates(container):
    service = container.employee_service
    employee = service.create_employee(name="Ravi Kumar", email=" HR@Example.com ", role="hr")
    assert employee.email == "hr@example.com"
    assert employee.role == Role.HR

    with pytest.raises(ConflictError):
        service.create_employee(name="Other", email="hr@example.com", role="ceo")


def test_create_validates_role_and_email(container):
    service = container.employee_service
    with pytest.raises(ValidationError):
        service.create_employee(name="X", email="x@example.com", role="intern")
    with pytest.raises(ValidationError):
        service.create_employee(name="X", email="not-an-email", role="hr")


def test_list_defaults_to_active(container, add_employee):
    add_employee("Active One", Role.TELECALLER)
    add_employee("Gone", Role.TELECALLER, status=EmployeeStatus.INACTIVE)
    service = container.employee_service

    assert [e.name for e in service.list_employees()] == ["Active One"]
    assert len(service.list_employees(status="all")) == 2
    assert [e.name for e in service.list_employees(status="inactive")] == ["Gone"]


def test_set_status_and_update(container, add_employee):
    employee = add_employee("Meera Iyer", Role.ACCOUNTANT)
    service = container.employee_service

    assert service.set_status(employee.id, "inactive").status == EmployeeStatus.INACTIVE
    updated = service.update_employee(employee.id, {"designation": "Senior Accountant"})
    assert updated.designation == "Senior Accountant"

    with pytest.raises(ValidationError):
        service.update_employee(employee.id, {})


def test_get_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.employee_service.get_employee("64b7f0c2a1b2c3d4e5f60718")
    with pytest.raises(ValidationError, match="Invalid employee ID"):
        container.employee_service.get_employee("42")
