from __future__ import annotations

import dataclasses
import itertools
from typing import Optional

import pytest
from bson import ObjectId

from src.hr_operations.hr_operations.auth.tokens import issue_token
from src.hr_operations.hr_operations.container import wire
from src.hr_operations.hr_operations.core.enums import EmployeeStatus, Role
from src.hr_operations.hr_operations.core.exceptions import ConflictError
from src.hr_operations.hr_operations.employees.model import Employee
from src.hr_operations.hr_operations.main import create_app

JWT_SECRET = "test-jwt-secret"
GATEWAY_SECRET = "test-gateway-secret"


def new_id() -> str:
    return str(ObjectId())


class _Store:
    def __init__(self):
        self.items: dict = {}
        self._seq = itertools.count(1)
        self.order: dict = {}

    def put(self, entity):
        if not entity.id:
            entity = dataclasses.replace(entity, id=new_id())
        if entity.id not in self.order:
            self.order[entity.id] = next(self._seq)
        self.items[entity.id] = entity
        return entity


class InMemoryDepartments(_Store):
    def get(self, department_id):
        return self.items.get(department_id)

    def find_by_name(self, name):
        return next((d for d in self.items.values() if d.name.lower() == name.strip().lower()), None)

    def dept_id_exists(self, dept_id):
        return any(d.dept_id == dept_id for d in self.items.values())

    def list_active(self):
        return sorted((d for d in self.items.values() if d.is_active), key=lambda d: d.name)

    def insert(self, department):
        return self.put(department)

    def save(self, department):
        return self.put(department)


class InMemoryEmployees(_Store):
    def get(self, employee_id):
        return self.items.get(employee_id)

    def find_by_email(self, email):
        return next((e for e in self.items.values() if e.email == email.strip().lower()), None)

    def list(self, *, role=None, status=None):
        rows = [
            e
            for e in self.items.values()
            if (role is None or e.role == role) and (status is None or e.status == status)
        ]
        return sorted(rows, key=lambda e: e.name)

    def list_active_by_role(self, role):
        return self.list(role=role, status=EmployeeStatus.ACTIVE)

    def count_active_by_role(self, role):
        return len(self.list_active_by_role(role))

    def insert(self, employee):
        if self.find_by_email(employee.email):
            raise ConflictError("An employee with this email already exists")
        return self.put(employee)

    def save(self, employee):
        return self.put(employee)


class InMemoryHolidays(_Store):
    """Mirrors the unique (date, departments.id) index."""

    def _check_unique(self, holiday):
        ids = {d.id for d in holiday.departments}
        for other in self.items.values():
            if other.id != holiday.id and other.date == holiday.date and ids & {d.id for d in other.departments}:
                raise ConflictError("Holiday already exists for this date in one of the selected departments")

    def get(self, holiday_id):
        return self.items.get(holiday_id)

    def find_conflicts(self, *, date, department_ids, exclude_id=None):
        ids = set(department_ids)
        return [
            h
            for h in self.items.values()
            if h.date == date and h.id != exclude_id and ids & {d.id for d in h.departments}
        ]

    def list(self, *, department=None, status=None, date_from=None, date_to=None):
        rows = [
            h
            for h in self.items.values()
            if (department is None or h.covers(department))
            and (status is None or h.status == status)
            and (date_from is None or h.date >= date_from)
            and (date_to is None or h.date <= date_to)
        ]
        return sorted(rows, key=lambda h: h.date)

    def for_date(self, date, *, department=None):
        return [h for h in self.list(department=department) if h.date == date]

    def insert(self, holiday):
        self._check_unique(holiday)
        return self.put(holiday)

    def save(self, holiday):
        self._check_unique(holiday)
        return self.put(holiday)

    def delete(self, holiday_id):
        return self.items.pop(holiday_id, None) is not None


class InMemoryAttendance(_Store):
    """Mirrors the unique (employee_id, date) index."""

    def get(self, attendance_id):
        return self.items.get(attendance_id)

    def find_for_employee_date(self, employee_id, date):
        return next((r for r in self.items.values() if r.employee_id == employee_id and r.date == date), None)

    def list_for_employee(self, employee_id, *, date_from=None, date_to=None):
        rows = [
            r
            for r in self.items.values()
            if r.employee_id == employee_id
            and (date_from is None or r.date >= date_from)
            and (date_to is None or r.date <= date_to)
        ]
        return sorted(rows, key=lambda r: r.date, reverse=True)

    def list_for_department(self, department, *, date=None):
        rows = [r for r in self.items.values() if department in r.departments and (date is None or r.date == date)]
        return sorted(rows, key=lambda r: (r.date, r.employee_name), reverse=True)

    def list_for_date(self, date):
        return [r for r in self.items.values() if r.date == date]

    def insert(self, record):
        if self.find_for_employee_date(record.employee_id, record.date):
            raise ConflictError("Attendance already marked for this date")
        return self.put(record)

    def save(self, record):
        return self.put(record)


class InMemoryMeetings(_Store):
    def _filter(self, rows, status, date):
        rows = [m for m in rows if (status is None or m.status == status) and (date is None or m.schedule.date == date)]
        return sorted(rows, key=lambda m: (m.schedule.date, m.schedule.start_time))

    def get(self, meeting_id):
        return self.items.get(meeting_id)

    def find_by_organizer(self, employee_id, *, status=None, date=None, skip=0, limit=None):
        rows = self._filter([m for m in self.items.values() if m.is_organized_by(employee_id)], status, date)
        return rows[skip: skip + limit if limit else None]

    def count_by_organizer(self, employee_id, *, status=None, date=None):
        return len(self.find_by_organizer(employee_id, status=status, date=date))

    def find_for_invitee(self, employee_id, *, status=None, date=None, skip=0, limit=None):
        rows = self._filter([m for m in self.items.values() if m.is_invited(employee_id)], status, date)
        return rows[skip: skip + limit if limit else None]

    def count_for_invitee(self, employee_id, *, status=None, date=None):
        return len(self.find_for_invitee(employee_id, status=status, date=date))

    def find_related(self, employee_id, department):
        rows = [
            m
            for m in self.items.values()
            if m.is_organized_by(employee_id)
            or m.is_invited(employee_id)
            or any(d.department == department for d in m.invited_departments)
        ]
        return self._filter(rows, None, None)

    def insert(self, meeting):
        return self.put(meeting)

    def save(self, meeting):
        return self.put(meeting)


class InMemoryMeetingAttendance(_Store):
    def upsert(self, record):
        existing = next(
            (
                r
                for r in self.items.values()
                if r.meeting_id == record.meeting_id and r.participant_id == record.participant_id
            ),
            None,
        )
        if existing:
            record = dataclasses.replace(record, id=existing.id, created_at=existing.created_at)
        return self.put(record)

    def list_for_meeting(self, meeting_id):
        rows = [r for r in self.items.values() if r.meeting_id == meeting_id]
        return sorted(rows, key=lambda r: r.participant_name)


class InMemoryPayments(_Store):
    def get(self, payment_id):
        return self.items.get(payment_id)

    def find_by_order_id(self, order_id):
        return next((p for p in self.items.values() if p.gateway_order_id == order_id), None)

    def list_for_lead(self, lead_id):
        rows = [p for p in self.items.values() if p.lead_id == lead_id]
        return sorted(rows, key=lambda p: self.order[p.id], reverse=True)

    def insert(self, payment):
        return self.put(payment)

    def save(self, payment):
        return self.put(payment)


@pytest.fixture
def container():
    return wire(
        conn=None,
        departments_repo=InMemoryDepartments(),
        employees_repo=InMemoryEmployees(),
        holidays_repo=InMemoryHolidays(),
        attendance_repo=InMemoryAttendance(),
        meetings_repo=InMemoryMeetings(),
        meeting_attendance_repo=InMemoryMeetingAttendance(),
        payments_repo=InMemoryPayments(),
        gateway_secret=GATEWAY_SECRET,
    )


@pytest.fixture
def add_employee(container):
    def _add(
        name: str,
        role: Role,
        *,
        email: Optional[str] = None,
        status: EmployeeStatus = EmployeeStatus.ACTIVE,
        emp_code: str = "",
    ) -> Employee:
        employee = Employee(
            id="",
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            role=role,
            emp_code=emp_code,
            status=status,
        )
        return container.employees_repo.insert(employee)

    return _add


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    def _headers(employee: Employee) -> dict:
        token = issue_token(
            secret=JWT_SECRET,
            employee_id=employee.id,
            role=employee.role,
            name=employee.name,
            email=employee.email,
            emp_code=employee.emp_code,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
