from __future__ import annotations

import logging
from typing import Iterable

from pymongo import ASCENDING, DESCENDING, IndexModel

from ..core.constants import (
    COLLECTION_ATTENDANCE,
    COLLECTION_DEPARTMENTS,
    COLLECTION_EMPLOYEES,
    COLLECTION_HOLIDAYS,
    COLLECTION_MEETING_ATTENDANCE,
    COLLECTION_MEETINGS,
    COLLECTION_PAYMENTS,
)
from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..departments.service import DepartmentService
from ..employees.service import EmployeeService
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

INDEXES: dict[str, list[IndexModel]] = {
    COLLECTION_DEPARTMENTS: [
        IndexModel([("name", ASCENDING)], unique=True),
        IndexModel([("dept_id", ASCENDING)], unique=True),
    ],
    COLLECTION_EMPLOYEES: [
        IndexModel([("email", ASCENDING)], unique=True),
        IndexModel([("role", ASCENDING), ("status", ASCENDING)]),
    ],
    COLLECTION_HOLIDAYS: [
        # One holiday per (date, department); multikey over the departments array.
        IndexModel([("date", ASCENDING), ("departments.id", ASCENDING)], unique=True),
    ],
    COLLECTION_ATTENDANCE: [
        IndexModel([("employee_id", ASCENDING), ("date", ASCENDING)], unique=True),
        IndexModel([("date", ASCENDING)]),
        IndexModel([("departments", ASCENDING), ("date", DESCENDING)]),
    ],
    COLLECTION_MEETINGS: [
        IndexModel([("organizer.employee_id", ASCENDING), ("schedule.date", ASCENDING)]),
        IndexModel([("participants.employee_id", ASCENDING)]),
        IndexModel([("invited_departments.invited_employees.employee_id", ASCENDING)]),
        IndexModel([("status", ASCENDING)]),
    ],
    COLLECTION_MEETING_ATTENDANCE: [
        IndexModel([("meeting_id", ASCENDING), ("participant_id", ASCENDING)], unique=True),
    ],
    COLLECTION_PAYMENTS: [
        IndexModel([("lead_id", ASCENDING), ("created_at", DESCENDING)]),
        IndexModel([("gateway_order_id", ASCENDING)], sparse=True),
    ],
}

DEMO_EMPLOYEES: Iterable[tuple[str, str, Role, str]] = (
    ("Asha Menon", "ceo@example.com", Role.CEO, "EMP001"),
    ("Ravi Kumar", "hr@example.com", Role.HR, "EMP002"),
    ("Neha Sharma", "tl@example.com", Role.TEAM_LEADER, "EMP003"),
    ("Vikram Rao", "pm@example.com", Role.PROJECT_MANAGER, "EMP004"),
    ("Priya Nair", "sales@example.com", Role.SALES_EMPLOYEE, "EMP005"),
    ("Arjun Das", "telecaller@example.com", Role.TELECALLER, "EMP006"),
    ("Meera Iyer", "accounts@example.com", Role.ACCOUNTANT, "EMP007"),
)


def ensure_indexes(conn: DatabaseConnection) -> None:
    for collection, indexes in INDEXES.items():
        names = conn.collection(collection).create_indexes(indexes)
        logger.debug("Indexes ready on %s: %s", collection, names)


def list_collections(conn: DatabaseConnection) -> list[str]:
    return sorted(conn.db.list_collection_names())


def seed_departments(departments: DepartmentService) -> int:
    created = departments.seed_defaults()
    logger.info("Default departments seeded (%d new)", created)
    return created


def ensure_demo_employees(employees: EmployeeService) -> int:
    created = 0
    for name, email, role, emp_code in DEMO_EMPLOYEES:
        try:
            employees.create_employee(name=name, email=email, role=role.value, emp_code=emp_code)
            created += 1
        except ConflictError:
            continue
    logger.info("Demo employees seeded (%d new)", created)
    return created
