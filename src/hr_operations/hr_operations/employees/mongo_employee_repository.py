from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from bson import ObjectId

from ..core.constants import COLLECTION_EMPLOYEES
from ..core.enums import EmployeeStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, to_object_id, translate_duplicate_key
from .model import Employee
from .repository import EmployeeRepository


def _to_entity(doc: Dict[str, Any]) -> Employee:
    return Employee(
        id=id_str(doc),
        name=doc.get("name", ""),
        email=doc.get("email", ""),
        role=Role(doc["role"]),
        emp_code=doc.get("emp_code", ""),
        phone=doc.get("phone", ""),
        designation=doc.get("designation", ""),
        status=EmployeeStatus(doc.get("status", EmployeeStatus.ACTIVE.value)),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _to_document(employee: Employee) -> Dict[str, Any]:
    return {
        "name": employee.name,
        "email": employee.email,
        "role": employee.role.value,
        "emp_code": employee.emp_code,
        "phone": employee.phone,
        "designation": employee.designation,
        "status": employee.status.value,
        "created_at": employee.created_at,
        "updated_at": employee.updated_at,
    }


class MongoEmployeeRepository(EmployeeRepository):
    def __init__(self, conn: DatabaseConnection):
        self._col = conn.collection(COLLECTION_EMPLOYEES)

    def get(self, employee_id: str) -> Optional[Employee]:
        if not ObjectId.is_valid(employee_id):
            return None
        doc = self._col.find_one({"_id": ObjectId(employee_id)})
        return _to_entity(doc) if doc else None

    def find_by_email(self, email: str) -> Optional[Employee]:
        doc = self._col.find_one({"email": email.strip().lower()})
        return _to_entity(doc) if doc else None

    def list(self, *, role: Optional[Role] = None, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        query: Dict[str, Any] = {}
        if role is not None:
            query["role"] = role.value
        if status is not None:
            query["status"] = status.value
        return [_to_entity(d) for d in self._col.find(query).sort("name", 1)]

    def list_active_by_role(self, role: Role) -> Sequence[Employee]:
        return self.list(role=role, status=EmployeeStatus.ACTIVE)

    def count_active_by_role(self, role: Role) -> int:
        return self._col.count_documents({"role": role.value, "status": EmployeeStatus.ACTIVE.value})

    def insert(self, employee: Employee) -> Employee:
        with translate_duplicate_key("An employee with this email already exists"):
            result = self._col.insert_one(_to_document(employee))
        return self.get(str(result.inserted_id))

    def save(self, employee: Employee) -> Employee:
        with translate_duplicate_key("An employee with this email already exists"):
            self._col.replace_one(
                {"_id": to_object_id(employee.id, entity="employee")},
                _to_document(employee),
            )
        return employee
