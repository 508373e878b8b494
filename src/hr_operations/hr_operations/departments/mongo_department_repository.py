from __future__ import annotations

import re
from typing import Any, Dict, Optional, Sequence

from bson import ObjectId

from ..core.constants import COLLECTION_DEPARTMENTS
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, optional_str, to_object_id, translate_duplicate_key
from .model import Department
from .repository import DepartmentRepository


def _to_entity(doc: Dict[str, Any]) -> Department:
    return Department(
        id=id_str(doc),
        dept_id=doc["dept_id"],
        name=doc["name"],
        description=doc.get("description", ""),
        is_active=bool(doc.get("is_active", True)),
        created_by=optional_str(doc.get("created_by")),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _to_document(department: Department) -> Dict[str, Any]:
    return {
        "dept_id": department.dept_id,
        "name": department.name,
        "description": department.description,
        "is_active": department.is_active,
        "created_by": department.created_by,
        "created_at": department.created_at,
        "updated_at": department.updated_at,
    }


class MongoDepartmentRepository(DepartmentRepository):
    def __init__(self, conn: DatabaseConnection):
        self._col = conn.collection(COLLECTION_DEPARTMENTS)

    def get(self, department_id: str) -> Optional[Department]:
        if not ObjectId.is_valid(department_id):
            return None
        doc = self._col.find_one({"_id": ObjectId(department_id)})
        return _to_entity(doc) if doc else None

    def find_by_name(self, name: str) -> Optional[Department]:
        pattern = f"^{re.escape(name.strip())}$"
        doc = self._col.find_one({"name": {"$regex": pattern, "$options": "i"}})
        return _to_entity(doc) if doc else None

    def dept_id_exists(self, dept_id: str) -> bool:
        return self._col.count_documents({"dept_id": dept_id}, limit=1) > 0

    def list_active(self) -> Sequence[Department]:
        return [_to_entity(d) for d in self._col.find({"is_active": True}).sort("name", 1)]

    def insert(self, department: Department) -> Department:
        with translate_duplicate_key("Department already exists"):
            result = self._col.insert_one(_to_document(department))
        return self.get(str(result.inserted_id))

    def save(self, department: Department) -> Department:
        with translate_duplicate_key("Department already exists"):
            self._col.replace_one(
                {"_id": to_object_id(department.id, entity="department")},
                _to_document(department),
            )
        return department
