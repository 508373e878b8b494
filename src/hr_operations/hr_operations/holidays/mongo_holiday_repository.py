from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from bson import ObjectId

from ..core.constants import COLLECTION_HOLIDAYS
from ..core.enums import HolidayStatus
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, optional_str, to_object_id, translate_duplicate_key
from .model import DepartmentRef, Holiday
from .repository import HolidayRepository

DUPLICATE_MESSAGE = "Holiday already exists for this date in one of the selected departments"


def _to_entity(doc: Dict[str, Any]) -> Holiday:
    return Holiday(
        id=id_str(doc),
        title=doc.get("title", ""),
        date=doc["date"],
        departments=tuple(DepartmentRef(name=d.get("name", ""), id=d.get("id", "")) for d in doc.get("departments", [])),
        status=HolidayStatus(doc.get("status", HolidayStatus.FULL_DAY.value)),
        description=doc.get("description", ""),
        start_time=doc.get("start_time", "09:00"),
        end_time=doc.get("end_time", "17:00"),
        display_time=doc.get("display_time", ""),
        department_colors=tuple(doc.get("department_colors", [])),
        background_color=doc.get("background_color", ""),
        created_by=optional_str(doc.get("created_by")),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _to_document(holiday: Holiday) -> Dict[str, Any]:
    return {
        "title": holiday.title,
        "date": holiday.date,
        "departments": [{"name": d.name, "id": d.id} for d in holiday.departments],
        "status": holiday.status.value,
        "description": holiday.description,
        "start_time": holiday.start_time,
        "end_time": holiday.end_time,
        "display_time": holiday.display_time,
        "department_colors": list(holiday.department_colors),
        "background_color": holiday.background_color,
        "created_by": holiday.created_by,
        "created_at": holiday.created_at,
        "updated_at": holiday.updated_at,
    }


def _department_clause(department: str) -> Dict[str, Any]:
    return {"$or": [{"departments.id": department}, {"departments.name": department}]}


class MongoHolidayRepository(HolidayRepository):
    def __init__(self, conn: DatabaseConnection):
        self._col = conn.collection(COLLECTION_HOLIDAYS)

    def get(self, holiday_id: str) -> Optional[Holiday]:
        if not ObjectId.is_valid(holiday_id):
            return None
        doc = self._col.find_one({"_id": ObjectId(holiday_id)})
        return _to_entity(doc) if doc else None

    def find_conflicts(
        self,
        *,
        date: str,
        department_ids: Iterable[str],
        exclude_id: Optional[str] = None,
    ) -> Sequence[Holiday]:
        query: Dict[str, Any] = {"date": date, "departments.id": {"$in": list(department_ids)}}
        if exclude_id:
            query["_id"] = {"$ne": to_object_id(exclude_id, entity="holiday")}
        return [_to_entity(d) for d in self._col.find(query)]

    def list(
        self,
        *,
        department: Optional[str] = None,
        status: Optional[HolidayStatus] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> Sequence[Holiday]:
        query: Dict[str, Any] = {}
        if department:
            query.update(_department_clause(department))
        if status is not None:
            query["status"] = status.value
        date_range: Dict[str, str] = {}
        if date_from:
            date_range["$gte"] = date_from
        if date_to:
            date_range["$lte"] = date_to
        if date_range:
            query["date"] = date_range
        return [_to_entity(d) for d in self._col.find(query).sort("date", 1)]

    def for_date(self, date: str, *, department: Optional[str] = None) -> Sequence[Holiday]:
        query: Dict[str, Any] = {"date": date}
        if department:
            query.update(_department_clause(department))
        return [_to_entity(d) for d in self._col.find(query)]

    def insert(self, holiday: Holiday) -> Holiday:
        with translate_duplicate_key(DUPLICATE_MESSAGE):
            result = self._col.insert_one(_to_document(holiday))
        return self.get(str(result.inserted_id))

    def save(self, holiday: Holiday) -> Holiday:
        with translate_duplicate_key(DUPLICATE_MESSAGE):
            self._col.replace_one({"_id": to_object_id(holiday.id, entity="holiday")}, _to_document(holiday))
        return holiday

    def delete(self, holiday_id: str) -> bool:
        result = self._col.delete_one({"_id": to_object_id(holiday_id, entity="holiday")})
        return result.deleted_count > 0
