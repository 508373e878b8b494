from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from bson import ObjectId

from ..core.constants import COLLECTION_ATTENDANCE
from ..core.enums import AttendanceStatus, HolidayStatus
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, optional_str, to_object_id, translate_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

DUPLICATE_MESSAGE = "Attendance already marked for this date"


def _to_entity(doc: Dict[str, Any]) -> AttendanceRecord:
    holiday_type = doc.get("holiday_type")
    return AttendanceRecord(
        id=id_str(doc),
        employee_id=str(doc["employee_id"]),
        date=doc["date"],
        status=AttendanceStatus(doc.get("status", AttendanceStatus.PRESENT.value)),
        departments=tuple(doc.get("departments", [])),
        employee_name=doc.get("employee_name", ""),
        check_in=doc.get("check_in"),
        check_out=doc.get("check_out"),
        total_hours=float(doc.get("total_hours", 0) or 0),
        notes=doc.get("notes", ""),
        is_holiday=bool(doc.get("is_holiday", False)),
        holiday_type=HolidayStatus(holiday_type) if holiday_type else None,
        approved_by=optional_str(doc.get("approved_by")),
        remarks=doc.get("remarks", ""),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _to_document(record: AttendanceRecord) -> Dict[str, Any]:
    return {
        "employee_id": record.employee_id,
        "date": record.date,
        "status": record.status.value,
        "departments": list(record.departments),
        "employee_name": record.employee_name,
        "check_in": record.check_in,
        "check_out": record.check_out,
        "total_hours": record.total_hours,
        "notes": record.notes,
        "is_holiday": record.is_holiday,
        "holiday_type": record.holiday_type.value if record.holiday_type else None,
        "approved_by": record.approved_by,
        "remarks": record.remarks,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
    }


class MongoAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: DatabaseConnection):
        self._col = conn.collection(COLLECTION_ATTENDANCE)

    def get(self, attendance_id: str) -> Optional[AttendanceRecord]:
        if not ObjectId.is_valid(attendance_id):
            return None
        doc = self._col.find_one({"_id": ObjectId(attendance_id)})
        return _to_entity(doc) if doc else None

    def find_for_employee_date(self, employee_id: str, date: str) -> Optional[AttendanceRecord]:
        doc = self._col.find_one({"employee_id": employee_id, "date": date})
        return _to_entity(doc) if doc else None

    def list_for_employee(
        self,
        employee_id: str,
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        query: Dict[str, Any] = {"employee_id": employee_id}
        date_range: Dict[str, str] = {}
        if date_from:
            date_range["$gte"] = date_from
        if date_to:
            date_range["$lte"] = date_to
        if date_range:
            query["date"] = date_range
        return [_to_entity(d) for d in self._col.find(query).sort("date", -1)]

    def list_for_department(self, department: str, *, date: Optional[str] = None) -> Sequence[AttendanceRecord]:
        query: Dict[str, Any] = {"departments": department}
        if date:
            query["date"] = date
        return [_to_entity(d) for d in self._col.find(query).sort([("date", -1), ("employee_name", 1)])]

    def list_for_date(self, date: str) -> Sequence[AttendanceRecord]:
        return [_to_entity(d) for d in self._col.find({"date": date})]

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        with translate_duplicate_key(DUPLICATE_MESSAGE):
            result = self._col.insert_one(_to_document(record))
        return self.get(str(result.inserted_id))

    def save(self, record: AttendanceRecord) -> AttendanceRecord:
        with translate_duplicate_key(DUPLICATE_MESSAGE):
            self._col.replace_one({"_id": to_object_id(record.id, entity="attendance")}, _to_document(record))
        return record
