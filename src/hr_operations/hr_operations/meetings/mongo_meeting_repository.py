from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument

from ..core.constants import COLLECTION_MEETING_ATTENDANCE, COLLECTION_MEETINGS, DEFAULT_TIMEZONE
from ..core.enums import (
    MeetingAttendanceStatus,
    MeetingStatus,
    MeetingType,
    Platform,
    Priority,
    ResponseStatus,
    Role,
)
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, optional_str, to_object_id
from .model import (
    InvitedDepartment,
    InvitedEmployee,
    Meeting,
    MeetingAttendance,
    Notifications,
    Organizer,
    Participant,
    Schedule,
)
from .repository import MeetingAttendanceRepository, MeetingRepository

_SORT = [("schedule.date", ASCENDING), ("schedule.start_time", ASCENDING)]


def _invited_employee(doc: Dict[str, Any]) -> InvitedEmployee:
    return InvitedEmployee(
        employee_id=str(doc["employee_id"]),
        name=doc.get("name", ""),
        email=doc.get("email", ""),
        emp_code=doc.get("emp_code", ""),
        status=ResponseStatus(doc.get("status", ResponseStatus.PENDING.value)),
        response_date=doc.get("response_date"),
    )


def _to_entity(doc: Dict[str, Any]) -> Meeting:
    organizer = doc["organizer"]
    schedule = doc["schedule"]
    notifications = doc.get("notifications") or {}
    return Meeting(
        id=id_str(doc),
        title=doc["title"],
        description=doc.get("description", ""),
        agenda=doc.get("agenda", ""),
        organizer=Organizer(
            employee_id=str(organizer["employee_id"]),
            name=organizer.get("name", ""),
            role=Role(organizer["role"]),
            email=organizer.get("email", ""),
            emp_code=organizer.get("emp_code", ""),
            designation=organizer.get("designation", ""),
        ),
        invited_departments=tuple(
            InvitedDepartment(
                department=d["department"],
                department_name=d.get("department_name", d["department"]),
                invited_employees=tuple(_invited_employee(e) for e in d.get("invited_employees", [])),
            )
            for d in doc.get("invited_departments", [])
        ),
        participants=tuple(
            Participant(
                employee_id=str(p["employee_id"]),
                role=Role(p["role"]),
                name=p.get("name", ""),
                department=p.get("department", ""),
                email=p.get("email", ""),
                status=ResponseStatus(p.get("status", ResponseStatus.PENDING.value)),
                response_date=p.get("response_date"),
            )
            for p in doc.get("participants", [])
        ),
        schedule=Schedule(
            date=schedule["date"],
            start_time=schedule["start_time"],
            end_time=schedule["end_time"],
            timezone=schedule.get("timezone", DEFAULT_TIMEZONE),
        ),
        platform=Platform(doc["platform"]),
        meeting_link=doc.get("meeting_link", ""),
        location=doc.get("location", ""),
        meeting_type=MeetingType(doc.get("meeting_type", MeetingType.CROSS_DEPARTMENT.value)),
        priority=Priority(doc.get("priority", Priority.MEDIUM.value)),
        status=MeetingStatus(doc.get("status", MeetingStatus.SCHEDULED.value)),
        notifications=Notifications(
            sent_to_departments=bool(notifications.get("sent_to_departments", False)),
            sent_at=notifications.get("sent_at"),
        ),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def _to_document(meeting: Meeting) -> Dict[str, Any]:
    return {
        "title": meeting.title,
        "description": meeting.description,
        "agenda": meeting.agenda,
        "organizer": {
            "employee_id": meeting.organizer.employee_id,
            "name": meeting.organizer.name,
            "role": meeting.organizer.role.value,
            "email": meeting.organizer.email,
            "emp_code": meeting.organizer.emp_code,
            "designation": meeting.organizer.designation,
        },
        "invited_departments": [
            {
                "department": d.department,
                "department_name": d.department_name,
                "invited_employees": [
                    {
                        "employee_id": e.employee_id,
                        "name": e.name,
                        "email": e.email,
                        "emp_code": e.emp_code,
                        "status": e.status.value,
                        "response_date": e.response_date,
                    }
                    for e in d.invited_employees
                ],
            }
            for d in meeting.invited_departments
        ],
        "participants": [
            {
                "employee_id": p.employee_id,
                "role": p.role.value,
                "name": p.name,
                "department": p.department,
                "email": p.email,
                "status": p.status.value,
                "response_date": p.response_date,
            }
            for p in meeting.participants
        ],
        "schedule": {
            "date": meeting.schedule.date,
            "start_time": meeting.schedule.start_time,
            "end_time": meeting.schedule.end_time,
            "timezone": meeting.schedule.timezone,
        },
        "platform": meeting.platform.value,
        "meeting_link": meeting.meeting_link,
        "location": meeting.location,
        "meeting_type": meeting.meeting_type.value,
        "priority": meeting.priority.value,
        "status": meeting.status.value,
        "notifications": {
            "sent_to_departments": meeting.notifications.sent_to_departments,
            "sent_at": meeting.notifications.sent_at,
        },
        "created_at": meeting.created_at,
        "updated_at": meeting.updated_at,
    }


def _invitee_clause(employee_id: str) -> Dict[str, Any]:
    return {
        "$or": [
            {"participants.employee_id": employee_id},
            {"invited_departments.invited_employees.employee_id": employee_id},
        ]
    }


def _filters(base: Dict[str, Any], status: Optional[MeetingStatus], date: Optional[str]) -> Dict[str, Any]:
    query = dict(base)
    if status is not None:
        query["status"] = status.value
    if date:
        query["schedule.date"] = date
    return query


class MongoMeetingRepository(MeetingRepository):
    def __init__(self, conn: DatabaseConnection):
        self._col = conn.collection(COLLECTION_MEETINGS)

    def _find(self, query: Dict[str, Any], *, skip: int = 0, limit: Optional[int] = None) -> Sequence[Meeting]:
        cursor = self._col.find(query).sort(_SORT)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [_to_entity(d) for d in cursor]

    def get(self, meeting_id: str) -> Optional[Meeting]:
        if not ObjectId.is_valid(meeting_id):
            return None
        doc = self._col.find_one({"_id": ObjectId(meeting_id)})
        return _to_entity(doc) if doc else None

    def find_by_organizer(self, employee_id, *, status=None, date=None, skip=0, limit=None):
        query = _filters({"organizer.employee_id": employee_id}, status, date)
        return self._find(query, skip=skip, limit=limit)

    def count_by_organizer(self, employee_id, *, status=None, date=None):
        return self._col.count_documents(_filters({"organizer.employee_id": employee_id}, status, date))

    def find_for_invitee(self, employee_id, *, status=None, date=None, skip=0, limit=None):
        return self._find(_filters(_invitee_clause(employee_id), status, date), skip=skip, limit=limit)

    def count_for_invitee(self, employee_id, *, status=None, date=None):
        return self._col.count_documents(_filters(_invitee_clause(employee_id), status, date))

    def find_related(self, employee_id: str, department: str) -> Sequence[Meeting]:
        clause = _invitee_clause(employee_id)
        clause["$or"].append({"organizer.employee_id": employee_id})
        clause["$or"].append({"invited_departments.department": department})
        return self._find(clause)

    def insert(self, meeting: Meeting) -> Meeting:
        result = self._col.insert_one(_to_document(meeting))
        return self.get(str(result.inserted_id))

    def save(self, meeting: Meeting) -> Meeting:
        self._col.replace_one({"_id": to_object_id(meeting.id, entity="meeting")}, _to_document(meeting))
        return meeting


def _attendance_entity(doc: Dict[str, Any]) -> MeetingAttendance:
    return MeetingAttendance(
        id=id_str(doc),
        meeting_id=str(doc["meeting_id"]),
        participant_id=str(doc["participant_id"]),
        participant_name=doc.get("participant_name", ""),
        status=MeetingAttendanceStatus(doc.get("status", MeetingAttendanceStatus.ABSENT.value)),
        join_time=doc.get("join_time"),
        leave_time=doc.get("leave_time"),
        recorded_by=optional_str(doc.get("recorded_by")),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


class MongoMeetingAttendanceRepository(MeetingAttendanceRepository):
    def __init__(self, conn: DatabaseConnection):
        self._col = conn.collection(COLLECTION_MEETING_ATTENDANCE)

    def upsert(self, record: MeetingAttendance) -> MeetingAttendance:
        key = {"meeting_id": record.meeting_id, "participant_id": record.participant_id}
        doc = self._col.find_one_and_update(
            key,
            {
                "$set": {
                    "participant_name": record.participant_name,
                    "status": record.status.value,
                    "join_time": record.join_time,
                    "leave_time": record.leave_time,
                    "recorded_by": record.recorded_by,
                    "updated_at": record.updated_at,
                },
                "$setOnInsert": {"created_at": record.created_at},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return _attendance_entity(doc)

    def list_for_meeting(self, meeting_id: str) -> Sequence[MeetingAttendance]:
        cursor = self._col.find({"meeting_id": meeting_id}).sort("participant_name", ASCENDING)
        return [_attendance_entity(d) for d in cursor]
