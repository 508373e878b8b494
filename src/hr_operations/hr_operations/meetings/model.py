from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import (
    MeetingAttendanceStatus,
    MeetingStatus,
    MeetingType,
    Platform,
    Priority,
    ResponseStatus,
    Role,
)


@dataclass(frozen=True)
class Organizer:
    employee_id: str
    name: str
    role: Role
    email: str = ""
    emp_code: str = ""
    designation: str = ""


@dataclass(frozen=True)
class InvitedEmployee:
    employee_id: str
    name: str
    email: str = ""
    emp_code: str = ""
    status: ResponseStatus = ResponseStatus.PENDING
    response_date: Optional[datetime] = None


@dataclass(frozen=True)
class InvitedDepartment:
    department: str
    department_name: str
    invited_employees: Tuple[InvitedEmployee, ...] = ()


@dataclass(frozen=True)
class Participant:
    employee_id: str
    role: Role
    name: str
    department: str
    email: str = ""
    status: ResponseStatus = ResponseStatus.PENDING
    response_date: Optional[datetime] = None


@dataclass(frozen=True)
class Schedule:
    date: str
    start_time: str
    end_time: str
    timezone: str = "Asia/Kolkata"


@dataclass(frozen=True)
class Notifications:
    sent_to_departments: bool = False
    sent_at: Optional[datetime] = None


@dataclass(frozen=True)
class Meeting:
    id: str
    title: str
    organizer: Organizer
    schedule: Schedule
    platform: Platform
    description: str = ""
    agenda: str = ""
    invited_departments: Tuple[InvitedDepartment, ...] = ()
    participants: Tuple[Participant, ...] = ()
    meeting_link: str = ""
    location: str = ""
    meeting_type: MeetingType = MeetingType.CROSS_DEPARTMENT
    priority: Priority = Priority.MEDIUM
    status: MeetingStatus = MeetingStatus.SCHEDULED
    notifications: Notifications = Notifications()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_organized_by(self, employee_id: str) -> bool:
        return self.organizer.employee_id == employee_id

    def is_invited(self, employee_id: str) -> bool:
        if any(p.employee_id == employee_id for p in self.participants):
            return True
        return any(
            e.employee_id == employee_id for d in self.invited_departments for e in d.invited_employees
        )

    def participant(self, employee_id: str) -> Optional[Participant]:
        return next((p for p in self.participants if p.employee_id == employee_id), None)


@dataclass(frozen=True)
class MeetingAttendance:
    id: str
    meeting_id: str
    participant_id: str
    participant_name: str
    status: MeetingAttendanceStatus = MeetingAttendanceStatus.ABSENT
    join_time: Optional[str] = None
    leave_time: Optional[str] = None
    recorded_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class MeetingPage:
    items: Tuple[Meeting, ...]
    page: int
    pages: int
    total: int
