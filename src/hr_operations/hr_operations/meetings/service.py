from __future__ import annotations

import dataclasses
import logging
import math
import re
from datetime import timedelta
from typing import Any, Mapping, Optional

from ..auth.tokens import CurrentUser
from ..common.datetime_utils import now_local, parse_iso_date, utcnow
from ..common.validators import (
    optional_text,
    optional_time_string,
    parse_positive_int,
    require_choice,
    require_date_string,
    require_max_length,
    require_non_empty,
    require_object_id,
    require_time_string,
)
from ..core.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_TIMEZONE,
    DEPARTMENT_LABELS,
    MAX_PAGE_SIZE,
    MEETING_AGENDA_MAX,
    MEETING_DESCRIPTION_MAX,
    MEETING_ORGANIZER_ROLES,
    MEETING_TITLE_MAX,
    MEETING_TRANSITIONS,
    UPCOMING_MEETING_DAYS,
)
from ..core.enums import (
    MeetingAttendanceStatus,
    MeetingStatus,
    MeetingType,
    Platform,
    Priority,
    ResponseStatus,
    Role,
)
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import (
    InvitedDepartment,
    InvitedEmployee,
    Meeting,
    MeetingAttendance,
    MeetingPage,
    Notifications,
    Organizer,
    Participant,
    Schedule,
)
from .repository import MeetingAttendanceRepository, MeetingRepository

logger = logging.getLogger(__name__)

_LINK_RE = re.compile(r"^https?://", re.IGNORECASE)

_DEPARTMENT_ALIASES = {
    "sales": Role.SALES_EMPLOYEE,
    "tl": Role.TEAM_LEADER,
    "pm": Role.PROJECT_MANAGER,
}

EDITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "agenda",
        "schedule",
        "platform",
        "meeting_link",
        "location",
        "meeting_type",
        "priority",
        "status",
    }
)

_RESPONSE_CHOICES = frozenset({ResponseStatus.ACCEPTED, ResponseStatus.DECLINED})
_INITIAL_STATUSES = frozenset({MeetingStatus.DRAFT, MeetingStatus.SCHEDULED})
_ATTENDANCE_CLOSED = frozenset({MeetingStatus.DRAFT, MeetingStatus.CANCELLED})
_TERMINAL = frozenset({MeetingStatus.COMPLETED, MeetingStatus.CANCELLED})


def department_key(raw: Any) -> Role:
    """Resolve a department given as a key string or an object carrying ``id``/``department``."""
    value = raw
    if isinstance(raw, dict):
        value = raw.get("id") or raw.get("department") or raw.get("value")
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Invalid department entry")
    key = value.strip().lower().replace("_", "-")
    if key in _DEPARTMENT_ALIASES:
        return _DEPARTMENT_ALIASES[key]
    try:
        return Role(key)
    except ValueError:
        raise ValidationError(f"Unknown department: {value}")


def _check_transition(current: MeetingStatus, target: MeetingStatus) -> None:
    if target == current:
        return
    if target not in MEETING_TRANSITIONS[current]:
        raise ValidationError(f"Cannot change meeting status from {current.value} to {target.value}")


def _validate_link(platform: Platform, link: str) -> None:
    if platform != Platform.IN_PERSON and not link:
        raise ValidationError("Meeting link is required for virtual meetings")
    if link and not _LINK_RE.match(link):
        raise ValidationError("Meeting link must start with http:// or https://")


def _build_schedule(raw: Any, *, base: Optional[Schedule] = None) -> Schedule:
    if not isinstance(raw, dict):
        raise ValidationError("Complete meeting schedule is required")
    if base is None and not all(raw.get(k) for k in ("date", "start_time", "end_time")):
        raise ValidationError("Complete meeting schedule is required")

    fields: dict[str, Any] = {}
    if raw.get("date"):
        fields["date"] = require_date_string(raw["date"], "Meeting date")
    if raw.get("start_time"):
        fields["start_time"] = require_time_string(raw["start_time"], "Start time")
    if raw.get("end_time"):
        fields["end_time"] = require_time_string(raw["end_time"], "End time")
    if raw.get("timezone"):
        fields["timezone"] = require_non_empty(raw["timezone"], "Timezone")

    if base is None:
        schedule = Schedule(timezone=DEFAULT_TIMEZONE, **fields)
    else:
        schedule = dataclasses.replace(base, **fields)
    if schedule.end_time <= schedule.start_time:
        raise ValidationError("Meeting end time must be after start time")
    return schedule


def _paginate(page: Any, limit: Any) -> tuple[int, int]:
    return (
        parse_positive_int(page, "page", default=1),
        parse_positive_int(limit, "limit", default=DEFAULT_PAGE_SIZE, maximum=MAX_PAGE_SIZE),
    )


class MeetingService:
    def __init__(
        self,
        meetings: MeetingRepository,
        attendance: MeetingAttendanceRepository,
        employees: EmployeeRepository,
    ):
        self._meetings = meetings
        self._attendance = attendance
        self._employees = employees

    # Lookups

    def _visible(self, meeting_id: str, user: CurrentUser) -> Meeting:
        require_object_id(meeting_id, "meeting")
        meeting = self._meetings.get(meeting_id)
        if not meeting or not (meeting.is_organized_by(user.id) or meeting.is_invited(user.id)):
            raise NotFoundError("Meeting not found or access denied")
        return meeting

    def _organized(self, meeting_id: str, user: CurrentUser) -> Meeting:
        require_object_id(meeting_id, "meeting")
        meeting = self._meetings.get(meeting_id)
        if not meeting or not meeting.is_organized_by(user.id):
            raise NotFoundError("Meeting not found or access denied")
        return meeting

    def _organizer(self, user: CurrentUser) -> Organizer:
        employee = self._employees.get(user.id)
        if employee is None:
            return Organizer(employee_id=user.id, name=user.name, role=user.role, email=user.email, emp_code=user.emp_code)
        return Organizer(
            employee_id=employee.id,
            name=employee.name,
            role=user.role,
            email=employee.email,
            emp_code=employee.emp_code,
            designation=employee.designation,
        )

    def _roster(self, organizer: Organizer, departments: list[Role]) -> tuple[tuple[InvitedDepartment, ...], tuple[Participant, ...]]:
        """Invite every active employee of each department; the organiser is accepted up front."""
        now = utcnow()
        if organizer.role not in departments:
            departments = [*departments, organizer.role]

        invited: list[InvitedDepartment] = []
        participants: list[Participant] = []
        for role in departments:
            entries = [
                InvitedEmployee(employee_id=e.id, name=e.name, email=e.email, emp_code=e.emp_code)
                for e in self._employees.list_active_by_role(role)
                if e.id != organizer.employee_id
            ]
            if role == organizer.role:
                entries.insert(
                    0,
                    InvitedEmployee(
                        employee_id=organizer.employee_id,
                        name=organizer.name,
                        email=organizer.email,
                        emp_code=organizer.emp_code,
                        status=ResponseStatus.ACCEPTED,
                        response_date=now,
                    ),
                )
            if not entries:
                logger.info("No active employees in department %s; skipped", role.value)
                continue

            invited.append(InvitedDepartment(role.value, DEPARTMENT_LABELS[role], tuple(entries)))
            participants.extend(
                Participant(
                    employee_id=e.employee_id,
                    role=role,
                    name=e.name,
                    department=role.value,
                    email=e.email,
                    status=e.status,
                    response_date=e.response_date,
                )
                for e in entries
            )
        return tuple(invited), tuple(participants)

    # Organiser operations

    def create(
        self,
        user: CurrentUser,
        *,
        title: Any,
        schedule: Any,
        departments: Any,
        platform: Any = None,
        meeting_link: Any = None,
        description: Any = None,
        agenda: Any = None,
        location: Any = None,
        meeting_type: Any = None,
        priority: Any = None,
        status: Any = None,
    ) -> Meeting:
        if user.role not in MEETING_ORGANIZER_ROLES:
            raise AuthorizationError("You are not allowed to organise meetings")

        title = require_max_length(require_non_empty(title, "Meeting title"), "Meeting title", MEETING_TITLE_MAX)
        built_schedule = _build_schedule(schedule)
        platform_value = require_choice(platform, Platform, "platform") if platform else Platform.GOOGLE_MEET
        link = optional_text(meeting_link, "Meeting link", max_len=500)
        _validate_link(platform_value, link)

        if not isinstance(departments, list) or not departments:
            raise ValidationError("At least one department is required")
        selected = list(dict.fromkeys(department_key(d) for d in departments))

        initial = require_choice(status, MeetingStatus, "status") if status else MeetingStatus.SCHEDULED
        if initial not in _INITIAL_STATUSES:
            raise ValidationError("New meetings must be draft or scheduled")

        organizer = self._organizer(user)
        invited, participants = self._roster(organizer, selected)
        now = utcnow()
        meeting = Meeting(
            id="",
            title=title,
            description=optional_text(description, "Description", max_len=MEETING_DESCRIPTION_MAX),
            agenda=optional_text(agenda, "Agenda", max_len=MEETING_AGENDA_MAX),
            organizer=organizer,
            invited_departments=invited,
            participants=participants,
            schedule=built_schedule,
            platform=platform_value,
            meeting_link=link,
            location=optional_text(location, "Location", max_len=500),
            meeting_type=require_choice(meeting_type, MeetingType, "meeting type") if meeting_type else MeetingType.CROSS_DEPARTMENT,
            priority=require_choice(priority, Priority, "priority") if priority else Priority.MEDIUM,
            status=initial,
            notifications=Notifications(sent_to_departments=bool(invited), sent_at=now if invited else None),
            created_at=now,
            updated_at=now,
        )
        created = self._meetings.insert(meeting)
        logger.info(
            "Meeting created: %s by %s with %d participants",
            created.id,
            organizer.employee_id,
            len(created.participants),
        )
        return created

    def list_organized(
        self,
        user: CurrentUser,
        *,
        status: Any = None,
        date: Any = None,
        page: Any = None,
        limit: Any = None,
    ) -> MeetingPage:
        page_no, size = _paginate(page, limit)
        status_value = require_choice(status, MeetingStatus, "status") if status else None
        day = require_date_string(date) if date else None
        total = self._meetings.count_by_organizer(user.id, status=status_value, date=day)
        items = self._meetings.find_by_organizer(
            user.id, status=status_value, date=day, skip=(page_no - 1) * size, limit=size
        )
        return MeetingPage(items=tuple(items), page=page_no, pages=math.ceil(total / size), total=total)

    def update(self, meeting_id: str, user: CurrentUser, changes: Mapping[str, Any]) -> Meeting:
        meeting = self._organized(meeting_id, user)
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        if not changes:
            raise ValidationError("No updatable fields provided")
        if meeting.status in _TERMINAL:
            raise ValidationError(f"Cannot update a {meeting.status.value} meeting")

        updates: dict[str, Any] = {}
        if "title" in changes:
            title = require_non_empty(changes["title"], "Meeting title")
            updates["title"] = require_max_length(title, "Meeting title", MEETING_TITLE_MAX)
        if "description" in changes:
            updates["description"] = optional_text(changes["description"], "Description", max_len=MEETING_DESCRIPTION_MAX)
        if "agenda" in changes:
            updates["agenda"] = optional_text(changes["agenda"], "Agenda", max_len=MEETING_AGENDA_MAX)
        if "schedule" in changes:
            updates["schedule"] = _build_schedule(changes["schedule"], base=meeting.schedule)
        if "platform" in changes:
            updates["platform"] = require_choice(changes["platform"], Platform, "platform")
        if "meeting_link" in changes:
            updates["meeting_link"] = optional_text(changes["meeting_link"], "Meeting link", max_len=500)
        if "location" in changes:
            updates["location"] = optional_text(changes["location"], "Location", max_len=500)
        if "meeting_type" in changes:
            updates["meeting_type"] = require_choice(changes["meeting_type"], MeetingType, "meeting type")
        if "priority" in changes:
            updates["priority"] = require_choice(changes["priority"], Priority, "priority")

        _validate_link(updates.get("platform", meeting.platform), updates.get("meeting_link", meeting.meeting_link))

        if "status" in changes:
            target = require_choice(changes["status"], MeetingStatus, "status")
            _check_transition(meeting.status, target)
            updates["status"] = target
        elif "schedule" in updates and updates["schedule"] != meeting.schedule and meeting.status == MeetingStatus.SCHEDULED:
            updates["status"] = MeetingStatus.RESCHEDULED

        saved = self._meetings.save(dataclasses.replace(meeting, updated_at=utcnow(), **updates))
        logger.info("Meeting updated: %s fields=%s", saved.id, sorted(updates))
        return saved

    def cancel(self, meeting_id: str, user: CurrentUser) -> Meeting:
        meeting = self._organized(meeting_id, user)
        if meeting.status == MeetingStatus.CANCELLED:
            raise ValidationError("Meeting is already cancelled")
        _check_transition(meeting.status, MeetingStatus.CANCELLED)
        saved = self._meetings.save(
            dataclasses.replace(meeting, status=MeetingStatus.CANCELLED, updated_at=utcnow())
        )
        logger.info("Meeting cancelled: %s", saved.id)
        return saved

    def record_attendance(
        self,
        meeting_id: str,
        user: CurrentUser,
        *,
        participant_id: Any,
        status: Any,
        join_time: Any = None,
        leave_time: Any = None,
    ) -> MeetingAttendance:
        meeting = self._organized(meeting_id, user)
        if meeting.status in _ATTENDANCE_CLOSED:
            raise ValidationError(f"Cannot record attendance for a {meeting.status.value} meeting")

        participant_id = require_non_empty(participant_id, "Participant")
        participant = meeting.participant(participant_id)
        if participant is None:
            raise NotFoundError("Participant not found in this meeting")

        attendance_status = require_choice(status, MeetingAttendanceStatus, "attendance status")
        join = optional_time_string(join_time, "Join time")
        leave = optional_time_string(leave_time, "Leave time")
        if join and leave and leave <= join:
            raise ValidationError("Leave time must be after join time")

        now = utcnow()
        record = self._attendance.upsert(
            MeetingAttendance(
                id="",
                meeting_id=meeting.id,
                participant_id=participant.employee_id,
                participant_name=participant.name,
                status=attendance_status,
                join_time=join,
                leave_time=leave,
                recorded_by=user.id,
                created_at=now,
                updated_at=now,
            )
        )

        attended = attendance_status in {MeetingAttendanceStatus.PRESENT, MeetingAttendanceStatus.LATE}
        roster_status = ResponseStatus.ATTENDED if attended else ResponseStatus.MISSED
        self._meetings.save(self._with_response(meeting, participant.employee_id, roster_status, now))
        return record

    def attendance(self, meeting_id: str, user: CurrentUser) -> list[MeetingAttendance]:
        meeting = self._organized(meeting_id, user)
        return list(self._attendance.list_for_meeting(meeting.id))

    # Invitee operations

    def list_invited(
        self,
        user: CurrentUser,
        *,
        status: Any = None,
        date: Any = None,
        page: Any = None,
        limit: Any = None,
    ) -> MeetingPage:
        page_no, size = _paginate(page, limit)
        status_value = require_choice(status, MeetingStatus, "status") if status else None
        day = require_date_string(date) if date else None
        total = self._meetings.count_for_invitee(user.id, status=status_value, date=day)
        items = self._meetings.find_for_invitee(
            user.id, status=status_value, date=day, skip=(page_no - 1) * size, limit=size
        )
        return MeetingPage(items=tuple(items), page=page_no, pages=math.ceil(total / size), total=total)

    def get_for_user(self, meeting_id: str, user: CurrentUser) -> Meeting:
        return self._visible(meeting_id, user)

    def respond(self, meeting_id: str, user: CurrentUser, *, status: Any) -> Meeting:
        try:
            response = ResponseStatus(status)
        except ValueError:
            response = None
        if response not in _RESPONSE_CHOICES:
            raise ValidationError("Status must be either accepted or declined")

        meeting = self._visible(meeting_id, user)
        if not meeting.is_invited(user.id):
            raise NotFoundError("Meeting not found or access denied")
        if meeting.status in _TERMINAL:
            raise ValidationError(f"Cannot respond to a {meeting.status.value} meeting")

        saved = self._meetings.save(self._with_response(meeting, user.id, response, utcnow()))
        logger.info("Meeting %s: %s responded %s", saved.id, user.id, response.value)
        return saved

    @staticmethod
    def _with_response(meeting: Meeting, employee_id: str, status: ResponseStatus, when) -> Meeting:
        departments = tuple(
            dataclasses.replace(
                d,
                invited_employees=tuple(
                    dataclasses.replace(e, status=status, response_date=when) if e.employee_id == employee_id else e
                    for e in d.invited_employees
                ),
            )
            for d in meeting.invited_departments
        )
        participants = tuple(
            dataclasses.replace(p, status=status, response_date=when) if p.employee_id == employee_id else p
            for p in meeting.participants
        )
        return dataclasses.replace(
            meeting, invited_departments=departments, participants=participants, updated_at=when
        )

    # Reporting

    def stats(self, user: CurrentUser) -> dict:
        meetings = self._meetings.find_related(user.id, user.role.value)
        today = now_local().date()
        horizon = today + timedelta(days=UPCOMING_MEETING_DAYS)

        by_status = {s.value: 0 for s in MeetingStatus}
        by_department: dict[str, int] = {}
        today_count = upcoming = 0
        for meeting in meetings:
            by_status[meeting.status.value] += 1
            for d in meeting.invited_departments:
                by_department[d.department] = by_department.get(d.department, 0) + 1

            day = parse_iso_date(meeting.schedule.date)
            if day == today and meeting.status in {MeetingStatus.SCHEDULED, MeetingStatus.IN_PROGRESS}:
                today_count += 1
            elif today < day <= horizon and meeting.status == MeetingStatus.SCHEDULED:
                upcoming += 1

        return {
            "total": len(meetings),
            "today": today_count,
            "upcoming": upcoming,
            "by_status": by_status,
            "by_department": by_department,
        }
