from __future__ import annotations

from datetime import timedelta

import pytest

from src.hr_operations.hr_operations.auth.tokens import CurrentUser
from src.hr_operations.hr_operations.common.datetime_utils import now_local
from src.hr_operations.hr_operations.core.enums import (
    EmployeeStatus,
    MeetingAttendanceStatus,
    MeetingStatus,
    ResponseStatus,
    Role,
)
from src.hr_operations.hr_operations.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_operations.hr_operations.meetings.service import department_key

SCHEDULE = {"date": "2030-01-15", "start_time": "10:00", "end_time": "11:00"}


def _user(employee) -> CurrentUser:
    return CurrentUser(id=employee.id, role=employee.role, name=employee.name, email=employee.email)


def _create(service, organizer, **overrides):
    payload = {
        "title": "Quarterly planning",
        "schedule": dict(SCHEDULE),
        "departments": ["sales-employee"],
        "meeting_link": "https://meet.example.com/abc",
    }
    payload.update(overrides)
    return service.create(_user(organizer), **payload)


@pytest.fixture
def people(add_employee):
    return {
        "hr": add_employee("Ravi Kumar", Role.HR),
        "sales1": add_employee("Priya Nair", Role.SALES_EMPLOYEE),
        "sales2": add_employee("Arjun Das", Role.SALES_EMPLOYEE),
        "sales_inactive": add_employee("Old Timer", Role.SALES_EMPLOYEE, status=EmployeeStatus.INACTIVE),
        "tele": add_employee("Meera Iyer", Role.TELECALLER),
    }


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("sales", Role.SALES_EMPLOYEE),
        ("TL", Role.TEAM_LEADER),
        ("project_manager", Role.PROJECT_MANAGER),
        ({"id": "hr", "name": "Human Resources"}, Role.HR),
    ],
)
def test_department_key_aliases(raw, expected):
    assert department_key(raw) == expected


def test_department_key_rejects_unknown():
    with pytest.raises(ValidationError, match="Unknown department"):
        department_key("marketing")


def test_create_builds_roster_with_organizer_accepted(container, people):
    meeting = _create(container.meeting_service, people["hr"])

    assert [d.department for d in meeting.invited_departments] == ["sales-employee", "hr"]
    invited_ids = {p.employee_id for p in meeting.participants}
    assert invited_ids == {people["hr"].id, people["sales1"].id, people["sales2"].id}
    organizer = meeting.participant(people["hr"].id)
    assert organizer.status == ResponseStatus.ACCEPTED
    assert meeting.participant(people["sales1"].id).status == ResponseStatus.PENDING
    assert meeting.status == MeetingStatus.SCHEDULED
    assert meeting.notifications.sent_to_departments is True


def test_create_skips_departments_without_active_staff(container, people):
    meeting = _create(container.meeting_service, people["hr"], departments=["accountant", "telecaller"])
    assert [d.department for d in meeting.invited_departments] == ["telecaller", "hr"]


def test_create_requires_organizer_role(container, people):
    with pytest.raises(AuthorizationError):
        _create(container.meeting_service, people["sales1"])


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": "  "}, "Meeting title is required"),
        ({"schedule": {"date": "2030-01-15", "start_time": "10:00"}}, "Complete meeting schedule is required"),
        ({"meeting_link": None}, "Meeting link is required for virtual meetings"),
        ({"departments": []}, "At least one department is required"),
        ({"schedule": {"date": "2030-01-15", "start_time": "11:00", "end_time": "10:00"}}, "end time must be after"),
    ],
)
def test_create_validation(container, people, overrides, message):
    with pytest.raises(ValidationError, match=message):
        _create(container.meeting_service, people["hr"], **overrides)


def test_in_person_meeting_needs_no_link(container, people):
    meeting = _create(container.meeting_service, people["hr"], platform="in_person", meeting_link=None, location="Room 4")
    assert meeting.meeting_link == ""


def test_rescheduling_changes_status(container, people):
    service = container.meeting_service
    meeting = _create(service, people["hr"])

    updated = service.update(meeting.id, _user(people["hr"]), {"schedule": {"date": "2030-01-16"}})

    assert updated.status == MeetingStatus.RESCHEDULED
    assert updated.schedule.date == "2030-01-16"
    assert updated.schedule.start_time == "10:00"


def test_invalid_status_transition(container, people):
    service = container.meeting_service
    meeting = _create(service, people["hr"])
    service.update(meeting.id, _user(people["hr"]), {"status": "completed"})

    with pytest.raises(ValidationError):
        service.update(meeting.id, _user(people["hr"]), {"status": "scheduled"})


def test_only_organizer_can_update_or_cancel(container, people):
    service = container.meeting_service
    meeting = _create(service, people["hr"])

    with pytest.raises(NotFoundError, match="Meeting not found or access denied"):
        service.update(meeting.id, _user(people["sales1"]), {"title": "Hijacked"})
    with pytest.raises(NotFoundError):
        service.cancel(meeting.id, _user(people["tele"]))

    cancelled = service.cancel(meeting.id, _user(people["hr"]))
    assert cancelled.status == MeetingStatus.CANCELLED
    with pytest.raises(ValidationError, match="already cancelled"):
        service.cancel(meeting.id, _user(people["hr"]))


def test_invitee_response(container, people):
    service = container.meeting_service
    meeting = _create(service, people["hr"])

    with pytest.raises(ValidationError, match="Status must be either accepted or declined"):
        service.respond(meeting.id, _user(people["sales1"]), status="maybe")
    with pytest.raises(NotFoundError):
        service.respond(meeting.id, _user(people["tele"]), status="accepted")

    updated = service.respond(meeting.id, _user(people["sales1"]), status="declined")
    assert updated.participant(people["sales1"].id).status == ResponseStatus.DECLINED
    invited = [e for d in updated.invited_departments for e in d.invited_employees if e.employee_id == people["sales1"].id]
    assert invited[0].status == ResponseStatus.DECLINED
    assert invited[0].response_date is not None


def test_visibility_is_limited_to_roster(container, people):
    service = container.meeting_service
    meeting = _create(service, people["hr"])

    assert service.get_for_user(meeting.id, _user(people["sales2"])).id == meeting.id
    with pytest.raises(NotFoundError):
        service.get_for_user(meeting.id, _user(people["tele"]))
    with pytest.raises(ValidationError, match="Invalid meeting ID"):
        service.get_for_user("nope", _user(people["hr"]))


def test_record_attendance_updates_roster(container, people):
    service = container.meeting_service
    hr = _user(people["hr"])
    meeting = _create(service, people["hr"])

    record = service.record_attendance(
        meeting.id, hr, participant_id=people["sales1"].id, status="late", join_time="10:10", leave_time="11:00"
    )
    assert record.status == MeetingAttendanceStatus.LATE
    service.record_attendance(meeting.id, hr, participant_id=people["sales2"].id, status="absent")
    # recording again overwrites the earlier entry
    service.record_attendance(meeting.id, hr, participant_id=people["sales1"].id, status="present")

    records = service.attendance(meeting.id, hr)
    assert [(r.participant_name, r.status) for r in records] == [
        ("Arjun Das", MeetingAttendanceStatus.ABSENT),
        ("Priya Nair", MeetingAttendanceStatus.PRESENT),
    ]
    stored = container.meetings_repo.get(meeting.id)
    assert stored.participant(people["sales1"].id).status == ResponseStatus.ATTENDED
    assert stored.participant(people["sales2"].id).status == ResponseStatus.MISSED

    with pytest.raises(NotFoundError, match="Participant not found"):
        service.record_attendance(meeting.id, hr, participant_id=people["tele"].id, status="present")


def test_pagination_of_invited_meetings(container, people):
    service = container.meeting_service
    for day in range(1, 4):
        _create(service, people["hr"], schedule={"date": f"2030-02-0{day}", "start_time": "10:00", "end_time": "11:00"})

    page = service.list_invited(_user(people["sales1"]), page="2", limit="2")

    assert (page.page, page.pages, page.total) == (2, 2, 3)
    assert [m.schedule.date for m in page.items] == ["2030-02-03"]

    with pytest.raises(ValidationError):
        service.list_invited(_user(people["sales1"]), page="0")


def test_stats_counts_today_and_upcoming(container, people):
    service = container.meeting_service
    today = now_local().date()

    def _on(day, **extra):
        schedule = {"date": day.isoformat(), "start_time": "10:00", "end_time": "11:00"}
        return _create(service, people["hr"], schedule=schedule, **extra)

    _on(today)
    _on(today + timedelta(days=3))
    _on(today + timedelta(days=30))
    cancelled = _on(today + timedelta(days=2))
    service.cancel(cancelled.id, _user(people["hr"]))

    stats = service.stats(_user(people["sales1"]))

    assert stats["total"] == 4
    assert stats["today"] == 1
    assert stats["upcoming"] == 1
    assert stats["by_status"]["cancelled"] == 1
    assert stats["by_department"] == {"sales-employee": 4, "hr": 4}


def test_stats_include_meetings_for_the_callers_department(container, people, add_employee):
    service = container.meeting_service
    _create(service, people["hr"])
    newcomer = add_employee("Late Joiner", Role.SALES_EMPLOYEE)

    stats = service.stats(_user(newcomer))

    assert stats["total"] == 1
    assert stats["by_department"] == {"sales-employee": 1, "hr": 1}
    assert service.stats(_user(people["tele"]))["total"] == 0
