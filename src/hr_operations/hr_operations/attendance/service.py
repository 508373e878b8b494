from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import hours_between, month_bounds, today_iso, utcnow
from ..common.validators import (
    optional_text,
    optional_time_string,
    require_choice,
    require_date_string,
    require_month_year,
    require_non_empty,
    require_object_id,
)
from ..core.enums import AttendanceStatus, EmployeeStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..holidays.repository import HolidayRepository
from ..holidays.service import find_day_off
from .model import (
    AttendanceRecord,
    AttendanceSummary,
    DailyAttendanceReport,
    DailyAttendanceRow,
    DailyAttendanceSummary,
)
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"status", "check_in", "check_out", "notes", "remarks"})


def compute_total_hours(check_in: Optional[str], check_out: Optional[str]) -> float:
    if not check_in or not check_out:
        return 0.0
    hours = hours_between(check_in, check_out)
    if hours < 0:
        raise ValidationError("Check-out time cannot be before check-in time")
    return hours


def _departments(raw: Any, employee: Employee) -> tuple[str, ...]:
    if raw is None or raw == [] or (isinstance(raw, str) and not raw.strip()):
        return (employee.role.value,)
    if isinstance(raw, str):
        return (raw.strip(),)
    if isinstance(raw, list) and all(isinstance(d, str) and d.strip() for d in raw):
        return tuple(dict.fromkeys(d.strip() for d in raw))
    raise ValidationError("Departments must be a list of department names")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        holidays: HolidayRepository,
    ):
        self._attendance = attendance
        self._employees = employees
        self._holidays = holidays

    def _employee(self, employee_id: Any) -> Employee:
        require_object_id(employee_id, "employee")
        employee = self._employees.get(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _record(self, attendance_id: str) -> AttendanceRecord:
        require_object_id(attendance_id, "attendance")
        record = self._attendance.get(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def mark(
        self,
        *,
        employee_id: Any,
        date: Any,
        status: Any = None,
        departments: Any = None,
        check_in: Any = None,
        check_out: Any = None,
        notes: Any = None,
    ) -> AttendanceRecord:
        employee = self._employee(employee_id)
        date = require_date_string(date)
        status_value = require_choice(status, AttendanceStatus, "status") if status else AttendanceStatus.PRESENT
        check_in = optional_time_string(check_in, "Check-in time")
        check_out = optional_time_string(check_out, "Check-out time")
        if check_out and not check_in:
            raise ValidationError("Check-in time is required before check-out")
        total_hours = compute_total_hours(check_in, check_out)
        depts = _departments(departments, employee)

        if self._attendance.find_for_employee_date(employee.id, date):
            raise ConflictError("Attendance already marked for this date")

        holiday = find_day_off(self._holidays, date, depts)
        now = utcnow()
        record = AttendanceRecord(
            id="",
            employee_id=employee.id,
            employee_name=employee.name,
            date=date,
            departments=depts,
            status=AttendanceStatus.HOLIDAY if holiday else status_value,
            check_in=check_in,
            check_out=check_out,
            total_hours=total_hours,
            notes=optional_text(notes, "Notes", max_len=500),
            is_holiday=holiday is not None,
            holiday_type=holiday.status if holiday else None,
            created_at=now,
            updated_at=now,
        )
        created = self._attendance.insert(record)
        logger.info("Attendance marked: employee=%s date=%s status=%s", created.employee_id, date, created.status.value)
        return created

    def check_out(self, attendance_id: str, *, check_out: Any) -> AttendanceRecord:
        record = self._record(attendance_id)
        if not record.check_in:
            raise ValidationError("Cannot check out without a check-in time")
        if record.check_out:
            raise ValidationError("Check-out already recorded for this date")
        check_out = optional_time_string(check_out, "Check-out time")
        if not check_out:
            raise ValidationError("Check-out time is required")

        updated = dataclasses.replace(
            record,
            check_out=check_out,
            total_hours=compute_total_hours(record.check_in, check_out),
            updated_at=utcnow(),
        )
        return self._attendance.save(updated)

    def update(self, attendance_id: str, changes: Mapping[str, Any]) -> AttendanceRecord:
        record = self._record(attendance_id)
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        if not changes:
            raise ValidationError("No updatable fields provided")

        updates: dict[str, Any] = {}
        if "status" in changes:
            updates["status"] = require_choice(changes["status"], AttendanceStatus, "status")
        if "check_in" in changes:
            updates["check_in"] = optional_time_string(changes["check_in"], "Check-in time")
        if "check_out" in changes:
            updates["check_out"] = optional_time_string(changes["check_out"], "Check-out time")
        if "notes" in changes:
            updates["notes"] = optional_text(changes["notes"], "Notes", max_len=500)
        if "remarks" in changes:
            updates["remarks"] = optional_text(changes["remarks"], "Remarks", max_len=500)

        check_in = updates.get("check_in", record.check_in)
        check_out = updates.get("check_out", record.check_out)
        if check_out and not check_in:
            raise ValidationError("Check-in time is required before check-out")
        updates["total_hours"] = compute_total_hours(check_in, check_out)

        return self._attendance.save(dataclasses.replace(record, updated_at=utcnow(), **updates))

    def update_status(
        self,
        attendance_id: str,
        *,
        status: Any,
        approved_by: str,
        remarks: Any = None,
        description: Any = None,
    ) -> AttendanceRecord:
        record = self._record(attendance_id)
        if not status:
            raise ValidationError("Status is required")
        updates: dict[str, Any] = {
            "status": require_choice(status, AttendanceStatus, "status"),
            "approved_by": approved_by,
        }
        if remarks is not None:
            updates["remarks"] = optional_text(remarks, "Remarks", max_len=500)
        if description is not None:
            updates["notes"] = optional_text(description, "Description", max_len=500)

        saved = self._attendance.save(dataclasses.replace(record, updated_at=utcnow(), **updates))
        logger.info("Attendance %s status set to %s by %s", saved.id, saved.status.value, approved_by)
        return saved

    def history(self, employee_id: Any, *, month: Any = None, year: Any = None) -> Sequence[AttendanceRecord]:
        employee = self._employee(employee_id)
        date_from = date_to = None
        if month not in (None, "") or year not in (None, ""):
            m, y = require_month_year(month, year)
            date_from, date_to = month_bounds(y, m)
        return self._attendance.list_for_employee(employee.id, date_from=date_from, date_to=date_to)

    def for_department(self, department: Any, *, date: Any = None) -> Sequence[AttendanceRecord]:
        department = require_non_empty(department, "Department")
        day = require_date_string(date) if date else None
        return self._attendance.list_for_department(department, date=day)

    def summary(self, employee_id: Any, *, month: Any, year: Any) -> AttendanceSummary:
        m, y = require_month_year(month, year)
        employee = self._employee(employee_id)
        date_from, date_to = month_bounds(y, m)
        records = self._attendance.list_for_employee(employee.id, date_from=date_from, date_to=date_to)

        def count(status: AttendanceStatus) -> int:
            return sum(1 for r in records if r.status == status)

        return AttendanceSummary(
            employee_id=employee.id,
            month=m,
            year=y,
            total_days=len(records),
            present=count(AttendanceStatus.PRESENT),
            absent=count(AttendanceStatus.ABSENT),
            half_days=count(AttendanceStatus.HALF_DAY),
            leaves=count(AttendanceStatus.LEAVE),
            holidays=count(AttendanceStatus.HOLIDAY),
            total_working_hours=round(sum(r.total_hours for r in records), 2),
        )

    def daily(self, *, date: Any = None) -> DailyAttendanceReport:
        """Every active employee for one day; missing records count as absent unless it is a holiday."""
        day = require_date_string(date) if date else today_iso()
        employees = self._employees.list(status=EmployeeStatus.ACTIVE)
        records = {r.employee_id: r for r in self._attendance.list_for_date(day)}
        holidays = [h for h in self._holidays.for_date(day) if h.is_day_off]

        rows = []
        for employee in employees:
            record = records.get(employee.id)
            holiday = next((h for h in holidays if h.covers(employee.role.value)), None)
            if holiday:
                status = AttendanceStatus.HOLIDAY
            elif record:
                status = record.status
            else:
                status = AttendanceStatus.ABSENT
            rows.append(
                DailyAttendanceRow(
                    employee_id=employee.id,
                    name=employee.name,
                    email=employee.email,
                    emp_code=employee.emp_code,
                    role=employee.role.value,
                    status=status,
                    attendance_id=record.id if record else None,
                    check_in=record.check_in if record else None,
                    check_out=record.check_out if record else None,
                    total_hours=record.total_hours if record else 0.0,
                    notes=record.notes if record else "",
                    holiday=holiday.title if holiday else None,
                )
            )

        def count(status: AttendanceStatus) -> int:
            return sum(1 for r in rows if r.status == status)

        total = len(rows)
        present = count(AttendanceStatus.PRESENT)
        summary = DailyAttendanceSummary(
            total_employees=total,
            present=present,
            half_day=count(AttendanceStatus.HALF_DAY),
            leave=count(AttendanceStatus.LEAVE),
            absent=count(AttendanceStatus.ABSENT),
            holiday=count(AttendanceStatus.HOLIDAY),
            present_percentage=round(present / total * 100, 1) if total else 0.0,
        )

        holiday_info = None
        if holidays:
            first = holidays[0]
            holiday_info = {
                "title": first.title,
                "status": first.status.value,
                "departments": [d.name for d in first.departments],
            }

        return DailyAttendanceReport(
            date=day,
            is_holiday=bool(holidays),
            holiday_info=holiday_info,
            summary=summary,
            employees=tuple(rows),
        )
