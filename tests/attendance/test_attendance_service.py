from __future__ import annotations

import pytest

from src.hr_operations.hr_operations.core.enums import AttendanceStatus, EmployeeStatus, HolidayStatus, Role
from src.hr_operations.hr_operations.core.exceptions import ConflictError, NotFoundError, ValidationError


def test_mark_computes_hours_and_defaults_department(container, add_employee):
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)

    record = container.attendance_service.mark(
        employee_id=employee.id, date="2025-09-01", check_in="09:15", check_out="18:00"
    )

    assert record.status == AttendanceStatus.PRESENT
    assert record.departments == ("sales-employee",)
    assert record.employee_name == "Priya Nair"
    assert record.total_hours == 8.75
    assert record.is_holiday is False


def test_mark_twice_same_day_is_rejected(container, add_employee):
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)
    service = container.attendance_service
    service.mark(employee_id=employee.id, date="2025-09-01")

    with pytest.raises(ConflictError, match="Attendance already marked for this date"):
        service.mark(employee_id=employee.id, date="2025-09-01", status="Absent")


def test_check_out_before_check_in_is_rejected(container, add_employee):
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)
    with pytest.raises(ValidationError):
        container.attendance_service.mark(
            employee_id=employee.id, date="2025-09-01", check_in="18:00", check_out="09:00"
        )


def test_mark_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.attendance_service.mark(employee_id="64b7f0c2a1b2c3d4e5f60718", date="2025-09-01")


def test_holiday_overrides_status(container, add_employee):
    employee = add_employee("Ravi Kumar", Role.HR)
    container.holiday_service.create(
        title="Onam", date="2025-09-05", departments=["hr"], status="Half Day Holiday", end_time="13:00"
    )

    record = container.attendance_service.mark(employee_id=employee.id, date="2025-09-05", status="Present")

    assert record.status == AttendanceStatus.HOLIDAY
    assert record.is_holiday is True
    assert record.holiday_type == HolidayStatus.HALF_DAY


def test_working_day_event_is_not_a_holiday(container, add_employee):
    employee = add_employee("Ravi Kumar", Role.HR)
    container.holiday_service.create(title="Audit", date="2025-09-06", departments=["hr"], status="Working Day")

    record = container.attendance_service.mark(employee_id=employee.id, date="2025-09-06")

    assert record.status == AttendanceStatus.PRESENT
    assert record.is_holiday is False


def test_check_out_recomputes_hours_once(container, add_employee):
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)
    service = container.attendance_service
    record = service.mark(employee_id=employee.id, date="2025-09-01", check_in="09:00")

    updated = service.check_out(record.id, check_out="17:30")
    assert updated.total_hours == 8.5

    with pytest.raises(ValidationError, match="already recorded"):
        service.check_out(record.id, check_out="18:00")


def test_update_and_update_status(container, add_employee):
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)
    hr = add_employee("Ravi Kumar", Role.HR)
    service = container.attendance_service
    record = service.mark(employee_id=employee.id, date="2025-09-01", check_in="09:00", check_out="17:00")

    updated = service.update(record.id, {"check_in": "10:00"})
    assert updated.total_hours == 7.0

    approved = service.update_status(record.id, status="Leave", remarks="Sick", approved_by=hr.id)
    assert approved.status == AttendanceStatus.LEAVE
    assert approved.remarks == "Sick"
    assert approved.approved_by == hr.id

    with pytest.raises(ValidationError, match="Status is required"):
        service.update_status(record.id, status=None, approved_by=hr.id)


def test_monthly_summary(container, add_employee):
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)
    service = container.attendance_service
    service.mark(employee_id=employee.id, date="2025-09-01", check_in="09:00", check_out="17:00")
    service.mark(employee_id=employee.id, date="2025-09-02", check_in="09:00", check_out="13:00", status="Half Day")
    service.mark(employee_id=employee.id, date="2025-09-03", status="Absent")
    service.mark(employee_id=employee.id, date="2025-10-01", check_in="09:00", check_out="17:00")

    summary = service.summary(employee.id, month="9", year="2025")

    assert summary.total_days == 3
    assert (summary.present, summary.half_days, summary.absent) == (1, 1, 1)
    assert summary.total_working_hours == 12.0

    with pytest.raises(ValidationError, match="Month and year are required"):
        service.summary(employee.id, month=None, year="2025")


def test_history_is_newest_first(container, add_employee):
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)
    service = container.attendance_service
    service.mark(employee_id=employee.id, date="2025-09-01")
    service.mark(employee_id=employee.id, date="2025-09-03")

    assert [r.date for r in service.history(employee.id)] == ["2025-09-03", "2025-09-01"]


def test_daily_dashboard_merges_employees_records_and_holidays(container, add_employee):
    present = add_employee("Asha", Role.SALES_EMPLOYEE)
    add_employee("Bala", Role.SALES_EMPLOYEE)
    add_employee("Chitra", Role.TELECALLER)
    add_employee("Dev", Role.ACCOUNTANT, status=EmployeeStatus.INACTIVE)
    container.holiday_service.create(title="Team outing", date="2025-09-10", departments=["telecaller"])
    container.attendance_service.mark(employee_id=present.id, date="2025-09-10", check_in="09:00")

    report = container.attendance_service.daily(date="2025-09-10")

    statuses = {row.name: row.status for row in report.employees}
    assert statuses == {
        "Asha": AttendanceStatus.PRESENT,
        "Bala": AttendanceStatus.ABSENT,
        "Chitra": AttendanceStatus.HOLIDAY,
    }
    assert report.summary.total_employees == 3
    assert report.summary.present_percentage == 33.3
    assert report.is_holiday is True
    assert report.holiday_info["title"] == "Team outing"


@pytest.mark.parametrize("department", ["   ", ""])
def test_blank_department_falls_back_to_role(container, add_employee, department):
    employee = add_employee("Priya Nair", Role.SALES_EMPLOYEE)

    record = container.attendance_service.mark(employee_id=employee.id, date="2025-09-01", departments=department)

    assert record.departments == ("sales-employee",)
