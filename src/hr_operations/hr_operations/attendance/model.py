from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import AttendanceStatus, HolidayStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One attendance record per employee per day (date is YYYY-MM-DD, times HH:MM)."""

    id: str
    employee_id: str
    date: str
    status: AttendanceStatus
    departments: Tuple[str, ...] = ()
    employee_name: str = ""
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    total_hours: float = 0.0
    notes: str = ""
    is_holiday: bool = False
    holiday_type: Optional[HolidayStatus] = None
    approved_by: Optional[str] = None
    remarks: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceSummary:
    employee_id: str
    month: int
    year: int
    total_days: int
    present: int
    absent: int
    half_days: int
    leaves: int
    holidays: int
    total_working_hours: float


@dataclass(frozen=True)
class DailyAttendanceRow:
    """Dashboard row: an active employee merged with that day's record and holiday."""

    employee_id: str
    name: str
    email: str
    emp_code: str
    role: str
    status: AttendanceStatus
    attendance_id: Optional[str] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    total_hours: float = 0.0
    notes: str = ""
    holiday: Optional[str] = None


@dataclass(frozen=True)
class DailyAttendanceSummary:
    total_employees: int
    present: int
    half_day: int
    leave: int
    absent: int
    holiday: int
    present_percentage: float


@dataclass(frozen=True)
class DailyAttendanceReport:
    date: str
    is_holiday: bool
    holiday_info: Optional[dict]
    summary: DailyAttendanceSummary
    employees: Tuple[DailyAttendanceRow, ...]
