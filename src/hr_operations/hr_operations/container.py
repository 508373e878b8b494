from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mongo_attendance_repository import MongoAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DatabaseConnection, MongoConfig
from .departments.mongo_department_repository import MongoDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .employees.mongo_employee_repository import MongoEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .holidays.mongo_holiday_repository import MongoHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .meetings.mongo_meeting_repository import MongoMeetingAttendanceRepository, MongoMeetingRepository
from .meetings.repository import MeetingAttendanceRepository, MeetingRepository
from .meetings.service import MeetingService
from .payments.mongo_payment_repository import MongoPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    departments_repo: DepartmentRepository
    employees_repo: EmployeeRepository
    holidays_repo: HolidayRepository
    attendance_repo: AttendanceRepository
    meetings_repo: MeetingRepository
    meeting_attendance_repo: MeetingAttendanceRepository
    payments_repo: PaymentRepository

    department_service: DepartmentService
    employee_service: EmployeeService
    holiday_service: HolidayService
    attendance_service: AttendanceService
    meeting_service: MeetingService
    payment_service: PaymentService


def wire(
    *,
    conn: Optional[DatabaseConnection],
    departments_repo: DepartmentRepository,
    employees_repo: EmployeeRepository,
    holidays_repo: HolidayRepository,
    attendance_repo: AttendanceRepository,
    meetings_repo: MeetingRepository,
    meeting_attendance_repo: MeetingAttendanceRepository,
    payments_repo: PaymentRepository,
    gateway_secret: Optional[str] = None,
) -> Container:
    """Build services over the given repositories (MongoDB in production, in-memory in tests)."""
    return Container(
        conn=conn,
        departments_repo=departments_repo,
        employees_repo=employees_repo,
        holidays_repo=holidays_repo,
        attendance_repo=attendance_repo,
        meetings_repo=meetings_repo,
        meeting_attendance_repo=meeting_attendance_repo,
        payments_repo=payments_repo,
        department_service=DepartmentService(departments_repo, employees_repo),
        employee_service=EmployeeService(employees_repo),
        holiday_service=HolidayService(holidays_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo, holidays_repo),
        meeting_service=MeetingService(meetings_repo, meeting_attendance_repo, employees_repo),
        payment_service=PaymentService(payments_repo, gateway_secret=gateway_secret),
    )


def build_container(*, mongo_config: dict, gateway_secret: Optional[str] = None) -> Container:
    config = MongoConfig(
        uri=str(mongo_config["uri"]),
        database=str(mongo_config["database"]),
        timeout_ms=int(mongo_config.get("timeout_ms", 5000)),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire(
        conn=conn,
        departments_repo=MongoDepartmentRepository(conn),
        employees_repo=MongoEmployeeRepository(conn),
        holidays_repo=MongoHolidayRepository(conn),
        attendance_repo=MongoAttendanceRepository(conn),
        meetings_repo=MongoMeetingRepository(conn),
        meeting_attendance_repo=MongoMeetingAttendanceRepository(conn),
        payments_repo=MongoPaymentRepository(conn),
        gateway_secret=gateway_secret,
    )
