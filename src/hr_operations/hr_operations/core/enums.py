from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role. Also used as the department key for holidays and meetings."""

    CEO = "ceo"
    HR = "hr"
    TEAM_LEADER = "team-leader"
    PROJECT_MANAGER = "project-manager"
    SALES_EMPLOYEE = "sales-employee"
    TELECALLER = "telecaller"
    ACCOUNTANT = "accountant"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class HolidayStatus(str, Enum):
    """Calendar event kind. Working days are listed on the calendar but are not days off."""

    FULL_DAY = "Full Day Holiday"
    HALF_DAY = "Half Day Holiday"
    WORKING_DAY = "Working Day"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"
    LEAVE = "Leave"
    HOLIDAY = "Holiday"


class MeetingStatus(str, Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


class ResponseStatus(str, Enum):
    """Per-participant state on a meeting roster."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    ATTENDED = "attended"
    MISSED = "missed"


class Platform(str, Enum):
    GOOGLE_MEET = "google_meet"
    ZOOM = "zoom"
    MICROSOFT_TEAMS = "microsoft_teams"
    SLACK = "slack"
    IN_PERSON = "in_person"
    OTHER = "other"


class MeetingType(str, Enum):
    ONE_ON_ONE = "one_on_one"
    TEAM = "team"
    DEPARTMENT = "department"
    CROSS_DEPARTMENT = "cross_department"
    CLIENT = "client"
    REVIEW = "review"
    TRAINING = "training"
    PLANNING = "planning"
    STATUS_UPDATE = "status_update"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class MeetingAttendanceStatus(str, Enum):
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    EXCUSED = "excused"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class WorkStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    VERIFIED = "Verified"
