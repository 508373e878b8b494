"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

from .enums import MeetingStatus, Role

API_VERSION = "1.0.0"

COMPANY_SUFFIX = "@fisheries123"

# Short codes used to build department identifiers (code + COMPANY_SUFFIX).
DEPARTMENT_CODES = {
    "HR": "HR",
    "Development": "DEV",
    "Design": "DES",
    "Marketing": "MKT",
    "Sales": "SAL",
    "Support": "SUP",
    "Management": "MGMT",
    "Accountant": "AC",
    "Project Manager": "PM",
    "Team Leader": "TL",
    "Telecaller": "TC",
    "Sales Employee": "SE",
}

DEFAULT_DEPARTMENTS = (
    ("Telecaller", "Telecalling team"),
    ("Accountant", "Accounts and finance"),
    ("Sales Employee", "Field sales"),
    ("Team Leader", "Team leads"),
    ("Project Manager", "Project management"),
    ("HR", "Human resources"),
)

DEPARTMENT_LABELS = {
    Role.HR: "Human Resources",
    Role.CEO: "Chief Executive Officer",
    Role.TEAM_LEADER: "Team Leader",
    Role.PROJECT_MANAGER: "Project Manager",
    Role.ACCOUNTANT: "Accountant",
    Role.TELECALLER: "Telecaller",
    Role.SALES_EMPLOYEE: "Sales",
}

# URL prefix -> role served under /api/<prefix>/meetings
MEETING_PREFIXES = {
    "ceo": Role.CEO,
    "hr": Role.HR,
    "tl": Role.TEAM_LEADER,
    "pm": Role.PROJECT_MANAGER,
    "sales": Role.SALES_EMPLOYEE,
    "telecaller": Role.TELECALLER,
    "accountant": Role.ACCOUNTANT,
}

MEETING_ORGANIZER_ROLES = frozenset({Role.CEO, Role.HR, Role.TEAM_LEADER})
HR_MANAGEMENT_ROLES = (Role.HR, Role.CEO)
PAYMENT_ROLES = (Role.PROJECT_MANAGER,)

MEETING_TRANSITIONS = {
    MeetingStatus.DRAFT: frozenset({MeetingStatus.SCHEDULED, MeetingStatus.CANCELLED}),
    MeetingStatus.SCHEDULED: frozenset(
        {
            MeetingStatus.IN_PROGRESS,
            MeetingStatus.COMPLETED,
            MeetingStatus.CANCELLED,
            MeetingStatus.RESCHEDULED,
        }
    ),
    MeetingStatus.RESCHEDULED: frozenset(
        {MeetingStatus.SCHEDULED, MeetingStatus.IN_PROGRESS, MeetingStatus.CANCELLED}
    ),
    MeetingStatus.IN_PROGRESS: frozenset({MeetingStatus.COMPLETED, MeetingStatus.CANCELLED}),
    MeetingStatus.COMPLETED: frozenset(),
    MeetingStatus.CANCELLED: frozenset(),
}

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_HOLIDAY_START = "09:00"
DEFAULT_HOLIDAY_END = "17:00"
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
UPCOMING_MEETING_DAYS = 7

MEETING_TITLE_MAX = 200
MEETING_DESCRIPTION_MAX = 1000
MEETING_AGENDA_MAX = 2000

COLLECTION_DEPARTMENTS = "departments"
COLLECTION_EMPLOYEES = "employees"
COLLECTION_HOLIDAYS = "holidays"
COLLECTION_ATTENDANCE = "attendance"
COLLECTION_MEETINGS = "meetings"
COLLECTION_MEETING_ATTENDANCE = "meeting_attendance"
COLLECTION_PAYMENTS = "payments"
