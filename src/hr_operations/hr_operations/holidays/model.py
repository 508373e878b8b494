from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import HolidayStatus


@dataclass(frozen=True)
class DepartmentRef:
    name: str
    id: str


@dataclass(frozen=True)
class Holiday:
    """Calendar event for one or more departments on a single date (YYYY-MM-DD)."""

    id: str
    title: str
    date: str
    departments: Tuple[DepartmentRef, ...]
    status: HolidayStatus = HolidayStatus.FULL_DAY
    description: str = ""
    start_time: str = "09:00"
    end_time: str = "17:00"
    display_time: str = ""
    department_colors: Tuple[str, ...] = ()
    background_color: str = ""
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_day_off(self) -> bool:
        return self.status != HolidayStatus.WORKING_DAY

    def covers(self, department: str) -> bool:
        return any(d.id == department or d.name == department for d in self.departments)
