from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import month_bounds, today_iso, utcnow
from ..common.validators import (
    optional_text,
    require_choice,
    require_date_string,
    require_month_year,
    require_non_empty,
    require_object_id,
    require_time_string,
)
from ..core.constants import DEFAULT_HOLIDAY_END, DEFAULT_HOLIDAY_START, DEPARTMENT_LABELS
from ..core.enums import HolidayStatus, Role
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import DepartmentRef, Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "date",
        "departments",
        "status",
        "start_time",
        "end_time",
        "display_time",
        "department_colors",
        "background_color",
    }
)


def _label_for(key: str) -> str:
    try:
        return DEPARTMENT_LABELS[Role(key)]
    except ValueError:
        return key


def normalize_departments(raw: Any) -> tuple[DepartmentRef, ...]:
    """Accept department keys or ``{name, id}`` objects; return de-duplicated refs."""
    if not isinstance(raw, list) or not raw:
        raise ValidationError("At least one department must be selected")

    refs: list[DepartmentRef] = []
    seen: set[str] = set()
    for item in raw:
        if isinstance(item, str):
            key = item.strip()
            if not key:
                raise ValidationError("Department cannot be empty")
            ref = DepartmentRef(name=_label_for(key), id=key)
        elif isinstance(item, dict):
            dept_id = item.get("id") or item.get("name")
            if not isinstance(dept_id, str) or not dept_id.strip():
                raise ValidationError("Each department needs an id or a name")
            dept_id = dept_id.strip()
            name = item.get("name") if isinstance(item.get("name"), str) and item.get("name").strip() else None
            ref = DepartmentRef(name=(name or _label_for(dept_id)).strip(), id=dept_id)
        else:
            raise ValidationError("Invalid department entry")

        if ref.id not in seen:
            seen.add(ref.id)
            refs.append(ref)
    return tuple(refs)


def _normalize_colors(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(c, str) for c in raw):
        raise ValidationError("department_colors must be a list of strings")
    return tuple(c.strip() for c in raw)


def _display_time(status: HolidayStatus, start_time: str, end_time: str) -> str:
    if status == HolidayStatus.FULL_DAY:
        return "Full Day"
    return f"{start_time} - {end_time}"


def find_day_off(holidays: HolidayRepository, date: str, departments: Iterable[str]) -> Optional[Holiday]:
    """First non-working-day holiday on ``date`` covering any of ``departments``."""
    keys = list(departments)
    for holiday in holidays.for_date(date):
        if holiday.is_day_off and any(holiday.covers(k) for k in keys):
            return holiday
    return None


def _department_filter(department: Optional[str]) -> Optional[str]:
    if not department or department.strip().lower() == "all":
        return None
    return department.strip()


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def _ensure_no_conflict(self, holiday: Holiday, *, exclude_id: Optional[str] = None) -> None:
        ids = [d.id for d in holiday.departments]
        conflicts = self._holidays.find_conflicts(date=holiday.date, department_ids=ids, exclude_id=exclude_id)
        if not conflicts:
            return
        taken = {d.id for c in conflicts for d in c.departments}
        names = [d.name for d in holiday.departments if d.id in taken]
        raise ConflictError(f"Holiday already exists for this date in departments: {', '.join(names)}")

    @staticmethod
    def _validate(holiday: Holiday, *, explicit_display_time: bool) -> Holiday:
        if holiday.end_time <= holiday.start_time:
            raise ValidationError("End time must be after start time")
        if not explicit_display_time:
            holiday = dataclasses.replace(
                holiday, display_time=_display_time(holiday.status, holiday.start_time, holiday.end_time)
            )
        return holiday

    def create(
        self,
        *,
        title: Any,
        date: Any,
        departments: Any,
        status: Any = None,
        description: Any = None,
        start_time: Any = None,
        end_time: Any = None,
        display_time: Any = None,
        department_colors: Any = None,
        background_color: Any = None,
        created_by: Optional[str] = None,
    ) -> Holiday:
        refs = normalize_departments(departments)
        now = utcnow()
        holiday = Holiday(
            id="",
            title=require_non_empty(title, "Title"),
            date=require_date_string(date),
            departments=refs,
            status=require_choice(status, HolidayStatus, "status") if status else HolidayStatus.FULL_DAY,
            description=optional_text(description, "Description", max_len=1000),
            start_time=require_time_string(start_time, "Start time") if start_time else DEFAULT_HOLIDAY_START,
            end_time=require_time_string(end_time, "End time") if end_time else DEFAULT_HOLIDAY_END,
            display_time=optional_text(display_time, "Display time", max_len=50),
            department_colors=_normalize_colors(department_colors),
            background_color=optional_text(background_color, "Background color", max_len=30),
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        holiday = self._validate(holiday, explicit_display_time=bool(holiday.display_time))

        self._ensure_no_conflict(holiday)
        created = self._holidays.insert(holiday)
        logger.info("Holiday created: %s on %s for %s", created.title, created.date, [d.id for d in created.departments])
        return created

    def get(self, holiday_id: str) -> Holiday:
        require_object_id(holiday_id, "holiday")
        holiday = self._holidays.get(holiday_id)
        if not holiday:
            raise NotFoundError("Holiday not found")
        return holiday

    def update(self, holiday_id: str, changes: Mapping[str, Any]) -> Holiday:
        holiday = self.get(holiday_id)
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        if not changes:
            raise ValidationError("No updatable fields provided")

        updates: dict[str, Any] = {}
        if "title" in changes:
            updates["title"] = require_non_empty(changes["title"], "Title")
        if "description" in changes:
            updates["description"] = optional_text(changes["description"], "Description", max_len=1000)
        if "date" in changes:
            updates["date"] = require_date_string(changes["date"])
        if "departments" in changes:
            updates["departments"] = normalize_departments(changes["departments"])
        if "status" in changes:
            updates["status"] = require_choice(changes["status"], HolidayStatus, "status")
        if "start_time" in changes:
            updates["start_time"] = require_time_string(changes["start_time"], "Start time")
        if "end_time" in changes:
            updates["end_time"] = require_time_string(changes["end_time"], "End time")
        if "display_time" in changes:
            updates["display_time"] = optional_text(changes["display_time"], "Display time", max_len=50)
        if "department_colors" in changes:
            updates["department_colors"] = _normalize_colors(changes["department_colors"])
        if "background_color" in changes:
            updates["background_color"] = optional_text(changes["background_color"], "Background color", max_len=30)

        updated = dataclasses.replace(holiday, updated_at=utcnow(), **updates)
        timing_changed = bool({"status", "start_time", "end_time"} & set(updates))
        explicit_display = "display_time" in updates or not timing_changed
        updated = self._validate(updated, explicit_display_time=explicit_display)

        if "date" in updates or "departments" in updates:
            self._ensure_no_conflict(updated, exclude_id=holiday.id)
        return self._holidays.save(updated)

    def delete(self, holiday_id: str) -> None:
        self.get(holiday_id)
        self._holidays.delete(holiday_id)
        logger.info("Holiday deleted: %s", holiday_id)

    def list(
        self,
        *,
        department: Optional[str] = None,
        status: Optional[str] = None,
        month: Any = None,
        year: Any = None,
    ) -> Sequence[Holiday]:
        date_from = date_to = None
        if month not in (None, "") or year not in (None, ""):
            m, y = require_month_year(month, year)
            date_from, date_to = month_bounds(y, m)
        return self._holidays.list(
            department=_department_filter(department),
            status=require_choice(status, HolidayStatus, "status") if status else None,
            date_from=date_from,
            date_to=date_to,
        )

    def in_range(self, *, start_date: Any, end_date: Any, department: Optional[str] = None) -> Sequence[Holiday]:
        if not start_date or not end_date:
            raise ValidationError("Start date and end date are required")
        start = require_date_string(start_date, "Start date")
        end = require_date_string(end_date, "End date")
        if end < start:
            raise ValidationError("End date must be on or after start date")
        return self._holidays.list(department=_department_filter(department), date_from=start, date_to=end)

    def check(self, date: Any, *, department: Optional[str] = None) -> Sequence[Holiday]:
        return self._holidays.for_date(require_date_string(date), department=_department_filter(department))

    def for_department(self, department: str, *, year: Any = None) -> Sequence[Holiday]:
        department = require_non_empty(department, "Department")
        date_from = date_to = None
        if year not in (None, ""):
            try:
                y = int(year)
            except (TypeError, ValueError):
                raise ValidationError("Year must be a number")
            date_from, date_to = f"{y:04d}-01-01", f"{y:04d}-12-31"
        return self._holidays.list(department=department, date_from=date_from, date_to=date_to)

    def today(self, *, department: Optional[str] = None) -> Sequence[Holiday]:
        return self._holidays.for_date(today_iso(), department=_department_filter(department))
