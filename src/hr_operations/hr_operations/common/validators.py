from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from bson import ObjectId

from ..core.exceptions import ValidationError
from .datetime_utils import parse_hhmm, parse_iso_date

E = TypeVar("E", bound=Enum)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any, field_name: str, *, max_len: Optional[int] = None) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    value = value.strip()
    if max_len is not None:
        require_max_length(value, field_name, max_len)
    return value


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} cannot exceed {max_len} characters")
    return value


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {field_name}. Allowed values: {allowed}")


def require_date_string(value: Any, field_name: str = "Date") -> str:
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")
    value = value.strip()
    try:
        parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid calendar date")
    return value


def require_time_string(value: Any, field_name: str = "Time") -> str:
    if not isinstance(value, str) or not _TIME_RE.match(value.strip()):
        raise ValidationError(f"{field_name} must be in HH:MM format")
    value = value.strip()
    try:
        parse_hhmm(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid time")
    return value


def optional_time_string(value: Any, field_name: str = "Time") -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_time_string(value, field_name)


def require_object_id(value: Any, entity: str) -> str:
    """Reject malformed ids before they reach the database."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValidationError(f"Invalid {entity} ID")
    return value


def require_non_negative_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def parse_positive_int(value: Any, field_name: str, *, default: int, maximum: Optional[int] = None) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer")
    if number < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    if maximum is not None:
        number = min(number, maximum)
    return number


def require_month_year(month: Any, year: Any) -> tuple[int, int]:
    if month in (None, "") or year in (None, ""):
        raise ValidationError("Month and year are required")
    try:
        m, y = int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("Month and year must be numbers")
    if not 1 <= m <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1900 <= y <= 9999:
        raise ValidationError("Year is out of range")
    return m, y
