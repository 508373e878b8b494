from __future__ import annotations

import calendar
from datetime import date, datetime, time, timezone


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value, "%H:%M").time()


def minutes_of(value: str) -> int:
    t = parse_hhmm(value)
    return t.hour * 60 + t.minute


def hours_between(start: str, end: str) -> float:
    """Hours between two HH:MM strings on the same day, rounded to 2 decimals.

    Returns a negative number when ``end`` is before ``start``; callers decide
    whether that is an error.
    """
    return round((minutes_of(end) - minutes_of(start)) / 60, 2)


def month_bounds(year: int, month: int) -> tuple[str, str]:
    """First and last day of a month as YYYY-MM-DD strings."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1).isoformat(), date(year, month, last_day).isoformat()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now()


def today_iso() -> str:
    return now_local().date().isoformat()


def utcnow() -> datetime:
    """Timestamp used for created_at / updated_at."""
    return datetime.now(timezone.utc)
