from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import HolidayStatus
from .model import Holiday


class HolidayRepository(Protocol):
    """All list methods return holidays sorted by date ascending.

    ``department`` filters match a department ref by id or by name.
    """

    def get(self, holiday_id: str) -> Optional[Holiday]:
        raise NotImplementedError

    def find_conflicts(
        self,
        *,
        date: str,
        department_ids: Iterable[str],
        exclude_id: Optional[str] = None,
    ) -> Sequence[Holiday]:
        """Holidays on ``date`` sharing at least one department id."""

        raise NotImplementedError

    def list(
        self,
        *,
        department: Optional[str] = None,
        status: Optional[HolidayStatus] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> Sequence[Holiday]:
        raise NotImplementedError

    def for_date(self, date: str, *, department: Optional[str] = None) -> Sequence[Holiday]:
        raise NotImplementedError

    def insert(self, holiday: Holiday) -> Holiday:
        raise NotImplementedError

    def save(self, holiday: Holiday) -> Holiday:
        raise NotImplementedError

    def delete(self, holiday_id: str) -> bool:
        raise NotImplementedError
