from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import MeetingStatus
from .model import Meeting, MeetingAttendance


class MeetingRepository(Protocol):
    """Listing methods sort by schedule date then start time."""

    def get(self, meeting_id: str) -> Optional[Meeting]:
        raise NotImplementedError

    def find_by_organizer(
        self,
        employee_id: str,
        *,
        status: Optional[MeetingStatus] = None,
        date: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[Meeting]:
        raise NotImplementedError

    def count_by_organizer(
        self,
        employee_id: str,
        *,
        status: Optional[MeetingStatus] = None,
        date: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def find_for_invitee(
        self,
        employee_id: str,
        *,
        status: Optional[MeetingStatus] = None,
        date: Optional[str] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[Meeting]:
        """Meetings listing ``employee_id`` as participant or department invitee."""

        raise NotImplementedError

    def count_for_invitee(
        self,
        employee_id: str,
        *,
        status: Optional[MeetingStatus] = None,
        date: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def find_related(self, employee_id: str, department: str) -> Sequence[Meeting]:
        """Meetings organised by or inviting ``employee_id``, or inviting ``department``."""

        raise NotImplementedError

    def insert(self, meeting: Meeting) -> Meeting:
        raise NotImplementedError

    def save(self, meeting: Meeting) -> Meeting:
        raise NotImplementedError


class MeetingAttendanceRepository(Protocol):
    def upsert(self, record: MeetingAttendance) -> MeetingAttendance:
        """Insert or replace the record for (meeting_id, participant_id)."""

        raise NotImplementedError

    def list_for_meeting(self, meeting_id: str) -> Sequence[MeetingAttendance]:
        raise NotImplementedError
