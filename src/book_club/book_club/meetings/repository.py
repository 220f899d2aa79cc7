from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Meeting


class MeetingRepository(Protocol):
    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        raise NotImplementedError

    def list_by_club(self, club_id: int) -> Sequence[Meeting]:
        """Meetings joined with books and attendances, latest date first."""

        raise NotImplementedError

    def list_upcoming(self, club_id: int, *, now: datetime, limit: int) -> Sequence[Meeting]:
        """Meetings at or after `now`, soonest first."""

        raise NotImplementedError

    def create_with_attendees(
        self,
        *,
        club_id: int,
        title: str,
        meeting_at: datetime,
        location: str,
        memo: str,
        attendee_ids: Sequence[int],
        book_ids: Sequence[int],
    ) -> int:
        """Insert the meeting plus one ATTENDING row per attendee. One transaction.

        Returns meeting_id.
        """

        raise NotImplementedError

    def update_with_attendees(
        self,
        *,
        meeting_id: int,
        title: str,
        meeting_at: datetime,
        location: str,
        memo: str,
        attendee_ids: Sequence[int],
        book_ids: Optional[Sequence[int]] = None,
    ) -> bool:
        """Replace scalar fields and the whole attendee roster. One transaction.

        The book set is replaced only when `book_ids` is not None.
        Returns False when the meeting does not exist.
        """

        raise NotImplementedError

    def delete(self, meeting_id: int) -> bool:
        raise NotImplementedError
