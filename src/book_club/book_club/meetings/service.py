from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from ..clubs.service import ClubService
from ..common.datetime_utils import combine_meeting_datetime, default_meeting_title, now_utc, require_date
from ..common.validators import id_list, optional_text, require_non_empty
from ..core.constants import MEETING_TITLE_SUFFIX, TEXT_FIELD_MAX_LEN
from ..core.exceptions import NotFoundError
from .model import Meeting
from .repository import MeetingRepository


class MeetingService:
    """Use cases: meetings and their attendee rosters.

    `date` + `time` are wall-clock values at the club offset on both create
    and update; storage is UTC.
    """

    def __init__(
        self,
        meetings: MeetingRepository,
        clubs: ClubService,
        *,
        tz: timezone,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._meetings = meetings
        self._clubs = clubs
        self._tz = tz
        self._clock = clock

    @property
    def tz(self) -> timezone:
        return self._tz

    def list_meetings(self) -> List[Meeting]:
        return list(self._meetings.list_by_club(self._clubs.default_club_id()))

    def upcoming(self, limit: int, *, now: Optional[datetime] = None) -> List[Meeting]:
        return list(
            self._meetings.list_upcoming(self._clubs.default_club_id(), now=now or self._clock(), limit=limit)
        )

    def get(self, meeting_id: int) -> Meeting:
        meeting = self._meetings.get_by_id(int(meeting_id))
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting

    def create(
        self,
        *,
        date: Any,
        time: Any,
        title: Any = None,
        location: Any = None,
        memo: Any = None,
        attendees: Any = None,
        book_ids: Any = None,
    ) -> Meeting:
        date_s = require_non_empty(date, "Date")
        time_s = require_non_empty(time, "Time")
        meeting_at = combine_meeting_datetime(date_s, time_s, tz=self._tz)

        title_s = optional_text(title, "Title").strip()
        if title_s:
            title_s = require_non_empty(title_s, "Title", max_len=TEXT_FIELD_MAX_LEN)
        else:
            title_s = default_meeting_title(require_date(date_s, "Date"), MEETING_TITLE_SUFFIX)

        meeting_id = self._meetings.create_with_attendees(
            club_id=self._clubs.default_club_id(),
            title=title_s,
            meeting_at=meeting_at,
            location=optional_text(location, "Location", max_len=TEXT_FIELD_MAX_LEN),
            memo=optional_text(memo, "Memo"),
            attendee_ids=id_list(attendees, "Attendees"),
            book_ids=id_list(book_ids, "Books"),
        )
        return self.get(meeting_id)

    def update(
        self,
        meeting_id: int,
        *,
        title: Any,
        date: Any,
        time: Any,
        location: Any = None,
        memo: Any = None,
        attendees: Any = None,
        book_ids: Any = None,
    ) -> Meeting:
        title_s = require_non_empty(title, "Title", max_len=TEXT_FIELD_MAX_LEN)
        date_s = require_non_empty(date, "Date")
        time_s = require_non_empty(time, "Time")
        meeting_at = combine_meeting_datetime(date_s, time_s, tz=self._tz)

        self.get(meeting_id)
        updated = self._meetings.update_with_attendees(
            meeting_id=int(meeting_id),
            title=title_s,
            meeting_at=meeting_at,
            location=optional_text(location, "Location", max_len=TEXT_FIELD_MAX_LEN),
            memo=optional_text(memo, "Memo"),
            attendee_ids=id_list(attendees, "Attendees"),
            book_ids=None if book_ids is None else id_list(book_ids, "Books"),
        )
        if not updated:
            raise NotFoundError("Meeting not found")
        return self.get(meeting_id)

    def delete(self, meeting_id: int) -> None:
        if not self._meetings.delete(int(meeting_id)):
            raise NotFoundError("Meeting not found")
