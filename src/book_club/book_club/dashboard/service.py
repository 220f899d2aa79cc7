from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..books.model import Book
from ..books.service import BookService
from ..clubs.service import ClubService
from ..common.datetime_utils import now_utc
from ..core.constants import DASHBOARD_RECENT_BOOKS_LIMIT, DASHBOARD_UPCOMING_LIMIT
from ..meetings.model import Meeting
from ..meetings.service import MeetingService
from ..members.repository import MemberRepository


@dataclass(frozen=True)
class DashboardSummary:
    total_members: int
    total_books: int
    books_this_month: int
    upcoming_meetings: List[Meeting]
    recent_books: List[Book]


def month_start_utc(now: datetime, tz: timezone) -> datetime:
    """First instant of the current month at the club offset, as naive UTC."""
    local = now.replace(tzinfo=timezone.utc).astimezone(tz)
    start = local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return start.astimezone(timezone.utc).replace(tzinfo=None)


class DashboardService:
    def __init__(
        self,
        members: MemberRepository,
        clubs: ClubService,
        books: BookService,
        meetings: MeetingService,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._members = members
        self._clubs = clubs
        self._books = books
        self._meetings = meetings
        self._clock = clock

    def summary(self, *, now: Optional[datetime] = None) -> DashboardSummary:
        now = now or self._clock()
        return DashboardSummary(
            total_members=self._members.count_by_club(self._clubs.default_club_id()),
            total_books=self._books.count(),
            books_this_month=self._books.count(created_since=month_start_utc(now, self._meetings.tz)),
            upcoming_meetings=self._meetings.upcoming(DASHBOARD_UPCOMING_LIMIT, now=now),
            recent_books=self._books.recent(DASHBOARD_RECENT_BOOKS_LIMIT),
        )
