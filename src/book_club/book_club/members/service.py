from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..books.model import Book
from ..books.repository import BookRepository
from ..clubs.service import ClubService
from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_non_empty
from ..core.constants import NICKNAME_MAX_LEN, TEXT_FIELD_MAX_LEN, TOP_GENRES_LIMIT
from ..core.enums import MemberRole
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceStats, Member, MemberReadingStats, MemberWithStats
from .repository import MemberRepository


def parse_role(value: Any) -> MemberRole:
    if value is None or value == "":
        return MemberRole.MEMBER
    try:
        return MemberRole(value)
    except ValueError:
        raise ValidationError("Role must be LEADER or MEMBER")


def attendance_rate(attended: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(attended / total * 100, 2)


def summarize_genres(books: Sequence[Book]) -> Tuple[int, List[Tuple[str, int]]]:
    """Count genres over distinct (title, author) pairs.

    The same book may be registered once per member; only the first
    registration of a pair is counted. Returns (unique book count,
    [(genre, count)] sorted by count descending, ties in first-seen order).
    """

    unique: Dict[Tuple[str, str], Book] = {}
    for book in books:
        unique.setdefault((book.title, book.author), book)

    counts: Dict[str, int] = {}
    for book in unique.values():
        for genre in book.genres:
            counts[genre] = counts.get(genre, 0) + 1

    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return len(unique), ranked


class MemberService:
    """Use cases: manage club members and compute their statistics."""

    def __init__(
        self,
        members: MemberRepository,
        clubs: ClubService,
        books: BookRepository,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._members = members
        self._clubs = clubs
        self._books = books
        self._clock = clock

    def get(self, member_id: int) -> Member:
        member = self._members.get_by_id(int(member_id))
        if not member:
            raise NotFoundError("Member not found")
        return member

    def list_with_stats(self, *, now: Optional[datetime] = None) -> List[MemberWithStats]:
        now = now or self._clock()
        club_id = self._clubs.default_club_id()

        members = self._members.list_by_club(club_id)
        total = self._members.count_past_meetings(club_id=club_id, before=now)
        attended_by_member = self._members.count_attended_past_meetings(club_id=club_id, before=now)

        out: list[MemberWithStats] = []
        for m in members:
            attended = attended_by_member.get(m.member_id, 0)
            out.append(
                MemberWithStats(
                    member=m,
                    stats=AttendanceStats(
                        total_meetings=total,
                        attended_meetings=attended,
                        attendance_rate=attendance_rate(attended, total),
                    ),
                )
            )
        return out

    def create(self, *, nickname: Any, role: Any = None, contact: Any = None) -> Member:
        nickname = require_non_empty(nickname, "Nickname", max_len=NICKNAME_MAX_LEN)
        member_id = self._members.create(
            club_id=self._clubs.default_club_id(),
            nickname=nickname,
            role=parse_role(role),
            contact=optional_text(contact, "Contact", max_len=TEXT_FIELD_MAX_LEN),
        )
        return self.get(member_id)

    def update(self, member_id: int, *, nickname: Any, role: Any = None, contact: Any = None) -> Member:
        nickname = require_non_empty(nickname, "Nickname", max_len=NICKNAME_MAX_LEN)
        role_v = parse_role(role)
        contact_v = optional_text(contact, "Contact", max_len=TEXT_FIELD_MAX_LEN)

        self.get(member_id)
        self._members.update(member_id=int(member_id), nickname=nickname, role=role_v, contact=contact_v)
        return self.get(member_id)

    def delete(self, member_id: int) -> None:
        if not self._members.delete(int(member_id)):
            raise NotFoundError("Member not found")

    def reading_stats(self, member_id: int) -> MemberReadingStats:
        member = self.get(member_id)
        books = list(self._books.list_added_by(member.member_id))
        unique_books, ranked = summarize_genres(books)
        return MemberReadingStats(
            member=member,
            books=tuple(books),
            unique_books=unique_books,
            genre_counts=tuple(ranked),
            top_genres=tuple(ranked[:TOP_GENRES_LIMIT]),
        )
