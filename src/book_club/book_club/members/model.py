from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..books.model import Book
from ..core.enums import MemberRole


@dataclass(frozen=True)
class Member:
    member_id: int
    club_id: int
    nickname: str
    role: MemberRole
    contact: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceStats:
    """Attendance over meetings that already took place (computed on read, never stored)."""

    total_meetings: int
    attended_meetings: int
    attendance_rate: float


@dataclass(frozen=True)
class MemberWithStats:
    member: Member
    stats: AttendanceStats


@dataclass(frozen=True)
class MemberReadingStats:
    """Books a member added plus genre counts over distinct (title, author) pairs."""

    member: Member
    books: Tuple[Book, ...]
    unique_books: int
    genre_counts: Tuple[Tuple[str, int], ...]
    top_genres: Tuple[Tuple[str, int], ...]
