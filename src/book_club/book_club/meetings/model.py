from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class MeetingBook:
    book_id: int
    title: str
    author: str


@dataclass(frozen=True)
class Attendance:
    member_id: int
    nickname: str
    status: AttendanceStatus


@dataclass(frozen=True)
class Meeting:
    """A scheduled gathering. `meeting_at` is naive UTC."""

    meeting_id: int
    club_id: int
    title: str
    meeting_at: datetime
    location: str
    memo: str
    books: Tuple[MeetingBook, ...] = field(default_factory=tuple)
    attendances: Tuple[Attendance, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
