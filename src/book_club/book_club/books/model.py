from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Book:
    """A reading-list entry joined with its adding member and genre names.

    The same (title, author) may exist once per adding member.
    """

    book_id: int
    club_id: int
    title: str
    author: str
    notes: str
    registered_date: date
    added_by_id: Optional[int] = None
    added_by_nickname: Optional[str] = None
    genres: Tuple[str, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
