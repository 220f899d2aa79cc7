from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Book


class BookRepository(Protocol):
    def get_by_id(self, book_id: int) -> Optional[Book]:
        raise NotImplementedError

    def list_by_club(self, club_id: int, *, limit: Optional[int] = None) -> Sequence[Book]:
        """Books newest first (by created_at)."""

        raise NotImplementedError

    def list_added_by(self, member_id: int) -> Sequence[Book]:
        raise NotImplementedError

    def count_by_club(self, club_id: int, *, created_since: Optional[datetime] = None) -> int:
        raise NotImplementedError

    def create_with_genres(
        self,
        *,
        club_id: int,
        title: str,
        author: str,
        notes: str,
        registered_date: date,
        added_by_id: Optional[int],
        genres: Sequence[str],
    ) -> int:
        """Insert the book, find-or-create each genre in the club and link it. One transaction.

        Returns book_id.
        """

        raise NotImplementedError

    def update_with_genres(
        self,
        *,
        book_id: int,
        title: str,
        author: str,
        notes: str,
        registered_date: date,
        added_by_id: Optional[int],
        genres: Sequence[str],
    ) -> bool:
        """Replace scalar fields and the whole genre set. One transaction.

        Genres are resolved in the club the book already belongs to.
        Returns False when the book does not exist.
        """

        raise NotImplementedError

    def delete(self, book_id: int) -> bool:
        raise NotImplementedError
