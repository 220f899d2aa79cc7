from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from ..clubs.service import ClubService
from ..common.datetime_utils import require_date
from ..common.validators import optional_id, optional_text, require_non_empty, string_list
from ..core.constants import GENRE_NAME_MAX_LEN, TEXT_FIELD_MAX_LEN
from ..core.exceptions import NotFoundError
from .model import Book
from .repository import BookRepository


class BookService:
    """Use cases: the reading list (book + genre set written as one unit)."""

    def __init__(self, books: BookRepository, clubs: ClubService):
        self._books = books
        self._clubs = clubs

    def list_books(self) -> List[Book]:
        return list(self._books.list_by_club(self._clubs.default_club_id()))

    def get(self, book_id: int) -> Book:
        book = self._books.get_by_id(int(book_id))
        if not book:
            raise NotFoundError("Book not found")
        return book

    def create(
        self,
        *,
        title: Any,
        author: Any,
        registered_date: Any,
        notes: Any = None,
        genres: Any = None,
        added_by_id: Any = None,
    ) -> Book:
        title = require_non_empty(title, "Title", max_len=TEXT_FIELD_MAX_LEN)
        author = require_non_empty(author, "Author", max_len=TEXT_FIELD_MAX_LEN)
        registered = require_date(require_non_empty(registered_date, "Registered date"), "Registered date")

        book_id = self._books.create_with_genres(
            club_id=self._clubs.default_club_id(),
            title=title,
            author=author,
            notes=optional_text(notes, "Notes"),
            registered_date=registered,
            added_by_id=optional_id(added_by_id, "Added-by member"),
            genres=string_list(genres, "Genres", max_len=GENRE_NAME_MAX_LEN),
        )
        return self.get(book_id)

    def update(
        self,
        book_id: int,
        *,
        title: Any,
        author: Any,
        registered_date: Any = None,
        notes: Any = None,
        genres: Any = None,
        added_by_id: Any = None,
    ) -> Book:
        title = require_non_empty(title, "Title", max_len=TEXT_FIELD_MAX_LEN)
        author = require_non_empty(author, "Author", max_len=TEXT_FIELD_MAX_LEN)
        existing = self.get(book_id)

        registered = existing.registered_date
        if registered_date not in (None, ""):
            registered = require_date(registered_date, "Registered date")

        updated = self._books.update_with_genres(
            book_id=existing.book_id,
            title=title,
            author=author,
            notes=optional_text(notes, "Notes"),
            registered_date=registered,
            added_by_id=optional_id(added_by_id, "Added-by member"),
            genres=string_list(genres, "Genres", max_len=GENRE_NAME_MAX_LEN),
        )
        if not updated:
            raise NotFoundError("Book not found")
        return self.get(existing.book_id)

    def delete(self, book_id: int) -> None:
        if not self._books.delete(int(book_id)):
            raise NotFoundError("Book not found")

    def recent(self, limit: int) -> List[Book]:
        return list(self._books.list_by_club(self._clubs.default_club_id(), limit=limit))

    def count(self, *, created_since: Optional[datetime] = None) -> int:
        return self._books.count_by_club(self._clubs.default_club_id(), created_since=created_since)
