from __future__ import annotations

from typing import Any, Dict

from ..common.datetime_utils import to_iso
from ..core.constants import UNKNOWN_MEMBER_NAME
from .model import Book


def book_to_json(book: Book) -> Dict[str, Any]:
    """Flattened book: genre names in order, adding member reduced to a display name."""
    return {
        "id": book.book_id,
        "clubId": book.club_id,
        "title": book.title,
        "author": book.author,
        "notes": book.notes,
        "registeredDate": book.registered_date.isoformat(),
        "addedById": book.added_by_id,
        "addedBy": book.added_by_nickname or UNKNOWN_MEMBER_NAME,
        "genres": list(book.genres),
        "createdAt": to_iso(book.created_at) if book.created_at else None,
        "updatedAt": to_iso(book.updated_at) if book.updated_at else None,
    }
