from __future__ import annotations

from threading import Lock
from typing import Optional

from .repository import ClubRepository


class ClubService:
    """Default-tenant singleton.

    The club id is resolved once (normally at startup) and cached for the life
    of the process.
    """

    def __init__(self, clubs: ClubRepository, *, default_name: str, default_description: str):
        self._clubs = clubs
        self._default_name = default_name
        self._default_description = default_description
        self._club_id: Optional[int] = None
        self._lock = Lock()

    def default_club_id(self) -> int:
        if self._club_id is None:
            with self._lock:
                if self._club_id is None:
                    club = self._clubs.get_or_create_default(
                        name=self._default_name,
                        description=self._default_description,
                    )
                    self._club_id = club.club_id
        return self._club_id
