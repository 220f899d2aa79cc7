from __future__ import annotations

from typing import Optional, Protocol

from .model import Club


class ClubRepository(Protocol):
    def get_first(self) -> Optional[Club]:
        raise NotImplementedError

    def get_or_create_default(self, *, name: str, description: str) -> Club:
        """Return the oldest club, creating the default one if the table is empty.

        Must be safe when several processes start at once (exactly one row is created).
        """

        raise NotImplementedError
