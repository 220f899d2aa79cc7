from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import MemberRole
from .model import Member


class MemberRepository(Protocol):
    """Repository interface for Member.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def list_by_club(self, club_id: int) -> Sequence[Member]:
        """Members of a club ordered by nickname."""

        raise NotImplementedError

    def create(self, *, club_id: int, nickname: str, role: MemberRole, contact: str) -> int:
        """Insert a member; raises ConflictError on a duplicate nickname within the club."""

        raise NotImplementedError

    def update(self, *, member_id: int, nickname: str, role: MemberRole, contact: str) -> None:
        raise NotImplementedError

    def delete(self, member_id: int) -> bool:
        raise NotImplementedError

    def count_past_meetings(self, *, club_id: int, before: datetime) -> int:
        raise NotImplementedError

    def count_attended_past_meetings(self, *, club_id: int, before: datetime) -> Dict[int, int]:
        """member_id -> number of meetings before `before` with status ATTENDING."""

        raise NotImplementedError

    def count_by_club(self, club_id: int) -> int:
        raise NotImplementedError
