from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Club:
    """Tenant root. In practice the system runs exactly one club."""

    club_id: int
    name: str
    description: str
    created_at: Optional[datetime] = None
