from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Club
from .repository import ClubRepository


def _row_to_club(r: dict) -> Club:
    return Club(
        club_id=int(r["club_id"]),
        name=r["name"],
        description=r.get("description") or "",
        created_at=r.get("created_at"),
    )


class MySQLClubRepository(ClubRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_first(self) -> Optional[Club]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT club_id, name, description, created_at
                FROM clubs
                ORDER BY created_at ASC, club_id ASC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            return _row_to_club(r) if r else None

    def get_or_create_default(self, *, name: str, description: str) -> Club:
        club = self.get_first()
        if club:
            return club

        # uq_clubs_default lets only one concurrent starter insert the row.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO clubs(name, description, is_default) VALUES(%s,%s,1)",
                (name, description),
            )

        club = self.get_first()
        if not club:
            raise RuntimeError("Default club could not be created")
        return club
