from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Sequence

from ..core.enums import AttendanceStatus, MemberRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, integrity_errors
from .model import Member
from .repository import MemberRepository

DUPLICATE_NICKNAME = "Nickname already exists in this club"


def _row_to_member(r: dict) -> Member:
    return Member(
        member_id=int(r["member_id"]),
        club_id=int(r["club_id"]),
        nickname=r["nickname"],
        role=MemberRole(r["role"]),
        contact=r.get("contact") or "",
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, club_id, nickname, role, contact, created_at, updated_at
                FROM members
                WHERE member_id=%s
                """,
                (int(member_id),),
            )
            r = fetchone(cur)
            return _row_to_member(r) if r else None

    def list_by_club(self, club_id: int) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, club_id, nickname, role, contact, created_at, updated_at
                FROM members
                WHERE club_id=%s
                ORDER BY nickname ASC
                """,
                (int(club_id),),
            )
            return [_row_to_member(r) for r in fetchall(cur)]

    def create(self, *, club_id: int, nickname: str, role: MemberRole, contact: str) -> int:
        with integrity_errors(conflict=DUPLICATE_NICKNAME):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO members(club_id, nickname, role, contact) VALUES(%s,%s,%s,%s)",
                    (int(club_id), nickname, role.value, contact),
                )
                return int(cur.lastrowid)

    def update(self, *, member_id: int, nickname: str, role: MemberRole, contact: str) -> None:
        with integrity_errors(conflict=DUPLICATE_NICKNAME):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE members SET nickname=%s, role=%s, contact=%s WHERE member_id=%s",
                    (nickname, role.value, contact, int(member_id)),
                )

    def delete(self, member_id: int) -> bool:
        # attendances cascade; books.added_by_id is set to NULL by the FK rule.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM members WHERE member_id=%s", (int(member_id),))
            return cur.rowcount > 0

    def count_past_meetings(self, *, club_id: int, before: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS total FROM meetings WHERE club_id=%s AND meeting_at < %s",
                (int(club_id), before),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def count_attended_past_meetings(self, *, club_id: int, before: datetime) -> Dict[int, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.member_id, COUNT(*) AS attended
                FROM attendances a
                JOIN meetings m ON m.meeting_id = a.meeting_id
                WHERE m.club_id=%s AND m.meeting_at < %s AND a.status=%s
                GROUP BY a.member_id
                """,
                (int(club_id), before, AttendanceStatus.ATTENDING.value),
            )
            return {int(r["member_id"]): int(r["attended"]) for r in fetchall(cur)}

    def count_by_club(self, club_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM members WHERE club_id=%s", (int(club_id),))
            r = fetchone(cur)
            return int(r["total"]) if r else 0
