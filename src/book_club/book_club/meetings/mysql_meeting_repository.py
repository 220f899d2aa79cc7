from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, integrity_errors
from .model import Attendance, Meeting, MeetingBook
from .repository import MeetingRepository

UNKNOWN_REFERENCE = "Attendee or book does not exist"


def _load_relations(cur, meeting_ids: Sequence[int]):
    books: Dict[int, List[MeetingBook]] = {mid: [] for mid in meeting_ids}
    attendances: Dict[int, List[Attendance]] = {mid: [] for mid in meeting_ids}
    if not meeting_ids:
        return books, attendances

    placeholders = in_clause(meeting_ids)
    cur.execute(
        f"""
        SELECT mb.meeting_id, b.book_id, b.title, b.author
        FROM meeting_books mb
        JOIN books b ON b.book_id = mb.book_id
        WHERE mb.meeting_id IN ({placeholders})
        ORDER BY mb.meeting_id, b.book_id
        """,
        tuple(meeting_ids),
    )
    for r in fetchall(cur):
        books[int(r["meeting_id"])].append(
            MeetingBook(book_id=int(r["book_id"]), title=r["title"], author=r["author"])
        )

    cur.execute(
        f"""
        SELECT a.meeting_id, a.member_id, m.nickname, a.status
        FROM attendances a
        JOIN members m ON m.member_id = a.member_id
        WHERE a.meeting_id IN ({placeholders})
        ORDER BY a.meeting_id, a.created_at, a.member_id
        """,
        tuple(meeting_ids),
    )
    for r in fetchall(cur):
        attendances[int(r["meeting_id"])].append(
            Attendance(
                member_id=int(r["member_id"]),
                nickname=r["nickname"],
                status=AttendanceStatus(r["status"]),
            )
        )

    return books, attendances


def _insert_attendees(cur, meeting_id: int, attendee_ids: Sequence[int]) -> None:
    if not attendee_ids:
        return
    cur.executemany(
        "INSERT INTO attendances(meeting_id, member_id, status) VALUES(%s,%s,%s)",
        [(int(meeting_id), int(mid), AttendanceStatus.ATTENDING.value) for mid in attendee_ids],
    )


def _insert_books(cur, meeting_id: int, book_ids: Sequence[int]) -> None:
    if not book_ids:
        return
    cur.executemany(
        "INSERT INTO meeting_books(meeting_id, book_id) VALUES(%s,%s)",
        [(int(meeting_id), int(bid)) for bid in book_ids],
    )


class MySQLMeetingRepository(MeetingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, *, order: str, limit: Optional[int] = None) -> List[Meeting]:
        sql = f"""
            SELECT meeting_id, club_id, title, meeting_at, location, memo, created_at, updated_at
            FROM meetings
            WHERE {where}
            ORDER BY {order}
        """
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            rows = fetchall(cur)
            ids = [int(r["meeting_id"]) for r in rows]
            books, attendances = _load_relations(cur, ids)
            return [
                Meeting(
                    meeting_id=int(r["meeting_id"]),
                    club_id=int(r["club_id"]),
                    title=r["title"],
                    meeting_at=r["meeting_at"],
                    location=r.get("location") or "",
                    memo=r.get("memo") or "",
                    books=tuple(books[int(r["meeting_id"])]),
                    attendances=tuple(attendances[int(r["meeting_id"])]),
                    created_at=r.get("created_at"),
                    updated_at=r.get("updated_at"),
                )
                for r in rows
            ]

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        meetings = self._select("meeting_id=%s", (int(meeting_id),), order="meeting_id")
        return meetings[0] if meetings else None

    def list_by_club(self, club_id: int) -> Sequence[Meeting]:
        return self._select("club_id=%s", (int(club_id),), order="meeting_at DESC, meeting_id DESC")

    def list_upcoming(self, club_id: int, *, now: datetime, limit: int) -> Sequence[Meeting]:
        return self._select(
            "club_id=%s AND meeting_at >= %s",
            (int(club_id), now),
            order="meeting_at ASC, meeting_id ASC",
            limit=limit,
        )

    def create_with_attendees(
        self,
        *,
        club_id: int,
        title: str,
        meeting_at: datetime,
        location: str,
        memo: str,
        attendee_ids: Sequence[int],
        book_ids: Sequence[int],
    ) -> int:
        with integrity_errors(conflict="Duplicate attendee", missing_reference=UNKNOWN_REFERENCE):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO meetings(club_id, title, meeting_at, location, memo)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(club_id), title, meeting_at, location, memo),
                )
                meeting_id = int(cur.lastrowid)
                _insert_attendees(cur, meeting_id, attendee_ids)
                _insert_books(cur, meeting_id, book_ids)
                return meeting_id

    def update_with_attendees(
        self,
        *,
        meeting_id: int,
        title: str,
        meeting_at: datetime,
        location: str,
        memo: str,
        attendee_ids: Sequence[int],
        book_ids: Optional[Sequence[int]] = None,
    ) -> bool:
        with integrity_errors(conflict="Duplicate attendee", missing_reference=UNKNOWN_REFERENCE):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT meeting_id FROM meetings WHERE meeting_id=%s FOR UPDATE", (int(meeting_id),))
                if not fetchone(cur):
                    return False

                cur.execute(
                    "UPDATE meetings SET title=%s, meeting_at=%s, location=%s, memo=%s WHERE meeting_id=%s",
                    (title, meeting_at, location, memo, int(meeting_id)),
                )
                cur.execute("DELETE FROM attendances WHERE meeting_id=%s", (int(meeting_id),))
                _insert_attendees(cur, meeting_id, attendee_ids)

                if book_ids is not None:
                    cur.execute("DELETE FROM meeting_books WHERE meeting_id=%s", (int(meeting_id),))
                    _insert_books(cur, meeting_id, book_ids)
                return True

    def delete(self, meeting_id: int) -> bool:
        # attendances and meeting_books cascade.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM meetings WHERE meeting_id=%s", (int(meeting_id),))
            return cur.rowcount > 0
