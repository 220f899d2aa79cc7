from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, integrity_errors
from .model import Book
from .repository import BookRepository

UNKNOWN_ADDED_BY = "Added-by member does not exist"

_BOOK_COLUMNS = """
    b.book_id, b.club_id, b.title, b.author, b.notes, b.registered_date,
    b.added_by_id, m.nickname AS added_by_nickname, b.created_at, b.updated_at
"""


def _row_to_book(r: dict, genres: Sequence[str]) -> Book:
    return Book(
        book_id=int(r["book_id"]),
        club_id=int(r["club_id"]),
        title=r["title"],
        author=r["author"],
        notes=r.get("notes") or "",
        registered_date=r["registered_date"],
        added_by_id=int(r["added_by_id"]) if r.get("added_by_id") is not None else None,
        added_by_nickname=r.get("added_by_nickname"),
        genres=tuple(genres),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _genres_for(cur, book_ids: Sequence[int]) -> Dict[int, List[str]]:
    out: Dict[int, List[str]] = {bid: [] for bid in book_ids}
    if not book_ids:
        return out

    cur.execute(
        f"""
        SELECT bg.book_id, g.name
        FROM book_genres bg
        JOIN genres g ON g.genre_id = bg.genre_id
        WHERE bg.book_id IN ({in_clause(book_ids)})
        ORDER BY bg.book_id, bg.position, g.genre_id
        """,
        tuple(book_ids),
    )
    for r in fetchall(cur):
        out[int(r["book_id"])].append(r["name"])
    return out


def _link_genres(cur, *, book_id: int, club_id: int, genres: Sequence[str]) -> None:
    linked: set[int] = set()
    for position, name in enumerate(genres):
        # Find-or-create against uq_genres_club_name; LAST_INSERT_ID(genre_id)
        # makes lastrowid the existing id when the row is already there.
        cur.execute(
            """
            INSERT INTO genres(club_id, name) VALUES(%s,%s)
            ON DUPLICATE KEY UPDATE genre_id=LAST_INSERT_ID(genre_id)
            """,
            (int(club_id), name),
        )
        genre_id = int(cur.lastrowid)

        # Two names resolving to one genre row link it once.
        if genre_id in linked:
            continue
        linked.add(genre_id)

        cur.execute(
            "INSERT INTO book_genres(book_id, genre_id, position) VALUES(%s,%s,%s)",
            (int(book_id), genre_id, position),
        )


class MySQLBookRepository(BookRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, *, limit: Optional[int] = None) -> List[Book]:
        sql = f"""
            SELECT {_BOOK_COLUMNS}
            FROM books b
            LEFT JOIN members m ON m.member_id = b.added_by_id
            WHERE {where}
            ORDER BY b.created_at DESC, b.book_id DESC
        """
        if limit is not None:
            sql += " LIMIT %s"
            params = params + (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            rows = fetchall(cur)
            genres = _genres_for(cur, [int(r["book_id"]) for r in rows])
            return [_row_to_book(r, genres[int(r["book_id"])]) for r in rows]

    def get_by_id(self, book_id: int) -> Optional[Book]:
        books = self._select("b.book_id=%s", (int(book_id),))
        return books[0] if books else None

    def list_by_club(self, club_id: int, *, limit: Optional[int] = None) -> Sequence[Book]:
        return self._select("b.club_id=%s", (int(club_id),), limit=limit)

    def list_added_by(self, member_id: int) -> Sequence[Book]:
        return self._select("b.added_by_id=%s", (int(member_id),))

    def count_by_club(self, club_id: int, *, created_since: Optional[datetime] = None) -> int:
        clauses = ["club_id=%s"]
        params: list[object] = [int(club_id)]
        if created_since is not None:
            clauses.append("created_at >= %s")
            params.append(created_since)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM books WHERE {' AND '.join(clauses)}", tuple(params))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

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
        with integrity_errors(conflict="Book could not be saved", missing_reference=UNKNOWN_ADDED_BY):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO books(club_id, title, author, notes, registered_date, added_by_id)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (int(club_id), title, author, notes, registered_date, added_by_id),
                )
                book_id = int(cur.lastrowid)
                _link_genres(cur, book_id=book_id, club_id=club_id, genres=genres)
                return book_id

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
        with integrity_errors(conflict="Book could not be saved", missing_reference=UNKNOWN_ADDED_BY):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("SELECT club_id FROM books WHERE book_id=%s FOR UPDATE", (int(book_id),))
                r = fetchone(cur)
                if not r:
                    return False
                club_id = int(r["club_id"])

                cur.execute(
                    """
                    UPDATE books
                    SET title=%s, author=%s, notes=%s, registered_date=%s, added_by_id=%s
                    WHERE book_id=%s
                    """,
                    (title, author, notes, registered_date, added_by_id, int(book_id)),
                )
                cur.execute("DELETE FROM book_genres WHERE book_id=%s", (int(book_id),))
                _link_genres(cur, book_id=int(book_id), club_id=club_id, genres=genres)
                return True

    def delete(self, book_id: int) -> bool:
        # book_genres and meeting_books cascade.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM books WHERE book_id=%s", (int(book_id),))
            return cur.rowcount > 0
