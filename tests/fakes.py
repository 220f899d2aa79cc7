"""In-memory repositories mirroring the MySQL schema rules.

Unique keys raise ConflictError, unknown foreign keys raise ValidationError,
and deletes cascade the way the FK rules in database/schema.sql do.
"""

from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from src.book_club.book_club.books.model import Book
from src.book_club.book_club.clubs.model import Club
from src.book_club.book_club.core.enums import AttendanceStatus, MemberRole
from src.book_club.book_club.core.exceptions import ConflictError, ValidationError
from src.book_club.book_club.meetings.model import Attendance, Meeting, MeetingBook
from src.book_club.book_club.members.model import Member


class InMemoryStore:
    def __init__(self, *, start: datetime = datetime(2024, 1, 1, 0, 0, 0)):
        self.clubs: Dict[int, Club] = {}
        self.members: Dict[int, Member] = {}
        self.books: Dict[int, dict] = {}
        self.genres: Dict[int, tuple] = {}
        self.book_genres: List[tuple] = []
        self.meetings: Dict[int, dict] = {}
        self.attendances: List[tuple] = []
        self.meeting_books: List[tuple] = []
        self._ids = itertools.count(1)
        self._tick = start

    def next_id(self) -> int:
        return next(self._ids)

    def now(self) -> datetime:
        # Strictly increasing so "newest first" ordering is deterministic.
        self._tick += timedelta(seconds=1)
        return self._tick


class InMemoryClubs:
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.create_calls = 0

    def get_first(self) -> Optional[Club]:
        if not self._store.clubs:
            return None
        return self._store.clubs[min(self._store.clubs)]

    def get_or_create_default(self, *, name: str, description: str) -> Club:
        club = self.get_first()
        if club:
            return club
        self.create_calls += 1
        club_id = self._store.next_id()
        self._store.clubs[club_id] = Club(club_id=club_id, name=name, description=description)
        return self._store.clubs[club_id]


class InMemoryMembers:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def _check_unique(self, club_id: int, nickname: str, *, exclude: Optional[int] = None) -> None:
        for m in self._store.members.values():
            if m.club_id == club_id and m.nickname == nickname and m.member_id != exclude:
                raise ConflictError("Nickname already exists in this club")

    def get_by_id(self, member_id: int) -> Optional[Member]:
        return self._store.members.get(member_id)

    def list_by_club(self, club_id: int) -> Sequence[Member]:
        return sorted((m for m in self._store.members.values() if m.club_id == club_id), key=lambda m: m.nickname)

    def create(self, *, club_id: int, nickname: str, role: MemberRole, contact: str) -> int:
        self._check_unique(club_id, nickname)
        member_id = self._store.next_id()
        now = self._store.now()
        self._store.members[member_id] = Member(
            member_id=member_id,
            club_id=club_id,
            nickname=nickname,
            role=role,
            contact=contact,
            created_at=now,
            updated_at=now,
        )
        return member_id

    def update(self, *, member_id: int, nickname: str, role: MemberRole, contact: str) -> None:
        m = self._store.members.get(member_id)
        if not m:
            return
        self._check_unique(m.club_id, nickname, exclude=member_id)
        self._store.members[member_id] = replace(
            m, nickname=nickname, role=role, contact=contact, updated_at=self._store.now()
        )

    def delete(self, member_id: int) -> bool:
        if member_id not in self._store.members:
            return False
        del self._store.members[member_id]
        self._store.attendances = [a for a in self._store.attendances if a[1] != member_id]
        for b in self._store.books.values():
            if b["added_by_id"] == member_id:
                b["added_by_id"] = None
        return True

    def count_past_meetings(self, *, club_id: int, before: datetime) -> int:
        return sum(1 for m in self._store.meetings.values() if m["club_id"] == club_id and m["meeting_at"] < before)

    def count_attended_past_meetings(self, *, club_id: int, before: datetime) -> Dict[int, int]:
        out: Dict[int, int] = {}
        for meeting_id, member_id, status in self._store.attendances:
            mt = self._store.meetings[meeting_id]
            if mt["club_id"] == club_id and mt["meeting_at"] < before and status == AttendanceStatus.ATTENDING:
                out[member_id] = out.get(member_id, 0) + 1
        return out

    def count_by_club(self, club_id: int) -> int:
        return len(self.list_by_club(club_id))


class InMemoryBooks:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def _to_book(self, row: dict) -> Book:
        genre_ids = [g for b, g in self._store.book_genres if b == row["book_id"]]
        added_by = self._store.members.get(row["added_by_id"]) if row["added_by_id"] else None
        return Book(
            book_id=row["book_id"],
            club_id=row["club_id"],
            title=row["title"],
            author=row["author"],
            notes=row["notes"],
            registered_date=row["registered_date"],
            added_by_id=row["added_by_id"],
            added_by_nickname=added_by.nickname if added_by else None,
            genres=tuple(self._store.genres[g][1] for g in genre_ids),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _sorted(self, rows) -> List[Book]:
        return [self._to_book(r) for r in sorted(rows, key=lambda r: r["created_at"], reverse=True)]

    def _check_member(self, added_by_id: Optional[int]) -> None:
        if added_by_id is not None and added_by_id not in self._store.members:
            raise ValidationError("Added-by member does not exist")

    def _find_or_create_genre(self, club_id: int, name: str) -> int:
        for genre_id, (g_club, g_name) in self._store.genres.items():
            if g_club == club_id and g_name == name:
                return genre_id
        genre_id = self._store.next_id()
        self._store.genres[genre_id] = (club_id, name)
        return genre_id

    def _link(self, book_id: int, club_id: int, genres: Sequence[str]) -> None:
        for name in genres:
            genre_id = self._find_or_create_genre(club_id, name)
            if (book_id, genre_id) in self._store.book_genres:
                raise ConflictError("Book could not be saved")
            self._store.book_genres.append((book_id, genre_id))

    def get_by_id(self, book_id: int) -> Optional[Book]:
        row = self._store.books.get(book_id)
        return self._to_book(row) if row else None

    def list_by_club(self, club_id: int, *, limit: Optional[int] = None) -> Sequence[Book]:
        books = self._sorted(r for r in self._store.books.values() if r["club_id"] == club_id)
        return books[:limit] if limit is not None else books

    def list_added_by(self, member_id: int) -> Sequence[Book]:
        return self._sorted(r for r in self._store.books.values() if r["added_by_id"] == member_id)

    def count_by_club(self, club_id: int, *, created_since: Optional[datetime] = None) -> int:
        return sum(
            1
            for r in self._store.books.values()
            if r["club_id"] == club_id and (created_since is None or r["created_at"] >= created_since)
        )

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
        self._check_member(added_by_id)
        book_id = self._store.next_id()
        now = self._store.now()
        self._store.books[book_id] = {
            "book_id": book_id,
            "club_id": club_id,
            "title": title,
            "author": author,
            "notes": notes,
            "registered_date": registered_date,
            "added_by_id": added_by_id,
            "created_at": now,
            "updated_at": now,
        }
        self._link(book_id, club_id, genres)
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
        row = self._store.books.get(book_id)
        if not row:
            return False
        self._check_member(added_by_id)
        row.update(
            title=title,
            author=author,
            notes=notes,
            registered_date=registered_date,
            added_by_id=added_by_id,
            updated_at=self._store.now(),
        )
        self._store.book_genres = [bg for bg in self._store.book_genres if bg[0] != book_id]
        self._link(book_id, row["club_id"], genres)
        return True

    def delete(self, book_id: int) -> bool:
        if book_id not in self._store.books:
            return False
        del self._store.books[book_id]
        self._store.book_genres = [bg for bg in self._store.book_genres if bg[0] != book_id]
        self._store.meeting_books = [mb for mb in self._store.meeting_books if mb[1] != book_id]
        return True


class InMemoryMeetings:
    def __init__(self, store: InMemoryStore):
        self._store = store

    def _to_meeting(self, row: dict) -> Meeting:
        mid = row["meeting_id"]
        return Meeting(
            meeting_id=mid,
            club_id=row["club_id"],
            title=row["title"],
            meeting_at=row["meeting_at"],
            location=row["location"],
            memo=row["memo"],
            books=tuple(
                MeetingBook(book_id=b, title=self._store.books[b]["title"], author=self._store.books[b]["author"])
                for m, b in self._store.meeting_books
                if m == mid
            ),
            attendances=tuple(
                Attendance(member_id=member_id, nickname=self._store.members[member_id].nickname, status=status)
                for m, member_id, status in self._store.attendances
                if m == mid
            ),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _check_refs(self, attendee_ids: Sequence[int], book_ids: Optional[Sequence[int]]) -> None:
        if any(mid not in self._store.members for mid in attendee_ids):
            raise ValidationError("Attendee or book does not exist")
        if book_ids and any(bid not in self._store.books for bid in book_ids):
            raise ValidationError("Attendee or book does not exist")

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        row = self._store.meetings.get(meeting_id)
        return self._to_meeting(row) if row else None

    def list_by_club(self, club_id: int) -> Sequence[Meeting]:
        rows = [r for r in self._store.meetings.values() if r["club_id"] == club_id]
        return [self._to_meeting(r) for r in sorted(rows, key=lambda r: r["meeting_at"], reverse=True)]

    def list_upcoming(self, club_id: int, *, now: datetime, limit: int) -> Sequence[Meeting]:
        rows = [r for r in self._store.meetings.values() if r["club_id"] == club_id and r["meeting_at"] >= now]
        return [self._to_meeting(r) for r in sorted(rows, key=lambda r: r["meeting_at"])][:limit]

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
        self._check_refs(attendee_ids, book_ids)
        meeting_id = self._store.next_id()
        now = self._store.now()
        self._store.meetings[meeting_id] = {
            "meeting_id": meeting_id,
            "club_id": club_id,
            "title": title,
            "meeting_at": meeting_at,
            "location": location,
            "memo": memo,
            "created_at": now,
            "updated_at": now,
        }
        self._store.attendances.extend((meeting_id, mid, AttendanceStatus.ATTENDING) for mid in attendee_ids)
        self._store.meeting_books.extend((meeting_id, bid) for bid in book_ids)
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
        row = self._store.meetings.get(meeting_id)
        if not row:
            return False
        self._check_refs(attendee_ids, book_ids)
        row.update(title=title, meeting_at=meeting_at, location=location, memo=memo, updated_at=self._store.now())
        self._store.attendances = [a for a in self._store.attendances if a[0] != meeting_id]
        self._store.attendances.extend((meeting_id, mid, AttendanceStatus.ATTENDING) for mid in attendee_ids)
        if book_ids is not None:
            self._store.meeting_books = [mb for mb in self._store.meeting_books if mb[0] != meeting_id]
            self._store.meeting_books.extend((meeting_id, bid) for bid in book_ids)
        return True

    def delete(self, meeting_id: int) -> bool:
        if meeting_id not in self._store.meetings:
            return False
        del self._store.meetings[meeting_id]
        self._store.attendances = [a for a in self._store.attendances if a[0] != meeting_id]
        self._store.meeting_books = [mb for mb in self._store.meeting_books if mb[0] != meeting_id]
        return True
