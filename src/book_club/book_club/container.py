from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .books.mysql_book_repository import MySQLBookRepository
from .books.repository import BookRepository
from .books.service import BookService
from .clubs.mysql_club_repository import MySQLClubRepository
from .clubs.repository import ClubRepository
from .clubs.service import ClubService
from .common.datetime_utils import club_timezone
from .core.constants import DEFAULT_CLUB_DESCRIPTION, DEFAULT_CLUB_NAME, DEFAULT_MEETING_UTC_OFFSET_HOURS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .meetings.mysql_meeting_repository import MySQLMeetingRepository
from .meetings.repository import MeetingRepository
from .meetings.service import MeetingService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import MemberService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    clubs_repo: ClubRepository
    members_repo: MemberRepository
    books_repo: BookRepository
    meetings_repo: MeetingRepository

    club_service: ClubService
    member_service: MemberService
    book_service: BookService
    meeting_service: MeetingService
    dashboard_service: DashboardService


def assemble_container(
    *,
    clubs_repo: ClubRepository,
    members_repo: MemberRepository,
    books_repo: BookRepository,
    meetings_repo: MeetingRepository,
    conn: Optional[DatabaseConnection] = None,
    default_club_name: str = DEFAULT_CLUB_NAME,
    default_club_description: str = DEFAULT_CLUB_DESCRIPTION,
    utc_offset_hours: int = DEFAULT_MEETING_UTC_OFFSET_HOURS,
) -> Container:
    """Wire services on top of the given repositories (MySQL in production, fakes in tests)."""

    club_service = ClubService(
        clubs_repo,
        default_name=default_club_name,
        default_description=default_club_description,
    )
    member_service = MemberService(members_repo, club_service, books_repo)
    book_service = BookService(books_repo, club_service)
    meeting_service = MeetingService(meetings_repo, club_service, tz=club_timezone(utc_offset_hours))
    dashboard_service = DashboardService(members_repo, club_service, book_service, meeting_service)

    return Container(
        conn=conn,
        clubs_repo=clubs_repo,
        members_repo=members_repo,
        books_repo=books_repo,
        meetings_repo=meetings_repo,
        club_service=club_service,
        member_service=member_service,
        book_service=book_service,
        meeting_service=meeting_service,
        dashboard_service=dashboard_service,
    )


def build_container(
    *,
    db_config: dict,
    default_club_name: str = DEFAULT_CLUB_NAME,
    default_club_description: str = DEFAULT_CLUB_DESCRIPTION,
    utc_offset_hours: int = DEFAULT_MEETING_UTC_OFFSET_HOURS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return assemble_container(
        clubs_repo=MySQLClubRepository(conn),
        members_repo=MySQLMemberRepository(conn),
        books_repo=MySQLBookRepository(conn),
        meetings_repo=MySQLMeetingRepository(conn),
        conn=conn,
        default_club_name=default_club_name,
        default_club_description=default_club_description,
        utc_offset_hours=utc_offset_hours,
    )
