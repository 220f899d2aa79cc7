from __future__ import annotations

from enum import Enum


class MemberRole(str, Enum):
    """Role of a member inside the club."""

    LEADER = "LEADER"
    MEMBER = "MEMBER"


class AttendanceStatus(str, Enum):
    """Attendance status stored per (meeting, member)."""

    ATTENDING = "ATTENDING"
    NOT_ATTENDING = "NOT_ATTENDING"
    UNDECIDED = "UNDECIDED"
