from __future__ import annotations

from typing import Any, Dict

from ..books.serializers import book_to_json
from ..common.datetime_utils import to_iso
from .model import Member, MemberReadingStats, MemberWithStats


def member_to_json(member: Member) -> Dict[str, Any]:
    return {
        "id": member.member_id,
        "clubId": member.club_id,
        "nickname": member.nickname,
        "role": member.role.value,
        "contact": member.contact,
        "createdAt": to_iso(member.created_at) if member.created_at else None,
        "updatedAt": to_iso(member.updated_at) if member.updated_at else None,
    }


def member_with_stats_to_json(item: MemberWithStats) -> Dict[str, Any]:
    out = member_to_json(item.member)
    out["attendanceStats"] = {
        "totalMeetings": item.stats.total_meetings,
        "attendedMeetings": item.stats.attended_meetings,
        "attendanceRate": item.stats.attendance_rate,
    }
    return out


def reading_stats_to_json(stats: MemberReadingStats) -> Dict[str, Any]:
    return {
        "member": member_to_json(stats.member),
        "books": [book_to_json(b) for b in stats.books],
        "stats": {
            "totalBooks": len(stats.books),
            "uniqueBooks": stats.unique_books,
            "genreCount": len(stats.genre_counts),
            "topGenres": [{"genre": name, "count": count} for name, count in stats.top_genres],
        },
    }
