from __future__ import annotations

from datetime import timezone
from typing import Any, Dict

from ..common.datetime_utils import to_iso, utc_to_club_iso
from .model import Meeting


def meeting_to_json(meeting: Meeting, *, tz: timezone) -> Dict[str, Any]:
    return {
        "id": meeting.meeting_id,
        "clubId": meeting.club_id,
        "title": meeting.title,
        "date": utc_to_club_iso(meeting.meeting_at, tz=tz),
        "location": meeting.location,
        "memo": meeting.memo,
        "books": [{"id": b.book_id, "title": b.title, "author": b.author} for b in meeting.books],
        "attendances": [
            {"member": {"id": a.member_id, "nickname": a.nickname}, "status": a.status.value}
            for a in meeting.attendances
        ],
        "createdAt": to_iso(meeting.created_at) if meeting.created_at else None,
        "updatedAt": to_iso(meeting.updated_at) if meeting.updated_at else None,
    }
