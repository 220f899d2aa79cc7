from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def require_date(value: str, field_name: str) -> date:
    try:
        return parse_iso_date(value.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def club_timezone(offset_hours: int) -> timezone:
    return timezone(timedelta(hours=offset_hours))


def combine_meeting_datetime(date_s: str, time_s: str, *, tz: timezone) -> datetime:
    """Combine a date ('2024-01-31') and a wall-clock time ('19:30') at the club offset.

    Returns a naive UTC datetime, which is what the meetings table stores.
    """

    day = require_date(date_s, "Date")
    try:
        fmt = "%H:%M:%S" if time_s.count(":") == 2 else "%H:%M"
        parsed = datetime.strptime(time_s.strip(), fmt)
    except (AttributeError, ValueError):
        raise ValidationError("Time must be a HH:MM time")

    local = datetime.combine(day, parsed.time(), tzinfo=tz)
    return local.astimezone(timezone.utc).replace(tzinfo=None)


def utc_to_club_iso(value: datetime, *, tz: timezone) -> str:
    return value.replace(tzinfo=timezone.utc).astimezone(tz).isoformat()


def to_iso(value: datetime) -> str:
    """Render a stored (naive UTC) timestamp as ISO-8601 with a Z suffix."""
    return value.replace(microsecond=0).isoformat() + "Z"


def now_utc() -> datetime:
    """Current naive UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def default_meeting_title(day: date, suffix: str) -> str:
    return f"{day.year}. {day.month}. {day.day}. {suffix}"
