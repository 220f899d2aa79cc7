"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_CLUB_NAME = "우리 북클럽"
DEFAULT_CLUB_DESCRIPTION = "기본 북클럽"
DEFAULT_MEETING_UTC_OFFSET_HOURS = 9
MEETING_TITLE_SUFFIX = "모임"
UNKNOWN_MEMBER_NAME = "Unknown"

DASHBOARD_UPCOMING_LIMIT = 3
DASHBOARD_RECENT_BOOKS_LIMIT = 5
TOP_GENRES_LIMIT = 5

# Column widths in database/schema.sql
NICKNAME_MAX_LEN = 50
GENRE_NAME_MAX_LEN = 50
TEXT_FIELD_MAX_LEN = 255
