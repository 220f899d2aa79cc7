import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "book_club"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "book_club"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

DEFAULT_CLUB_NAME = os.getenv("DEFAULT_CLUB_NAME", "우리 북클럽")
DEFAULT_CLUB_DESCRIPTION = os.getenv("DEFAULT_CLUB_DESCRIPTION", "기본 북클럽")
MEETING_UTC_OFFSET_HOURS = int(os.getenv("MEETING_UTC_OFFSET_HOURS", "9"))
