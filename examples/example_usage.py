"""Example: use the service layer directly (without Flask).

Controllers are a thin layer; the use cases live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.book_club.book_club.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for item in container.member_service.list_with_stats():
        print(item.member.nickname, f"{item.stats.attendance_rate}%")

    for book in container.book_service.list_books()[:5]:
        print(book.title, "/", book.author, list(book.genres))


if __name__ == "__main__":
    main()
