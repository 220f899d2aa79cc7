from __future__ import annotations

from datetime import datetime

import pytest

from src.book_club.book_club.container import assemble_container
from src.book_club.book_club.main import create_app
from tests.fakes import InMemoryBooks, InMemoryClubs, InMemoryMeetings, InMemoryMembers, InMemoryStore


@pytest.fixture
def fixed_now() -> datetime:
    # naive UTC
    return datetime(2024, 6, 15, 3, 0, 0)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(store):
    return assemble_container(
        clubs_repo=InMemoryClubs(store),
        members_repo=InMemoryMembers(store),
        books_repo=InMemoryBooks(store),
        meetings_repo=InMemoryMeetings(store),
        utc_offset_hours=9,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()
