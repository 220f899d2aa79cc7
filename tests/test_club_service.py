from __future__ import annotations

from src.book_club.book_club.clubs.service import ClubService
from tests.fakes import InMemoryClubs, InMemoryStore


def test_default_club_created_once_and_cached():
    store = InMemoryStore()
    clubs = InMemoryClubs(store)
    svc = ClubService(clubs, default_name="우리 북클럽", default_description="기본 북클럽")

    first = svc.default_club_id()
    second = svc.default_club_id()

    assert first == second
    assert clubs.create_calls == 1
    assert store.clubs[first].name == "우리 북클럽"


def test_existing_club_is_reused():
    store = InMemoryStore()
    clubs = InMemoryClubs(store)
    existing = clubs.get_or_create_default(name="Readers", description="")

    svc = ClubService(clubs, default_name="우리 북클럽", default_description="기본 북클럽")

    assert svc.default_club_id() == existing.club_id
    assert len(store.clubs) == 1
