from __future__ import annotations

from datetime import date

import pytest

from src.book_club.book_club.core.exceptions import NotFoundError, ValidationError


def _genre_rows(store):
    return sorted(name for _, name in store.genres.values())


def test_create_links_each_distinct_genre(container, store):
    book = container.book_service.create(
        title="  사피엔스 ",
        author=" 유발 하라리",
        registered_date="2024-01-01",
        genres=["역사", "인류학", "과학"],
    )

    assert book.title == "사피엔스"
    assert book.author == "유발 하라리"
    assert book.notes == ""
    assert book.registered_date == date(2024, 1, 1)
    assert book.genres == ("역사", "인류학", "과학")
    assert len([bg for bg in store.book_genres if bg[0] == book.book_id]) == 3


def test_existing_genres_are_reused(container, store):
    container.book_service.create(title="A", author="X", registered_date="2024-01-01", genres=["역사"])
    container.book_service.create(title="B", author="Y", registered_date="2024-01-02", genres=["역사", "소설"])

    assert _genre_rows(store) == ["소설", "역사"]


def test_repeated_genre_names_collapse(container, store):
    book = container.book_service.create(
        title="A", author="X", registered_date="2024-01-01", genres=["역사", " 역사 ", "", "소설", "역사"]
    )

    assert book.genres == ("역사", "소설")
    assert len([bg for bg in store.book_genres if bg[0] == book.book_id]) == 2


def test_update_replaces_genre_set(container):
    book = container.book_service.create(title="A", author="X", registered_date="2024-01-01", genres=["A", "B"])

    updated = container.book_service.update(book.book_id, title="A", author="X", genres=["B", "C"])

    assert set(updated.genres) == {"B", "C"}


def test_update_with_empty_genres_unlinks_all(container):
    book = container.book_service.create(title="A", author="X", registered_date="2024-01-01", genres=["A"])

    updated = container.book_service.update(book.book_id, title="A", author="X", genres=[])

    assert updated.genres == ()


def test_update_keeps_registered_date_when_omitted(container):
    book = container.book_service.create(title="A", author="X", registered_date="2024-03-05")

    updated = container.book_service.update(book.book_id, title="A2", author="X", notes="good")

    assert updated.registered_date == date(2024, 3, 5)
    assert updated.notes == "good"


def test_update_replaces_added_by_wholesale(container):
    alice = container.member_service.create(nickname="Alice")
    book = container.book_service.create(
        title="A", author="X", registered_date="2024-01-01", added_by_id=alice.member_id
    )
    assert book.added_by_nickname == "Alice"

    updated = container.book_service.update(book.book_id, title="A", author="X")

    assert updated.added_by_id is None


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "author": "X", "registered_date": "2024-01-01"},
        {"title": "T", "author": None, "registered_date": "2024-01-01"},
        {"title": "T", "author": "X", "registered_date": None},
        {"title": "T", "author": "X", "registered_date": "01/02/2024"},
        {"title": "T", "author": "X", "registered_date": "2024-01-01", "genres": "역사"},
        {"title": "T" * 256, "author": "X", "registered_date": "2024-01-01"},
        {"title": "T", "author": "X", "registered_date": "2024-01-01", "genres": ["g" * 51]},
    ],
)
def test_create_rejects_invalid_input(container, payload):
    with pytest.raises(ValidationError):
        container.book_service.create(**payload)


def test_create_rejects_unknown_added_by(container, store):
    with pytest.raises(ValidationError):
        container.book_service.create(title="T", author="X", registered_date="2024-01-01", added_by_id=999)

    assert store.books == {}


def test_update_and_delete_missing_book(container):
    with pytest.raises(NotFoundError):
        container.book_service.update(42, title="T", author="X")
    with pytest.raises(NotFoundError):
        container.book_service.delete(42)


def test_update_validates_before_lookup(container):
    with pytest.raises(ValidationError):
        container.book_service.update(42, title="", author="X")


def test_same_book_may_be_registered_per_member(container):
    alice = container.member_service.create(nickname="Alice")
    bob = container.member_service.create(nickname="Bob")

    container.book_service.create(title="T", author="A", registered_date="2024-01-01", added_by_id=alice.member_id)
    container.book_service.create(title="T", author="A", registered_date="2024-01-01", added_by_id=bob.member_id)

    assert len(container.book_service.list_books()) == 2


def test_delete_cascades_genre_links(container, store):
    book = container.book_service.create(title="T", author="A", registered_date="2024-01-01", genres=["역사"])

    container.book_service.delete(book.book_id)

    assert store.book_genres == []
    assert _genre_rows(store) == ["역사"]
