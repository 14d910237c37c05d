"""
Pytest configuration and shared fixtures for peoplecache tests.

This module provides person payloads, an in-memory data source whose
requests can be held open with asyncio events, and a presentation adapter
that records every notification it receives.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable, Sequence
from typing import Any

import pytest

from peoplecache.shared.errors import DataSourceError
from peoplecache.shared.models.person import Person


def _payload(index: int, *, image: bool = True, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": f"p{index}",
        "firstName": f"First{index}",
        "lastName": f"Last{index}",
        "email": f"person{index}@example.com",
        "username": f"user{index}",
        "friendCount": index % 3,
    }
    if image:
        payload["imageURL"] = f"https://images.test/p{index}.png"
    payload.update(overrides)
    return payload


@pytest.fixture
def person_payload() -> Callable[..., dict[str, Any]]:
    """Factory for valid person payloads keyed by an integer index."""
    return _payload


@pytest.fixture
def make_person() -> Callable[..., Person]:
    """Factory for validated Person records keyed by an integer index."""

    def _make(index: int, *, image: bool = True, **overrides: Any) -> Person:
        return Person.from_payload(_payload(index, image=image, **overrides))

    return _make


class FakeDataSource:
    """In-memory PersonDataSource.

    Every call is recorded. A request waits on the event returned by
    hold() for its (kind, key) until the test sets it, which lets tests
    decide the order in which responses arrive.
    """

    def __init__(self, page_size: int = 10) -> None:
        self.page_size = page_size
        self.pages: dict[int, list[Person]] = {}
        self.images: dict[str, bytes] = {}
        self.friends: dict[str, list[Person]] = {}
        self.errors: dict[tuple[str, Any], DataSourceError] = {}

        self.page_calls: list[int] = []
        self.image_calls: list[tuple[str, str]] = []
        self.friend_calls: list[str] = []

        self._holds: dict[tuple[str, Any], asyncio.Event] = {}

    def hold(self, kind: str, key: Any) -> asyncio.Event:
        """Block the (kind, key) request until the returned event is set."""
        event = asyncio.Event()
        self._holds[(kind, key)] = event
        return event

    async def _arrive(self, kind: str, key: Any) -> None:
        event = self._holds.get((kind, key))
        if event is not None:
            await event.wait()
        error = self.errors.get((kind, key))
        if error is not None:
            raise error

    def fetch_page(self, page: int) -> AsyncIterator[tuple[Person, int]]:
        self.page_calls.append(page)
        return self._page_records(page)

    async def _page_records(self, page: int) -> AsyncIterator[tuple[Person, int]]:
        await self._arrive("page", page)
        for position, person in enumerate(self.pages.get(page, [])):
            yield person, page * self.page_size + position

    async def fetch_image(self, person_id: str, url: str) -> bytes:
        self.image_calls.append((person_id, url))
        await self._arrive("image", person_id)
        return self.images.get(person_id, f"image-of-{person_id}".encode())

    async def fetch_friends(self, person_id: str) -> list[Person]:
        self.friend_calls.append(person_id)
        await self._arrive("friends", person_id)
        return list(self.friends.get(person_id, []))


class RecordingAdapter:
    """PresentationAdapter that records what it was told."""

    def __init__(self) -> None:
        self.refreshes = 0
        self.friends_updates: list[tuple[str, list[Person]]] = []
        self.selected_rows: list[int] = []

    def on_refresh(self) -> None:
        self.refreshes += 1

    def on_friends_loaded(self, person_id: str, friends: Sequence[Person]) -> None:
        self.friends_updates.append((person_id, list(friends)))

    def on_select_row(self, row: int) -> None:
        self.selected_rows.append(row)


@pytest.fixture
def data_source() -> FakeDataSource:
    """Fake data source with a page size of 10."""
    return FakeDataSource(page_size=10)


@pytest.fixture
def adapter() -> RecordingAdapter:
    """Recording presentation adapter."""
    return RecordingAdapter()
