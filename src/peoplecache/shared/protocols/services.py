"""Service protocols for dependency inversion.

This module defines the Protocol interfaces the paging controller talks
to: the data source that reaches the remote people API, and the
presentation adapter that renders the cached records. Test doubles only
need to satisfy these protocols.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Protocol

from peoplecache.shared.models.person import Person


class PersonDataSource(Protocol):
    """Protocol for the remote people API.

    Every operation is a single fire-and-forget request. There is no
    cancel API; a caller that loses interest simply ignores the result.
    Failures are raised as DataSourceError subclasses.

    Example:
        >>> from peoplecache.services.people import PeopleDataSource
        >>>
        >>> source: PersonDataSource = PeopleDataSource()
        >>> async for person, row in source.fetch_page(0):
        ...     print(row, person.display_name)
    """

    @property
    def page_size(self) -> int:
        """Number of people per page."""

    def fetch_page(self, page: int) -> AsyncIterator[tuple[Person, int]]:
        """Fetch one page of people.

        Args:
            page: Zero-based page index

        Yields:
            (person, absolute_row_index) for every valid record of the page
        """

    async def fetch_image(self, person_id: str, url: str) -> bytes:
        """Fetch the raw avatar bytes of a person.

        Args:
            person_id: Id of the person the image belongs to
            url: Server supplied image URL

        Returns:
            Raw image bytes
        """

    async def fetch_friends(self, person_id: str) -> list[Person]:
        """Fetch the friend list of a person.

        Args:
            person_id: Id of the person

        Returns:
            Friends in server order, invalid entries dropped
        """


class PresentationAdapter(Protocol):
    """Protocol for the UI layer that renders cached people.

    The controller calls these hooks on its owner event loop.
    """

    def on_refresh(self) -> None:
        """Cached data changed; redraw the visible rows."""

    def on_friends_loaded(self, person_id: str, friends: Sequence[Person]) -> None:
        """The friend list of the currently selected person arrived."""

    def on_select_row(self, row: int) -> None:
        """Navigate to the given row of the people list."""
