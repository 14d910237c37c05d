"""Cache state dataclasses for the paging controller.

This module holds the three independent caches the controller owns,
the set of in-flight pages, and the record handed to the failure hook.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from peoplecache.shared.errors import DataSourceError
from peoplecache.shared.models.person import Person

__all__ = ["FailedRequest", "PeopleCacheState", "RequestKind"]


class RequestKind(str, Enum):
    """Kinds of requests the controller issues."""

    PAGE = "page"
    IMAGE = "image"
    FRIENDS = "friends"


@dataclass(frozen=True)
class FailedRequest:
    """A request that ended in a DataSourceError.

    Attributes:
        kind: Which operation failed
        key: Page number for pages, person id for images and friends
        error: The error raised by the data source
    """

    kind: RequestKind
    key: int | str
    error: DataSourceError


@dataclass
class PeopleCacheState:
    """Caches owned by one paging controller.

    The caches are keyed and filled independently; a hit in one says
    nothing about the others.

    Attributes:
        rows: Absolute row index -> person, sparse
        images: Person id -> raw image bytes
        friends: Person id -> friends in server order
        pending_pages: Page number -> UTC time the fetch was issued
    """

    rows: dict[int, Person] = field(default_factory=dict)
    images: dict[str, bytes] = field(default_factory=dict)
    friends: dict[str, list[Person]] = field(default_factory=dict)
    pending_pages: dict[int, datetime] = field(default_factory=dict)

    def clear_rows(self) -> None:
        """Drop row-positioned state; identity keyed caches survive."""
        self.rows.clear()
        self.pending_pages.clear()

    def clear_identity_caches(self) -> None:
        """Drop the image and friends caches."""
        self.images.clear()
        self.friends.clear()

    def find_row(self, person_id: str) -> int | None:
        """Lowest cached row holding the given person, if any."""
        for row in sorted(self.rows):
            if self.rows[row].id == person_id:
                return row
        return None
