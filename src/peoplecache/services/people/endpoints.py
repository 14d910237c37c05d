"""URL construction for the people API.

Page and friends URLs are built from configuration, so a failure there is
a programming error. Image URLs come from the server and failing to parse
one is an expected outcome. Both cases raise InvalidEndpointError and the
caller decides how loudly to report it.
"""

from __future__ import annotations

from yarl import URL

from peoplecache.config.models.api_settings import PeopleAPISettings
from peoplecache.shared.constants import LogOperations, PeopleAPIConfig, QueryParams
from peoplecache.shared.errors import InvalidEndpointError

_ALLOWED_SCHEMES = ("http", "https")


def parse_absolute_url(raw: str, operation: str | None = None) -> URL:
    """Parse an absolute http(s) URL.

    Args:
        raw: URL text
        operation: Operation name recorded on the error

    Returns:
        The parsed URL

    Raises:
        InvalidEndpointError: If raw is not an absolute http or https URL
    """
    try:
        url = URL(raw)
    except (TypeError, ValueError) as e:
        raise InvalidEndpointError(str(raw), str(e), operation, e) from e

    if not url.is_absolute() or url.scheme not in _ALLOWED_SCHEMES or not url.host:
        raise InvalidEndpointError(raw, "not an absolute http(s) URL", operation)
    return url


def build_page_url(settings: PeopleAPISettings, page: int) -> URL:
    """URL of a zero-based page; the wire page number starts at 1."""
    if page < 0:
        raise InvalidEndpointError(
            settings.base_url + settings.people_path,
            f"page index must be non-negative, got {page}",
            LogOperations.FETCH_PAGE,
        )
    base = parse_absolute_url(settings.base_url + settings.people_path, LogOperations.FETCH_PAGE)
    return base.with_query(
        {
            QueryParams.PAGE: page + PeopleAPIConfig.WIRE_PAGE_OFFSET,
            QueryParams.PER_PAGE: settings.page_size,
        }
    )


def build_friends_url(settings: PeopleAPISettings, person_id: str) -> URL:
    """URL of the friend list of one person."""
    if not person_id:
        raise InvalidEndpointError(
            settings.base_url + settings.friends_path,
            "person id must be a non-empty string",
            LogOperations.FETCH_FRIENDS,
        )
    base = parse_absolute_url(settings.base_url + settings.friends_path, LogOperations.FETCH_FRIENDS)
    return base.with_query({QueryParams.PERSON_ID: person_id})


def build_image_url(raw: str) -> URL:
    """URL of an avatar as supplied by the server."""
    return parse_absolute_url(raw, LogOperations.FETCH_IMAGE)
