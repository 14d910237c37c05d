"""HTTP data source for the remote people API.

This module maps the three data source operations onto HTTP GET requests
issued through a shared aiohttp session, and maps every failure onto the
DataSourceError taxonomy:

- TransportError: aiohttp raised a client error or the request timed out
- BadStatusError: status outside 200..203
- MalformedPayloadError: body is not the expected JSON object
- InvalidEndpointError: the request URL could not be built
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator

import aiohttp
from yarl import URL

from peoplecache.config.models.api_settings import PeopleAPISettings
from peoplecache.shared.constants import HTTPStatusCodes, LogOperations, ResponseKeys
from peoplecache.shared.errors import BadStatusError, TransportError
from peoplecache.shared.logging import log_api_call, log_operation_success
from peoplecache.shared.models.person import Person

from .endpoints import build_friends_url, build_image_url, build_page_url
from .payloads import decode_item_list, iter_valid_people
from .session_manager import AsyncSessionManager

logger = logging.getLogger(__name__)


class PeopleDataSource:
    """Data source backed by the people REST API.

    One call is one request; nothing is cached or retried here, that is
    the caller's job.

    Args:
        settings: People API settings (defaults when omitted)
        session_manager: Session manager to borrow the HTTP session from
    """

    def __init__(
        self,
        settings: PeopleAPISettings | None = None,
        session_manager: AsyncSessionManager | None = None,
    ) -> None:
        self._settings = settings or PeopleAPISettings()
        self._session_manager = session_manager or AsyncSessionManager(self._settings)

    @property
    def page_size(self) -> int:
        """Number of people per page."""
        return self._settings.page_size

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self._session_manager.close_session()

    async def _get(self, url: URL, operation: str) -> bytes:
        """Issue one GET and return the body of an accepted response.

        Raises:
            TransportError: If the request could not be completed
            BadStatusError: If the status is outside 200..203
        """
        session = await self._session_manager.get_session()
        started = time.perf_counter()
        try:
            async with session.get(url) as response:
                status = response.status
                log_api_call(
                    logger,
                    str(url),
                    status_code=status,
                    duration_ms=(time.perf_counter() - started) * 1000,
                    context={"operation": operation},
                )
                if not HTTPStatusCodes.is_accepted(status):
                    raise BadStatusError(str(url), status, operation)
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(str(url), e, operation) from e

    async def fetch_page(self, page: int) -> AsyncIterator[tuple[Person, int]]:
        """Fetch one page of people.

        The whole page arrives in one response; records are yielded one
        at a time with their absolute row index. Invalid records are
        skipped but still occupy their position.

        Args:
            page: Zero-based page index

        Yields:
            (person, absolute_row_index) for every valid record
        """
        started = time.perf_counter()
        url = build_page_url(self._settings, page)
        body = await self._get(url, LogOperations.FETCH_PAGE)
        items = decode_item_list(body, ResponseKeys.PEOPLE, str(url), LogOperations.FETCH_PAGE)

        first_row = page * self._settings.page_size
        valid = 0
        for position, person in iter_valid_people(items, LogOperations.FETCH_PAGE):
            valid += 1
            yield person, first_row + position

        log_operation_success(
            logger,
            LogOperations.FETCH_PAGE,
            (time.perf_counter() - started) * 1000,
            result_info={"page": page, "received": len(items), "valid": valid},
        )

    async def fetch_image(self, person_id: str, url: str) -> bytes:
        """Fetch the raw avatar bytes of a person.

        Args:
            person_id: Id of the person the image belongs to
            url: Server supplied image URL

        Returns:
            Raw image bytes

        Raises:
            InvalidEndpointError: If url is not an absolute http(s) URL
        """
        image_url = build_image_url(url)
        data = await self._get(image_url, LogOperations.FETCH_IMAGE)
        logger.debug("Fetched %d image bytes for person %s", len(data), person_id)
        return data

    async def fetch_friends(self, person_id: str) -> list[Person]:
        """Fetch the friend list of a person.

        Args:
            person_id: Id of the person

        Returns:
            Friends in server order, invalid entries dropped
        """
        started = time.perf_counter()
        url = build_friends_url(self._settings, person_id)
        body = await self._get(url, LogOperations.FETCH_FRIENDS)
        items = decode_item_list(body, ResponseKeys.FRIENDS, str(url), LogOperations.FETCH_FRIENDS)
        friends = [person for _, person in iter_valid_people(items, LogOperations.FETCH_FRIENDS)]

        log_operation_success(
            logger,
            LogOperations.FETCH_FRIENDS,
            (time.perf_counter() - started) * 1000,
            result_info={"person_id": person_id, "received": len(items), "valid": len(friends)},
        )
        return friends
