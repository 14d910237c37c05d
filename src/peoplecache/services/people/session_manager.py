"""Async HTTP session manager for the people API.

This module manages the aiohttp.ClientSession shared by every request a
data source issues: created lazily on first use, recreated if it was
closed, and closed explicitly by its owner.
"""

from __future__ import annotations

import asyncio
import logging
import types
from typing import Any

import aiohttp
from typing_extensions import Self

from peoplecache.config.models.api_settings import PeopleAPISettings
from peoplecache.shared.constants import ContentTypes, HTTPHeaders, SessionConfig
from peoplecache.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)


class AsyncSessionManager:
    """Manages the aiohttp.ClientSession lifecycle.

    Can be used as an async context manager; leaving the block closes
    the session.

    Args:
        settings: People API settings (user agent and timeout)
    """

    def __init__(self, settings: PeopleAPISettings | None = None) -> None:
        self._settings = settings or PeopleAPISettings()
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session.

        Returns:
            aiohttp.ClientSession: The managed HTTP session.
        """
        async with self._session_lock:
            if self._session is None or self._session.closed:
                self._session = self._create_session()
            return self._session

    def _create_session(self) -> aiohttp.ClientSession:
        connector = aiohttp.TCPConnector(
            limit=SessionConfig.CONNECTION_LIMIT,
            limit_per_host=SessionConfig.CONNECTION_LIMIT_PER_HOST,
            keepalive_timeout=SessionConfig.KEEPALIVE_TIMEOUT,
        )

        headers = {
            HTTPHeaders.USER_AGENT: self._settings.user_agent,
            HTTPHeaders.ACCEPT: ContentTypes.JSON,
        }

        options: dict[str, Any] = {}
        # Without a configured timeout aiohttp keeps its own default
        if self._settings.request_timeout is not None:
            options["timeout"] = aiohttp.ClientTimeout(total=self._settings.request_timeout)

        session = aiohttp.ClientSession(
            connector=connector,
            headers=headers,
            raise_for_status=False,
            **options,
        )
        logger.debug("aiohttp.ClientSession created")
        return session

    async def close_session(self) -> None:
        """Close the HTTP session and clean up resources."""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                self._session = None
                return
            try:
                await self._session.close()
                logger.debug("aiohttp.ClientSession closed")
            except aiohttp.ClientError as e:
                raise ApplicationError(
                    code=ErrorCode.RESOURCE_CLEANUP_ERROR,
                    message=f"Error closing HTTP session: {e!s}",
                    context=ErrorContext(operation="close_session"),
                    original_error=e,
                ) from e
            finally:
                self._session = None

    def is_session_ready(self) -> bool:
        """Check if the session is open."""
        return self._session is not None and not self._session.closed

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        await self.close_session()
