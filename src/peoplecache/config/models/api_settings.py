"""API configuration models.

This module contains the configuration model for the remote people API:
where it lives, how large a page is, and the HTTP client identity.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from peoplecache.shared.constants import PeopleAPIConfig


class PeopleAPISettings(BaseModel):
    """People API configuration.

    Note: request_timeout is unset by default, in which case requests
    complete or fail per the transport's own default timeout.
    """

    base_url: str = Field(
        default=PeopleAPIConfig.DEFAULT_BASE_URL,
        description="Scheme and host of the people API",
    )
    people_path: str = Field(
        default=PeopleAPIConfig.PEOPLE_PATH,
        description="Path of the paginated people endpoint",
    )
    friends_path: str = Field(
        default=PeopleAPIConfig.FRIENDS_PATH,
        description="Path of the friends endpoint",
    )
    page_size: int = Field(
        default=PeopleAPIConfig.DEFAULT_PAGE_SIZE,
        gt=0,
        description="Number of people requested per page",
    )
    request_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Total request timeout in seconds (None = transport default)",
    )
    user_agent: str = Field(
        default=PeopleAPIConfig.DEFAULT_USER_AGENT,
        description="User-Agent header sent with every request",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class APISettings(BaseModel):
    """API configuration container.

    Note: Environment variable loading is handled by the parent Settings class.
    """

    people: PeopleAPISettings = Field(
        default_factory=PeopleAPISettings,
        description="People API configuration",
    )


__all__ = [
    "APISettings",
    "PeopleAPISettings",
]
