"""
People API Constants

This module contains the constants that describe the remote people API:
endpoint paths, query parameter names, paging defaults and the
top-level response keys.
"""

from .system import Application


class PeopleAPIConfig:
    """People API configuration constants."""

    DEFAULT_BASE_URL = "https://interview-api.somecompany.com"
    PEOPLE_PATH = "/people"
    FRIENDS_PATH = "/friends"

    # Number of people per page requested from the server
    DEFAULT_PAGE_SIZE = 10

    # The wire protocol numbers pages from 1, internally they start at 0
    WIRE_PAGE_OFFSET = 1

    DEFAULT_USER_AGENT = f"{Application.NAME}/{Application.VERSION}"


class QueryParams:
    """Query parameter names."""

    PAGE = "page"
    PER_PAGE = "perPage"
    PERSON_ID = "personID"


class ResponseKeys:
    """Top-level keys of JSON response bodies."""

    PEOPLE = "people"
    FRIENDS = "friends"


class SessionConfig:
    """aiohttp session pool limits."""

    CONNECTION_LIMIT = 100
    CONNECTION_LIMIT_PER_HOST = 20
    KEEPALIVE_TIMEOUT = 60
