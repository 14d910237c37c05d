"""People API data source.

This package contains the aiohttp based implementation of the
PersonDataSource protocol and its supporting pieces.
"""

from .people_client import PeopleDataSource
from .session_manager import AsyncSessionManager

__all__ = ["AsyncSessionManager", "PeopleDataSource"]
