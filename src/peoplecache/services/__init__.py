"""Services module for peoplecache.

This module contains the paging controller and the people API data
source it drives.
"""

from .cache_models import FailedRequest, PeopleCacheState, RequestKind
from .paging_controller import PeoplePagingController
from .people import AsyncSessionManager, PeopleDataSource

__all__ = [
    "AsyncSessionManager",
    "FailedRequest",
    "PeopleCacheState",
    "PeopleDataSource",
    "PeoplePagingController",
    "RequestKind",
]
