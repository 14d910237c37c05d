"""
peoplecache - paging and caching for a remote people collection

Maps visible list rows onto pages of a paginated REST API, coalesces
concurrent page requests, and caches records, avatars and friend lists
for a master/detail people UI.
"""

__version__ = "0.1.0"

from .services import PeopleDataSource, PeoplePagingController
from .shared.models import Person

__all__ = [
    "PeopleDataSource",
    "PeoplePagingController",
    "Person",
]
