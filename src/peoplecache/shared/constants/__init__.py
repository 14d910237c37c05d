"""
peoplecache Constants Module

This module provides centralized constants for the peoplecache package.
All magic values are defined here to keep the HTTP mapping, the record
factory and the logging layer consistent with each other.
"""

from .api import PeopleAPIConfig, QueryParams, ResponseKeys, SessionConfig
from .http_codes import ContentTypes, HTTPHeaders, HTTPStatusCodes
from .logging import LogConfig, LogOperations
from .person_fields import PersonFields
from .system import Application, FileSystem

__all__ = [
    "Application",
    "ContentTypes",
    "FileSystem",
    "HTTPHeaders",
    "HTTPStatusCodes",
    "LogConfig",
    "LogOperations",
    "PeopleAPIConfig",
    "PersonFields",
    "QueryParams",
    "ResponseKeys",
    "SessionConfig",
]
