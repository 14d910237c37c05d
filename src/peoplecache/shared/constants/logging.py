"""
Logging Configuration Constants

This module contains all constants related to logging configuration,
operation names, and log formatting.
"""

from .system import Application


class LogConfig:
    """Log configuration constants."""

    DEFAULT_LEVEL = "INFO"
    DEFAULT_LOGGER_NAME = Application.NAME
    DEFAULT_ENCODING = "utf-8"
    TIME_FORMAT = "[%H:%M:%S]"


class LogOperations:
    """Operation names used in structured log records."""

    FETCH_PAGE = "fetch_page"
    FETCH_IMAGE = "fetch_image"
    FETCH_FRIENDS = "fetch_friends"
    LOAD_PAGE = "load_page"
    LOAD_IMAGE = "load_image"
    LOAD_FRIENDS = "load_friends"
    NOTIFY_ADAPTER = "notify_adapter"
    RESET = "reset"
    MEMORY_PRESSURE = "memory_pressure"
