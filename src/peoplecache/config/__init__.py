"""peoplecache Configuration Module

This module provides unified access to configuration models and settings
management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: App, Logging and API settings
"""

from __future__ import annotations

from .models import (
    APISettings,
    AppSettings,
    LoggingSettings,
    PeopleAPISettings,
    Settings,
)
from .loader import get_config, load_settings, reload_config

__all__ = [
    "APISettings",
    "AppSettings",
    "LoggingSettings",
    "PeopleAPISettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
]
