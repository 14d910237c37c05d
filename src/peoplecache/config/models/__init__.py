"""Configuration models for peoplecache."""

from .api_settings import APISettings, PeopleAPISettings
from .app_settings import AppSettings, LoggingSettings
from .settings import Settings

__all__ = [
    "APISettings",
    "AppSettings",
    "LoggingSettings",
    "PeopleAPISettings",
    "Settings",
]
