"""Application and logging configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from peoplecache.shared.constants import Application, LogConfig


class AppSettings(BaseModel):
    """Application configuration."""

    name: str = Field(default=Application.NAME, description="Application name")
    version: str = Field(default=Application.VERSION, description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages logging behavior including level, file output
    and the console renderer.
    """

    level: str = Field(default=LogConfig.DEFAULT_LEVEL, description="Logging level")
    file: str | None = Field(default=None, description="JSON log file path")
    console_output: bool = Field(
        default=True,
        description="Rich console output (False = JSON lines on stderr)",
    )


__all__ = [
    "AppSettings",
    "LoggingSettings",
]
