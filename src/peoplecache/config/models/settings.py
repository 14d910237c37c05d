"""peoplecache Settings Configuration Model.

One Settings object groups the app, logging and api domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from peoplecache.config.models.api_settings import APISettings
from peoplecache.config.models.app_settings import AppSettings, LoggingSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Values come from PEOPLECACHE_* environment variables, with "__"
    separating nested fields, e.g. PEOPLECACHE_API__PEOPLE__PAGE_SIZE=25.
    Keyword arguments (e.g. a loaded TOML file) take precedence over the
    environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="PEOPLECACHE_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Settings from a TOML file; the environment fills keys the file omits."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        logger.debug("Loaded configuration from %s", file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file."""

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True, exclude_unset=False)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
