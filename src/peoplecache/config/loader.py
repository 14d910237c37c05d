"""Where peoplecache settings come from.

A TOML file (explicit, or the first of the default locations) provides
the values, PEOPLECACHE_* variables from the environment or a .env file
fill in the rest, and a process wide SettingsLoader caches the result.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from peoplecache.config.models.settings import Settings
from peoplecache.shared.constants import FileSystem
from peoplecache.shared.errors import create_config_error

logger = logging.getLogger(__name__)


class SettingsLoader:
    """Caches one Settings instance per process.

    The instance is built on first access under a lock; later reads do
    not take the lock.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Cached settings, loaded on first call."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self) -> Settings:
        """Discard the cached settings and load them again."""
        with self._lock:
            self._instance = load_settings()

        return self._instance


def _load_env_file(env_file: Path = Path(FileSystem.ENV_FILE)) -> None:
    """Load environment variables from a .env file when one exists.

    Variables already present in the environment win over the file.
    """
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Build Settings from a TOML file and the environment.

    Args:
        config_path: Optional path to TOML configuration file. If None, tries
            the default locations and falls back to environment variables.

    Returns:
        The loaded settings

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ApplicationError: If the configuration values are invalid
    """
    _load_env_file()

    candidates: list[Path]
    if config_path:
        candidates = [Path(config_path)]
    else:
        candidates = [
            Path("config") / FileSystem.CONFIG_FILE,
            Path(FileSystem.CONFIG_FILE),
            Path.home() / FileSystem.HOME_DIR / FileSystem.CONFIG_FILE,
        ]

    try:
        if config_path:
            return Settings.from_toml_file(candidates[0])

        for candidate in candidates:
            if candidate.exists():
                return Settings.from_toml_file(candidate)

        return Settings()
    except ValidationError as e:
        raise create_config_error(
            f"Invalid configuration: {e.error_count()} error(s)",
            operation="load_settings",
            original_error=e,
        ) from e


_loader = SettingsLoader()


def get_config() -> Settings:
    """Process wide settings, see SettingsLoader.get_config."""
    return _loader.get_config()


def reload_config() -> Settings:
    """Reload the process wide settings."""
    return _loader.reload_config()


__all__ = [
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
]
