"""
System Configuration Constants

This module contains application metadata and the file locations
used by configuration loading.
"""


class Application:
    """Application metadata constants."""

    NAME = "peoplecache"
    VERSION = "0.1.0"


class FileSystem:
    """File system locations used by configuration loading."""

    HOME_DIR = ".peoplecache"
    CONFIG_FILE = "config.toml"
    ENV_FILE = ".env"
