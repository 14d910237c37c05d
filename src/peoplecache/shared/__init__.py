"""peoplecache Shared Module.

This package contains constants, models, protocols, errors and logging
helpers used across peoplecache.
"""

__all__ = ["constants", "errors", "logging", "models", "protocols"]
