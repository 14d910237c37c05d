"""Protocol interfaces shared across peoplecache."""

from .services import PersonDataSource, PresentationAdapter

__all__ = ["PersonDataSource", "PresentationAdapter"]
