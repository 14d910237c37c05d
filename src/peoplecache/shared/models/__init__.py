"""Shared data models for peoplecache."""

from .person import Person

__all__ = ["Person"]
