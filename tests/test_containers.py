"""Tests for the dependency injection container."""

from __future__ import annotations

import logging

from dependency_injector import providers

from peoplecache.config.models.api_settings import APISettings, PeopleAPISettings
from peoplecache.config.models.settings import Settings
from peoplecache.containers import Container
from peoplecache.services import PeopleDataSource, PeoplePagingController


def _container(page_size: int = 5) -> Container:
    container = Container()
    settings = Settings(api=APISettings(people=PeopleAPISettings(page_size=page_size)))
    container.config.override(providers.Object(settings))
    return container


def test_data_source_is_shared():
    container = _container()

    source = container.data_source()

    assert isinstance(source, PeopleDataSource)
    assert container.data_source() is source
    assert source.page_size == 5


def test_each_controller_is_new_and_uses_configured_page_size():
    container = _container(page_size=12)

    first = container.paging_controller()
    second = container.paging_controller()

    assert isinstance(first, PeoplePagingController)
    assert first is not second
    assert first.page_size == 12


def test_logger_follows_logging_settings():
    container = _container()
    container.config().logging.level = "WARNING"

    logger = container.logger()

    assert logger.name == "peoplecache"
    assert logger.level == logging.WARNING
    assert container.logger() is logger

    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
