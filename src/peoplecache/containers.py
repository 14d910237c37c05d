"""Dependency Injection container for peoplecache.

This module provides a centralized DI container using dependency-injector
to wire the paging controller to its data source.

The container manages:
- Settings (Singleton)
- Package logger (Singleton, configured from the logging settings)
- HTTP session manager (Singleton, one shared aiohttp session)
- People data source (Singleton)
- Paging controller (Factory, one per list screen)
"""

from __future__ import annotations

from dependency_injector import containers, providers

from peoplecache.config.loader import load_settings
from peoplecache.services import (
    AsyncSessionManager,
    PeopleDataSource,
    PeoplePagingController,
)
from peoplecache.shared.constants import LogConfig
from peoplecache.shared.logging import setup_structured_logger


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for peoplecache services.

    Example:
        >>> container = Container()
        >>> controller = container.paging_controller()
        >>> controller.subscribe(adapter)
    """

    # Configuration
    config = providers.Singleton(load_settings)

    logger = providers.Singleton(
        setup_structured_logger,
        name=LogConfig.DEFAULT_LOGGER_NAME,
        level=config.provided.logging.level,
        log_file=config.provided.logging.file,
        use_rich_console=config.provided.logging.console_output,
    )

    people_api_settings = providers.Callable(
        lambda config: config.api.people,
        config=config,
    )

    # HTTP
    session_manager = providers.Singleton(
        AsyncSessionManager,
        settings=people_api_settings,
    )

    data_source = providers.Singleton(
        PeopleDataSource,
        settings=people_api_settings,
        session_manager=session_manager,
    )

    # Core
    paging_controller = providers.Factory(
        PeoplePagingController,
        data_source=data_source,
    )
