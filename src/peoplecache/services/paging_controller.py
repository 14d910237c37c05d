"""Paging cache controller.

This module implements the controller that sits between a people list UI
and the remote people API. It maps row indices onto pages, coalesces
concurrent requests for the same page, keeps the row, image and friends
caches, and drops friend lists that arrive after the selection moved on.

All cache state belongs to one asyncio event loop (the owner loop).
Requests run as tasks on that loop, so their completions always resume
on the owner before they touch the caches. Code running on another
thread must go through call_threadsafe().
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import time
from collections.abc import Callable, Coroutine, Iterable
from contextlib import aclosing
from datetime import datetime, timezone
from typing import Any, TypeVar

from peoplecache.shared.constants import LogOperations
from peoplecache.shared.errors import (
    ApplicationError,
    DataSourceError,
    ErrorCode,
    ErrorContext,
    InvalidEndpointError,
)
from peoplecache.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)
from peoplecache.shared.models.person import Person
from peoplecache.shared.protocols.services import PersonDataSource, PresentationAdapter

from .cache_models import FailedRequest, PeopleCacheState, RequestKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

FailureHook = Callable[[FailedRequest], None]


class PeoplePagingController:
    """Row-indexed cache over a paginated people data source.

    Args:
        data_source: Source of pages, images and friend lists
        page_size: People per page; must match data_source.page_size, which
            decides the absolute row of every record it yields
        adapters: Presentation adapters notified of changes
        failure_hook: Called with every FailedRequest; the place to plug
            in a retry policy (none is shipped)
        loop: Owner event loop, defaults to the loop running the first
            request

    Example:
        >>> controller = PeoplePagingController(PeopleDataSource())
        >>> controller.subscribe(adapter)
        >>> if controller.record_at(5) is None:
        ...     controller.ensure_loaded(5)
    """

    def __init__(
        self,
        data_source: PersonDataSource,
        *,
        page_size: int | None = None,
        adapters: Iterable[PresentationAdapter] = (),
        failure_hook: FailureHook | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        size = page_size if page_size is not None else data_source.page_size
        if size <= 0:
            raise ApplicationError(
                code=ErrorCode.INVALID_CONFIG,
                message=f"Page size must be positive, got: {size}",
                context=ErrorContext(
                    operation="paging_controller_init",
                    additional_data={"page_size": size},
                ),
            )
        if size != data_source.page_size:
            raise ApplicationError(
                code=ErrorCode.INVALID_CONFIG,
                message=(
                    f"Page size {size} differs from the data source page size "
                    f"{data_source.page_size}"
                ),
                context=ErrorContext(
                    operation="paging_controller_init",
                    additional_data={
                        "page_size": size,
                        "source_page_size": data_source.page_size,
                    },
                ),
            )

        self.page_size = size
        self.selected_person_id: str | None = None

        self._source = data_source
        self._state = PeopleCacheState()
        self._adapters: list[PresentationAdapter] = list(adapters)
        self._failure_hook = failure_hook
        self._loop = loop
        self._tasks: set[asyncio.Task[Any]] = set()
        # Bumped by reset(); page results from an older generation are dropped
        self._generation = 0

    # ------------------------------------------------------------------
    # Adapter registration
    # ------------------------------------------------------------------

    def subscribe(self, adapter: PresentationAdapter) -> None:
        """Register an adapter for change notifications."""
        if adapter not in self._adapters:
            self._adapters.append(adapter)

    def unsubscribe(self, adapter: PresentationAdapter) -> None:
        """Stop notifying an adapter."""
        if adapter in self._adapters:
            self._adapters.remove(adapter)

    # ------------------------------------------------------------------
    # Lookups (never issue requests)
    # ------------------------------------------------------------------

    def page_for_row(self, row: int) -> int:
        """Zero-based page holding the given row."""
        return row // self.page_size

    def record_at(self, row: int) -> Person | None:
        """Cached person at an absolute row, None when not loaded yet."""
        return self._state.rows.get(row)

    def image_for(self, person_id: str) -> bytes | None:
        """Cached avatar bytes of a person."""
        return self._state.images.get(person_id)

    def friends_for(self, person_id: str) -> list[Person] | None:
        """Cached friend list of a person."""
        friends = self._state.friends.get(person_id)
        return list(friends) if friends is not None else None

    @property
    def row_count(self) -> int:
        """Rows the list should show: every cached person plus one
        placeholder row whose display triggers the next page load."""
        return len(self._state.rows) + 1

    @property
    def pending_pages(self) -> dict[int, datetime]:
        """Snapshot of the in-flight pages and when they were requested."""
        return dict(self._state.pending_pages)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def ensure_loaded(self, row: int) -> asyncio.Task[None] | None:
        """Make sure the page holding row is cached or being fetched.

        Returns:
            The fetch task when a request was issued, None when the row is
            cached or its page is already in flight
        """
        if row < 0:
            raise ApplicationError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Row index must be non-negative, got: {row}",
                context=ErrorContext(operation=LogOperations.LOAD_PAGE),
            )

        if row in self._state.rows:
            return None

        page = self.page_for_row(row)
        if page in self._state.pending_pages:
            logger.debug("Page %d already in flight, row %d coalesced", page, row)
            return None

        self._owner_loop()
        self._state.pending_pages[page] = datetime.now(timezone.utc)
        return self._spawn(self._load_page(page, self._generation), f"people-page-{page}")

    def ensure_image_loaded(self, person_id: str, url: str) -> asyncio.Task[None]:
        """Fetch and cache the avatar of a person. Failures are not retried."""
        self._owner_loop()
        return self._spawn(self._load_image(person_id, url), f"people-image-{person_id}")

    def ensure_friends_loaded(self, person_id: str) -> list[Person] | None:
        """Return cached friends, or start fetching them and return None."""
        cached = self.friends_for(person_id)
        if cached is not None:
            return cached

        self._owner_loop()
        self._spawn(self._load_friends(person_id), f"people-friends-{person_id}")
        return None

    async def _load_page(self, page: int, generation: int) -> None:
        started = time.perf_counter()
        stored = 0
        log_operation_start(logger, LogOperations.LOAD_PAGE, {"page": page})
        try:
            async with aclosing(self._source.fetch_page(page)) as records:
                async for person, row in records:
                    if generation != self._generation:
                        logger.debug("Dropping page %d, fetched before a reset", page)
                        return
                    self._store_row(person, row)
                    stored += 1
        except DataSourceError as e:
            if generation != self._generation:
                logger.debug("Ignoring failure of page %d, fetched before a reset", page)
                return
            self._report_failure(RequestKind.PAGE, page, e, LogOperations.LOAD_PAGE)
            return
        finally:
            # A newer generation may already own this page number
            if generation == self._generation:
                self._state.pending_pages.pop(page, None)

        log_operation_success(
            logger,
            LogOperations.LOAD_PAGE,
            (time.perf_counter() - started) * 1000,
            result_info={"page": page, "stored": stored},
        )

    def _store_row(self, person: Person, row: int) -> None:
        self._state.rows[row] = person
        if person.has_image_url and person.id not in self._state.images:
            self.ensure_image_loaded(person.id, person.image_url or "")
        self._notify_refresh()

    async def _load_image(self, person_id: str, url: str) -> None:
        try:
            data = await self._source.fetch_image(person_id, url)
        except InvalidEndpointError as e:
            # Image URLs come from the server and may be unusable
            self._report_failure(
                RequestKind.IMAGE, person_id, e, LogOperations.LOAD_IMAGE, level=logging.WARNING
            )
            return
        except DataSourceError as e:
            self._report_failure(RequestKind.IMAGE, person_id, e, LogOperations.LOAD_IMAGE)
            return

        if not data:
            logger.warning("Person id %s image error: no image data", person_id)
            return

        self._state.images[person_id] = data
        self._notify_refresh()

    async def _load_friends(self, person_id: str) -> None:
        try:
            friends = await self._source.fetch_friends(person_id)
        except DataSourceError as e:
            self._report_failure(RequestKind.FRIENDS, person_id, e, LogOperations.LOAD_FRIENDS)
            return

        for friend in friends:
            if friend.has_image_url and friend.id not in self._state.images:
                self.ensure_image_loaded(friend.id, friend.image_url or "")

        self._state.friends[person_id] = list(friends)

        if self.selected_person_id != person_id:
            logger.debug(
                "Friends of %s arrived after selection moved to %s; cached only",
                person_id,
                self.selected_person_id,
            )
            return

        self._notify(lambda adapter: adapter.on_friends_loaded(person_id, list(friends)))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_row(self, row: int) -> list[Person] | None:
        """Select the person at row for the detail view.

        Returns:
            The cached friends of that person, or None while they load
            (and when the row itself is not cached)
        """
        person = self.record_at(row)
        if person is None:
            return None
        self.selected_person_id = person.id
        return self.ensure_friends_loaded(person.id)

    def select_friend(self, friend_id: str) -> int | None:
        """Navigate to the list row of a friend.

        Only the row cache is searched. A friend that is not cached is
        left alone: nothing is fetched and no adapter is notified.

        Returns:
            The row that was selected, or None
        """
        row = self._state.find_row(friend_id)
        if row is None:
            return None
        self._notify(lambda adapter: adapter.on_select_row(row))
        return row

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Forget every row and in-flight page, keep images and friends."""
        self._check_owner()
        self._generation += 1
        self._state.clear_rows()
        logger.debug("Row cache reset", extra={"operation": LogOperations.RESET})
        self._notify_refresh()

    def on_memory_pressure(self) -> None:
        """Drop images and friend lists, then reset()."""
        self._check_owner()
        released = len(self._state.images)
        self._state.clear_identity_caches()
        logger.info(
            "Released %d cached images under memory pressure",
            released,
            extra={"operation": LogOperations.MEMORY_PRESSURE},
        )
        self.reset()

    # ------------------------------------------------------------------
    # Owner loop and task bookkeeping
    # ------------------------------------------------------------------

    def call_threadsafe(self, callback: Callable[..., T], *args: Any) -> concurrent.futures.Future[T]:
        """Run callback(*args) on the owner loop from any thread.

        Returns:
            A concurrent future with the callback's result
        """
        if self._loop is None:
            raise ApplicationError(
                code=ErrorCode.CONCURRENCY_ERROR,
                message="Controller has no owner loop yet",
                context=ErrorContext(operation="call_threadsafe"),
            )

        async def _invoke() -> T:
            return callback(*args)

        return asyncio.run_coroutine_threadsafe(_invoke(), self._loop)

    async def drain(self) -> None:
        """Wait until no request task is outstanding, including the
        image requests that finishing pages and friend lists start."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _running_loop(self) -> asyncio.AbstractEventLoop | None:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def _owner_loop(self) -> asyncio.AbstractEventLoop:
        running = self._running_loop()
        if self._loop is None and running is not None:
            self._loop = running
        if running is None or running is not self._loop:
            raise ApplicationError(
                code=ErrorCode.CONCURRENCY_ERROR,
                message="Requests must be issued from the controller's owner event loop",
                context=ErrorContext(operation="owner_loop"),
            )
        return self._loop

    def _check_owner(self) -> None:
        if self._loop is not None and self._running_loop() is not self._loop:
            raise ApplicationError(
                code=ErrorCode.CONCURRENCY_ERROR,
                message="Cache state may only change on the controller's owner event loop",
                context=ErrorContext(operation="check_owner"),
            )

    def _spawn(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task[None]:
        task = self._owner_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Request task %s failed unexpectedly", task.get_name(), exc_info=error)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _notify_refresh(self) -> None:
        self._notify(lambda adapter: adapter.on_refresh())

    def _notify(self, call: Callable[[PresentationAdapter], None]) -> None:
        for adapter in list(self._adapters):
            try:
                call(adapter)
            except Exception as e:  # noqa: BLE001
                error = ApplicationError(
                    code=ErrorCode.ADAPTER_CALLBACK_FAILED,
                    message=f"Presentation adapter callback failed: {e!s}",
                    context=ErrorContext(
                        operation=LogOperations.NOTIFY_ADAPTER,
                        additional_data={"adapter": type(adapter).__name__},
                    ),
                    original_error=e,
                )
                log_operation_error(logger, error)

    def _report_failure(
        self,
        kind: RequestKind,
        key: int | str,
        error: DataSourceError,
        operation: str,
        *,
        level: int = logging.ERROR,
    ) -> None:
        log_operation_error(
            logger,
            error,
            operation=operation,
            context={"request_kind": kind.value, "request_key": key},
            level=level,
        )
        if self._failure_hook is None:
            return
        try:
            self._failure_hook(FailedRequest(kind=kind, key=key, error=error))
        except Exception:  # noqa: BLE001
            logger.exception("Failure hook raised for %s request %s", kind.value, key)


__all__ = ["FailureHook", "PeoplePagingController"]
