"""
Structured logging for peoplecache.

This module provides the logger setup (Rich console output or JSON lines)
and helpers that record operation start, success and failure with their
context attached as structured extras.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from peoplecache.shared.constants import HTTPStatusCodes, LogConfig
from peoplecache.shared.errors import ErrorContext, PeopleCacheError


# Structured extras copied into the JSON entry when a record carries them
_EXTRA_FIELDS = ("error_code", "operation", "context", "duration_ms", "result_info")


class StructuredFormatter(logging.Formatter):
    """Renders each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            {field: getattr(record, field) for field in _EXTRA_FIELDS if hasattr(record, field)}
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _create_rich_console() -> Console:
    """Create the Rich console used by the console handler."""
    custom_theme = Theme(
        {
            "logging.level.debug": "cyan",
            "logging.level.info": "green",
            "logging.level.warning": "yellow",
            "logging.level.error": "red bold",
            "logging.level.critical": "red bold reverse",
            "log.time": "dim cyan",
            "log.message": "white",
            "log.path": "dim blue",
        }
    )
    return Console(theme=custom_theme, stderr=True)


def _console_handler(use_rich_console: bool) -> logging.Handler:
    if not use_rich_console:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
        return handler
    return RichHandler(
        console=_create_rich_console(),
        show_path=True,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        log_time_format=LogConfig.TIME_FORMAT,
    )


def setup_structured_logger(
    name: str = LogConfig.DEFAULT_LOGGER_NAME,
    level: str = LogConfig.DEFAULT_LEVEL,
    log_file: str | None = None,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """
    Configure a logger for the package.

    Calling it again replaces the handlers of the earlier call. The file
    handler, when log_file is given, always writes JSON lines.

    Args:
        name: Logger name (default: "peoplecache")
        level: Log level name (default: "INFO")
        log_file: Optional path of a JSON lines log file
        use_rich_console: Rich console output, or JSON lines on stderr

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(level.upper())

    handlers = [_console_handler(use_rich_console)]
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding=LogConfig.DEFAULT_ENCODING)
        file_handler.setFormatter(StructuredFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False
    return logger


def _context_to_dict(context: dict[str, Any] | ErrorContext | None) -> dict[str, Any]:
    if context is None:
        return {}
    if isinstance(context, ErrorContext):
        return context.safe_dict()
    return dict(context)


def log_operation_error(
    logger: logging.Logger,
    error: PeopleCacheError,
    operation: str | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
    *,
    level: int = logging.ERROR,
) -> None:
    """
    Record a PeopleCacheError as a structured log entry.

    Args:
        logger: Logger instance
        error: The error to record
        operation: Operation name, defaults to the one stored in the error context
        context: Extra context merged over the error's own context
        level: Log level, ERROR unless the failure is an expected one
    """
    context_dict: dict[str, Any] = dict(error.context.safe_dict())
    context_dict.update(_context_to_dict(context))

    logger.log(
        level,
        error.message,
        extra={
            "error_code": error.code.name,
            "context": context_dict,
            "operation": operation or error.context.operation,
        },
        exc_info=error.original_error,
    )


def log_operation_success(
    logger: logging.Logger,
    operation: str,
    duration_ms: float,
    result_info: dict[str, Any] | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """
    Record a successful operation at debug level.

    Args:
        logger: Logger instance
        operation: Operation name
        duration_ms: Elapsed time in milliseconds
        result_info: Result summary (optional)
        context: Context information (optional)
    """
    logger.debug(
        "Operation '%s' completed successfully",
        operation,
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "result_info": result_info or {},
            "context": _context_to_dict(context),
        },
    )


def log_operation_start(
    logger: logging.Logger,
    operation: str,
    context: dict[str, Any] | None = None,
) -> None:
    """
    Record the start of an operation at debug level.

    Args:
        logger: Logger instance
        operation: Operation name
        context: Context information (optional)
    """
    logger.debug(
        "Starting operation '%s'",
        operation,
        extra={
            "operation": operation,
            "context": context or {},
        },
    )


def log_api_call(
    logger: logging.Logger,
    endpoint: str,
    method: str = "GET",
    status_code: int | None = None,
    duration_ms: float | None = None,
    context: dict[str, Any] | None = None,
) -> None:
    """
    Record one HTTP exchange with the people API.

    Responses with a 4xx or 5xx status are logged at warning level,
    everything else at debug level.
    """
    failed = status_code is not None and status_code >= HTTPStatusCodes.BAD_REQUEST
    outcome = "" if status_code is None else f" -> {status_code}"
    details = {
        "endpoint": endpoint,
        "method": method,
        "status_code": status_code,
        "duration_ms": duration_ms,
        **(context or {}),
    }
    logger.log(
        logging.WARNING if failed else logging.DEBUG,
        "%s %s%s",
        method,
        endpoint,
        outcome,
        extra={
            "operation": "api_call",
            "context": {key: value for key, value in details.items() if value is not None},
        },
    )
