"""Errors raised by peoplecache.

Every error carries an ErrorCode, a human readable message, an
ErrorContext that is safe to log, and the exception that caused it.

Data source failures share one taxonomy across the page, image and
friends requests:

    InfrastructureError
    └── DataSourceError
        ├── TransportError         network or transport failure
        ├── BadStatusError         HTTP status outside 200..203
        ├── MalformedPayloadError  body is not the expected JSON shape
        └── InvalidEndpointError   request URL could not be built

    DomainError
    └── RecordValidationError      person payload failed validation
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

ContextValue = Union[str, int, float, bool]

# Never written to logs
MASKED_CONTEXT_FIELDS = frozenset({"user_id"})


class ErrorCode(str, Enum):
    """Error codes for peoplecache."""

    # Network and API Errors
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    BAD_STATUS = "BAD_STATUS"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    INVALID_ENDPOINT = "INVALID_ENDPOINT"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_CONFIG = "INVALID_CONFIG"

    # Application Errors
    CONCURRENCY_ERROR = "CONCURRENCY_ERROR"
    ADAPTER_CALLBACK_FAILED = "ADAPTER_CALLBACK_FAILED"
    RESOURCE_CLEANUP_ERROR = "RESOURCE_CLEANUP_ERROR"


def _primitive(key: str, value: Any) -> ContextValue:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (str, int, float, bool)):
        return value
    msg = (
        f"Context value {key!r} must be str, int, float, bool or Enum, "
        f"got {type(value).__name__}"
    )
    raise TypeError(msg)


@dataclass(frozen=True)
class ErrorContext:
    """Where an error happened.

    additional_data only holds primitives, so a context can always be
    written into a JSON log line. Enum values are stored as their value.

    Raises:
        TypeError: If additional_data is not a dict or holds other types
    """

    operation: str | None = None
    user_id: str | None = None
    additional_data: dict[str, ContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is None:
            return
        if not isinstance(self.additional_data, dict):
            msg = f"additional_data must be a dict, got {type(self.additional_data).__name__}"
            raise TypeError(msg)
        primitives = {key: _primitive(key, value) for key, value in self.additional_data.items()}
        object.__setattr__(self, "additional_data", primitives)

    def safe_dict(self) -> dict[str, Any]:
        """Context for log output, without the masked fields.

        Example:
            >>> ErrorContext(operation="fetch_page", user_id="u1").safe_dict()
            {'operation': 'fetch_page', 'additional_data': {}}
        """
        data: dict[str, Any] = {
            name: getattr(self, name)
            for name in ("operation", "user_id")
            if name not in MASKED_CONTEXT_FIELDS and getattr(self, name) is not None
        }
        data["additional_data"] = dict(self.additional_data or {})
        return data


class PeopleCacheError(Exception):
    """Base class of every peoplecache error.

    Args:
        code: What went wrong
        message: Human readable description
        context: Where it went wrong, empty when omitted
        original_error: Exception that caused this one, if any
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.context = context if context is not None else ErrorContext()
        self.original_error = original_error
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Loggable form of the error; masked context fields are left out."""
        cause = self.original_error
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(cause) if cause is not None else None,
        }


class DomainError(PeopleCacheError):
    """A payload violates the rules of the people domain."""


class InfrastructureError(PeopleCacheError):
    """Talking to the remote people API failed."""


class ApplicationError(PeopleCacheError):
    """Bad configuration or misuse of the controller."""


class RecordValidationError(DomainError):
    """A person payload is not a mapping or lacks a required string field."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.VALIDATION_ERROR,
            message,
            ErrorContext(
                operation="person_from_payload",
                additional_data={"field": field} if field else None,
            ),
            original_error,
        )
        self.field = field


class DataSourceError(InfrastructureError):
    """Base class for every failure reported by a person data source."""


class TransportError(DataSourceError):
    """Network or transport failure; the cause is kept in original_error."""

    def __init__(
        self,
        url: str,
        original_error: Exception,
        operation: str | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.TRANSPORT_ERROR,
            f"Request to {url} failed: {original_error!s}",
            ErrorContext(operation=operation, additional_data={"url": url}),
            original_error,
        )
        self.url = url


class BadStatusError(DataSourceError):
    """HTTP status outside the accepted 200..203 range."""

    def __init__(self, url: str, status: int, operation: str | None = None) -> None:
        super().__init__(
            ErrorCode.BAD_STATUS,
            f"Request to {url} returned HTTP {status}",
            ErrorContext(
                operation=operation,
                additional_data={"url": url, "status": status},
            ),
        )
        self.url = url
        self.status = status


class MalformedPayloadError(DataSourceError):
    """Response body is not JSON or lacks the expected top-level key."""

    def __init__(
        self,
        url: str,
        reason: str,
        operation: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.MALFORMED_PAYLOAD,
            f"Malformed response from {url}: {reason}",
            ErrorContext(operation=operation, additional_data={"url": url}),
            original_error,
        )
        self.url = url


class InvalidEndpointError(DataSourceError):
    """The request URL could not be constructed from the supplied inputs."""

    def __init__(
        self,
        url: str,
        reason: str,
        operation: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.INVALID_ENDPOINT,
            f"Invalid endpoint <{url}>: {reason}",
            ErrorContext(operation=operation, additional_data={"url": url}),
            original_error,
        )
        self.url = url


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """ApplicationError for a configuration value that cannot be used."""
    return ApplicationError(
        ErrorCode.CONFIGURATION_ERROR,
        message,
        ErrorContext(
            operation=operation,
            additional_data={"config_key": config_key} if config_key else None,
        ),
        original_error,
    )
