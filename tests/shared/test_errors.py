"""
Tests for the peoplecache error handling system.

This module covers ErrorContext coercion and masking, the base error
class, and the data source error taxonomy.
"""

from dataclasses import FrozenInstanceError
from enum import Enum
from pathlib import Path

import pytest

from peoplecache.shared.errors import (
    ApplicationError,
    BadStatusError,
    DataSourceError,
    DomainError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    InvalidEndpointError,
    MalformedPayloadError,
    PeopleCacheError,
    RecordValidationError,
    TransportError,
    create_config_error,
)


class _Kind(Enum):
    PAGE = "page"


class TestErrorContext:
    """Test cases for ErrorContext frozen dataclass."""

    def test_empty_context(self):
        """Test creating an empty ErrorContext."""
        context = ErrorContext()
        assert context.operation is None
        assert context.user_id is None
        assert context.additional_data is None

    def test_enum_values_are_coerced(self):
        """Test that Enum values in additional_data become their values."""
        context = ErrorContext(additional_data={"kind": _Kind.PAGE, "page": 3})
        assert context.additional_data == {"kind": "page", "page": 3}

    def test_non_primitive_values_are_rejected(self):
        """Test that complex values cannot leak into logs."""
        with pytest.raises(TypeError):
            ErrorContext(additional_data={"path": Path("/tmp")})

    def test_frozen_immutability(self):
        """Test that ErrorContext is immutable."""
        context = ErrorContext(operation="fetch_page")
        with pytest.raises(FrozenInstanceError):
            context.operation = "other"  # type: ignore[misc]

    def test_safe_dict_masks_user_id(self):
        """Test that safe_dict hides the user id."""
        context = ErrorContext(operation="fetch_page", user_id="u1")
        assert context.safe_dict() == {"operation": "fetch_page", "additional_data": {}}


class TestPeopleCacheError:
    """Test cases for the base error class."""

    def test_str_and_to_dict(self):
        """Test string form and dictionary export."""
        cause = ValueError("bad")
        error = ApplicationError(
            ErrorCode.INVALID_CONFIG,
            "page size must be positive",
            ErrorContext(operation="init", additional_data={"page_size": 0}),
            cause,
        )

        assert str(error) == "INVALID_CONFIG: page size must be positive"
        assert error.to_dict() == {
            "code": "INVALID_CONFIG",
            "message": "page size must be positive",
            "context": {"operation": "init", "additional_data": {"page_size": 0}},
            "original_error": "bad",
        }

    def test_default_context(self):
        """Test a missing context is replaced with an empty one."""
        error = DomainError(ErrorCode.VALIDATION_ERROR, "invalid")
        assert isinstance(error.context, ErrorContext)


class TestDataSourceErrors:
    """Test cases for the data source error taxonomy."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (TransportError("https://api.test", ConnectionError("reset")), ErrorCode.TRANSPORT_ERROR),
            (BadStatusError("https://api.test", 503), ErrorCode.BAD_STATUS),
            (MalformedPayloadError("https://api.test", "not JSON"), ErrorCode.MALFORMED_PAYLOAD),
            (InvalidEndpointError("::", "not a URL"), ErrorCode.INVALID_ENDPOINT),
        ],
    )
    def test_hierarchy_and_codes(self, error, code):
        """Test every data source error is an InfrastructureError with its code."""
        assert isinstance(error, DataSourceError)
        assert isinstance(error, InfrastructureError)
        assert isinstance(error, PeopleCacheError)
        assert error.code == code

    def test_transport_error_keeps_cause(self):
        """Test the transport cause is preserved."""
        cause = ConnectionResetError("peer reset")
        error = TransportError("https://api.test/people", cause, "fetch_page")

        assert error.original_error is cause
        assert error.context.operation == "fetch_page"
        assert error.context.additional_data == {"url": "https://api.test/people"}

    def test_bad_status_records_status(self):
        """Test the HTTP status is available to callers."""
        error = BadStatusError("https://api.test/people", 404)

        assert error.status == 404
        assert error.context.additional_data["status"] == 404
        assert "404" in error.message


class TestRecordValidationError:
    """Test cases for person payload validation errors."""

    def test_field_is_recorded(self):
        """Test the offending field is exposed and kept in context."""
        error = RecordValidationError("missing email", field="email")

        assert isinstance(error, DomainError)
        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.field == "email"
        assert error.context.additional_data == {"field": "email"}

    def test_without_field(self):
        """Test a payload level error has no field."""
        error = RecordValidationError("not an object")
        assert error.field is None
        assert error.context.additional_data is None


def test_create_config_error():
    """Test configuration error helper."""
    cause = ValueError("page_size")
    error = create_config_error("Invalid configuration", "api.people.page_size", "load", cause)

    assert isinstance(error, ApplicationError)
    assert error.code == ErrorCode.CONFIGURATION_ERROR
    assert error.context.additional_data == {"config_key": "api.people.page_size"}
    assert error.original_error is cause
