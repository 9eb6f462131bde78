"""
Behavioral tests for domain exceptions and value objects.
"""

import pytest

from global_error_handler.domain import (
    BadRequestError,
    DomainError,
    ErrorKind,
    ExceptionRecord,
    NotFoundError,
    PermissionDeniedError,
    classify,
)


class TestDomainExceptions:
    """Tests for the closed set of domain error kinds."""

    @pytest.mark.parametrize(
        ("exc_cls", "kind", "default_message"),
        [
            (NotFoundError, ErrorKind.NOT_FOUND, "Item not found"),
            (BadRequestError, ErrorKind.BAD_REQUEST, "Something went wrong"),
            (PermissionDeniedError, ErrorKind.PERMISSION_DENIED, "You have no access"),
        ],
    )
    def test_default_message_and_kind(self, exc_cls, kind, default_message):
        """Test that each domain error carries its kind and default message."""
        exc = exc_cls()
        assert exc.kind is kind
        assert exc.message == default_message
        assert str(exc) == default_message

    def test_custom_message(self):
        """Test that a custom message replaces the default."""
        exc = NotFoundError("User 42 not found")
        assert exc.message == "User 42 not found"
        assert str(exc) == "User 42 not found"

    def test_all_domain_errors_share_base(self):
        """Test that domain errors can be caught via DomainError."""
        with pytest.raises(DomainError):
            raise PermissionDeniedError()

    def test_classify_domain_and_foreign_errors(self):
        """Test classify() for domain errors and arbitrary exceptions."""
        assert classify(BadRequestError()) is ErrorKind.BAD_REQUEST
        assert classify(DomainError("plain")) is ErrorKind.GENERIC
        assert classify(ValueError("nope")) is ErrorKind.GENERIC


class TestExceptionRecord:
    """Tests for the ExceptionRecord value object."""

    def test_render_indents_by_depth(self):
        """Test that render() indents two spaces per depth level."""
        record = ExceptionRecord(type_name="KeyError", message="'id'", depth=2)
        assert record.render() == "    KeyError: 'id'"

    def test_render_includes_source(self):
        """Test that render() appends the source location when known."""
        record = ExceptionRecord(
            type_name="ValueError", message="bad", source="app.py:10 in handler"
        )
        assert record.render() == "ValueError: bad (at app.py:10 in handler)"

    def test_negative_depth_rejected(self):
        """Test that negative depth raises ValueError."""
        with pytest.raises(ValueError, match="depth"):
            ExceptionRecord(type_name="X", message="", depth=-1)

    def test_record_is_immutable(self):
        """Test that records are frozen."""
        record = ExceptionRecord(type_name="X", message="m")
        with pytest.raises(AttributeError):
            record.message = "changed"  # type: ignore[misc]
