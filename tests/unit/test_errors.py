"""
Tests for the application error hierarchy.
"""

from core.errors import (
    BaseAppError,
    ConfigError,
    ErrorCode,
    ErrorSeverity,
    ErrorType,
    InvalidOperationError,
    SystemError,
    ValidationError,
    map_exception,
)


class TestInvalidOperationError:
    """Test state machine errors."""

    def test_defaults(self):
        error = InvalidOperationError("complete submission", "IDLE")

        assert error.type is ErrorType.STATE
        assert error.code is ErrorCode.INVALID_TRANSITION
        assert error.severity is ErrorSeverity.LOW
        assert error.operation == "complete submission"
        assert error.phase == "IDLE"
        assert str(error) == "Cannot complete submission while form is idle"

    def test_custom_code(self):
        error = InvalidOperationError("submit", "PENDING", code=ErrorCode.SUBMISSION_IN_PROGRESS)
        assert error.code is ErrorCode.SUBMISSION_IN_PROGRESS
        assert error.to_dict()["context"] == {"operation": "submit", "phase": "PENDING"}


class TestValidationError:
    """Test loggable field errors."""

    def test_field_stored_in_context(self):
        error = ValidationError(ErrorCode.REQUIRED_FIELD_MISSING, "Name is required", field="name")

        assert error.field == "name"
        assert error.type is ErrorType.VALIDATION
        assert error.retriable

    def test_repr_includes_code(self):
        error = ValidationError(ErrorCode.INVALID_FORMAT, "Enter a valid email address", field="email")
        assert "INVALID_FORMAT" in repr(error)


class TestMapException:
    """Test mapping of built-in exceptions."""

    def test_app_errors_pass_through(self):
        error = ConfigError(ErrorCode.CONFIG_INVALID, "bad config")
        assert map_exception(error) is error

    def test_value_error_maps_to_validation(self):
        mapped = map_exception(ValueError("bad value"))

        assert isinstance(mapped, ValidationError)
        assert mapped.code is ErrorCode.INVALID_INPUT
        assert mapped.user_message == "bad value"

    def test_os_error_maps_to_system(self):
        mapped = map_exception(OSError("disk gone"))

        assert isinstance(mapped, SystemError)
        assert mapped.code is ErrorCode.OS_ERROR

    def test_unknown_exception_falls_back(self):
        mapped = map_exception(RuntimeError("boom"))

        assert isinstance(mapped, BaseAppError)
        assert mapped.code is ErrorCode.UNKNOWN
        assert mapped.user_message == "An unexpected error occurred"
        assert "RuntimeError: boom" in mapped.technical_message
