"""
Tests for ErrorHandler core functionality.

Tests cover:
- Singleton pattern behavior
- Exception capture and normalization
- Logging and signal emission
"""

import logging
import sys
from unittest.mock import patch

import pytest

from core.error_handler import (
    ERROR_LOGGER_NAME,
    ErrorHandler,
    create_validation_error,
    get_error_handler,
    setup_error_handling,
)
from core.errors import BaseAppError, ErrorCode, ErrorType, InvalidOperationError


class TestErrorHandlerSingleton:
    """Test the singleton pattern implementation."""

    def test_singleton_pattern(self):
        assert ErrorHandler() is ErrorHandler()

    def test_get_error_handler_returns_singleton(self):
        assert get_error_handler() is ErrorHandler()

    def test_initialization_only_once(self):
        ErrorHandler._instance = None

        with patch.object(ErrorHandler, "_setup_logging") as mock_setup:
            handler1 = ErrorHandler()
            handler2 = ErrorHandler()

            assert mock_setup.call_count == 1
            assert handler1 is handler2

        # Let later tests get a handler with logging configured
        ErrorHandler._instance = None


class TestErrorCapture:
    """Test exception capture and normalization."""

    def setup_method(self):
        self.handler = ErrorHandler()

    def test_capture_basic_exception(self):
        app_error = self.handler.capture(ValueError("Test error"))

        assert isinstance(app_error, BaseAppError)
        assert app_error.type == ErrorType.VALIDATION
        assert app_error.code == ErrorCode.INVALID_INPUT
        assert "ValueError: Test error" in app_error.technical_message
        assert "traceback" in app_error.context

    def test_capture_already_app_error(self):
        original = InvalidOperationError("start over", "IDLE")
        assert self.handler.capture(original) is original

    def test_capture_sanitizes_context(self):
        context = {"password": "secret123", "note": "x" * 300, "count": 3}

        app_error = self.handler.capture(ValueError("Test error"), context)

        assert app_error.context["password"] == "[REDACTED]"
        assert app_error.context["note"].endswith("...")
        assert len(app_error.context["note"]) == 203
        assert app_error.context["count"] == "3"


class TestErrorHandling:
    """Test logging and signal emission."""

    def setup_method(self):
        self.handler = ErrorHandler()

    def test_handle_emits_signal(self, qtbot):
        error = InvalidOperationError("complete submission", "IDLE")

        with qtbot.waitSignal(self.handler.errorOccurred, timeout=1000) as blocker:
            returned = self.handler.handle(error)

        assert returned is error
        assert blocker.args == [error]

    def test_low_severity_logged_as_warning(self):
        logger = logging.getLogger(ERROR_LOGGER_NAME)

        with patch.object(logger, "log") as mock_log:
            self.handler.handle(InvalidOperationError("submit", "PENDING"))

        assert mock_log.call_args[0][0] == logging.WARNING

    def test_handle_reraises_keyboard_interrupt(self):
        with pytest.raises(KeyboardInterrupt):
            self.handler.handle(KeyboardInterrupt())

    def test_report_field_error(self, qtbot):
        with qtbot.waitSignal(self.handler.errorOccurred, timeout=1000) as blocker:
            self.handler.report_field_error("name", "Name is required")

        reported = blocker.args[0]
        assert reported.field == "name"
        assert reported.code == ErrorCode.REQUIRED_FIELD_MISSING

    def test_to_user_message_adds_retry_hint(self):
        error = create_validation_error("email", "Enter a valid email address")
        assert self.handler.to_user_message(error) == "Enter a valid email address You can try again."


class TestCreateValidationError:
    """Test error codes chosen for field messages."""

    @pytest.mark.parametrize(
        "message,code",
        [
            ("Name is required", ErrorCode.REQUIRED_FIELD_MISSING),
            ("Name must be at least 2 characters", ErrorCode.VALUE_OUT_OF_RANGE),
            ("Message is too long", ErrorCode.VALUE_OUT_OF_RANGE),
            ("Enter a valid email address", ErrorCode.INVALID_FORMAT),
            ("Name contains invalid characters", ErrorCode.INVALID_FORMAT),
            ("Something else", ErrorCode.INVALID_INPUT),
        ],
    )
    def test_codes(self, message, code):
        assert create_validation_error("field", message).code == code


class TestHooks:
    """Test exception hook installation."""

    def test_install_and_restore(self):
        original = sys.excepthook
        handler = setup_error_handling()
        try:
            assert sys.excepthook is not original
        finally:
            handler.restore_hooks()
        assert sys.excepthook is original

    def test_restore_returns_hook_active_at_install(self):
        """A hook set after the handler was created is the one restored."""
        get_error_handler()
        previous = sys.excepthook

        def later_hook(exc_type, exc_value, exc_traceback):
            pass

        sys.excepthook = later_hook
        try:
            handler = setup_error_handling()
            handler.install_hooks()
            assert sys.excepthook is not later_hook

            handler.restore_hooks()
            assert sys.excepthook is later_hook
        finally:
            sys.excepthook = previous
