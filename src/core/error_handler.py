"""
Centralized error handling and logging for the contact form application.

This module provides a singleton ErrorHandler that normalizes exceptions into
application errors, writes them to a rotating log file and notifies the UI
through a Qt signal.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import traceback
from pathlib import Path
from typing import Any, ClassVar

from PySide6.QtCore import QObject, QStandardPaths, Signal

from .config import APP_NAME, APP_ORGANIZATION
from .errors import BaseAppError, ErrorCode, ErrorSeverity, ValidationError, from_exception

ERROR_LOGGER_NAME = "contact_form_gui.errors"


def create_validation_error(field: str, message: str, value: Any = None) -> ValidationError:
    """
    Create a ValidationError for logging a field failure.

    Args:
        field: Field name that failed validation
        message: Validation message shown to the user
        value: The rejected value

    Returns:
        ValidationError instance
    """
    lowered = message.lower()
    code = ErrorCode.INVALID_INPUT

    if "required" in lowered:
        code = ErrorCode.REQUIRED_FIELD_MISSING
    elif any(word in lowered for word in ("too short", "too long", "at least", "at most")):
        code = ErrorCode.VALUE_OUT_OF_RANGE
    elif "valid" in lowered:
        code = ErrorCode.INVALID_FORMAT

    return ValidationError(
        code=code,
        user_message=message,
        field=field,
        technical_message=f"Validation failed for field '{field}': {message}",
        context={"value": value} if value is not None else {},
    )


class ErrorHandler(QObject):
    """
    Centralized error handler with logging and Qt signal emission.

    Signals:
        errorOccurred(object): A BaseAppError was handled
    """

    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the error handler (only once due to singleton)."""
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._installed_hook: Any = None

        self._setup_logging()

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Normalize an exception into a BaseAppError.

        Args:
            exception: The exception to capture
            context: Optional context information

        Returns:
            BaseAppError with normalized metadata
        """
        safe_context = self._sanitize_context(context or {})
        app_error = from_exception(exception, safe_context)

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        if "traceback" not in app_error.context:
            tb_str = traceback.format_exc()
            if tb_str == "NoneType: None\n":
                tb_str = f"{type(exception).__name__}: {exception}\n"
            app_error.context["traceback"] = tb_str

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture, log and broadcast an exception.

        Args:
            exception: The exception to handle
            context: Optional context information

        Returns:
            BaseAppError for further processing
        """
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = self.capture(exception, context)

        if self._logger:
            level = logging.WARNING if app_error.severity is ErrorSeverity.LOW else logging.ERROR
            self._logger.log(
                level,
                f"[{app_error.code.value}] {app_error.user_message}",
                extra={
                    "app_code": app_error.code.value,
                    "error_type": app_error.type.value,
                    "severity": app_error.severity.value,
                },
            )

        self.errorOccurred.emit(app_error)
        return app_error

    def report_field_error(self, field: str, message: str, value: Any = None) -> BaseAppError:
        """Log a field that failed validation on submit."""
        return self.handle(create_validation_error(field, message, value))

    def to_user_message(self, app_error: BaseAppError) -> str:
        """Generate a concise, user-friendly message from a BaseAppError."""
        message = app_error.user_message
        if app_error.retriable:
            message += " You can try again."
        return message

    def _setup_logging(self) -> None:
        """Set up rotating file logging in the app data directory."""
        try:
            app_data_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.AppDataLocation)
            if app_data_location:
                app_data_path = Path(app_data_location)
            else:
                config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
                app_data_path = Path(config_location) / APP_ORGANIZATION / APP_NAME

            logs_dir = app_data_path / "logs"
            logs_dir.mkdir(parents=True, exist_ok=True)

            ErrorHandler._logger = logging.getLogger(ERROR_LOGGER_NAME)
            ErrorHandler._logger.setLevel(logging.DEBUG)
            ErrorHandler._logger.propagate = False

            if not ErrorHandler._logger.handlers:
                file_handler = logging.handlers.RotatingFileHandler(
                    logs_dir / "app.log",
                    maxBytes=1_048_576,  # 1MB
                    backupCount=3,
                    encoding="utf-8",
                )
                formatter = logging.Formatter(
                    "%(asctime)s | %(levelname)s | %(name)s | code=%(app_code)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
                file_handler.setFormatter(formatter)
                ErrorHandler._logger.addHandler(file_handler)

                if __debug__:
                    console_handler = logging.StreamHandler()
                    console_handler.setFormatter(formatter)
                    console_handler.setLevel(logging.ERROR)
                    ErrorHandler._logger.addHandler(console_handler)

        except OSError as e:
            logging.basicConfig(level=logging.ERROR)
            logging.error(f"Failed to setup error logging: {e}")

    def _sanitize_context(self, context: dict[str, Any]) -> dict[str, Any]:
        """
        Limit context size and redact sensitive keys.

        Field values are user content, so long ones are truncated.
        """
        safe_context: dict[str, Any] = {}
        max_items = 20

        for index, (key, value) in enumerate(context.items()):
            if index >= max_items:
                safe_context["..."] = f"({len(context) - max_items} more items truncated)"
                break

            if any(sensitive in key.lower() for sensitive in ("password", "token", "secret")):
                safe_context[key] = "[REDACTED]"
            elif isinstance(value, str) and len(value) > 200:
                safe_context[key] = value[:200] + "..."
            else:
                safe_context[key] = value if isinstance(value, str) else repr(value)[:200]

        return safe_context

    def install_hooks(self) -> None:
        """Route unhandled exceptions through the handler."""
        if sys.excepthook is not self._installed_hook:
            # Remember whatever hook is active now, not the one seen at construction
            self._original_excepthook = sys.excepthook

        def exception_hook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            if issubclass(exc_type, KeyboardInterrupt) or not isinstance(exc_value, Exception):
                self._original_excepthook(exc_type, exc_value, exc_traceback)
                return
            self.handle(exc_value, {"source": "sys.excepthook"})

        self._installed_hook = exception_hook
        sys.excepthook = exception_hook

    def restore_hooks(self) -> None:
        """Restore the exception hook that was active when the hooks were installed."""
        sys.excepthook = self._original_excepthook
        self._installed_hook = None


def get_error_handler() -> ErrorHandler:
    """Get the singleton ErrorHandler instance."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """
    Set up global error handling for the application.

    This should be called once during application startup.
    """
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: str = "INFO") -> None:
    """
    Initialize logging configuration.

    Args:
        level: Root log level name
    """
    get_error_handler()

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
