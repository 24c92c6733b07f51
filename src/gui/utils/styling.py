"""
Shared styling for the contact form.

Field validity is expressed through dynamic properties (``hasError`` and
``isValid``) matched by the form stylesheet, so a state change only needs a
property update followed by a re-polish.
"""

from typing import Any, Protocol

from core.form_state import FieldState, FieldStatus


class StyleableWidget(Protocol):
    """Protocol for widgets that can be styled."""

    def setProperty(self, name: str, value: Any) -> bool: ...
    def style(self) -> Any: ...


class AccessiblePalette:
    """
    Color palette with WCAG AA contrast against the form background.
    """

    BORDER_DEFAULT = "#dee2e6"
    BORDER_FOCUS = "#0d6efd"
    BORDER_ERROR = "#dc3545"
    BORDER_SUCCESS = "#198754"

    BACKGROUND_DEFAULT = "#ffffff"
    BACKGROUND_DISABLED = "#e9ecef"

    TEXT_PRIMARY = "#212529"
    TEXT_SECONDARY = "#6c757d"
    TEXT_ERROR = "#721c24"
    TEXT_WARNING = "#856404"
    TEXT_SUCCESS = "#198754"

    FLASH_ERROR_BG = "#f8d7da"

    BUTTON_PRIMARY_BG = "#0d6efd"
    BUTTON_PRIMARY_TEXT = "#ffffff"
    PROGRESS_CHUNK = "#0d6efd"


FORM_STYLESHEET = f"""
    QLineEdit, QPlainTextEdit {{
        border: 1px solid {AccessiblePalette.BORDER_DEFAULT};
        border-radius: 4px;
        padding: 6px;
        background-color: {AccessiblePalette.BACKGROUND_DEFAULT};
        color: {AccessiblePalette.TEXT_PRIMARY};
    }}
    QLineEdit:focus, QPlainTextEdit:focus {{
        border: 2px solid {AccessiblePalette.BORDER_FOCUS};
    }}
    QLineEdit[hasError="true"], QPlainTextEdit[hasError="true"] {{
        border: 2px solid {AccessiblePalette.BORDER_ERROR};
    }}
    QLineEdit[isValid="true"], QPlainTextEdit[isValid="true"] {{
        border: 2px solid {AccessiblePalette.BORDER_SUCCESS};
    }}
    QLineEdit:read-only, QPlainTextEdit:read-only {{
        background-color: {AccessiblePalette.BACKGROUND_DISABLED};
    }}
    QLabel#fieldError {{
        color: {AccessiblePalette.TEXT_ERROR};
        font-size: 12px;
    }}
    QLabel#fieldError[flash="true"] {{
        background-color: {AccessiblePalette.FLASH_ERROR_BG};
        font-weight: bold;
    }}
    QLabel#charCount {{
        color: {AccessiblePalette.TEXT_SECONDARY};
        font-size: 12px;
    }}
    QLabel#charCount[warn="true"] {{
        color: {AccessiblePalette.TEXT_WARNING};
        font-weight: bold;
    }}
    QLabel#successTitle {{
        color: {AccessiblePalette.TEXT_SUCCESS};
        font-size: 20px;
        font-weight: bold;
    }}
    QPushButton#submitButton {{
        background-color: {AccessiblePalette.BUTTON_PRIMARY_BG};
        color: {AccessiblePalette.BUTTON_PRIMARY_TEXT};
        border-radius: 4px;
        padding: 8px 16px;
        font-weight: bold;
    }}
    QPushButton#submitButton:disabled {{
        background-color: {AccessiblePalette.BACKGROUND_DISABLED};
        color: {AccessiblePalette.TEXT_SECONDARY};
    }}
    QProgressBar#progressBar::chunk {{
        background-color: {AccessiblePalette.PROGRESS_CHUNK};
    }}
"""


def repolish(widget: StyleableWidget) -> None:
    """Re-apply the stylesheet after a dynamic property change."""
    widget.style().unpolish(widget)
    widget.style().polish(widget)


def apply_field_state(widget: StyleableWidget, state: FieldState) -> None:
    """
    Apply validation styling for a field state to an input widget.

    Args:
        widget: The input widget to style
        state: Field state to reflect
    """
    widget.setProperty("hasError", state.status is FieldStatus.INVALID)
    widget.setProperty("isValid", state.status is FieldStatus.VALID)
    repolish(widget)


def apply_warning(widget: StyleableWidget, warn: bool) -> None:
    """Toggle the warning style of a label."""
    widget.setProperty("warn", warn)
    repolish(widget)


def apply_flash(widget: StyleableWidget, flash: bool) -> None:
    """Toggle the highlight used to draw attention back to an error message."""
    widget.setProperty("flash", flash)
    repolish(widget)
