"""
GUI-specific utilities for the contact form application.
"""

from .styling import (
    FORM_STYLESHEET,
    AccessiblePalette,
    apply_field_state,
    apply_flash,
    apply_warning,
    repolish,
)

__all__ = [
    "FORM_STYLESHEET",
    "AccessiblePalette",
    "apply_field_state",
    "apply_flash",
    "apply_warning",
    "repolish",
]
