"""
Form state model for the contact form.

This module defines the field identifiers, per-field states and submission
phases shared by the form controller and the UI layer, plus the immutable
snapshots the controller hands out after every operation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType


class FieldKey(str, Enum):
    """
    Identifiers of the required form fields.

    Declaration order is the enumeration order used when looking for the
    first invalid field.
    """

    NAME = "name"
    EMAIL = "email"
    MESSAGE = "message"

    @classmethod
    def coerce(cls, key: FieldKey | str) -> FieldKey:
        """Accept either a FieldKey or its string value."""
        return key if isinstance(key, FieldKey) else cls(key)


class FieldStatus(Enum):
    """Display status of a single field."""

    UNTOUCHED = auto()  # No verdict shown
    VALID = auto()  # Passed its last validation
    INVALID = auto()  # Failed its last validation, message shown


class SubmissionPhase(Enum):
    """
    Phases of a form submission.

    IDLE -> PENDING -> SUCCEEDED -> IDLE, with reset returning any phase to IDLE.
    """

    IDLE = auto()  # Editable, ready to submit
    PENDING = auto()  # Submission in flight
    SUCCEEDED = auto()  # Success screen shown


@dataclass(frozen=True)
class FieldState:
    """Verdict currently displayed for a field."""

    status: FieldStatus = FieldStatus.UNTOUCHED
    message: str = ""

    @classmethod
    def untouched(cls) -> FieldState:
        return cls()

    @classmethod
    def valid(cls) -> FieldState:
        return cls(FieldStatus.VALID)

    @classmethod
    def invalid(cls, message: str) -> FieldState:
        return cls(FieldStatus.INVALID, message)

    @property
    def is_invalid(self) -> bool:
        return self.status is FieldStatus.INVALID


def untouched_fields() -> dict[FieldKey, FieldState]:
    """Return a fresh mapping with every field Untouched."""
    return {key: FieldState.untouched() for key in FieldKey}


@dataclass(frozen=True)
class FormState:
    """
    Immutable snapshot of the whole form.

    The UI renders from this snapshot without re-deriving any business rule.
    """

    fields: Mapping[FieldKey, FieldState] = field(default_factory=lambda: MappingProxyType(untouched_fields()))
    progress_percent: int = 0
    phase: SubmissionPhase = SubmissionPhase.IDLE
    character_count: int = 0
    character_warning: bool = False

    @property
    def can_submit(self) -> bool:
        """Whether the submit action is enabled."""
        return self.phase is SubmissionPhase.IDLE

    @property
    def is_loading(self) -> bool:
        """Whether a submission is in flight."""
        return self.phase is SubmissionPhase.PENDING

    def field_state(self, key: FieldKey | str) -> FieldState:
        return self.fields[FieldKey.coerce(key)]


@dataclass(frozen=True)
class FieldUpdate:
    """
    Outcome of a single field-level event.

    Attributes:
        key: Field the event was for
        state: Field state after the event
        validated: Whether the validator ran for this event
        changed: Whether the field state differs from before the event
        ignored: Whether the event was dropped because the form was not idle
        progress_percent: Form progress after the event
    """

    key: FieldKey
    state: FieldState
    validated: bool = False
    changed: bool = False
    ignored: bool = False
    progress_percent: int = 0
