"""
Form controller for the contact form.

The controller owns every field state and the submission phase. It decides
when a field is validated, aggregates progress, and drives the submission
state machine:

    IDLE --on_submit (all valid)--> PENDING --complete_submission--> SUCCEEDED
    SUCCEEDED --start_over--> IDLE
    any phase --reset_form--> IDLE

It has no UI dependency. Callers pass raw values in and render from the
returned updates or from the ``state`` snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType

from .errors import ErrorCode, InvalidOperationError
from .form_state import (
    FieldKey,
    FieldState,
    FieldUpdate,
    FormState,
    SubmissionPhase,
    untouched_fields,
)
from .validation import DEFAULT_RULES, ValidationResult, ValidationRules, validate_all, validate_field

logger = logging.getLogger(__name__)


class SubmitStatus(Enum):
    """Result categories of a submit request."""

    ACCEPTED = auto()  # All fields valid, submission is now pending
    REJECTED = auto()  # At least one field invalid
    IGNORED = auto()  # Refused because the form is not idle


@dataclass(frozen=True)
class SubmitOutcome:
    """
    Outcome of ``FormController.on_submit``.

    Attributes:
        status: Accepted, Rejected or Ignored
        first_invalid: First failing field in enumeration order (Rejected only)
        results: Per-field validation results (empty when Ignored)
        error: Reason the request was refused (Ignored only)
    """

    status: SubmitStatus
    first_invalid: FieldKey | None = None
    results: Mapping[FieldKey, ValidationResult] = field(default_factory=lambda: MappingProxyType({}))
    error: InvalidOperationError | None = None

    @property
    def accepted(self) -> bool:
        return self.status is SubmitStatus.ACCEPTED


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a phase transition request."""

    phase: SubmissionPhase
    error: InvalidOperationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _progress(values: Mapping[FieldKey, str]) -> int:
    filled = sum(1 for key in FieldKey if values[key].strip())
    return round(100 * filled / len(FieldKey))


class FormController:
    """
    Validation policy and submission state machine for the contact form.

    Field events are only honoured while the form is idle; anything arriving
    during a pending submission or on the success screen is ignored so the
    submitted content cannot change underneath it.
    """

    def __init__(self, rules: ValidationRules = DEFAULT_RULES) -> None:
        self._rules = rules
        self._fields: dict[FieldKey, FieldState] = untouched_fields()
        self._values: dict[FieldKey, str] = {key: "" for key in FieldKey}
        self._phase = SubmissionPhase.IDLE

    @property
    def rules(self) -> ValidationRules:
        return self._rules

    @property
    def phase(self) -> SubmissionPhase:
        return self._phase

    @property
    def state(self) -> FormState:
        """Snapshot of the current form state."""
        character_count = len(self._values[FieldKey.MESSAGE])
        return FormState(
            fields=MappingProxyType(dict(self._fields)),
            progress_percent=_progress(self._values),
            phase=self._phase,
            character_count=character_count,
            character_warning=character_count > self._rules.message_warn_length,
        )

    def field_state(self, key: FieldKey | str) -> FieldState:
        return self._fields[FieldKey.coerce(key)]

    # Field events

    def on_field_input(self, key: FieldKey | str, raw_value: str) -> FieldUpdate:
        """
        Handle typing in a field.

        Progress follows every keystroke. The field itself is only re-validated
        when it already shows an error, so fixes are reflected immediately
        without flagging a field the user is still filling in.
        """
        key = FieldKey.coerce(key)
        if self._phase is not SubmissionPhase.IDLE:
            return self._ignored(key, "input")

        self._values[key] = raw_value
        if self._fields[key].is_invalid:
            return self._validate(key)
        return self._unchanged(key)

    def on_field_blur(self, key: FieldKey | str, raw_value: str) -> FieldUpdate:
        """
        Handle a field losing focus.

        Validates only when the field holds something; leaving an empty field
        does not flag it.
        """
        key = FieldKey.coerce(key)
        if self._phase is not SubmissionPhase.IDLE:
            return self._ignored(key, "blur")

        self._values[key] = raw_value
        if raw_value.strip():
            return self._validate(key)
        return self._unchanged(key)

    # Submission state machine

    def on_submit(self, values: Mapping[FieldKey | str, str]) -> SubmitOutcome:
        """
        Validate every field and start the submission when all pass.

        Args:
            values: Raw value per field; missing fields count as empty

        Returns:
            SubmitOutcome describing whether the submission is now pending
        """
        if self._phase is not SubmissionPhase.IDLE:
            code = (
                ErrorCode.SUBMISSION_IN_PROGRESS
                if self._phase is SubmissionPhase.PENDING
                else ErrorCode.INVALID_TRANSITION
            )
            error = InvalidOperationError("submit", self._phase.name, code=code)
            logger.warning(f"Submit refused: {error.technical_message}")
            return SubmitOutcome(SubmitStatus.IGNORED, error=error)

        # Coerce every key before touching state so an unknown key changes nothing
        submitted = {key: "" for key in FieldKey}
        submitted.update({FieldKey.coerce(key): value for key, value in values.items()})

        validation = validate_all(
            submitted[FieldKey.NAME],
            submitted[FieldKey.EMAIL],
            submitted[FieldKey.MESSAGE],
            self._rules,
        )
        self._values = submitted
        for key, result in validation.results.items():
            self._fields[key] = FieldState.valid() if result.valid else FieldState.invalid(result.message)

        if not validation.all_valid:
            first_invalid = validation.first_invalid
            logger.info(f"Submit rejected, first invalid field: {first_invalid.value if first_invalid else None}")
            return SubmitOutcome(SubmitStatus.REJECTED, first_invalid=first_invalid, results=validation.results)

        self._phase = SubmissionPhase.PENDING
        logger.info("Submit accepted, submission pending")
        return SubmitOutcome(SubmitStatus.ACCEPTED, results=validation.results)

    def complete_submission(self) -> TransitionResult:
        """Finish a pending submission and clear the form."""
        if self._phase is not SubmissionPhase.PENDING:
            return self._refuse("complete submission")

        self._clear()
        self._phase = SubmissionPhase.SUCCEEDED
        logger.info("Submission completed")
        return TransitionResult(self._phase)

    def reset_form(self) -> TransitionResult:
        """Clear every field and return to idle, whatever the current phase."""
        previous = self._phase
        self._clear()
        self._phase = SubmissionPhase.IDLE
        if previous is not SubmissionPhase.IDLE:
            logger.info(f"Form reset from {previous.name}")
        return TransitionResult(self._phase)

    def start_over(self) -> TransitionResult:
        """Leave the success screen for a fresh form."""
        if self._phase is not SubmissionPhase.SUCCEEDED:
            return self._refuse("start over")

        self._clear()
        self._phase = SubmissionPhase.IDLE
        logger.info("Starting over with a fresh form")
        return TransitionResult(self._phase)

    # Helpers

    def _validate(self, key: FieldKey) -> FieldUpdate:
        previous = self._fields[key]
        result = validate_field(key, self._values[key], self._rules)
        current = FieldState.valid() if result.valid else FieldState.invalid(result.message)
        self._fields[key] = current
        return FieldUpdate(
            key=key,
            state=current,
            validated=True,
            changed=current != previous,
            progress_percent=_progress(self._values),
        )

    def _unchanged(self, key: FieldKey) -> FieldUpdate:
        return FieldUpdate(key=key, state=self._fields[key], progress_percent=_progress(self._values))

    def _ignored(self, key: FieldKey, event: str) -> FieldUpdate:
        logger.debug(f"Ignoring {event} on '{key.value}' while form is {self._phase.name}")
        return FieldUpdate(
            key=key,
            state=self._fields[key],
            ignored=True,
            progress_percent=_progress(self._values),
        )

    def _refuse(self, operation: str) -> TransitionResult:
        error = InvalidOperationError(operation, self._phase.name)
        logger.warning(f"Transition refused: {error.technical_message}")
        return TransitionResult(self._phase, error=error)

    def _clear(self) -> None:
        self._fields = untouched_fields()
        self._values = {key: "" for key in FieldKey}
