"""
Field validators for the contact form.

Every validator is a pure function from a raw string to a ValidationResult.
Failures are reported through the result, never raised, so the controller can
render them directly. Limits come from a ValidationRules value so they can be
tuned through configuration.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .form_state import FieldKey


@dataclass(frozen=True)
class ValidationRules:
    """Length limits applied by the field validators."""

    name_min_length: int = 2
    name_max_length: int = 50
    message_min_length: int = 10
    message_max_length: int = 500
    message_warn_length: int = 450


DEFAULT_RULES = ValidationRules()

# Letters, with single spaces, hyphens, apostrophes or periods between them.
# "Mary-Jane O'Neil", "J. R. Smith" and "José" are all acceptable.
NAME_PATTERN = re.compile(r"^[^\W\d_]+(?:(?:[ '\-]|\. ?)[^\W\d_]+)*\.?$")

# local-part@domain.tld, no whitespace and no second "@"
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class ValidationResult:
    """
    Verdict for one field value.

    The message is empty exactly when the value is valid.
    """

    valid: bool
    message: str = ""

    def __post_init__(self) -> None:
        if self.valid == bool(self.message):
            raise ValueError("ValidationResult requires a message iff the value is invalid")

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(True)

    @classmethod
    def fail(cls, message: str) -> ValidationResult:
        return cls(False, message)


@dataclass(frozen=True)
class FormValidation:
    """Results of validating every field at once."""

    all_valid: bool
    results: Mapping[FieldKey, ValidationResult]

    @property
    def first_invalid(self) -> FieldKey | None:
        """First failing field in enumeration order, or None."""
        for key in FieldKey:
            if not self.results[key].valid:
                return key
        return None


def validate_name(value: str, rules: ValidationRules = DEFAULT_RULES) -> ValidationResult:
    """Validate the sender's name."""
    text = value.strip()

    if not text:
        return ValidationResult.fail("Name is required")
    if len(text) < rules.name_min_length:
        return ValidationResult.fail(f"Name must be at least {rules.name_min_length} characters")
    if len(text) > rules.name_max_length:
        return ValidationResult.fail(f"Name must be at most {rules.name_max_length} characters")
    if not NAME_PATTERN.match(text):
        return ValidationResult.fail("Name contains invalid characters")

    return ValidationResult.ok()


def validate_email(value: str, rules: ValidationRules = DEFAULT_RULES) -> ValidationResult:
    """Validate the reply-to email address."""
    text = value.strip()

    if not text:
        return ValidationResult.fail("Email is required")
    if not EMAIL_PATTERN.match(text):
        return ValidationResult.fail("Enter a valid email address")

    return ValidationResult.ok()


def validate_message(value: str, rules: ValidationRules = DEFAULT_RULES) -> ValidationResult:
    """Validate the message body."""
    text = value.strip()

    if not text:
        return ValidationResult.fail("Message is required")
    if len(text) < rules.message_min_length:
        return ValidationResult.fail("Message is too short")
    if len(text) > rules.message_max_length:
        return ValidationResult.fail("Message is too long")

    return ValidationResult.ok()


FIELD_VALIDATORS = MappingProxyType(
    {
        FieldKey.NAME: validate_name,
        FieldKey.EMAIL: validate_email,
        FieldKey.MESSAGE: validate_message,
    }
)


def validate_field(key: FieldKey | str, value: str, rules: ValidationRules = DEFAULT_RULES) -> ValidationResult:
    """Run the validator registered for a field."""
    return FIELD_VALIDATORS[FieldKey.coerce(key)](value, rules)


def validate_all(
    name: str,
    email: str,
    message: str,
    rules: ValidationRules = DEFAULT_RULES,
) -> FormValidation:
    """
    Validate every field.

    Args:
        name: Raw name input
        email: Raw email input
        message: Raw message input
        rules: Length limits to apply

    Returns:
        FormValidation with a result per field; all_valid is their logical AND
    """
    results = {
        FieldKey.NAME: validate_name(name, rules),
        FieldKey.EMAIL: validate_email(email, rules),
        FieldKey.MESSAGE: validate_message(message, rules),
    }
    return FormValidation(
        all_valid=all(result.valid for result in results.values()),
        results=MappingProxyType(results),
    )
