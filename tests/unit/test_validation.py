"""
Tests for the field validators.
"""

import pytest

from core.form_state import FieldKey
from core.validation import (
    ValidationResult,
    ValidationRules,
    validate_all,
    validate_email,
    validate_field,
    validate_message,
    validate_name,
)


class TestValidationResult:
    """Test the ValidationResult invariant."""

    def test_valid_result_has_empty_message(self):
        result = ValidationResult.ok()
        assert result.valid is True
        assert result.message == ""

    def test_invalid_result_keeps_message(self):
        result = ValidationResult.fail("Name is required")
        assert result.valid is False
        assert result.message == "Name is required"

    def test_invalid_without_message_rejected(self):
        with pytest.raises(ValueError):
            ValidationResult(False, "")

    def test_valid_with_message_rejected(self):
        with pytest.raises(ValueError):
            ValidationResult(True, "unexpected")


class TestValidateName:
    """Test name validation."""

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_empty_is_required(self, value):
        assert validate_name(value) == ValidationResult.fail("Name is required")

    def test_single_character_too_short(self):
        assert validate_name(" J ") == ValidationResult.fail("Name must be at least 2 characters")

    def test_too_long(self):
        result = validate_name("A" * 51)
        assert not result.valid
        assert result.message == "Name must be at most 50 characters"

    @pytest.mark.parametrize("value", ["Jo", "Jordan Lee", "Mary-Jane O'Neil", "J. R. Smith", "José Álvarez"])
    def test_accepts_human_names(self, value):
        assert validate_name(value).valid

    @pytest.mark.parametrize("value", ["R2D2", "<script>", "Jo_Lee", "Jo  Lee", "--"])
    def test_rejects_invalid_characters(self, value):
        assert validate_name(value) == ValidationResult.fail("Name contains invalid characters")

    def test_custom_limits(self):
        rules = ValidationRules(name_min_length=3, name_max_length=5)
        assert validate_name("Jo", rules).message == "Name must be at least 3 characters"
        assert validate_name("Jordan", rules).message == "Name must be at most 5 characters"
        assert validate_name("Jodi", rules).valid


class TestValidateEmail:
    """Test email validation."""

    def test_empty_is_required(self):
        assert validate_email("  ") == ValidationResult.fail("Email is required")

    @pytest.mark.parametrize("value", ["a@b.com", "jordan@example.com", " first.last+tag@mail.example.org "])
    def test_accepts_addresses(self, value):
        assert validate_email(value).valid

    @pytest.mark.parametrize("value", ["not-an-email", "a@b", "@b.com", "a@.com", "a b@c.com", "a@b@c.com"])
    def test_rejects_malformed(self, value):
        assert validate_email(value) == ValidationResult.fail("Enter a valid email address")


class TestValidateMessage:
    """Test message validation."""

    def test_empty_is_required(self):
        assert validate_message("") == ValidationResult.fail("Message is required")

    def test_too_short_uses_trimmed_length(self):
        assert validate_message("   short    ") == ValidationResult.fail("Message is too short")

    def test_minimum_length_accepted(self):
        assert validate_message("x" * 10).valid

    def test_maximum_length_accepted(self):
        assert validate_message("x" * 500).valid

    def test_too_long(self):
        assert validate_message("x" * 501) == ValidationResult.fail("Message is too long")


class TestValidateAll:
    """Test whole-form validation."""

    @pytest.mark.parametrize(
        "name,email,message",
        [
            ("", "a@b.com", "hello world!!"),
            ("Jo", "not-an-email", "short"),
            ("Jordan Lee", "jordan@example.com", "This is a sufficiently long test message."),
            ("", "", ""),
        ],
    )
    def test_all_valid_matches_individual_results(self, name, email, message):
        report = validate_all(name, email, message)
        expected = validate_name(name).valid and validate_email(email).valid and validate_message(message).valid
        assert report.all_valid is expected
        assert report.results[FieldKey.NAME] == validate_name(name)
        assert report.results[FieldKey.EMAIL] == validate_email(email)
        assert report.results[FieldKey.MESSAGE] == validate_message(message)

    def test_first_invalid_follows_field_order(self):
        report = validate_all("Jo", "not-an-email", "short")
        assert report.first_invalid is FieldKey.EMAIL

    def test_first_invalid_none_when_valid(self):
        report = validate_all("Jordan Lee", "jordan@example.com", "This is a sufficiently long test message.")
        assert report.all_valid
        assert report.first_invalid is None

    def test_validators_are_idempotent(self):
        assert validate_all("J", "x", "y") == validate_all("J", "x", "y")
        assert validate_field("email", "a@b.com") == validate_field(FieldKey.EMAIL, "a@b.com")
