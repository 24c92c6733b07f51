"""
Tests for the form state model.
"""

from core.form_state import FieldKey, FieldState, FieldStatus, FormState, SubmissionPhase


class TestFieldKey:
    """Test field identifiers."""

    def test_enumeration_order(self):
        assert [key.value for key in FieldKey] == ["name", "email", "message"]

    def test_coerce_accepts_strings_and_members(self):
        assert FieldKey.coerce("email") is FieldKey.EMAIL
        assert FieldKey.coerce(FieldKey.MESSAGE) is FieldKey.MESSAGE


class TestFieldState:
    """Test field state constructors."""

    def test_default_is_untouched(self):
        state = FieldState()
        assert state.status is FieldStatus.UNTOUCHED
        assert state.message == ""
        assert state == FieldState.untouched()

    def test_invalid_carries_message(self):
        state = FieldState.invalid("Email is required")
        assert state.is_invalid
        assert state.message == "Email is required"

    def test_valid_is_not_invalid(self):
        assert not FieldState.valid().is_invalid


class TestFormState:
    """Test the derived properties of FormState."""

    def test_default_snapshot(self):
        state = FormState()
        assert state.phase is SubmissionPhase.IDLE
        assert state.can_submit
        assert not state.is_loading
        assert state.field_state("name") == FieldState.untouched()

    def test_pending_snapshot(self):
        state = FormState(phase=SubmissionPhase.PENDING)
        assert state.is_loading
        assert not state.can_submit

    def test_succeeded_snapshot_cannot_submit(self):
        state = FormState(phase=SubmissionPhase.SUCCEEDED)
        assert not state.can_submit
        assert not state.is_loading
