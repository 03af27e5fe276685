"""Tests for validate_field."""

import pytest

from bullion.booking.validation import REQUIRED_MESSAGE, FieldKind, validate_field
from bullion.config import DEFAULT_FIELD_RULES, FieldRule
from bullion.errors import ContractViolation


class TestRequired:
    @pytest.mark.parametrize("kind", list(FieldKind))
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_is_required(self, kind, value):
        result = validate_field(kind, value, DEFAULT_FIELD_RULES)
        assert not result.valid
        assert result.error == REQUIRED_MESSAGE

    def test_required_checked_even_without_rule(self):
        assert validate_field("email", "", {}).error == REQUIRED_MESSAGE


class TestName:
    def test_valid(self):
        assert validate_field("name", "Asha Rao", DEFAULT_FIELD_RULES).valid

    def test_too_short(self):
        result = validate_field("name", "A", DEFAULT_FIELD_RULES)
        assert result.error == "Name must be at least 2 characters"

    def test_too_long(self):
        result = validate_field("name", "A" * 51, DEFAULT_FIELD_RULES)
        assert result.error == "Name must not exceed 50 characters"

    def test_bad_characters(self):
        result = validate_field("name", "R2D2", DEFAULT_FIELD_RULES)
        assert result.error == "Name can only contain letters and spaces"

    def test_length_checked_before_pattern(self):
        """A too-short name with bad characters reports the length problem."""
        result = validate_field("name", "4", DEFAULT_FIELD_RULES)
        assert result.error == "Name must be at least 2 characters"


class TestPhone:
    def test_valid(self):
        assert validate_field("phone", "9876543210", DEFAULT_FIELD_RULES).valid

    def test_bad_leading_digit(self):
        assert not validate_field("phone", "1234567890", DEFAULT_FIELD_RULES).valid

    def test_wrong_length(self):
        result = validate_field("phone", "98765432", DEFAULT_FIELD_RULES)
        assert result.error == "Please enter a valid 10-digit Indian mobile number"

    def test_eleven_digits(self):
        assert not validate_field("phone", "98765432101", DEFAULT_FIELD_RULES).valid


class TestEmail:
    @pytest.mark.parametrize("email", ["asha@example.in", "a.b+c@mail.co.uk"])
    def test_valid(self, email):
        assert validate_field("email", email, DEFAULT_FIELD_RULES).valid

    @pytest.mark.parametrize("email", ["asha", "asha@example", "a b@example.com", "@example.com"])
    def test_invalid(self, email):
        result = validate_field("email", email, DEFAULT_FIELD_RULES)
        assert result.error == "Please enter a valid email address"


class TestQuantity:
    @pytest.mark.parametrize("value", ["1", "10.5", 250, 1000.0])
    def test_valid(self, value):
        assert validate_field("quantity", value, DEFAULT_FIELD_RULES).valid

    @pytest.mark.parametrize("value", ["0.5", "0", "-3", "abc", "nan", "inf"])
    def test_invalid(self, value):
        result = validate_field("quantity", value, DEFAULT_FIELD_RULES)
        assert result.error == "Quantity must be at least 1"

    def test_configured_maximum(self):
        rules = {"quantity": FieldRule(min_value=1.0, max_value=10.0)}
        assert validate_field("quantity", "11", rules).error == "Quantity must not exceed 10"


class TestRules:
    def test_no_rule_is_valid(self):
        assert validate_field("phone", "anything", {}).valid

    def test_unknown_kind_raises(self):
        with pytest.raises(ContractViolation):
            validate_field("address", "221B", DEFAULT_FIELD_RULES)

    def test_idempotent(self):
        """Validating the same input twice gives the same result."""
        for kind, value in [("name", "X"), ("phone", "9876543210"), ("quantity", "abc")]:
            first = validate_field(kind, value, DEFAULT_FIELD_RULES)
            second = validate_field(kind, value, DEFAULT_FIELD_RULES)
            assert first == second
