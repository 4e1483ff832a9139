"""
Unit tests for payout field validation.

Tests cover:
- Required fields with empty or whitespace values
- Optional fields left empty
- Options allow-lists
- Regular expression patterns, including malformed ones
- Aggregation of every failing field
"""

import pytest

from app.models import FieldErrorCode, FieldSchema, InputKind
from app.services.payout import validate_field, validate_fields


def make_field(**overrides) -> FieldSchema:
    values = {
        "token": "field",
        "input_kind": InputKind.TEXT,
        "label": "Field",
        "is_required": True,
        "validation_pattern": None,
        "current_value": "",
    }
    values.update(overrides)
    return FieldSchema(**values)


class TestRequiredFields:
    """Test required field checks."""

    @pytest.mark.parametrize("value", ["", "   ", "\t\n"])
    def test_required_blank_value(self, value):
        """Required field without a value is missing."""
        field = make_field(label="SSN", current_value=value)

        error = validate_field(field)

        assert error is not None
        assert error.code is FieldErrorCode.REQUIRED_FIELD_MISSING
        assert error.message == "SSN is required"

    @pytest.mark.parametrize(
        "kind", [InputKind.TEXT, InputKind.OPTIONS, InputKind.DATE]
    )
    def test_required_applies_to_every_kind(self, kind):
        """Required check does not depend on input kind."""
        field = make_field(input_kind=kind, validation_pattern="A|B")

        error = validate_field(field)

        assert error.code is FieldErrorCode.REQUIRED_FIELD_MISSING

    @pytest.mark.parametrize("pattern", [None, r"^\d+$", "A|B|C", "(["])
    def test_optional_empty_passes_regardless_of_pattern(self, pattern):
        """Optional field left empty never fails."""
        field = make_field(is_required=False, validation_pattern=pattern)

        assert validate_field(field) is None

    def test_optional_with_value_is_still_checked(self):
        """Optional field with a value must match its pattern."""
        field = make_field(
            is_required=False,
            validation_pattern=r"^\d+$",
            current_value="abc",
        )

        error = validate_field(field)

        assert error.code is FieldErrorCode.INVALID_FIELD_VALUE


class TestOptionsFields:
    """Test options allow-lists."""

    @pytest.mark.parametrize(
        "value,valid",
        [
            ("A", True),
            ("B", True),
            ("C", True),
            ("D", False),
            ("a", False),
            ("A|B", False),
            (" A", False),
        ],
    )
    def test_membership(self, value, valid):
        """Value must be exactly one of the listed options."""
        field = make_field(
            input_kind=InputKind.OPTIONS,
            label="Account Type",
            validation_pattern="A|B|C",
            current_value=value,
        )

        error = validate_field(field)

        if valid:
            assert error is None
        else:
            assert error.code is FieldErrorCode.INVALID_FIELD_VALUE
            assert error.message == "Invalid Account Type"

    def test_options_pattern_is_not_a_regex(self):
        """Regex metacharacters in options are literal values."""
        field = make_field(
            input_kind=InputKind.OPTIONS,
            validation_pattern=".*|x",
            current_value="anything",
        )

        assert validate_field(field) is not None

        field.current_value = ".*"
        assert validate_field(field) is None


class TestPatternFields:
    """Test regular expression validation."""

    @pytest.mark.parametrize(
        "value,valid",
        [
            ("123", True),
            ("1234", True),
            ("12", False),
            ("abcd", False),
            ("12345", False),
            ("123\n", False),
        ],
    )
    def test_cvv_pattern(self, value, valid):
        """CVV accepts three or four digits."""
        field = make_field(
            label="CVV", validation_pattern=r"^\d{3,4}$", current_value=value
        )

        error = validate_field(field)

        if valid:
            assert error is None
        else:
            assert error.code is FieldErrorCode.INVALID_FIELD_VALUE
            assert error.message == "Invalid CVV"

    def test_pattern_is_searched_not_anchored(self):
        """Unanchored patterns match anywhere in the value."""
        field = make_field(validation_pattern=r"\d", current_value="abc1")

        assert validate_field(field) is None

    def test_unicode_pattern(self):
        """Patterns match non-ASCII letters."""
        field = make_field(
            validation_pattern=r"^\w+$", current_value="Zoë"
        )

        assert validate_field(field) is None

    def test_unicode_property_escape(self):
        """Unicode property escapes are supported."""
        field = make_field(
            label="Name", validation_pattern=r"^\p{L}+$", current_value="José"
        )

        assert validate_field(field) is None

        field.current_value = "José1"
        assert validate_field(field).message == "Invalid Name"

    def test_end_anchor_rejects_trailing_newline(self):
        """An end anchor matches only at the very end of the value."""
        field = make_field(validation_pattern=r"^\$\d+[$]?$", current_value="$100$")

        assert validate_field(field) is None

        field.current_value = "$100\n"
        assert validate_field(field).code is FieldErrorCode.INVALID_FIELD_VALUE

    def test_date_field_uses_pattern(self):
        """Date fields are checked against their pattern."""
        field = make_field(
            input_kind=InputKind.DATE,
            validation_pattern=r"^\d{4}-\d{2}-\d{2}$",
            current_value="01/02/1990",
        )

        assert validate_field(field).code is FieldErrorCode.INVALID_FIELD_VALUE

        field.current_value = "1990-02-01"
        assert validate_field(field) is None

    @pytest.mark.parametrize("pattern", ["([", "*abc", "(?P<x", "a{2,1}"])
    def test_malformed_pattern_is_invalid_not_raised(self, pattern):
        """A broken pattern fails the field instead of raising."""
        field = make_field(
            label="Routing", validation_pattern=pattern, current_value="abc"
        )

        error = validate_field(field)

        assert error.code is FieldErrorCode.INVALID_FIELD_VALUE
        assert error.message == "Invalid Routing"

    def test_validation_does_not_mutate(self):
        """Validation leaves the field untouched."""
        field = make_field(validation_pattern=r"^\d+$", current_value=" 12 ")

        validate_field(field)

        assert field.current_value == " 12 "


class TestValidateFields:
    """Test aggregated validation."""

    def test_reports_every_failure(self):
        """All failing fields are reported in one pass."""
        fields = [
            make_field(token="a", label="A"),
            make_field(token="b", label="B", validation_pattern=r"^\d+$", current_value="x"),
            make_field(token="c", label="C", current_value="ok"),
            make_field(token="d", label="D", is_required=False),
        ]

        errors = validate_fields(fields)

        assert errors == {"a": "A is required", "b": "Invalid B"}

    def test_no_failures(self):
        """Valid fields produce an empty mapping."""
        assert validate_fields([make_field(current_value="x")]) == {}
