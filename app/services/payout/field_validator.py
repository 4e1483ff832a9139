"""
Payout field validation.

Pure, synchronous checks of one field's current value against its schema:
- Required check (empty or whitespace-only value)
- Options check (exact membership in the pipe-delimited allow-list)
- Pattern check (regular expression search for text and date fields)

Patterns are compiled with the regex package so Unicode property
escapes work, and an unescaped $ matches only at the very end of
the value.
"""

import functools
from collections.abc import Iterable
from dataclasses import dataclass
from typing import assert_never

import regex
from loguru import logger

from app.models.enums import FieldErrorCode, InputKind
from app.models.payout import FieldSchema


@dataclass(frozen=True)
class FieldError:
    """Validation failure of a single field."""

    code: FieldErrorCode
    message: str

    @classmethod
    def required(cls, field: FieldSchema) -> "FieldError":
        """Create a missing-value error."""
        return cls(FieldErrorCode.REQUIRED_FIELD_MISSING, f"{field.label} is required")

    @classmethod
    def invalid(cls, field: FieldSchema) -> "FieldError":
        """Create an invalid-value error."""
        return cls(FieldErrorCode.INVALID_FIELD_VALUE, f"Invalid {field.label}")


def _anchor_end(pattern: str) -> str:
    r"""Rewrite unescaped $ outside character classes as \Z."""
    out: list[str] = []
    escaped = in_class = False
    for char in pattern:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
        elif char == "$":
            out.append(r"\Z")
            continue
        out.append(char)
    return "".join(out)


@functools.lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> "regex.Pattern | None":
    """Compile a provider pattern, None if it is malformed."""
    try:
        return regex.compile(_anchor_end(pattern))
    except regex.error as e:
        logger.debug(f"Malformed field pattern {pattern!r}: {e}")
        return None


def _matches_pattern(pattern: str, value: str) -> bool:
    compiled = _compile_pattern(pattern)
    if compiled is None:
        return False
    return compiled.search(value) is not None


def validate_field(field: FieldSchema) -> FieldError | None:
    """
    Validate one field's current value.

    Args:
        field: Field with its entered value

    Returns:
        FieldError if the value is missing or invalid, None otherwise
    """
    if field.is_blank:
        if field.is_required:
            return FieldError.required(field)
        # Optional and empty: pattern is not checked
        return None

    value = field.current_value

    match field.input_kind:
        case InputKind.OPTIONS:
            # Allow-list, not a regular expression
            if field.validation_pattern and value not in field.options:
                return FieldError.invalid(field)
        case InputKind.TEXT | InputKind.DATE:
            if field.validation_pattern and not _matches_pattern(
                field.validation_pattern, value
            ):
                return FieldError.invalid(field)
        case _:
            assert_never(field.input_kind)

    return None


def validate_fields(fields: Iterable[FieldSchema]) -> dict[str, str]:
    """
    Validate every field in one pass.

    Args:
        fields: Fields to check

    Returns:
        Mapping of field token to error message for each failing field
    """
    errors: dict[str, str] = {}
    for field in fields:
        error = validate_field(field)
        if error:
            errors[field.token] = error.message
    return errors
