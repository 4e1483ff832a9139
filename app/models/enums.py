"""
Payout enums.

Closed sets of kinds and phases used by the payout workflow.
"""

from enum import Enum


class InputKind(str, Enum):
    """How a payout field is entered."""

    TEXT = "text"
    OPTIONS = "options"
    DATE = "date"


class ChannelKind(str, Enum):
    """Where a payout channel's field set comes from."""

    STATIC = "static"    # Fixed field set known at build time
    DYNAMIC = "dynamic"  # Field set fetched from the schema provider


class WorkflowPhase(str, Enum):
    """Payout dialog phases."""

    IDLE = "idle"
    CHANNEL_SELECTION = "channel_selection"
    FIELD_FETCHING = "field_fetching"
    FIELD_ENTRY = "field_entry"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FieldErrorCode(str, Enum):
    """Field-level validation failures."""

    REQUIRED_FIELD_MISSING = "required_field_missing"
    INVALID_FIELD_VALUE = "invalid_field_value"


class PaymentOutcome(str, Enum):
    """Checkout redirect outcome reported back to the payments API."""

    SUCCESS = "success"
    ERROR = "error"
    EXPIRED = "expired"
