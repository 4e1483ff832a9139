"""
Payout models.

Exports payout dataclasses and enums for easy imports.
"""

from app.models.enums import (
    ChannelKind,
    FieldErrorCode,
    InputKind,
    PaymentOutcome,
    WorkflowPhase,
)
from app.models.payout import (
    BalanceSource,
    ChannelDescriptor,
    FieldSchema,
    SubmissionPayload,
    SubmissionReceipt,
    WorkflowState,
)


__all__ = [
    # Enums
    "ChannelKind",
    "FieldErrorCode",
    "InputKind",
    "PaymentOutcome",
    "WorkflowPhase",
    # Dataclasses
    "BalanceSource",
    "ChannelDescriptor",
    "FieldSchema",
    "SubmissionPayload",
    "SubmissionReceipt",
    "WorkflowState",
]
