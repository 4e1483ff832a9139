"""
Payout services package.

This package provides the multi-channel payout workflow:
- field_validator: Per-field validation and error aggregation
- channel_registry: Built-in and catalog payout channels
- schema_fetcher: Field-schema fetches with stale-result discard
- payload_assembler: Channel-specific submission payloads
- precondition: Checks before the payout dialog may open
- workflow: The dialog state machine
- factory: Workflow wired to the payments API
- errors: Workflow-level exceptions
- protocols: Boundary interfaces

All components are re-exported for easy importing.
"""

from app.services.payout.channel_registry import ChannelRegistry
from app.services.payout.errors import (
    CatalogUnavailableError,
    ChannelNotSelectedError,
    InvalidTransitionError,
    PaymentVerificationError,
    PayoutError,
    PreconditionFailedError,
    SchemaFetchFailedError,
    SubmissionRejectedError,
    SubmissionTransportError,
    UnknownChannelError,
)
from app.services.payout.field_validator import (
    FieldError,
    validate_field,
    validate_fields,
)
from app.services.payout.payload_assembler import build_payload
from app.services.payout.precondition import PayoutPreconditionGate
from app.services.payout.schema_fetcher import FetchResult, FieldSchemaFetcher
from app.services.payout.workflow import PayoutWorkflow


__all__ = [
    # Workflow
    "PayoutWorkflow",
    "PayoutPreconditionGate",
    "ChannelRegistry",
    "FieldSchemaFetcher",
    "FetchResult",
    # Validation and payloads
    "FieldError",
    "validate_field",
    "validate_fields",
    "build_payload",
    # Errors
    "PayoutError",
    "CatalogUnavailableError",
    "ChannelNotSelectedError",
    "InvalidTransitionError",
    "PaymentVerificationError",
    "PreconditionFailedError",
    "SchemaFetchFailedError",
    "SubmissionRejectedError",
    "SubmissionTransportError",
    "UnknownChannelError",
]
