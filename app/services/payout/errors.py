"""
Payout workflow errors.

Workflow-level failures. Each one is surfaced to the user as a single
notification and leaves the dialog in a state the user can retry from.
Field-level failures are values (see field_validator), not exceptions.
"""


class PayoutError(Exception):
    """Base exception for payout workflow errors."""

    code = "PAYOUT_ERROR"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__name__)
        self.message = message


class ChannelNotSelectedError(PayoutError):
    """Raised when an action needs a payout channel and none is selected."""

    code = "CHANNEL_NOT_SELECTED"


class UnknownChannelError(PayoutError):
    """Raised when a channel id is neither built-in nor in the catalog."""

    code = "UNKNOWN_CHANNEL"


class SchemaFetchFailedError(PayoutError):
    """Raised by the field-schema provider when fields cannot be loaded."""

    code = "SCHEMA_FETCH_FAILED"


class SubmissionRejectedError(PayoutError):
    """Raised when the gateway refuses the request (business error)."""

    code = "SUBMISSION_REJECTED"


class SubmissionTransportError(PayoutError):
    """Raised when the gateway cannot be reached (network error)."""

    code = "SUBMISSION_TRANSPORT_FAILED"


class CatalogUnavailableError(PayoutError):
    """Raised when balance or channel catalogs cannot be loaded."""

    code = "CATALOG_UNAVAILABLE"


class PaymentVerificationError(PayoutError):
    """Raised when a checkout outcome cannot be reported."""

    code = "PAYMENT_VERIFICATION_FAILED"


class PreconditionFailedError(PayoutError):
    """Raised when the payout dialog may not be opened."""

    code = "PRECONDITION_FAILED"


class InvalidTransitionError(PayoutError):
    """Raised when an action is not allowed in the current phase."""

    code = "INVALID_TRANSITION"
