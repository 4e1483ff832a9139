"""
Application constants.

Centralized constants for the payout workflow.
"""

from decimal import Decimal

# ========================================================================
# PAYOUT RULES
# ========================================================================

# Minimum balance required before a payout dialog may open ($2)
DEFAULT_MIN_PAYOUT_AMOUNT = Decimal("2")

# Payments API HTTP timeout (in seconds)
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0

# ========================================================================
# STATIC CHANNELS
# ========================================================================

# Identity + crypto wallet payout
CHANNEL_SSN_WALLET = "ssn_wallet"

# Card payout with billing address
CHANNEL_CARD = "card"

# Field types reported by the field-schema provider
FIELD_TYPE_ID_SELFIE = "IDSelfieCollection"
FIELD_TYPE_CARD_EXPIRATION = "CardExpiration"

# Date fields are submitted in ISO format
DATE_VALUE_FORMAT = "%Y-%m-%d"

# ========================================================================
# USER MESSAGES
# ========================================================================

MSG_MIN_PAYOUT = "Withdraw Amount must be at least ${amount}"
MSG_VERIFICATION_REQUIRED = (
    "Please verify your identity before requesting a withdrawal"
)
MSG_SELECT_CHANNEL = "Please select a payment method"
MSG_FIELDS_FETCH_FAILED = "Failed to get payment fields. Please try again."
MSG_FIX_FIELDS = "Please fill in all required fields correctly"
MSG_SELFIE_REQUIRED = (
    "Please complete identity verification using the provided link, "
    "then continue your withdrawal"
)
MSG_SUBMIT_SUCCESS = "Withdraw request submitted successfully!"
MSG_SUBMIT_FAILED = "Something went wrong"
MSG_PAYMENT_VERIFICATION_FAILED = (
    "Payment verification failed. Please contact support."
)

# ========================================================================
# NOTIFICATIONS
# ========================================================================

# Telegram send timeout (in seconds)
TELEGRAM_TIMEOUT = 10.0
