"""
Services.

Business logic layer.
"""

# Base Service Infrastructure
from app.services.base_service import BaseService, ServiceResult, log_operation

# Payments API
from app.services.payment_verification_service import PaymentVerificationService
from app.services.payout_api_client import PayoutApiClient


__all__ = [
    # Base
    "BaseService",
    "ServiceResult",
    "log_operation",
    # Payments
    "PaymentVerificationService",
    "PayoutApiClient",
]
