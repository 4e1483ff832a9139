"""
Payment verification service.

Reports the outcome of an external checkout redirect (success, error or
expired page) back to the payments API, once per payment and outcome.
"""

from typing import Protocol

from app.config.constants import MSG_PAYMENT_VERIFICATION_FAILED
from app.models.enums import PaymentOutcome
from app.services.base_service import BaseService, ServiceResult
from app.services.payout.errors import PaymentVerificationError
from app.services.payout.protocols import NotificationSink


class PaymentVerifier(Protocol):
    """Reports checkout outcomes; raises PaymentVerificationError."""

    async def verify_payment(
        self, payment_id: str, outcome: PaymentOutcome
    ) -> None: ...


class PaymentVerificationService(BaseService):
    """Verifies checkout outcomes."""

    def __init__(
        self, verifier: PaymentVerifier, notifier: NotificationSink
    ) -> None:
        super().__init__()
        self.verifier = verifier
        self.notifier = notifier
        self._reported: set[tuple[str, PaymentOutcome]] = set()

    async def verify(
        self, payment_id: str | None, outcome: PaymentOutcome
    ) -> ServiceResult:
        """
        Report a checkout outcome.

        Args:
            payment_id: Payment id from the redirect (None if absent)
            outcome: Which return page the user landed on

        Returns:
            ServiceResult; a missing payment id succeeds without a call
        """
        if not payment_id:
            return ServiceResult.ok()

        key = (payment_id, outcome)
        if key in self._reported:
            return ServiceResult.ok(payment_id)

        try:
            await self.verifier.verify_payment(payment_id, outcome)
        except PaymentVerificationError as e:
            message = e.message or MSG_PAYMENT_VERIFICATION_FAILED
            self.logger.warning(
                f"Verification of payment {payment_id} ({outcome.value}) "
                f"failed: {e}"
            )
            await self.notifier.error(message)
            return ServiceResult.fail(message, e.code)

        self._reported.add(key)
        self.logger.info(f"Payment {payment_id} verified as {outcome.value}")
        return ServiceResult.ok(payment_id)
