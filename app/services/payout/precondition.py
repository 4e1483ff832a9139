"""
Payout precondition gate.

Decides whether the payout dialog may open for a balance source:
- Identity must be verified when the source requires it
- Amount must be a number of at least the minimum payout
- Amount must not exceed the available balance
"""

from decimal import Decimal, InvalidOperation

from loguru import logger

from app.config.constants import MSG_MIN_PAYOUT, MSG_VERIFICATION_REQUIRED
from app.config.settings import settings
from app.models.payout import BalanceSource
from app.services.payout.protocols import BalanceCatalogProvider


class PayoutPreconditionGate:
    """Checks run before a payout dialog is allowed to open."""

    def __init__(self, min_amount: Decimal | None = None) -> None:
        """
        Initialize gate.

        Args:
            min_amount: Minimum payout (defaults to settings)
        """
        self.min_amount = (
            settings.min_payout_amount if min_amount is None else min_amount
        )

    async def load_sources(
        self, catalog: BalanceCatalogProvider
    ) -> list[BalanceSource]:
        """
        Load balance sources that hold at least the minimum payout.

        Args:
            catalog: Provider of the user's game balances

        Returns:
            Sources a payout dialog can be opened for, in catalog order
        """
        sources = await catalog.get_balance_sources()
        withdrawable = [
            source for source in sources
            if source.available_balance >= self.min_amount
        ]
        logger.debug(
            f"{len(withdrawable)} of {len(sources)} balance sources "
            f"hold the minimum payout"
        )
        return withdrawable

    def check(
        self,
        source: BalanceSource,
        amount: Decimal | int | str,
        is_verified: bool = True,
    ) -> tuple[bool, Decimal | None, str | None]:
        """
        Check if a payout of amount from source may be requested.

        Args:
            source: Balance being withdrawn from
            amount: Requested amount
            is_verified: Whether the user's identity is verified

        Returns:
            Tuple of (can_open, parsed_amount, error_message)
        """
        if source.verification_required and not is_verified:
            logger.info(
                f"Payout dialog blocked for {source.provider}: "
                f"verification required"
            )
            return False, None, MSG_VERIFICATION_REQUIRED

        min_error = MSG_MIN_PAYOUT.format(amount=self.min_amount)

        try:
            parsed = Decimal(str(amount).strip())
        except InvalidOperation:
            return False, None, min_error

        if not parsed.is_finite() or parsed < self.min_amount:
            return False, None, min_error

        if parsed > source.available_balance:
            return False, None, (
                f"Insufficient balance. "
                f"Available: ${source.available_balance:.2f}"
            )

        return True, parsed, None
