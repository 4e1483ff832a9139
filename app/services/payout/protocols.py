"""
Payout workflow boundaries.

The workflow only talks to these interfaces; the payments API client and
the notification sinks implement them.
"""

from typing import Protocol

from app.models.payout import (
    BalanceSource,
    ChannelDescriptor,
    FieldSchema,
    SubmissionPayload,
    SubmissionReceipt,
)


class BalanceCatalogProvider(Protocol):
    """Read-only list of balances the user can withdraw from."""

    async def get_balance_sources(self) -> list[BalanceSource]: ...


class ChannelCatalogProvider(Protocol):
    """Read-only list of dynamic payout channels."""

    async def get_payment_methods(self) -> list[ChannelDescriptor]: ...


class FieldSchemaProvider(Protocol):
    """
    Field list of a dynamic channel.

    Raises SchemaFetchFailedError when the list cannot be loaded.
    """

    async def fetch_fields(self, channel_token: str) -> list[FieldSchema]: ...


class SubmissionGateway(Protocol):
    """
    Performs the payout request.

    Raises SubmissionRejectedError or SubmissionTransportError on failure.
    """

    async def submit(self, payload: SubmissionPayload) -> SubmissionReceipt: ...


class NotificationSink(Protocol):
    """Shows transient messages to the user."""

    async def success(self, message: str) -> None: ...

    async def error(self, message: str) -> None: ...
