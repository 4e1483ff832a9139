"""
Payout workflow assembly.

Wires a PayoutWorkflow to the payments API client and loads the dynamic
channel catalog.
"""

from decimal import Decimal

from app.services.payout.channel_registry import ChannelRegistry
from app.services.payout.precondition import PayoutPreconditionGate
from app.services.payout.protocols import NotificationSink
from app.services.payout.workflow import PayoutWorkflow
from app.services.payout_api_client import PayoutApiClient


async def create_payout_workflow(
    client: PayoutApiClient,
    notifier: NotificationSink,
    min_amount: Decimal | None = None,
) -> PayoutWorkflow:
    """
    Create a workflow backed by the payments API.

    Args:
        client: Payments API client (channel catalog, fields, gateway)
        notifier: Sink for user messages
        min_amount: Minimum payout (defaults to settings)

    Returns:
        PayoutWorkflow with the channel catalog loaded

    Raises:
        CatalogUnavailableError: If the channel catalog cannot be loaded
    """
    registry = ChannelRegistry(client)
    await registry.load_catalog()

    return PayoutWorkflow(
        registry=registry,
        field_provider=client,
        gateway=client,
        notifier=notifier,
        gate=PayoutPreconditionGate(min_amount),
    )
