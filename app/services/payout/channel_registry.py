"""
Payout channel registry.

Merges built-in static channels with the dynamic channel catalog and
resolves a channel id to its descriptor.
"""

from loguru import logger

from app.config.payout_channels import STATIC_CHANNELS
from app.models.payout import ChannelDescriptor
from app.services.payout.errors import UnknownChannelError
from app.services.payout.protocols import ChannelCatalogProvider


class ChannelRegistry:
    """Known payout channels for one dialog."""

    def __init__(
        self,
        catalog: ChannelCatalogProvider | None = None,
        static_channels: dict[str, ChannelDescriptor] | None = None,
    ) -> None:
        """
        Initialize channel registry.

        Args:
            catalog: Provider of dynamic channels (None for static only)
            static_channels: Built-in channels (defaults to STATIC_CHANNELS)
        """
        self._catalog = catalog
        self._static = dict(
            STATIC_CHANNELS if static_channels is None else static_channels
        )
        self._dynamic: dict[str, ChannelDescriptor] = {}

    async def load_catalog(self) -> list[ChannelDescriptor]:
        """
        Load dynamic channels from the catalog provider.

        Replaces previously loaded entries. Static channels win on id
        collisions.

        Returns:
            Dynamic channels in catalog order
        """
        if self._catalog is None:
            return []

        methods = await self._catalog.get_payment_methods()
        self._dynamic = {}
        for method in methods:
            if method.channel_id in self._static:
                logger.warning(
                    f"Catalog channel {method.channel_id} shadows a built-in "
                    f"channel, ignoring"
                )
                continue
            self._dynamic[method.channel_id] = method

        logger.debug(f"Loaded {len(self._dynamic)} dynamic payout channels")
        return list(self._dynamic.values())

    def channels(self) -> list[ChannelDescriptor]:
        """All selectable channels, built-in first."""
        return [*self._static.values(), *self._dynamic.values()]

    def resolve(self, channel_id: str) -> ChannelDescriptor:
        """
        Get channel descriptor by id.

        Raises:
            UnknownChannelError: If the id is not known
        """
        channel = self._static.get(channel_id) or self._dynamic.get(channel_id)
        if channel is None:
            raise UnknownChannelError(f"Unknown payout channel: {channel_id}")
        return channel
