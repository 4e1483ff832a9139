"""Unit tests for the payout channel registry."""

from unittest.mock import AsyncMock

import pytest

from app.config.constants import CHANNEL_CARD, CHANNEL_SSN_WALLET
from app.models import ChannelDescriptor, ChannelKind
from app.services.payout import ChannelRegistry, UnknownChannelError


@pytest.fixture
def catalog(masspay_channel):
    catalog = AsyncMock()
    catalog.get_payment_methods = AsyncMock(return_value=[masspay_channel])
    return catalog


def test_static_channels_without_catalog() -> None:
    """Built-in channels resolve without loading anything."""
    registry = ChannelRegistry()

    assert registry.resolve(CHANNEL_SSN_WALLET).kind is ChannelKind.STATIC
    assert registry.resolve(CHANNEL_CARD).fixed_fields
    with pytest.raises(UnknownChannelError):
        registry.resolve("masspay")


@pytest.mark.asyncio
async def test_load_catalog(catalog, masspay_channel) -> None:
    """Dynamic channels resolve after the catalog is loaded."""
    registry = ChannelRegistry(catalog)

    loaded = await registry.load_catalog()

    assert loaded == [masspay_channel]
    assert registry.resolve("masspay") is masspay_channel
    assert [c.channel_id for c in registry.channels()] == [
        CHANNEL_SSN_WALLET,
        CHANNEL_CARD,
        "masspay",
    ]


@pytest.mark.asyncio
async def test_reload_replaces_catalog(catalog, masspay_channel) -> None:
    """Reloading drops channels missing from the new catalog."""
    registry = ChannelRegistry(catalog)
    await registry.load_catalog()

    catalog.get_payment_methods.return_value = []
    await registry.load_catalog()

    with pytest.raises(UnknownChannelError):
        registry.resolve("masspay")


@pytest.mark.asyncio
async def test_catalog_cannot_shadow_static(catalog) -> None:
    """A catalog entry with a built-in id is ignored."""
    catalog.get_payment_methods.return_value = [
        ChannelDescriptor(CHANNEL_CARD, ChannelKind.DYNAMIC, "Fake card")
    ]
    registry = ChannelRegistry(catalog)

    assert await registry.load_catalog() == []
    assert registry.resolve(CHANNEL_CARD).kind is ChannelKind.STATIC
