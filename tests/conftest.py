"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for settings validation
os.environ.setdefault("PAYOUT_API_URL", "https://payments.test/api")
os.environ.setdefault("PAYOUT_API_TOKEN", "test_token")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("MIN_PAYOUT_AMOUNT", "2")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.models import (
    BalanceSource,
    ChannelDescriptor,
    ChannelKind,
    FieldSchema,
    InputKind,
    SubmissionReceipt,
)


@pytest.fixture
def mock_notifier():
    """Mock notification sink."""
    notifier = AsyncMock()
    notifier.success = AsyncMock()
    notifier.error = AsyncMock()
    return notifier


@pytest.fixture
def mock_bot():
    """Mock Telegram Bot."""
    bot = AsyncMock()
    bot.send_message = AsyncMock()
    return bot


@pytest.fixture
def mock_gateway():
    """Mock submission gateway accepting every request."""
    gateway = AsyncMock()
    gateway.submit = AsyncMock(
        return_value=SubmissionReceipt(message="Withdrawal queued")
    )
    return gateway


@pytest.fixture
def balance_source():
    """Game balance with enough funds for a payout."""
    return BalanceSource(
        provider="fortune",
        name="Fortune Slots",
        available_balance=Decimal("50.00"),
    )


@pytest.fixture
def masspay_channel():
    """Dynamic payout network channel."""
    return ChannelDescriptor(
        channel_id="masspay",
        kind=ChannelKind.DYNAMIC,
        display_name="MassPay Bank Transfer",
        fee_amount=Decimal("1.50"),
        thumbnail_url="https://cdn.test/masspay.png",
    )


@pytest.fixture
def masspay_fields():
    """Field list returned by the schema provider for masspay."""
    return [
        FieldSchema(
            token="acct",
            input_kind=InputKind.TEXT,
            label="Account Number",
            validation_pattern=r"^\d{6,17}$",
            field_type="BankAccountNumber",
        ),
        FieldSchema(
            token="acct_type",
            input_kind=InputKind.OPTIONS,
            label="Account Type",
            validation_pattern="Checking|Savings",
            field_type="BankAccountType",
        ),
    ]
