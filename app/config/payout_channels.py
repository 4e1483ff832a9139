"""
Single source of truth for built-in (static) payout channels.

Static channels carry a fixed field list defined here. Their field tokens
are also the keys sent to the submission gateway.
"""

from app.config.constants import (
    CHANNEL_CARD,
    CHANNEL_SSN_WALLET,
    FIELD_TYPE_CARD_EXPIRATION,
)
from app.models.enums import ChannelKind, InputKind
from app.models.payout import ChannelDescriptor, FieldSchema


# Field tokens with special handling
WALLET_ADDRESS_TOKEN = "wallet_address"


SSN_WALLET_FIELDS: tuple[FieldSchema, ...] = (
    FieldSchema(
        token="ssn",
        input_kind=InputKind.TEXT,
        label="Social Security Number",
        validation_pattern=r"^\d{3}-?\d{2}-?\d{4}$",
        expected_value_hint="123-45-6789",
    ),
    FieldSchema(
        token=WALLET_ADDRESS_TOKEN,
        input_kind=InputKind.TEXT,
        label="Wallet Address",
        validation_pattern=r"^[A-Za-z0-9]{26,64}$",
        expected_value_hint="0x...",
    ),
)

CARD_FIELDS: tuple[FieldSchema, ...] = (
    FieldSchema(
        token="cardholder_name",
        input_kind=InputKind.TEXT,
        label="Cardholder Name",
        validation_pattern=r"^[\w' .-]{2,64}$",
        expected_value_hint="John Doe",
    ),
    FieldSchema(
        token="card_number",
        input_kind=InputKind.TEXT,
        label="Card Number",
        validation_pattern=r"^\d{13,19}$",
        expected_value_hint="4111111111111111",
    ),
    FieldSchema(
        token="card_expiry",
        input_kind=InputKind.DATE,
        label="Expiration Date",
        validation_pattern=r"^(0[1-9]|1[0-2])/\d{2}$",
        expected_value_hint="MM/YY",
        field_type=FIELD_TYPE_CARD_EXPIRATION,
    ),
    FieldSchema(
        token="cvv",
        input_kind=InputKind.TEXT,
        label="CVV",
        validation_pattern=r"^\d{3,4}$",
        expected_value_hint="123",
    ),
    FieldSchema(
        token="billing_address",
        input_kind=InputKind.TEXT,
        label="Billing Address",
        expected_value_hint="123 Main St",
    ),
    FieldSchema(
        token="billing_address2",
        input_kind=InputKind.TEXT,
        label="Address Line 2",
        is_required=False,
        expected_value_hint="Apt 4B",
    ),
    FieldSchema(
        token="billing_city",
        input_kind=InputKind.TEXT,
        label="City",
    ),
    FieldSchema(
        token="billing_zip",
        input_kind=InputKind.TEXT,
        label="ZIP Code",
        validation_pattern=r"^\d{5}(-\d{4})?$",
        expected_value_hint="10001",
    ),
    FieldSchema(
        token="billing_country",
        input_kind=InputKind.OPTIONS,
        label="Country",
        validation_pattern="US|CA",
    ),
)


STATIC_CHANNELS: dict[str, ChannelDescriptor] = {
    CHANNEL_SSN_WALLET: ChannelDescriptor(
        channel_id=CHANNEL_SSN_WALLET,
        kind=ChannelKind.STATIC,
        display_name="Crypto Wallet",
        fixed_fields=SSN_WALLET_FIELDS,
    ),
    CHANNEL_CARD: ChannelDescriptor(
        channel_id=CHANNEL_CARD,
        kind=ChannelKind.STATIC,
        display_name="Debit Card",
        fixed_fields=CARD_FIELDS,
    ),
}
