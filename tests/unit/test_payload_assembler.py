"""
Unit tests for payout payload assembly.

Tests cover:
- Dynamic channel payloads (ordered token/value list)
- Static channel payloads (declared fixed keys only)
- Payloads restricted to the selected channel
"""

from decimal import Decimal

import pytest

from app.config.constants import CHANNEL_CARD, CHANNEL_SSN_WALLET
from app.config.payout_channels import STATIC_CHANNELS
from app.models import FieldSchema, InputKind, WorkflowPhase, WorkflowState
from app.services.payout import ChannelNotSelectedError, build_payload


@pytest.fixture
def state(balance_source):
    return WorkflowState(
        balance_source=balance_source,
        amount=Decimal("25"),
        phase=WorkflowPhase.FIELD_ENTRY,
    )


class TestDynamicPayload:
    """Test payloads for channels with fetched fields."""

    def test_one_entry_per_field_in_order(self, state, masspay_channel):
        """Every field is sent, in order, empty optional ones included."""
        state.selected_channel_id = masspay_channel.channel_id
        state.fields = [
            FieldSchema("dob", InputKind.DATE, "Date of Birth", current_value="1990-01-01"),
            FieldSchema("memo", InputKind.TEXT, "Memo", is_required=False),
            FieldSchema("acct", InputKind.TEXT, "Account", current_value="123456"),
        ]

        payload = build_payload(state, masspay_channel)

        assert payload.channel_token == "masspay"
        assert payload.body == {
            "amount": Decimal("25"),
            "game_provider": "fortune",
            "token": "masspay",
            "values": [
                {"token": "dob", "value": "1990-01-01"},
                {"token": "memo", "value": ""},
                {"token": "acct", "value": "123456"},
            ],
        }

    def test_static_fields_not_included(self, state, masspay_channel):
        """Leftover static values never reach a dynamic payload."""
        state.selected_channel_id = masspay_channel.channel_id
        state.static_fields = [
            FieldSchema("ssn", InputKind.TEXT, "SSN", current_value="123-45-6789")
        ]

        payload = build_payload(state, masspay_channel)

        assert "ssn" not in payload.body
        assert payload.body["values"] == []


class TestStaticPayload:
    """Test payloads for built-in channels."""

    def test_declared_keys_only(self, state):
        """Static payload carries exactly the channel's fixed keys."""
        channel = STATIC_CHANNELS[CHANNEL_SSN_WALLET]
        state.selected_channel_id = CHANNEL_SSN_WALLET
        state.static_fields = [item.blank_copy() for item in channel.fixed_fields]
        state.static_fields[0].current_value = "123-45-6789"
        state.static_fields[1].current_value = "0x" + "a" * 40
        state.fields = [
            FieldSchema("acct", InputKind.TEXT, "Account", current_value="999")
        ]

        payload = build_payload(state, channel)

        assert payload.channel_token == CHANNEL_SSN_WALLET
        assert payload.body == {
            "amount": Decimal("25"),
            "game_provider": "fortune",
            "ssn": "123-45-6789",
            "wallet_address": "0x" + "a" * 40,
        }

    def test_missing_static_value_sent_empty(self, state):
        """A declared field with no entry is sent as an empty string."""
        channel = STATIC_CHANNELS[CHANNEL_CARD]
        state.selected_channel_id = CHANNEL_CARD

        payload = build_payload(state, channel)

        declared = [item.token for item in channel.fixed_fields]
        assert list(payload.body)[2:] == declared
        assert all(payload.body[token] == "" for token in declared)


class TestChannelRestriction:
    """Test that only the selected channel is assembled."""

    def test_unselected_channel_rejected(self, state, masspay_channel):
        """Assembling for another channel is refused."""
        state.selected_channel_id = CHANNEL_CARD

        with pytest.raises(ChannelNotSelectedError):
            build_payload(state, masspay_channel)

    def test_nothing_selected_rejected(self, state, masspay_channel):
        """Assembling without a selection is refused."""
        with pytest.raises(ChannelNotSelectedError):
            build_payload(state, masspay_channel)
