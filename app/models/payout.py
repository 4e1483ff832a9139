"""
Payout domain models.

Plain dataclasses describing balance sources, payout channels, their
fields and the state of one payout dialog.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any

from app.models.enums import ChannelKind, InputKind, WorkflowPhase


@dataclass
class FieldSchema:
    """One input a payout channel requires."""

    token: str
    input_kind: InputKind
    label: str
    is_required: bool = True
    validation_pattern: str | None = None
    expected_value_hint: str = ""
    current_value: str = ""
    field_type: str | None = None  # e.g. BankAccountNumber, CardExpiration

    @property
    def is_blank(self) -> bool:
        """True when nothing but whitespace has been entered."""
        return not self.current_value or not self.current_value.strip()

    @property
    def options(self) -> list[str]:
        """Allowed values of an options field, in provider order."""
        if self.input_kind is not InputKind.OPTIONS or not self.validation_pattern:
            return []
        return self.validation_pattern.split("|")

    def blank_copy(self) -> "FieldSchema":
        """Copy of this field with an empty value."""
        return replace(self, current_value="")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "FieldSchema":
        """
        Build a field from a field-schema provider entry.

        Args:
            data: Raw entry with input_type, token, label, validation, ...

        Returns:
            FieldSchema with the provider's value (or empty string)

        Raises:
            ValueError: If input_type is not a known kind or token is missing
        """
        token = data.get("token")
        if not token:
            raise ValueError("Payment field without token")

        input_kind = InputKind(data.get("input_type"))

        if "is_required" in data:
            is_required = bool(data["is_required"])
        else:
            is_required = not bool(data.get("is_optional", False))

        return cls(
            token=str(token),
            input_kind=input_kind,
            label=str(data.get("label") or token),
            is_required=is_required,
            validation_pattern=data.get("validation") or None,
            expected_value_hint=str(data.get("expected_value") or ""),
            current_value=str(data.get("value") or ""),
            field_type=data.get("type"),
        )


@dataclass(frozen=True)
class ChannelDescriptor:
    """A payout destination and the field set it needs."""

    channel_id: str
    kind: ChannelKind
    display_name: str
    fee_amount: Decimal | None = None
    thumbnail_url: str | None = None
    fixed_fields: tuple[FieldSchema, ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ChannelDescriptor":
        """
        Build a dynamic channel from a channel catalog entry.

        The destination token is the channel id used for routing.
        """
        token = data.get("destination_token")
        if not token:
            raise ValueError("Payment method without destination_token")

        fee = data.get("fee")
        try:
            fee_amount = Decimal(str(fee)) if fee is not None else None
        except InvalidOperation:
            fee_amount = None

        return cls(
            channel_id=str(token),
            kind=ChannelKind.DYNAMIC,
            display_name=str(data.get("name") or token),
            fee_amount=fee_amount,
            thumbnail_url=data.get("thumbnail_url") or None,
        )


@dataclass(frozen=True)
class BalanceSource:
    """A game balance the user can withdraw from."""

    provider: str
    name: str
    available_balance: Decimal
    verification_required: bool = False


@dataclass(frozen=True)
class SubmissionPayload:
    """Request body for the submission gateway, routed by channel token."""

    channel_token: str
    body: dict[str, Any]


@dataclass(frozen=True)
class SubmissionReceipt:
    """Gateway acknowledgement of an accepted payout request."""

    message: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class WorkflowState:
    """State of one open payout dialog."""

    balance_source: BalanceSource
    amount: Decimal
    phase: WorkflowPhase = WorkflowPhase.CHANNEL_SELECTION
    selected_channel_id: str | None = None
    fields: list[FieldSchema] = field(default_factory=list)
    static_fields: list[FieldSchema] = field(default_factory=list)
    field_errors: dict[str, str] = field(default_factory=dict)
    locked_tokens: set[str] = field(default_factory=set)
    # Fields completed outside the dialog (token -> link to the step)
    verification_links: dict[str, str] = field(default_factory=dict)
    saved_wallet_address: str | None = None

    def fields_in_scope(self) -> list[FieldSchema]:
        """Static fixed fields followed by fetched dynamic fields."""
        return [*self.static_fields, *self.fields]

    def find_field(self, token: str) -> FieldSchema | None:
        """Look up a field of the selected channel by token."""
        for item in self.fields_in_scope():
            if item.token == token:
                return item
        return None

    def clear_entry(self) -> None:
        """Drop everything entered for the selected channel."""
        self.fields = []
        self.static_fields = []
        self.field_errors = {}
        self.locked_tokens = set()
        self.verification_links = {}
