"""
Payout workflow state machine.

Drives one payout dialog:
idle -> channel_selection -> (field_fetching ->) field_entry
     -> submitting -> succeeded | failed

Workflow-level errors are turned into one notification and a failed
ServiceResult; the dialog always stays in a state the user can retry from.
"""

from datetime import date
from decimal import Decimal
from typing import assert_never

from app.config.constants import (
    CHANNEL_SSN_WALLET,
    DATE_VALUE_FORMAT,
    FIELD_TYPE_CARD_EXPIRATION,
    MSG_FIELDS_FETCH_FAILED,
    MSG_FIX_FIELDS,
    MSG_SELECT_CHANNEL,
    MSG_SELFIE_REQUIRED,
    MSG_SUBMIT_FAILED,
    MSG_SUBMIT_SUCCESS,
)
from app.config.payout_channels import WALLET_ADDRESS_TOKEN
from app.models.enums import ChannelKind, InputKind, WorkflowPhase
from app.models.payout import (
    BalanceSource,
    ChannelDescriptor,
    FieldSchema,
    WorkflowState,
)
from app.services.base_service import BaseService, ServiceResult
from app.services.payout.channel_registry import ChannelRegistry
from app.services.payout.errors import (
    ChannelNotSelectedError,
    InvalidTransitionError,
    PreconditionFailedError,
    SubmissionRejectedError,
    SubmissionTransportError,
)
from app.services.payout.field_validator import (
    FieldError,
    validate_field,
    validate_fields,
)
from app.services.payout.payload_assembler import build_payload
from app.services.payout.precondition import PayoutPreconditionGate
from app.services.payout.protocols import (
    FieldSchemaProvider,
    NotificationSink,
    SubmissionGateway,
)
from app.services.payout.schema_fetcher import FieldSchemaFetcher


# Result codes that are not PayoutError codes
CODE_STALE_RESULT = "STALE_RESULT"
CODE_FIELD_VALIDATION = "FIELD_VALIDATION"
CODE_SELFIE_REQUIRED = "SELFIE_REQUIRED"
CODE_SUBMISSION_IN_PROGRESS = "SUBMISSION_IN_PROGRESS"
CODE_SUBMISSION_FAILED = "SUBMISSION_FAILED"

# Phases in which the selected channel may change
_SELECTION_PHASES = frozenset({
    WorkflowPhase.CHANNEL_SELECTION,
    WorkflowPhase.FIELD_FETCHING,
    WorkflowPhase.FIELD_ENTRY,
})


class PayoutWorkflow(BaseService):
    """State machine of one user's payout dialog."""

    def __init__(
        self,
        registry: ChannelRegistry,
        field_provider: FieldSchemaProvider,
        gateway: SubmissionGateway,
        notifier: NotificationSink,
        gate: PayoutPreconditionGate | None = None,
    ) -> None:
        """
        Initialize payout workflow.

        Args:
            registry: Selectable channels
            field_provider: Field-schema provider for dynamic channels
            gateway: Submission gateway
            notifier: Sink for transient user messages
            gate: Precondition gate (defaults to settings minimum)
        """
        super().__init__()
        self.registry = registry
        self.gateway = gateway
        self.notifier = notifier
        self.gate = gate or PayoutPreconditionGate()
        self._fetcher = FieldSchemaFetcher(field_provider)
        self._state: WorkflowState | None = None
        # Bumped on open/close so late results of a closed dialog are ignored
        self._session = 0
        # SUCCEEDED or FAILED after the latest submission
        self.last_outcome: WorkflowPhase | None = None

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def state(self) -> WorkflowState | None:
        return self._state

    @property
    def phase(self) -> WorkflowPhase:
        if self._state is None:
            return WorkflowPhase.IDLE
        return self._state.phase

    @property
    def selected_channel(self) -> ChannelDescriptor | None:
        """Descriptor of the selected channel (fee is informational)."""
        if self._state is None or self._state.selected_channel_id is None:
            return None
        return self.registry.resolve(self._state.selected_channel_id)

    @property
    def can_submit(self) -> bool:
        """Submit is enabled in field entry with a channel chosen."""
        return (
            self._state is not None
            and self._state.selected_channel_id is not None
            and self._state.phase is WorkflowPhase.FIELD_ENTRY
        )

    # ------------------------------------------------------------------
    # Dialog lifecycle
    # ------------------------------------------------------------------

    async def open(
        self,
        source: BalanceSource,
        amount: Decimal | int | str,
        is_verified: bool = True,
        saved_wallet_address: str | None = None,
    ) -> ServiceResult:
        """
        Open the payout dialog for a balance source.

        The precondition gate runs first; when it rejects, the dialog
        stays closed and the reason is shown to the user.

        Args:
            source: Balance being withdrawn from
            amount: Requested amount
            is_verified: Whether the user's identity is verified
            saved_wallet_address: Address to pre-fill for wallet payouts

        Returns:
            ServiceResult with the new WorkflowState as data
        """
        if self.phase is WorkflowPhase.SUBMITTING:
            raise InvalidTransitionError("Cannot reopen while submitting")

        can_open, parsed_amount, error = self.gate.check(
            source, amount, is_verified
        )
        if not can_open or parsed_amount is None:
            await self.notifier.error(error or MSG_SUBMIT_FAILED)
            return ServiceResult.fail(error, PreconditionFailedError.code)

        self._reset()
        self._state = WorkflowState(
            balance_source=source,
            amount=parsed_amount,
            saved_wallet_address=saved_wallet_address or None,
        )
        self.logger.info(
            f"Payout dialog opened for {source.provider}, amount={parsed_amount}"
        )
        return ServiceResult.ok(self._state)

    def close(self) -> None:
        """Close the dialog and drop all entered state."""
        if self._state is not None:
            self.logger.info("Payout dialog closed")
        self._reset()

    def _reset(self) -> None:
        self._fetcher.invalidate()
        self._session += 1
        self._state = None

    def _require_state(self) -> WorkflowState:
        if self._state is None:
            raise InvalidTransitionError("Payout dialog is not open")
        return self._state

    # ------------------------------------------------------------------
    # Channel selection
    # ------------------------------------------------------------------

    def select_channel(self, channel_id: str) -> ChannelDescriptor:
        """
        Select a payout channel.

        Clears fields and errors of the previous channel and makes any
        in-flight field fetch stale. Static channels go straight to
        field entry; dynamic channels wait for continue_withdrawal().

        Raises:
            UnknownChannelError: If channel_id is not known
            InvalidTransitionError: If the dialog is closed or submitting
        """
        state = self._require_state()
        if state.phase not in _SELECTION_PHASES:
            raise InvalidTransitionError(
                f"Cannot change channel in phase {state.phase.value}"
            )

        channel = self.registry.resolve(channel_id)

        self._fetcher.invalidate()
        state.clear_entry()
        state.selected_channel_id = channel.channel_id

        match channel.kind:
            case ChannelKind.STATIC:
                self._install_static_fields(state, channel)
                state.phase = WorkflowPhase.FIELD_ENTRY
            case ChannelKind.DYNAMIC:
                state.phase = WorkflowPhase.CHANNEL_SELECTION
            case _:
                assert_never(channel.kind)

        self.logger.debug(f"Selected payout channel {channel.channel_id}")
        return channel

    def _install_static_fields(
        self, state: WorkflowState, channel: ChannelDescriptor
    ) -> None:
        state.static_fields = [item.blank_copy() for item in channel.fixed_fields]

        if channel.channel_id == CHANNEL_SSN_WALLET and state.saved_wallet_address:
            wallet = state.find_field(WALLET_ADDRESS_TOKEN)
            if wallet is not None:
                wallet.current_value = state.saved_wallet_address
                state.locked_tokens.add(WALLET_ADDRESS_TOKEN)

    async def continue_withdrawal(self) -> ServiceResult:
        """
        Load the field list of the selected dynamic channel.

        A newer fetch, a channel switch or closing the dialog while this
        call is pending makes its result stale; stale results never
        touch the state.

        Returns:
            ServiceResult with the installed fields as data
        """
        state = self._require_state()
        if state.phase is WorkflowPhase.SUBMITTING:
            raise InvalidTransitionError("Cannot load fields while submitting")

        channel_id = state.selected_channel_id
        if channel_id is None:
            await self.notifier.error(MSG_SELECT_CHANNEL)
            return ServiceResult.fail(
                MSG_SELECT_CHANNEL, ChannelNotSelectedError.code
            )

        channel = self.registry.resolve(channel_id)
        match channel.kind:
            case ChannelKind.STATIC:
                # Fixed fields are already installed
                return ServiceResult.ok(state.static_fields)
            case ChannelKind.DYNAMIC:
                pass
            case _:
                assert_never(channel.kind)

        state.fields = []
        state.field_errors = {}
        state.verification_links = {}
        state.phase = WorkflowPhase.FIELD_FETCHING

        result = await self._fetcher.fetch(channel_id)

        if not self._fetcher.is_current(result):
            self.logger.info(
                f"Discarding stale field fetch for channel {channel_id}"
            )
            return ServiceResult.fail(None, CODE_STALE_RESULT)

        if not result.ok:
            state.phase = WorkflowPhase.CHANNEL_SELECTION
            message = result.error.message or MSG_FIELDS_FETCH_FAILED
            await self.notifier.error(message)
            return ServiceResult.fail(message, result.error.code)

        state.fields = result.fields
        state.verification_links = result.verification_links
        state.phase = WorkflowPhase.FIELD_ENTRY
        self.logger.debug(
            f"Installed {len(result.fields)} fields for channel {channel_id}"
        )
        return ServiceResult.ok(state.fields)

    def back_to_channels(self) -> None:
        """Drop loaded fields and return to channel selection."""
        state = self._require_state()
        if state.phase not in _SELECTION_PHASES:
            raise InvalidTransitionError(
                f"Cannot go back in phase {state.phase.value}"
            )

        self._fetcher.invalidate()
        state.clear_entry()
        state.phase = WorkflowPhase.CHANNEL_SELECTION

    # ------------------------------------------------------------------
    # Field entry
    # ------------------------------------------------------------------

    def set_field_value(self, token: str, value: str | date) -> FieldError | None:
        """
        Update a field and re-validate it.

        Args:
            token: Field token of the selected channel
            value: Entered text, or a date for date fields

        Returns:
            FieldError if the new value is invalid, None otherwise

        Raises:
            KeyError: If no field with this token is in scope
            InvalidTransitionError: If not in field entry or field is locked
        """
        state = self._require_state()
        if state.phase is not WorkflowPhase.FIELD_ENTRY:
            raise InvalidTransitionError(
                f"Cannot edit fields in phase {state.phase.value}"
            )

        field = state.find_field(token)
        if field is None:
            raise KeyError(token)
        if token in state.locked_tokens:
            raise InvalidTransitionError(f"Field {token} is locked")

        field.current_value = _normalize_value(field, value)

        error = validate_field(field)
        if error:
            state.field_errors[token] = error.message
        else:
            state.field_errors.pop(token, None)
        return error

    def change_wallet_address(self) -> None:
        """
        Unlock the pre-filled wallet address and empty it.

        The user has to enter a new address before submitting.
        """
        state = self._require_state()
        if (
            state.phase is not WorkflowPhase.FIELD_ENTRY
            or state.selected_channel_id != CHANNEL_SSN_WALLET
        ):
            raise InvalidTransitionError("No wallet address to change")

        wallet = state.find_field(WALLET_ADDRESS_TOKEN)
        if wallet is None:
            raise InvalidTransitionError("No wallet address to change")

        wallet.current_value = ""
        state.locked_tokens.discard(WALLET_ADDRESS_TOKEN)
        state.field_errors.pop(WALLET_ADDRESS_TOKEN, None)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self) -> ServiceResult:
        """
        Validate every field in scope and send the payout request.

        Invalid fields are all reported at once and the gateway is not
        called. On success the dialog closes; on failure the entered
        values are kept so the user can retry.

        Returns:
            ServiceResult with the SubmissionReceipt as data
        """
        state = self._require_state()

        if state.phase is WorkflowPhase.SUBMITTING:
            self.logger.warning("Submit ignored: submission already in progress")
            return ServiceResult.fail(None, CODE_SUBMISSION_IN_PROGRESS)

        if state.selected_channel_id is None:
            await self.notifier.error(MSG_SELECT_CHANNEL)
            return ServiceResult.fail(
                MSG_SELECT_CHANNEL, ChannelNotSelectedError.code
            )

        if state.phase is not WorkflowPhase.FIELD_ENTRY:
            raise InvalidTransitionError(
                f"Cannot submit in phase {state.phase.value}"
            )

        if state.verification_links:
            await self.notifier.error(MSG_SELFIE_REQUIRED)
            return ServiceResult.fail(
                MSG_SELFIE_REQUIRED,
                CODE_SELFIE_REQUIRED,
                data=dict(state.verification_links),
            )

        errors = validate_fields(state.fields_in_scope())
        if errors:
            state.field_errors = errors
            await self.notifier.error(MSG_FIX_FIELDS)
            return ServiceResult.fail(
                MSG_FIX_FIELDS, CODE_FIELD_VALIDATION, data=dict(errors)
            )
        state.field_errors = {}

        channel = self.registry.resolve(state.selected_channel_id)
        payload = build_payload(state, channel)

        state.phase = WorkflowPhase.SUBMITTING
        self.last_outcome = None
        session = self._session
        self.logger.info(
            f"Submitting payout via {channel.channel_id}: "
            f"amount={state.amount}, source={state.balance_source.provider}"
        )

        try:
            receipt = await self.gateway.submit(payload)
        except (SubmissionRejectedError, SubmissionTransportError) as e:
            self.logger.warning(f"Payout submission failed ({e.code}): {e}")
            return await self._submission_failed(
                state, session, e.message or MSG_SUBMIT_FAILED, e.code
            )
        except Exception as e:
            self.logger.exception(f"Unexpected payout gateway error: {e}")
            return await self._submission_failed(
                state, session, MSG_SUBMIT_FAILED, CODE_SUBMISSION_FAILED
            )
        finally:
            # Cancelled submissions must not leave the dialog locked
            if session == self._session and state.phase is WorkflowPhase.SUBMITTING:
                state.phase = WorkflowPhase.FIELD_ENTRY

        if session != self._session:
            self.logger.info("Ignoring success of closed dialog")
            return ServiceResult.fail(None, CODE_STALE_RESULT, data=receipt)

        self.last_outcome = WorkflowPhase.SUCCEEDED
        self.logger.info(f"Payout accepted via {channel.channel_id}")
        self._reset()
        await self.notifier.success(receipt.message or MSG_SUBMIT_SUCCESS)
        return ServiceResult.ok(receipt)

    async def _submission_failed(
        self, state: WorkflowState, session: int, message: str, code: str
    ) -> ServiceResult:
        if session != self._session:
            self.logger.info(f"Ignoring failure of closed dialog: {message}")
            return ServiceResult.fail(None, CODE_STALE_RESULT)

        self.last_outcome = WorkflowPhase.FAILED
        state.phase = WorkflowPhase.FIELD_ENTRY
        await self.notifier.error(message)
        return ServiceResult.fail(message, code)


def _normalize_value(field: FieldSchema, value: str | date) -> str:
    if not isinstance(value, date):
        return value

    match field.input_kind:
        case InputKind.DATE:
            if field.field_type == FIELD_TYPE_CARD_EXPIRATION:
                return value.strftime("%m/%y")
            return value.strftime(DATE_VALUE_FORMAT)
        case InputKind.TEXT | InputKind.OPTIONS:
            raise TypeError(f"Field {field.token} does not take a date")
        case _:
            assert_never(field.input_kind)
