"""
Payout payload assembly.

Builds the channel-specific request body sent to the submission gateway.
Only fields of the channel passed in are read.
"""

from typing import Any, assert_never

from app.models.enums import ChannelKind
from app.models.payout import ChannelDescriptor, SubmissionPayload, WorkflowState
from app.services.payout.errors import ChannelNotSelectedError


def build_payload(
    state: WorkflowState, channel: ChannelDescriptor
) -> SubmissionPayload:
    """
    Build the submission payload for the selected channel.

    Static channels send their declared fixed fields by key. Dynamic
    channels send the channel token and every fetched field as an ordered
    list of token/value pairs, empty optional ones included.

    Args:
        state: Workflow state with entered values
        channel: Descriptor of the selected channel

    Returns:
        SubmissionPayload routed by the channel id

    Raises:
        ChannelNotSelectedError: If channel is not the selected one
    """
    if state.selected_channel_id != channel.channel_id:
        raise ChannelNotSelectedError(
            f"Channel {channel.channel_id} is not selected"
        )

    body: dict[str, Any] = {
        "amount": state.amount,
        "game_provider": state.balance_source.provider,
    }

    match channel.kind:
        case ChannelKind.STATIC:
            entered = {item.token: item.current_value for item in state.static_fields}
            for declared in channel.fixed_fields:
                body[declared.token] = entered.get(declared.token, "")
        case ChannelKind.DYNAMIC:
            body["token"] = channel.channel_id
            body["values"] = [
                {"token": item.token, "value": item.current_value}
                for item in state.fields
            ]
        case _:
            assert_never(channel.kind)

    return SubmissionPayload(channel_token=channel.channel_id, body=body)
