"""
Field-schema fetch coordination.

Every fetch gets a generation number. Starting a new fetch or calling
invalidate() makes older generations stale; the workflow applies a
result only while it is current.
"""

from dataclasses import dataclass, field

from loguru import logger

from app.config.constants import FIELD_TYPE_ID_SELFIE
from app.models.payout import FieldSchema
from app.services.payout.errors import SchemaFetchFailedError
from app.services.payout.protocols import FieldSchemaProvider


@dataclass
class FetchResult:
    """Outcome of one field-schema fetch."""

    channel_token: str
    generation: int
    fields: list[FieldSchema] = field(default_factory=list)
    verification_links: dict[str, str] = field(default_factory=dict)
    error: SchemaFetchFailedError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FieldSchemaFetcher:
    """Fetches channel fields, tracking which fetch is authoritative."""

    def __init__(self, provider: FieldSchemaProvider) -> None:
        self._provider = provider
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> None:
        """Make any in-flight fetch stale."""
        self._generation += 1

    def is_current(self, result: FetchResult) -> bool:
        return result.generation == self._generation

    async def fetch(self, channel_token: str) -> FetchResult:
        """
        Fetch the field list of a dynamic channel.

        Returned fields are fresh copies with empty values. Values the
        provider sends for identity selfie fields are links to an
        external step and are kept in verification_links instead.

        Args:
            channel_token: Destination token of the channel

        Returns:
            FetchResult; check is_current() before applying it
        """
        self._generation += 1
        generation = self._generation

        try:
            raw_fields = await self._provider.fetch_fields(channel_token)
            fields, links = _prepare_fields(raw_fields)
        except SchemaFetchFailedError as e:
            logger.warning(
                f"Field fetch for channel {channel_token} failed: {e}"
            )
            return FetchResult(channel_token, generation, error=e)

        return FetchResult(
            channel_token,
            generation,
            fields=fields,
            verification_links=links,
        )


def _prepare_fields(
    raw_fields: list[FieldSchema],
) -> tuple[list[FieldSchema], dict[str, str]]:
    fields: list[FieldSchema] = []
    links: dict[str, str] = {}
    seen: set[str] = set()

    for raw in raw_fields:
        if raw.token in seen:
            raise SchemaFetchFailedError(
                f"Duplicate payment field token: {raw.token}"
            )
        seen.add(raw.token)

        if raw.field_type == FIELD_TYPE_ID_SELFIE and raw.current_value:
            links[raw.token] = raw.current_value
        fields.append(raw.blank_copy())

    return fields, links
