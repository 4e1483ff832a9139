"""
Payments API client.

HTTP client for the payments backend. Implements the payout workflow
boundaries:
- Balance catalog (game balances the user can withdraw)
- Channel catalog (payment methods of the payout network)
- Field-schema provider (fields a payment method needs)
- Submission gateway (the withdrawal request itself)
- Checkout outcome verification

aiohttp errors are translated into payout errors here and nowhere else.
"""

import functools
import json
from decimal import Decimal, InvalidOperation
from typing import Any

import aiohttp

from app.config.settings import settings
from app.models.enums import PaymentOutcome
from app.models.payout import (
    BalanceSource,
    ChannelDescriptor,
    FieldSchema,
    SubmissionPayload,
    SubmissionReceipt,
)
from app.services.base_service import BaseService, log_operation
from app.services.payout.errors import (
    CatalogUnavailableError,
    PaymentVerificationError,
    SchemaFetchFailedError,
    SubmissionRejectedError,
    SubmissionTransportError,
)


# API paths
BALANCES_PATH = "/games/balance"
PAYMENT_METHODS_PATH = "/masspay/payment-methods"
PAYMENT_FIELDS_PATH = "/masspay/payment-fields/{token}"
WITHDRAW_PATH = "/masspay/withdraw/{token}"
VERIFY_PAYMENT_PATH = "/payments/verify"


class ApiResponseError(Exception):
    """Payments API answered with an error status or success=false."""

    def __init__(self, status: int, message: str | None) -> None:
        super().__init__(f"HTTP {status}: {message}")
        self.status = status
        self.message = message


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


_dumps = functools.partial(json.dumps, default=_json_default)


def _extract_message(body: Any) -> str | None:
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


def _to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("0")


class PayoutApiClient(BaseService):
    """Client for the payments REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize payments API client.

        Args:
            base_url: API base URL (defaults to settings)
            token: Bearer token (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
        """
        super().__init__()
        self.base_url = (base_url or settings.payout_api_url).rstrip("/")
        self.token = token if token is not None else settings.payout_api_token
        self.timeout = timeout or settings.request_timeout_seconds
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "PayoutApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            headers = {"Accept": "application/json"}
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._session = aiohttp.ClientSession(
                headers=headers,
                json_serialize=_dumps,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Make an API call.

        Returns:
            Decoded JSON body (non-dict bodies are wrapped under "data")

        Raises:
            ApiResponseError: On HTTP error status or success=false
            aiohttp.ClientError, TimeoutError: On transport failure
        """
        session = await self._get_session()
        async with session.request(
            method, f"{self.base_url}{path}", json=payload
        ) as response:
            try:
                body = await response.json(content_type=None)
            except ValueError:
                body = None

            if response.status >= 400:
                raise ApiResponseError(response.status, _extract_message(body))
            if isinstance(body, dict) and body.get("success") is False:
                raise ApiResponseError(response.status, _extract_message(body))

            if isinstance(body, dict):
                return body
            return {"data": body}

    # ------------------------------------------------------------------
    # Catalogs
    # ------------------------------------------------------------------

    @log_operation
    async def get_balance_sources(self) -> list[BalanceSource]:
        """
        Get game balances the user can withdraw from.

        Raises:
            CatalogUnavailableError: If balances cannot be loaded
        """
        try:
            body = await self._request("GET", BALANCES_PATH)
        except ApiResponseError as e:
            raise CatalogUnavailableError(e.message) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise CatalogUnavailableError() from e

        data = body.get("data")
        games: dict[str, Any] = {}
        if isinstance(data, dict):
            games = data.get("game_information") or {}

        sources: list[BalanceSource] = []
        for provider, info in games.items():
            if isinstance(info, dict):
                sources.append(BalanceSource(
                    provider=str(provider),
                    name=str(info.get("name") or provider),
                    available_balance=_to_decimal(info.get("balance", 0)),
                    verification_required=bool(
                        info.get("verification_required", False)
                    ),
                ))
            else:
                sources.append(BalanceSource(
                    provider=str(provider),
                    name=str(provider),
                    available_balance=_to_decimal(info),
                ))
        return sources

    @log_operation
    async def get_payment_methods(self) -> list[ChannelDescriptor]:
        """
        Get payment methods of the payout network.

        Raises:
            CatalogUnavailableError: If the catalog cannot be loaded
        """
        try:
            body = await self._request("GET", PAYMENT_METHODS_PATH)
            return [
                ChannelDescriptor.from_api(item)
                for item in body.get("data") or []
            ]
        except ApiResponseError as e:
            raise CatalogUnavailableError(e.message) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise CatalogUnavailableError() from e
        except (ValueError, TypeError, AttributeError) as e:
            self.logger.warning(f"Malformed payment methods response: {e}")
            raise CatalogUnavailableError() from e

    # ------------------------------------------------------------------
    # Field schema
    # ------------------------------------------------------------------

    @log_operation
    async def fetch_fields(self, channel_token: str) -> list[FieldSchema]:
        """
        Get the fields a payment method needs, in presentation order.

        Raises:
            SchemaFetchFailedError: If fields cannot be loaded or parsed
        """
        path = PAYMENT_FIELDS_PATH.format(token=channel_token)
        try:
            body = await self._request("POST", path, {"token": channel_token})
            return [FieldSchema.from_api(item) for item in body.get("data") or []]
        except ApiResponseError as e:
            raise SchemaFetchFailedError(e.message) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise SchemaFetchFailedError() from e
        except (ValueError, TypeError, AttributeError) as e:
            self.logger.warning(f"Malformed payment fields response: {e}")
            raise SchemaFetchFailedError() from e

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    @log_operation
    async def submit(self, payload: SubmissionPayload) -> SubmissionReceipt:
        """
        Send the withdrawal request.

        Raises:
            SubmissionRejectedError: If the API refuses the request
            SubmissionTransportError: If the API cannot be reached
        """
        path = WITHDRAW_PATH.format(token=payload.channel_token)
        try:
            body = await self._request("POST", path, payload.body)
        except ApiResponseError as e:
            raise SubmissionRejectedError(e.message) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise SubmissionTransportError() from e

        data = body.get("data")
        return SubmissionReceipt(
            message=_extract_message(body),
            data=data if isinstance(data, dict) else {},
        )

    # ------------------------------------------------------------------
    # Checkout verification
    # ------------------------------------------------------------------

    @log_operation
    async def verify_payment(
        self, payment_id: str, outcome: PaymentOutcome
    ) -> None:
        """
        Report a checkout redirect outcome.

        Raises:
            PaymentVerificationError: If the outcome cannot be reported
        """
        try:
            await self._request(
                "POST",
                VERIFY_PAYMENT_PATH,
                {"payment_id": payment_id, "type": outcome.value},
            )
        except ApiResponseError as e:
            raise PaymentVerificationError(e.message) from e
        except (aiohttp.ClientError, TimeoutError) as e:
            raise PaymentVerificationError() from e
