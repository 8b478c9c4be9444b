"""Bitvora API client for Bitcoin and Lightning payments."""

import logging
from dataclasses import dataclass
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .errors import BitvoraAPIError, BitvoraDeserializationError, BitvoraTransportError
from .models import (
    CreateLightningAddressRequest,
    CreateLightningAddressResponse,
    CreateLightningInvoiceRequest,
    CreateLightningInvoiceResponse,
    CreateOnChainAddressRequest,
    CreateOnChainAddressResponse,
    EstimateWithdrawalRequest,
    EstimateWithdrawalResponse,
    GetBalanceResponse,
    GetDepositResponse,
    GetTransactionsResponse,
    WithdrawRequest,
    WithdrawResponse,
)

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


@dataclass(frozen=True)
class ClientConfig:
    """Static connection settings for a client."""
    base_url: str
    api_key: str

    def __repr__(self) -> str:
        return f"ClientConfig(base_url={self.base_url!r})"


class BitvoraClient:
    """
    Async client for the Bitvora API.

    Each method sends exactly one request and returns the typed response
    envelope. Nothing is retried. The client keeps no state between calls
    apart from its configuration and the pooled HTTP transport, so one
    instance can be shared by concurrent tasks.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Bitvora client.

        Args:
            base_url: API root (e.g., https://api.bitvora.com)
            api_key: Bitvora API key, sent as a bearer token
            transport: Optional httpx transport, mainly for tests
        """
        self.config = ClientConfig(base_url=base_url.rstrip("/"), api_key=api_key)

        self._client = httpx.AsyncClient(
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
        )

        logger.info(f"BitvoraClient initialized for {self.config.base_url}")

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "BitvoraClient":
        """Build a client from an existing ClientConfig."""
        return cls(config.base_url, config.api_key, transport=transport)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        response_model: Type[ResponseT],
        payload: Optional[BaseModel] = None,
    ) -> ResponseT:
        url = f"{self.config.base_url}{path}"
        body = payload.model_dump(mode="json") if payload is not None else None

        logger.debug(f"{method} {url}")
        try:
            response = await self._client.request(method, url, json=body)
            raw_body = response.text
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error(f"Request to {url} failed: {e!r}")
            raise BitvoraTransportError(f"Request error: {e}", cause=e) from e

        if not response.is_success:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise BitvoraAPIError(response.status_code, raw_body)

        try:
            result = response_model.model_validate_json(raw_body)
        except ValidationError as e:
            logger.error(f"Failed to deserialize response: {e}\nRaw body: {raw_body}")
            raise BitvoraDeserializationError(e, raw_body) from e

        logger.info(f"{method} {path} -> {response.status_code}")
        return result

    async def withdraw(self, request: WithdrawRequest) -> WithdrawResponse:
        """
        Send bitcoin to a Lightning invoice, Lightning address or on-chain address.

        Args:
            request: Amount, currency, destination and metadata

        Returns:
            WithdrawResponse describing the created withdrawal

        Raises:
            BitvoraTransportError: If the request could not be sent
            BitvoraAPIError: If the API returns a non-2xx status
            BitvoraDeserializationError: If the response does not match the schema
        """
        return await self._request(
            "POST", "/v1/bitcoin/withdraw/confirm", WithdrawResponse, request
        )

    async def estimate_withdrawal(
        self, request: EstimateWithdrawalRequest
    ) -> EstimateWithdrawalResponse:
        """
        Estimate fees and success probability for a withdrawal.

        Args:
            request: Amount, currency and destination

        Returns:
            EstimateWithdrawalResponse with fee and probability
        """
        return await self._request(
            "POST", "/v1/bitcoin/withdraw/estimate", EstimateWithdrawalResponse, request
        )

    async def create_lightning_invoice(
        self, request: CreateLightningInvoiceRequest
    ) -> CreateLightningInvoiceResponse:
        """
        Create a Lightning invoice for receiving a deposit.

        Args:
            request: Amount, currency, description, expiry and metadata

        Returns:
            CreateLightningInvoiceResponse including the BOLT11 payment request
        """
        return await self._request(
            "POST",
            "/v1/bitcoin/deposit/lightning-invoice",
            CreateLightningInvoiceResponse,
            request,
        )

    async def create_lightning_address(
        self, request: CreateLightningAddressRequest
    ) -> CreateLightningAddressResponse:
        """Create a Lightning address. Empty handle/domain lets the API pick them."""
        return await self._request(
            "POST",
            "/v1/bitcoin/deposit/lightning-address",
            CreateLightningAddressResponse,
            request,
        )

    async def create_onchain_address(
        self, request: CreateOnChainAddressRequest
    ) -> CreateOnChainAddressResponse:
        """Create a fresh on-chain deposit address."""
        return await self._request(
            "POST",
            "/v1/bitcoin/deposit/on-chain",
            CreateOnChainAddressResponse,
            request,
        )

    async def get_withdrawal(self, withdrawal_id: str) -> WithdrawResponse:
        """
        Get details of an existing withdrawal.

        Args:
            withdrawal_id: Withdrawal ID

        Returns:
            WithdrawResponse for that withdrawal
        """
        return await self._request(
            "GET", f"/v1/transactions/withdrawals/{withdrawal_id}", WithdrawResponse
        )

    async def get_deposit(self, deposit_id: str) -> GetDepositResponse:
        """
        Get details of an existing deposit.

        Args:
            deposit_id: Deposit ID

        Returns:
            GetDepositResponse for that deposit
        """
        return await self._request(
            "GET", f"/v1/transactions/deposits/{deposit_id}", GetDepositResponse
        )

    async def get_balance(self) -> GetBalanceResponse:
        """Get the account balance in satoshis."""
        return await self._request("GET", "/v1/transactions/balance", GetBalanceResponse)

    async def get_transactions(self) -> GetTransactionsResponse:
        """List account transactions."""
        return await self._request("GET", "/v1/transactions", GetTransactionsResponse)
