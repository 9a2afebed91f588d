"""Async client for the simulation API and the upstream JSON-RPC node."""

from collections.abc import Mapping
from types import TracebackType

from typing import Any, Self

import httpx

from pydantic import BaseModel, ConfigDict, Field, field_validator

from altitrace.access_list.builder import AccessListRequestBuilder
from altitrace.access_list.models import (
    AccessListRequest,
    AccessListResponse,
    ApiEnvelope,
    ExecutionOptions,
    TransactionCall,
)
from altitrace.errors import ApiError, ConfigurationError
from altitrace.helpers.config import get_api_url, get_optional_env
from altitrace.helpers.constants import (
    ACCESS_LIST_PATH,
    DEFAULT_TIMEOUT,
    MAX_RETRIES,
    RETRY_BASE_DELAY,
)
from altitrace.helpers.http import create_http_client, retry_with_backoff
from altitrace.helpers.logging import get_logger
from altitrace.helpers.rpc import RPCClient
from altitrace.transactions.hydrator import TransactionHydrator
from altitrace.transactions.models import TransactionRecord


logger = get_logger(__name__)


class ClientConfig(BaseModel):
    """Connection settings for ``AltitraceClient``."""

    api_url: str = Field(..., description="Simulation API base URL")
    rpc_url: str | None = Field(default=None, description="JSON-RPC node URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Seconds")
    headers: dict[str, str] = Field(default_factory=dict)
    max_retries: int = Field(default=MAX_RETRIES, ge=1)
    retry_base_delay: float = Field(default=RETRY_BASE_DELAY, ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("api_url", "rpc_url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        if value is not None and not value.startswith(("http://", "https://")):
            msg = f"URL must start with http:// or https://: {value}"
            raise ValueError(msg)
        return value.rstrip("/") if value is not None else None

    @classmethod
    def from_env(
        cls, api_url: str | None = None, rpc_url: str | None = None
    ) -> Self:
        """Build a config from explicit values, falling back to the environment.

        Reads ``ALTITRACE_API_URL``, ``HYPEREVM_RPC_URL`` and
        ``ALTITRACE_TIMEOUT``.

        Raises:
            ConfigurationError: If no API URL is available or the timeout is
                not a number
        """
        timeout = get_optional_env("ALTITRACE_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout_seconds = float(timeout or DEFAULT_TIMEOUT)
        except ValueError as e:
            msg = f"ALTITRACE_TIMEOUT must be a number, got {timeout!r}"
            raise ConfigurationError(msg, "timeout") from e

        return cls(
            api_url=get_api_url(api_url),
            rpc_url=rpc_url or get_optional_env("HYPEREVM_RPC_URL"),
            timeout=timeout_seconds,
        )


class AltitraceClient:
    """Transport for access list requests and transaction lookups.

    Owns an ``httpx.AsyncClient`` unless one is injected; use it as an async
    context manager so the connection pool is closed.

    Example:
        ```python
        config = ClientConfig(
            api_url="http://localhost:8080/v1",
            rpc_url="https://rpc.hyperliquid.xyz/evm",
        )
        async with AltitraceClient(config) as client:
            response = await client.generate_access_list(
                {"to": "0x680F...", "data": "0xa9059cbb..."}, block="latest"
            )
            print(response.account_count(), response.total_gas_used())
        ```
    """

    def __init__(
        self, config: ClientConfig, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self.config = config
        self._owns_http_client = http_client is None
        self.http = http_client or create_http_client(
            timeout=config.timeout, headers=config.headers
        )
        self.rpc = RPCClient(config.rpc_url, config.timeout) if config.rpc_url else None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http.aclose()

    def create_access_list(self) -> AccessListRequestBuilder:
        """Start a fluent access list request bound to this client."""
        return AccessListRequestBuilder(self)

    async def execute_access_list_request(
        self, request: AccessListRequest, options: ExecutionOptions | None = None
    ) -> AccessListResponse:
        """POST an access list request to the simulation API.

        Args:
            request: Assembled request
            options: Per-request timeout, extra headers and retry flag

        Returns:
            The generated access list

        Raises:
            httpx.HTTPError: If the request fails at the HTTP level
            ApiError: If the API reports an unsuccessful result
        """
        options = options or ExecutionOptions()
        url = f"{self.config.api_url}{ACCESS_LIST_PATH}"
        payload = request.to_payload()

        async def post() -> httpx.Response:
            response = await self.http.post(
                url,
                json=payload,
                headers=options.headers,
                timeout=options.timeout or self.config.timeout,
            )
            response.raise_for_status()
            return response

        if options.retry:
            post = retry_with_backoff(
                max_retries=self.config.max_retries,
                base_delay=self.config.retry_base_delay,
            )(post)

        logger.debug("POST %s block=%s", url, payload.get("block"))
        response = await post()
        envelope = ApiEnvelope.model_validate(response.json())

        if not envelope.success or envelope.data is None:
            error = envelope.error
            message = (error.message if error else None) or "Access list request failed"
            raise ApiError(message, error.code if error else None)

        return AccessListResponse.model_validate(envelope.data)

    async def generate_access_list(
        self,
        call: TransactionCall | Mapping[str, Any],
        *,
        block: str | int | None = None,
        options: ExecutionOptions | None = None,
    ) -> AccessListResponse:
        """Generate an access list without going through the builder."""
        builder = self.create_access_list().with_transaction(call)
        if block is not None:
            builder.at_block(block)
        if options is not None:
            builder.with_execution_options(options)
        return await builder.execute()

    async def get_transaction(self, tx_hash: str) -> dict[str, Any] | None:
        return await self._require_rpc().get_transaction(self.http, tx_hash)

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        return await self._require_rpc().get_transaction_receipt(self.http, tx_hash)

    async def load_transaction(self, tx_hash: str) -> TransactionRecord | None:
        """Fetch and hydrate a transaction, None when it cannot be loaded."""
        return await TransactionHydrator(self).hydrate(tx_hash)

    def _require_rpc(self) -> RPCClient:
        if self.rpc is None:
            msg = "rpc_url is required for transaction lookups"
            raise ConfigurationError(msg, "rpc_url")
        return self.rpc


__all__ = [
    "AltitraceClient",
    "ClientConfig",
]
