"""Ethereum JSON-RPC client utilities."""

from typing import Any

import httpx

from altitrace.errors import ConfigurationError, RpcError
from altitrace.helpers.constants import DEFAULT_TIMEOUT
from altitrace.helpers.logging import get_logger
from altitrace.helpers.rpc_models import (
    EthGetTransactionByHashRequest,
    EthGetTransactionReceiptRequest,
    JsonRpcRequest,
    JsonRpcResponse,
)


logger = get_logger(__name__)


class RPCClient:
    """Ethereum JSON-RPC client with typed request helpers."""

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: JSON-RPC endpoint URL
            timeout: Default timeout for requests in seconds

        Raises:
            ConfigurationError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ConfigurationError(msg, "rpc_url")

        self.rpc_url = rpc_url
        self.timeout = timeout

    async def send(
        self,
        client: httpx.AsyncClient,
        request: JsonRpcRequest,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Send a prepared JSON-RPC request and return its result.

        Raises:
            httpx.HTTPError: If the HTTP request fails
            RpcError: If the RPC response contains an error
        """
        logger.debug("RPC %s %s", request.method, request.params)
        response = await client.post(
            self.rpc_url,
            json=request.model_dump(),
            timeout=timeout or self.timeout,
        )
        response.raise_for_status()
        result = JsonRpcResponse.model_validate(response.json())

        if result.error is not None:
            msg = f"RPC error: {result.error.message}"
            raise RpcError(msg, result.error.code)

        return result.result

    async def call(
        self,
        client: httpx.AsyncClient,
        method: str,
        params: list[Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Make a single JSON-RPC call.

        Args:
            client: HTTP client instance
            method: RPC method name (e.g., "eth_blockNumber")
            params: Method parameters list
            timeout: Optional timeout override

        Returns:
            RPC result value

        Raises:
            httpx.HTTPError: If the HTTP request fails
            RpcError: If the RPC response contains an error
        """
        request = JsonRpcRequest(method=method, params=params or [], id=1)
        return await self.send(client, request, timeout=timeout)

    async def get_transaction(
        self, client: httpx.AsyncClient, tx_hash: str
    ) -> dict[str, Any] | None:
        """Fetch a transaction object by hash, None when the node does not know it."""
        return await self.send(
            client, EthGetTransactionByHashRequest(params=[tx_hash], id=1)
        )

    async def get_transaction_receipt(
        self, client: httpx.AsyncClient, tx_hash: str
    ) -> dict[str, Any] | None:
        """Fetch a transaction receipt by hash, None while pending or unknown."""
        return await self.send(
            client, EthGetTransactionReceiptRequest(params=[tx_hash], id=1)
        )


__all__ = [
    "RPCClient",
]
