"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: str = Field(default="2.0", description="JSON-RPC version")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(
        default_factory=list, description="Method parameters"
    )
    id: int | str = Field(..., description="Request ID")


class JsonRpcError(BaseModel):
    """Error member of a JSON-RPC 2.0 response."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response model."""

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: Any = None
    error: JsonRpcError | None = None

    model_config = ConfigDict(extra="allow")


class EthGetTransactionByHashRequest(JsonRpcRequest):
    """JSON-RPC request for eth_getTransactionByHash."""

    method: str = Field(default="eth_getTransactionByHash", frozen=True)


class EthGetTransactionReceiptRequest(JsonRpcRequest):
    """JSON-RPC request for eth_getTransactionReceipt."""

    method: str = Field(default="eth_getTransactionReceipt", frozen=True)


__all__ = [
    "EthGetTransactionByHashRequest",
    "EthGetTransactionReceiptRequest",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
]
