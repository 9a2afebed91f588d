"""Pydantic models for upstream transactions, receipts and hydrated records."""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from altitrace.helpers.parsers import parse_quantity


def _parse_quantity(value: object) -> object:
    if isinstance(value, str):
        return parse_quantity(value)
    return value


# JSON-RPC quantities arrive as hex strings
Quantity = Annotated[int, BeforeValidator(_parse_quantity)]

TRANSACTION_TYPE_NAMES = {
    0: "legacy",
    1: "eip2930",
    2: "eip1559",
    3: "eip4844",
    4: "eip7702",
}

RECEIPT_STATUS_SUCCESS = 1


class RpcTransaction(BaseModel):
    """Transaction object returned by eth_getTransactionByHash."""

    hash: str | None = None
    from_: str = Field(..., alias="from")
    to: str | None = None
    value: Quantity | None = None
    input: str | None = None
    gas: Quantity | None = None
    gas_price: Quantity | None = Field(default=None, alias="gasPrice")
    max_fee_per_gas: Quantity | None = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: Quantity | None = Field(
        default=None, alias="maxPriorityFeePerGas"
    )
    nonce: Quantity
    type: str | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def type_name(self) -> str:
        """Named transaction type, ``legacy`` when the node sent none."""
        if self.type is None:
            return "legacy"
        try:
            return TRANSACTION_TYPE_NAMES.get(parse_quantity(self.type), self.type)
        except ValueError:
            return self.type


class RpcReceipt(BaseModel):
    """Receipt object returned by eth_getTransactionReceipt."""

    status: Quantity | None = None
    block_number: Quantity = Field(..., alias="blockNumber")
    gas_used: Quantity = Field(..., alias="gasUsed")
    contract_address: str | None = Field(default=None, alias="contractAddress")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def succeeded(self) -> bool:
        return self.status == RECEIPT_STATUS_SUCCESS


class TransactionRecord(BaseModel):
    """A transaction merged with its receipt.

    Numeric fields are canonical hex quantities except ``nonce``. Optional
    fields absent from the source transaction stay ``None``.
    """

    from_: str = Field(..., alias="from")
    to: str
    value: str | None = None
    data: str
    gas: str | None = None
    gas_price: str | None = Field(default=None, alias="gasPrice")
    max_fee_per_gas: str | None = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: str | None = Field(
        default=None, alias="maxPriorityFeePerGas"
    )
    nonce: int
    block_number: str | None = Field(default=None, alias="blockNumber")
    transaction_type: str = Field(default="legacy", alias="transactionType")
    success: bool
    gas_used: str = Field(..., alias="gasUsed")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


__all__ = [
    "Quantity",
    "RpcReceipt",
    "RpcTransaction",
    "TRANSACTION_TYPE_NAMES",
    "TransactionRecord",
]
