"""Loading of transactions and receipts into ``TransactionRecord`` values."""

import asyncio

from typing import Any, Protocol

from altitrace.helpers.http import handle_http_errors
from altitrace.helpers.logging import get_logger
from altitrace.helpers.parsers import is_hash, to_hex
from altitrace.transactions.models import (
    RpcReceipt,
    RpcTransaction,
    TransactionRecord,
)


logger = get_logger(__name__)


class TransactionSource(Protocol):
    """Upstream reads needed to hydrate a transaction."""

    async def get_transaction(self, tx_hash: str) -> dict[str, Any] | None: ...

    async def get_transaction_receipt(
        self, tx_hash: str
    ) -> dict[str, Any] | None: ...


def is_valid_transaction_hash(tx_hash: str) -> bool:
    """Tell whether ``tx_hash`` looks like a transaction hash.

    Purely syntactic: ``0x`` followed by exactly 64 hex characters.
    """
    return is_hash(tx_hash)


def _optional_hex(value: int | None) -> str | None:
    return to_hex(value) if value is not None else None


def merge_transaction(
    transaction: RpcTransaction, receipt: RpcReceipt
) -> TransactionRecord:
    """Merge a transaction with its receipt into a ``TransactionRecord``.

    ``to`` falls back to the receipt's created contract address, then to an
    empty string.
    """
    return TransactionRecord(
        from_=transaction.from_,
        to=transaction.to or receipt.contract_address or "",
        value=_optional_hex(transaction.value),
        data=transaction.input or "0x",
        gas=_optional_hex(transaction.gas),
        gas_price=_optional_hex(transaction.gas_price),
        max_fee_per_gas=_optional_hex(transaction.max_fee_per_gas),
        max_priority_fee_per_gas=_optional_hex(transaction.max_priority_fee_per_gas),
        nonce=transaction.nonce,
        block_number=to_hex(receipt.block_number),
        transaction_type=transaction.type_name,
        success=receipt.succeeded,
        gas_used=to_hex(receipt.gas_used),
    )


class TransactionHydrator:
    """Fetches a transaction and its receipt and merges them.

    Any failure while fetching or parsing is logged and reported as ``None``,
    the same result as an unknown transaction.
    """

    def __init__(self, source: TransactionSource) -> None:
        self.source = source

    @handle_http_errors(default_return=None)
    async def hydrate(self, tx_hash: str) -> TransactionRecord | None:
        """Load the transaction ``tx_hash``.

        Returns:
            The hydrated record, or None if the transaction or its receipt is
            unavailable or could not be fetched
        """
        # Both reads run to completion before any failure is reported
        results = await asyncio.gather(
            self.source.get_transaction_receipt(tx_hash),
            self.source.get_transaction(tx_hash),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        receipt_data, transaction_data = results

        if transaction_data is None:
            logger.debug("Transaction %s not found", tx_hash)
            return None

        if receipt_data is None:
            logger.debug("Receipt for %s not available", tx_hash)
            return None

        return merge_transaction(
            RpcTransaction.model_validate(transaction_data),
            RpcReceipt.model_validate(receipt_data),
        )


__all__ = [
    "TransactionHydrator",
    "TransactionSource",
    "is_valid_transaction_hash",
    "merge_transaction",
]
