"""Pytest configuration and shared fixtures."""

import pytest

from typing import Any

from altitrace.access_list.client import ClientConfig


API_URL = "https://api.test/v1"
RPC_URL = "https://rpc.test"

SENDER = "0x295967dfb079edd765b1eb1c3c2f3d82d8770b61"
TOKEN = "0x680f1bcff944af147f17cdf606e7c62fb03e5566"
CREATED_CONTRACT = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
TX_HASH = "0x" + "ab" * 32


@pytest.fixture
def client_config() -> ClientConfig:
    """Client configuration pointing at mocked endpoints."""
    return ClientConfig(api_url=API_URL, rpc_url=RPC_URL, timeout=5.0)


@pytest.fixture
def transaction_payload() -> dict[str, Any]:
    """eth_getTransactionByHash result for an EIP-1559 token transfer."""
    return {
        "hash": TX_HASH,
        "from": SENDER,
        "to": TOKEN,
        "value": "0x0",
        "input": "0xa9059cbb",
        "gas": "0x5208",
        "gasPrice": "0x3b9aca00",
        "maxFeePerGas": "0x77359400",
        "maxPriorityFeePerGas": "0x3b9aca00",
        "nonce": "0x2a",
        "type": "0x2",
    }


@pytest.fixture
def receipt_payload() -> dict[str, Any]:
    """eth_getTransactionReceipt result for a successful transaction."""
    return {
        "transactionHash": TX_HASH,
        "status": "0x1",
        "blockNumber": "0x3e8",
        "gasUsed": "0x5000",
        "contractAddress": None,
    }
