"""Block size classification for the dual block architecture.

HyperEVM produces two kinds of blocks: big blocks with a 50M gas limit and
small blocks with a 2M gas limit. Reported gas limits drift a little from
those nominal values, so classification accepts a tolerance band around each
tier and falls back to the nearest tier by midpoint.
"""

import math
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from altitrace.helpers.constants import (
    BIG_BLOCK_GAS_LIMIT,
    BLOCK_SIZE_TOLERANCE,
    SMALL_BLOCK_GAS_LIMIT,
)
from altitrace.helpers.logging import get_logger
from altitrace.helpers.parsers import parse_quantity, to_hex


logger = get_logger(__name__)

type GasLimit = str | int | float | None


class BlockSize(StrEnum):
    """Coarse block size category."""

    BIG = "big"
    SMALL = "small"
    UNKNOWN = "unknown"


BLOCK_SIZE_LABELS = {
    BlockSize.BIG: "Big Block",
    BlockSize.SMALL: "Small Block",
    BlockSize.UNKNOWN: "Unknown",
}


class BlockOverrides(BaseModel):
    """Block header fields overridden for a simulation."""

    gas_limit: str | None = Field(default=None, alias="gasLimit")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def parse_gas_limit(gas_limit: GasLimit) -> int | None:
    """Parse a gas limit given as a number, hex string or decimal string.

    Floats (as decoded from JSON such as ``3e7``) are truncated to an int.

    Returns:
        The gas limit, or None when it is absent, empty, zero, non-finite or
        unparseable
    """
    if not gas_limit or isinstance(gas_limit, bool):
        return None

    if isinstance(gas_limit, float):
        if not math.isfinite(gas_limit):
            logger.debug("Non-finite gas limit: %r", gas_limit)
            return None
        return int(gas_limit)

    if not isinstance(gas_limit, (str, int)):
        logger.debug("Unsupported gas limit type: %r", gas_limit)
        return None

    try:
        return parse_quantity(gas_limit)
    except ValueError:
        logger.debug("Failed to parse gas limit: %r", gas_limit)
        return None


def classify_block_size(gas_limit: GasLimit) -> BlockSize:
    """Classify a block gas limit as big, small or unknown.

    Example:
        >>> classify_block_size("0x2faf080")
        <BlockSize.BIG: 'big'>
        >>> classify_block_size(26_000_000)
        <BlockSize.SMALL: 'small'>
        >>> classify_block_size(None)
        <BlockSize.UNKNOWN: 'unknown'>
    """
    value = parse_gas_limit(gas_limit)
    if value is None:
        return BlockSize.UNKNOWN

    if abs(value - BIG_BLOCK_GAS_LIMIT) <= BLOCK_SIZE_TOLERANCE:
        return BlockSize.BIG

    if abs(value - SMALL_BLOCK_GAS_LIMIT) <= BLOCK_SIZE_TOLERANCE:
        return BlockSize.SMALL

    # Strict comparison: the midpoint itself counts as small
    if value > (SMALL_BLOCK_GAS_LIMIT + BIG_BLOCK_GAS_LIMIT) / 2:
        return BlockSize.BIG

    return BlockSize.SMALL


def block_size_label(block_size: BlockSize) -> str:
    """Human readable label for a block size."""
    return BLOCK_SIZE_LABELS[block_size]


def big_block_override() -> BlockOverrides:
    """Block overrides that turn a simulated block into a big block."""
    return BlockOverrides(gas_limit=to_hex(BIG_BLOCK_GAS_LIMIT))


__all__ = [
    "BlockOverrides",
    "BlockSize",
    "GasLimit",
    "big_block_override",
    "block_size_label",
    "classify_block_size",
    "parse_gas_limit",
]
