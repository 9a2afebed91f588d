"""Normalization of block identifiers into their canonical wire form."""

from altitrace.access_list.models import (
    BlockReference,
    NumberBlockReference,
    TagBlockReference,
)
from altitrace.errors import InputValidationError
from altitrace.helpers.constants import BLOCK_TAGS
from altitrace.helpers.parsers import has_hex_prefix, to_hex


def normalize_block_reference(value: str | int) -> BlockReference:
    """Convert a block tag, number or hex string into a ``BlockReference``.

    Tags are stored as tag references. Hex strings are stored verbatim as
    number references; their digits are not re-validated, the upstream node
    rejects malformed ones. Integers (and decimal digit strings) are encoded
    as canonical hex.

    Args:
        value: Block tag, block number, or hex-encoded block number

    Returns:
        The canonical block reference

    Raises:
        InputValidationError: For negative numbers, booleans, or strings that
            are neither a tag, a hex quantity, nor decimal digits

    Example:
        >>> normalize_block_reference(999).value
        '0x3e7'
        >>> normalize_block_reference("latest").kind
        'tag'
    """
    if isinstance(value, bool):
        msg = f"Invalid block reference: {value!r}"
        raise InputValidationError(msg)

    if isinstance(value, int):
        if value < 0:
            msg = f"Block number cannot be negative: {value}"
            raise InputValidationError(msg)
        return NumberBlockReference(value=to_hex(value))

    if isinstance(value, str):
        if value in BLOCK_TAGS:
            return TagBlockReference(value=value)
        if has_hex_prefix(value):
            return NumberBlockReference(value=value)
        if value.isascii() and value.isdigit():
            return NumberBlockReference(value=to_hex(int(value)))

    msg = f"Invalid block reference: {value!r}"
    raise InputValidationError(msg)


__all__ = ["normalize_block_reference"]
