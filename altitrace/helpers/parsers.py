"""Parsing utilities for hex quantities and addresses."""

import re


ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")
HASH_PATTERN = re.compile(r"0x[0-9a-fA-F]{64}")
HEX_QUANTITY_PATTERN = re.compile(r"0[xX][0-9a-fA-F]+")


def has_hex_prefix(value: str) -> bool:
    """Tell whether a string starts with ``0x`` or ``0X``."""
    return value[:2].lower() == "0x"


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    return int(hex_value, 16)


def parse_quantity(value: str | int) -> int:
    """Parse a numeric quantity given as an int, a hex string or a decimal string.

    Raises:
        ValueError: If a string is not a plain hex or decimal quantity.
            Underscores, whitespace and non-ASCII digits are rejected.

    Example:
        >>> parse_quantity("0x3e8")
        1000
        >>> parse_quantity("1000")
        1000
    """
    if isinstance(value, int):
        return value
    if has_hex_prefix(value):
        if not HEX_QUANTITY_PATTERN.fullmatch(value):
            msg = f"Invalid hex quantity: {value!r}"
            raise ValueError(msg)
        return int(value, 16)
    if not (value.isascii() and value.isdigit()):
        msg = f"Invalid decimal quantity: {value!r}"
        raise ValueError(msg)
    return int(value, 10)


def to_hex(value: int) -> str:
    """Encode a non-negative integer as a canonical hex quantity.

    Lowercase, ``0x``-prefixed, without leading zeros.

    Example:
        >>> to_hex(999)
        '0x3e7'
        >>> to_hex(0)
        '0x0'
    """
    if value < 0:
        msg = f"Cannot encode negative quantity: {value}"
        raise ValueError(msg)
    return hex(value)


def is_address(value: str) -> bool:
    """Tell whether a string is a 20-byte hex address."""
    return bool(ADDRESS_PATTERN.fullmatch(value))


def is_hash(value: str) -> bool:
    """Tell whether a string is a 32-byte hex hash."""
    return bool(HASH_PATTERN.fullmatch(value))


__all__ = [
    "has_hex_prefix",
    "is_address",
    "is_hash",
    "parse_hex_int",
    "parse_quantity",
    "to_hex",
]
