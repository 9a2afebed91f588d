"""Common configuration constants used across the SDK."""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

ACCESS_LIST_PATH = "/simulate/access-list"
"""API path for access list generation"""

USER_AGENT = "altitrace-sdk-python/0.1.0"
"""User agent sent with every API request"""

# Retry Configuration
MAX_RETRIES = 3
"""Default maximum number of attempts when retries are enabled"""

RETRY_BASE_DELAY = 1.0
"""Base delay for exponential backoff in seconds"""

RETRY_MAX_DELAY = 30.0
"""Maximum delay between retries in seconds"""

# Block size thresholds for the dual block architecture
BIG_BLOCK_GAS_LIMIT = 50_000_000
"""Gas limit of a big block"""

SMALL_BLOCK_GAS_LIMIT = 2_000_000
"""Gas limit of a small block"""

BLOCK_SIZE_TOLERANCE = 1_000_000
"""Allowed drift around a nominal block gas limit"""

# Block tags accepted as block references
BLOCK_TAGS = ("latest", "earliest", "safe", "finalized")
"""Named block tags"""


__all__ = [
    "ACCESS_LIST_PATH",
    "BIG_BLOCK_GAS_LIMIT",
    "BLOCK_SIZE_TOLERANCE",
    "BLOCK_TAGS",
    "DEFAULT_TIMEOUT",
    "MAX_RETRIES",
    "RETRY_BASE_DELAY",
    "RETRY_MAX_DELAY",
    "SMALL_BLOCK_GAS_LIMIT",
    "USER_AGENT",
]
