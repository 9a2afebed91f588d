"""HTTP client utilities and helpers."""

from asyncio import sleep
from collections.abc import Awaitable, Callable
from functools import wraps

from typing import Any, ParamSpec, TypeVar

import httpx

from pydantic import ValidationError

from altitrace.errors import RpcError
from altitrace.helpers.constants import (
    DEFAULT_TIMEOUT,
    MAX_RETRIES,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
    USER_AGENT,
)
from altitrace.helpers.logging import get_logger


logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


def is_retryable(exc: Exception) -> bool:
    """Tell whether a failed request is worth another attempt.

    Timeouts and transport errors are retried; HTTP status errors only for
    the status codes in ``RETRYABLE_STATUS_CODES``.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(exc, httpx.TransportError)


def retry_with_backoff(
    max_retries: int = MAX_RETRIES,
    base_delay: float = RETRY_BASE_DELAY,
    max_delay: float = RETRY_MAX_DELAY,
    *,
    log_errors: bool = True,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator to retry async functions with exponential backoff.

    Only errors accepted by ``is_retryable`` are retried; anything else is
    raised immediately.

    Args:
        max_retries: Maximum number of attempts (default: 3)
        base_delay: Initial delay in seconds (default: 1.0)
        max_delay: Maximum delay between retries (default: 30.0)
        log_errors: Whether to log retry attempts (default: True)

    Returns:
        Decorated function that retries on transient httpx errors

    Example:
        ```python
        from altitrace.helpers.http import retry_with_backoff

        @retry_with_backoff(max_retries=3, base_delay=2.0)
        async def fetch_data(client: httpx.AsyncClient, url: str) -> dict:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()

        # Will retry up to 3 times with delays of 2s, 4s
        ```
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            for attempt in range(max_retries):
                try:
                    return await func(*args, **kwargs)
                except httpx.HTTPError as e:
                    if not is_retryable(e) or attempt == max_retries - 1:
                        if log_errors:
                            logger.error(
                                "%s failed after %d attempts: %s",
                                func.__name__,
                                attempt + 1,
                                e,
                            )
                        raise
                    if log_errors:
                        logger.warning(
                            "%s HTTP error (attempt %d/%d): %s",
                            func.__name__,
                            attempt + 1,
                            max_retries,
                            e,
                        )

                # Exponential backoff with max_delay cap
                delay = min(base_delay * (2**attempt), max_delay)
                await sleep(delay)

            msg = f"{func.__name__} called with max_retries={max_retries}"
            raise ValueError(msg)

        return wrapper

    return decorator


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT,
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        headers: Headers sent with every request, on top of the JSON defaults
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from altitrace.helpers.http import create_http_client

        async with create_http_client(timeout=60.0) as client:
            response = await client.get("https://example.com")
        ```
    """
    default_headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    return httpx.AsyncClient(
        timeout=timeout, headers={**default_headers, **(headers or {})}, **kwargs
    )


def handle_http_errors(
    default_return: T | None = None,
    *,
    log_errors: bool = True,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T | None]]]:
    """Decorator that turns any fetch failure into ``default_return``.

    HTTP errors, JSON-RPC errors, and payloads that fail model validation are
    logged at warning level; anything else is logged with its traceback.

    Args:
        default_return: Value to return on error (default: None)
        log_errors: Whether to log errors (default: True)

    Returns:
        Decorated function that never raises ``Exception`` subclasses
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T | None]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T | None:
            try:
                return await func(*args, **kwargs)
            except httpx.HTTPStatusError as e:
                if log_errors:
                    logger.warning(
                        "%s HTTP error: %s %s",
                        func.__name__,
                        e.response.status_code,
                        e.response.text[:100] if e.response.text else "",
                    )
                return default_return
            except (httpx.HTTPError, RpcError) as e:
                if log_errors:
                    logger.warning("%s request error: %s", func.__name__, e)
                return default_return
            except ValidationError as e:
                if log_errors:
                    logger.warning(
                        "%s malformed response: %d validation errors",
                        func.__name__,
                        e.error_count(),
                    )
                return default_return
            except Exception:
                if log_errors:
                    logger.exception("%s unexpected error", func.__name__)
                return default_return

        return wrapper

    return decorator


__all__ = [
    "RETRYABLE_STATUS_CODES",
    "create_http_client",
    "handle_http_errors",
    "is_retryable",
    "retry_with_backoff",
]
