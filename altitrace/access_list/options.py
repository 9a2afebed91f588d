"""Merging of per-request execution options."""

from altitrace.access_list.models import ExecutionOptions


def merge_execution_options(
    existing: ExecutionOptions | None, incoming: ExecutionOptions
) -> ExecutionOptions:
    """Combine two option sets without mutating either.

    Headers are unioned with ``incoming`` winning on key collisions.
    ``timeout`` and ``retry`` from ``incoming`` replace the existing values
    only when they are set.

    Example:
        >>> a = ExecutionOptions(headers={"a": "1"}, timeout=5.0)
        >>> merged = merge_execution_options(a, ExecutionOptions(headers={"b": "2"}))
        >>> merged.headers, merged.timeout
        ({'a': '1', 'b': '2'}, 5.0)
    """
    if existing is None:
        existing = ExecutionOptions()

    headers: dict[str, str] | None = None
    if existing.headers is not None or incoming.headers is not None:
        headers = {**(existing.headers or {}), **(incoming.headers or {})}

    return ExecutionOptions(
        timeout=incoming.timeout if incoming.timeout is not None else existing.timeout,
        headers=headers,
        retry=incoming.retry if incoming.retry is not None else existing.retry,
    )


__all__ = ["merge_execution_options"]
