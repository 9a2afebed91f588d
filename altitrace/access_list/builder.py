"""Fluent builder for access list requests."""

from collections.abc import Mapping
from enum import StrEnum

from typing import Any, Protocol, Self

from pydantic import ValidationError

from altitrace.access_list.block_reference import normalize_block_reference
from altitrace.access_list.models import (
    AccessListRequest,
    BlockReference,
    ExecutionOptions,
    TransactionCall,
)
from altitrace.access_list.options import merge_execution_options
from altitrace.errors import (
    BuilderConsumedError,
    InputValidationError,
    MissingRequiredFieldError,
)
from altitrace.helpers.logging import get_logger


logger = get_logger(__name__)


def _execution_options(**fields: Any) -> ExecutionOptions:
    try:
        return ExecutionOptions(**fields)
    except ValidationError as e:
        msg = f"Invalid execution options: {e.errors()[0]['msg']}"
        raise InputValidationError(msg) from e


class AccessListTransport(Protocol):
    """Capability the builder hands assembled requests to."""

    async def execute_access_list_request(
        self, request: AccessListRequest, options: ExecutionOptions | None = None
    ) -> Any: ...


class BuilderState(StrEnum):
    """Lifecycle of a request builder."""

    EMPTY = "empty"
    CONFIGURED = "configured"
    CONSUMED = "consumed"


class AccessListRequestBuilder:
    """Single-use fluent builder for ``AccessListRequest`` objects.

    Every mutator returns the builder so calls can be chained. The builder is
    consumed by ``build()`` or ``execute()``, even when they fail validation;
    any further call raises ``BuilderConsumedError``.

    Example:
        ```python
        async with AltitraceClient(config) as client:
            response = await (
                client.create_access_list()
                .with_transaction({"to": token, "data": calldata})
                .at_block(1000)
                .with_timeout(10.0)
                .execute()
            )
        ```
    """

    def __init__(self, transport: AccessListTransport) -> None:
        self._transport = transport
        self._call: TransactionCall | None = None
        self._block: BlockReference | None = None
        self._options: ExecutionOptions | None = None
        self._state = BuilderState.EMPTY

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def options(self) -> ExecutionOptions | None:
        """Current merged execution options snapshot."""
        return self._options

    def with_transaction(self, call: TransactionCall | Mapping[str, Any]) -> Self:
        """Attach the call parameters, replacing any previous call.

        Raises:
            InputValidationError: If a mapping does not describe a valid call
        """
        self._ensure_open("with_transaction")
        if not isinstance(call, TransactionCall):
            try:
                call = TransactionCall.model_validate(call)
            except ValidationError as e:
                msg = f"Invalid transaction call: {e.errors()[0]['msg']}"
                raise InputValidationError(msg) from e
        self._call = call
        self._state = BuilderState.CONFIGURED
        return self

    def at_block(self, block: str | int) -> Self:
        """Target a block by tag, number or hex quantity."""
        self._ensure_open("at_block")
        self._block = normalize_block_reference(block)
        return self

    def with_execution_options(
        self, options: ExecutionOptions | Mapping[str, Any]
    ) -> Self:
        """Merge a full option set, given as a model or a plain mapping."""
        self._ensure_open("with_execution_options")
        if not isinstance(options, ExecutionOptions):
            options = _execution_options(**options)
        return self._merge(options)

    def with_timeout(self, timeout: float) -> Self:
        """Set the request timeout in seconds.

        Raises:
            InputValidationError: If the timeout is not a positive number
        """
        self._ensure_open("with_timeout")
        return self._merge(_execution_options(timeout=timeout))

    def with_headers(self, headers: Mapping[str, str]) -> Self:
        """Add request headers; later calls win on key collisions."""
        self._ensure_open("with_headers")
        return self._merge(_execution_options(headers=dict(headers)))

    def with_retry(self, enabled: bool) -> Self:
        self._ensure_open("with_retry")
        return self._merge(_execution_options(retry=enabled))

    def build(self) -> AccessListRequest:
        """Assemble the request and consume the builder.

        Raises:
            MissingRequiredFieldError: If no transaction call was attached
            BuilderConsumedError: If the builder was already consumed
        """
        self._ensure_open("build")
        self._state = BuilderState.CONSUMED
        return self._assemble()

    async def execute(self) -> Any:
        """Assemble the request, consume the builder and send it.

        The transport's result is returned as is and its failures propagate
        unchanged.

        Raises:
            MissingRequiredFieldError: If no transaction call was attached
            BuilderConsumedError: If the builder was already consumed
        """
        self._ensure_open("execute")
        self._state = BuilderState.CONSUMED
        request = self._assemble()
        logger.debug("Executing access list request at block %s", request.block)
        return await self._transport.execute_access_list_request(
            request, self._options
        )

    def _assemble(self) -> AccessListRequest:
        if self._call is None:
            raise MissingRequiredFieldError("Transaction call")
        return AccessListRequest(params=self._call, block=self._block)

    def _merge(self, incoming: ExecutionOptions) -> Self:
        self._options = merge_execution_options(self._options, incoming)
        return self

    def _ensure_open(self, operation: str) -> None:
        if self._state is BuilderState.CONSUMED:
            raise BuilderConsumedError(operation)


__all__ = [
    "AccessListRequestBuilder",
    "AccessListTransport",
    "BuilderState",
]
