"""Tests for the access list request builder."""

from unittest.mock import AsyncMock

import pytest

from typing import Any

import httpx

from pydantic import ValidationError

from altitrace.access_list.builder import AccessListRequestBuilder, BuilderState
from altitrace.access_list.models import (
    AccessListRequest,
    ExecutionOptions,
    NumberBlockReference,
    TagBlockReference,
    TransactionCall,
)
from altitrace.errors import (
    BuilderConsumedError,
    InputValidationError,
    MissingRequiredFieldError,
)


SENDER = "0x295967dfb079edd765b1eb1c3c2f3d82d8770b61"
TOKEN = "0x680f1bcff944af147f17cdf606e7c62fb03e5566"


@pytest.fixture
def transport() -> AsyncMock:
    """Fake transport recording execute_access_list_request calls."""
    mock = AsyncMock()
    mock.execute_access_list_request.return_value = {"accessList": [], "gasUsed": "0x1"}
    return mock


@pytest.fixture
def call() -> TransactionCall:
    """A simple token transfer call."""
    return TransactionCall.model_validate(
        {"from": SENDER, "to": TOKEN, "data": "0xa9059cbb", "value": "0x0"}
    )


class TestBuild:
    """Tests for AccessListRequestBuilder.build."""

    def test_build_without_call_fails(self, transport: AsyncMock) -> None:
        """Test that build() requires a transaction call."""
        builder = AccessListRequestBuilder(transport)

        with pytest.raises(MissingRequiredFieldError, match="Transaction call is required"):
            builder.build()

    def test_build_with_call_and_block_number(
        self, transport: AsyncMock, call: TransactionCall
    ) -> None:
        """Test that block 1000 is rendered as 0x3e8."""
        request = AccessListRequestBuilder(transport).with_transaction(call).at_block(1000).build()

        assert request.params == call
        assert request.block == NumberBlockReference(value="0x3e8")
        assert request.to_payload() == {
            "params": {"from": SENDER, "to": TOKEN, "data": "0xa9059cbb", "value": "0x0"},
            "block": "0x3e8",
        }

    def test_build_without_block_omits_it(
        self, transport: AsyncMock, call: TransactionCall
    ) -> None:
        """Test that an unset block is left out of the payload."""
        request = AccessListRequestBuilder(transport).with_transaction(call).build()

        assert request.block is None
        assert "block" not in request.to_payload()

    def test_model_dump_renders_block_as_string(
        self, transport: AsyncMock, call: TransactionCall
    ) -> None:
        """Test that serialization renders the canonical wire value."""
        request = AccessListRequestBuilder(transport).with_transaction(call).at_block("safe").build()

        assert request.block == TagBlockReference(value="safe")
        assert request.model_dump()["block"] == "safe"

    def test_with_transaction_replaces_call(
        self, transport: AsyncMock, call: TransactionCall
    ) -> None:
        """Test that the last attached call wins."""
        other = TransactionCall(to=SENDER)

        request = (
            AccessListRequestBuilder(transport)
            .with_transaction(call)
            .with_transaction(other)
            .build()
        )

        assert request.params == other

    def test_with_transaction_accepts_mapping(self, transport: AsyncMock) -> None:
        """Test that wire-shaped mappings are validated into a call."""
        request = (
            AccessListRequestBuilder(transport)
            .with_transaction({"from": SENDER, "gasPrice": "0x1"})
            .build()
        )

        assert request.params.from_ == SENDER
        assert request.params.gas_price == "0x1"

    def test_with_transaction_rejects_bad_address(self, transport: AsyncMock) -> None:
        """Test that malformed addresses are rejected."""
        builder = AccessListRequestBuilder(transport)

        with pytest.raises(InputValidationError, match="Invalid Ethereum address"):
            builder.with_transaction({"to": "0x1234"})

        assert builder.state is BuilderState.EMPTY

    def test_built_request_is_immutable(
        self, transport: AsyncMock, call: TransactionCall
    ) -> None:
        """Test that the built request cannot be modified."""
        request = AccessListRequestBuilder(transport).with_transaction(call).build()

        with pytest.raises(ValidationError):
            request.block = None  # type: ignore[misc]


class TestOptions:
    """Tests for execution option setters."""

    def test_options_accumulate(self, transport: AsyncMock) -> None:
        """Test that option setters merge into one snapshot."""
        builder = (
            AccessListRequestBuilder(transport)
            .with_headers({"a": "1"})
            .with_timeout(5.0)
            .with_headers({"b": "2"})
            .with_retry(True)  # noqa: FBT003
            .with_headers({"a": "3"})
        )

        assert builder.options == ExecutionOptions(
            timeout=5.0, headers={"a": "3", "b": "2"}, retry=True
        )

    def test_with_execution_options_merges(self, transport: AsyncMock) -> None:
        """Test that a full options object is merged, not assigned."""
        builder = (
            AccessListRequestBuilder(transport)
            .with_timeout(5.0)
            .with_execution_options(ExecutionOptions(headers={"x": "y"}))
        )

        assert builder.options == ExecutionOptions(timeout=5.0, headers={"x": "y"})

    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("with_timeout", (0,)),
            ("with_timeout", (-1.0,)),
            ("with_headers", ({"X-Retries": 1},)),
            ("with_execution_options", ({"timeout": -5},)),
        ],
    )
    def test_invalid_options_rejected(
        self, transport: AsyncMock, method: str, args: tuple[Any, ...]
    ) -> None:
        """Test that bad option values raise InputValidationError."""
        builder = AccessListRequestBuilder(transport)

        with pytest.raises(InputValidationError, match="Invalid execution options"):
            getattr(builder, method)(*args)

        assert builder.options is None
        assert builder.state is BuilderState.EMPTY

    def test_with_execution_options_accepts_mapping(
        self, transport: AsyncMock
    ) -> None:
        """Test that a plain mapping is validated into options."""
        builder = AccessListRequestBuilder(transport).with_execution_options(
            {"timeout": 2.0, "retry": True}
        )

        assert builder.options == ExecutionOptions(timeout=2.0, retry=True)

    def test_setters_before_call_keep_empty_state(self, transport: AsyncMock) -> None:
        """Test that options and block do not configure a call."""
        builder = AccessListRequestBuilder(transport).with_timeout(1.0).at_block("latest")

        assert builder.state is BuilderState.EMPTY
        with pytest.raises(MissingRequiredFieldError):
            builder.build()


class TestLifecycle:
    """Tests for builder state transitions."""

    def test_states(self, transport: AsyncMock, call: TransactionCall) -> None:
        """Test EMPTY -> CONFIGURED -> CONSUMED."""
        builder = AccessListRequestBuilder(transport)
        assert builder.state is BuilderState.EMPTY

        builder.with_transaction(call)
        assert builder.state is BuilderState.CONFIGURED

        builder.build()
        assert builder.state is BuilderState.CONSUMED

    @pytest.mark.parametrize(
        ("method", "args"),
        [
            ("with_transaction", ({"to": TOKEN},)),
            ("at_block", (1,)),
            ("with_execution_options", (ExecutionOptions(),)),
            ("with_timeout", (1.0,)),
            ("with_headers", ({"a": "b"},)),
            ("with_retry", (False,)),
            ("build", ()),
        ],
    )
    def test_calls_after_build_fail(
        self, transport: AsyncMock, call: TransactionCall, method: str, args: tuple[Any, ...]
    ) -> None:
        """Test that a consumed builder rejects every call."""
        builder = AccessListRequestBuilder(transport).with_transaction(call)
        builder.build()

        with pytest.raises(BuilderConsumedError, match=method):
            getattr(builder, method)(*args)

    def test_failed_build_consumes_builder(self, transport: AsyncMock) -> None:
        """Test that a missing call is fatal to the builder."""
        builder = AccessListRequestBuilder(transport)
        with pytest.raises(MissingRequiredFieldError):
            builder.build()

        assert builder.state is BuilderState.CONSUMED


class TestExecute:
    """Tests for AccessListRequestBuilder.execute."""

    @pytest.mark.asyncio
    async def test_execute_without_call_fails(self, transport: AsyncMock) -> None:
        """Test that execute() requires a transaction call."""
        with pytest.raises(MissingRequiredFieldError):
            await AccessListRequestBuilder(transport).execute()

        transport.execute_access_list_request.assert_not_called()

    @pytest.mark.asyncio
    async def test_execute_delegates_request_and_options(
        self, transport: AsyncMock, call: TransactionCall
    ) -> None:
        """Test that the request and merged options reach the transport."""
        result = await (
            AccessListRequestBuilder(transport)
            .with_transaction(call)
            .at_block("0x10")
            .with_timeout(3.0)
            .execute()
        )

        assert result == {"accessList": [], "gasUsed": "0x1"}
        transport.execute_access_list_request.assert_awaited_once_with(
            AccessListRequest(params=call, block=NumberBlockReference(value="0x10")),
            ExecutionOptions(timeout=3.0),
        )

    @pytest.mark.asyncio
    async def test_execute_propagates_transport_failure(
        self, transport: AsyncMock, call: TransactionCall
    ) -> None:
        """Test that transport errors reach the caller unchanged."""
        error = httpx.ConnectError("connection refused")
        transport.execute_access_list_request.side_effect = error

        with pytest.raises(httpx.ConnectError) as exc_info:
            await AccessListRequestBuilder(transport).with_transaction(call).execute()

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_execute_consumes_builder(
        self, transport: AsyncMock, call: TransactionCall
    ) -> None:
        """Test that execute() can only run once."""
        builder = AccessListRequestBuilder(transport).with_transaction(call)
        await builder.execute()

        with pytest.raises(BuilderConsumedError):
            await builder.execute()
