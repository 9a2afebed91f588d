"""Tests for execution options merging."""

from altitrace.access_list.models import ExecutionOptions
from altitrace.access_list.options import merge_execution_options


class TestMergeExecutionOptions:
    """Tests for merge_execution_options function."""

    def test_headers_are_unioned(self) -> None:
        """Test that headers from both sides are kept."""
        merged = merge_execution_options(
            ExecutionOptions(headers={"a": "1"}), ExecutionOptions(headers={"b": "2"})
        )

        assert merged.headers == {"a": "1", "b": "2"}

    def test_incoming_header_wins(self) -> None:
        """Test that incoming headers override on collision."""
        merged = merge_execution_options(
            ExecutionOptions(headers={"a": "1"}), ExecutionOptions(headers={"a": "3"})
        )

        assert merged.headers == {"a": "3"}

    def test_sequential_header_merges(self) -> None:
        """Test merging {a:1}, then {b:2}, then {a:3}."""
        options = None
        for headers in ({"a": "1"}, {"b": "2"}, {"a": "3"}):
            options = merge_execution_options(options, ExecutionOptions(headers=headers))

        assert options is not None
        assert options.headers == {"a": "3", "b": "2"}

    def test_scalars_replaced_when_provided(self) -> None:
        """Test that timeout and retry are last-write-wins."""
        merged = merge_execution_options(
            ExecutionOptions(timeout=5.0, retry=True),
            ExecutionOptions(timeout=10.0, retry=False),
        )

        assert merged.timeout == 10.0
        assert merged.retry is False

    def test_omitted_fields_leave_existing(self) -> None:
        """Test that unset incoming fields do not clear existing ones."""
        existing = ExecutionOptions(timeout=5.0, headers={"a": "1"}, retry=True)

        merged = merge_execution_options(existing, ExecutionOptions())

        assert merged == existing

    def test_none_existing(self) -> None:
        """Test merging into nothing yields the incoming options."""
        incoming = ExecutionOptions(timeout=2.5)

        merged = merge_execution_options(None, incoming)

        assert merged.timeout == 2.5
        assert merged.headers is None
        assert merged.retry is None

    def test_inputs_not_mutated(self) -> None:
        """Test that merging leaves both inputs untouched."""
        existing_headers = {"a": "1"}
        incoming_headers = {"b": "2"}
        existing = ExecutionOptions(headers=existing_headers)
        incoming = ExecutionOptions(headers=incoming_headers)

        merged = merge_execution_options(existing, incoming)
        assert merged.headers is not None
        merged.headers["c"] = "3"

        assert existing.headers == {"a": "1"}
        assert incoming.headers == {"b": "2"}
        assert existing_headers == {"a": "1"}
