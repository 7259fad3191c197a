"""Tests for the decode -> invoke -> encode pipeline."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest

from conftest import RecordParams, WeatherResult
from tool_bridge import ErrorKind, ToolCallRequest, ToolRegistry, tool_function


def call(name: str, arguments: Any, call_id: str = "c1") -> ToolCallRequest:
    return ToolCallRequest(id=call_id, name=name, arguments=arguments)


class TestSuccessfulDispatch:
    """Calls whose arguments match the schema."""

    @pytest.mark.asyncio
    async def test_round_trip(self, registry, counter):
        result = await registry.dispatch(
            call("get_weather", {"city": "Tokyo", "country": "Japan"}, call_id="c2")
        )

        assert not result.is_error
        assert result.id == "c2"
        assert json.loads(result.content) == "Tokyo"
        assert counter.calls == 1

    @pytest.mark.asyncio
    async def test_model_output_is_json(self, registry):
        result = await registry.dispatch(
            call("get_forecast", {"city": "Tokyo", "days": 2, "unit": "C"})
        )

        assert json.loads(result.content) == {"temperature": 22.5, "condition": "Sunny"}

    @pytest.mark.asyncio
    async def test_optional_field_may_be_omitted(self):
        @tool_function
        async def record(params: RecordParams) -> dict[str, Any]:
            return {"email": params.email, "operation": params.operation}

        registry = ToolRegistry().register_function(record)
        result = await registry.dispatch(
            call("record", {"name": "Alice", "age": 25, "tags": [], "operation": "create"})
        )

        assert json.loads(result.content) == {"email": None, "operation": "create"}

    @pytest.mark.asyncio
    async def test_integer_accepted_for_number(self):
        @tool_function
        async def identity(params: WeatherResult) -> WeatherResult:
            return params

        registry = ToolRegistry().register_function(identity)
        result = await registry.dispatch(call("identity", {"temperature": 20, "condition": "Rain"}))

        assert json.loads(result.content)["temperature"] == 20.0


class TestDecodeErrors:
    """Arguments that do not match the schema never reach the handler."""

    @pytest.mark.asyncio
    async def test_missing_required_field(self, registry, counter):
        result = await registry.dispatch(call("get_weather", {"country": "Japan"}))

        assert result.is_error
        assert result.id == "c1"
        assert result.error.kind == ErrorKind.INVALID_ARGUMENTS
        assert result.error.details[0]["path"] == "city"
        assert result.error.details[0]["type"] == "missing"
        assert "city" in result.error.message
        assert counter.calls == 0

    @pytest.mark.asyncio
    async def test_wrong_type_is_not_coerced(self, registry):
        result = await registry.dispatch(
            call("get_forecast", {"city": "Tokyo", "days": "3", "unit": "C"})
        )

        assert result.error.kind == ErrorKind.INVALID_ARGUMENTS
        assert result.error.details[0]["path"] == "days"
        assert result.error.details[0]["input"] == "3"

    @pytest.mark.asyncio
    async def test_literal_restricted_to_declared_values(self, registry):
        result = await registry.dispatch(
            call("get_forecast", {"city": "Tokyo", "days": 3, "unit": "K"})
        )

        assert result.error.kind == ErrorKind.INVALID_ARGUMENTS
        assert result.error.details[0]["path"] == "unit"

    @pytest.mark.asyncio
    async def test_enum_restricted_to_declared_values(self):
        @tool_function
        async def record(params: RecordParams) -> str:
            return params.name

        registry = ToolRegistry().register_function(record)
        result = await registry.dispatch(
            call("record", {"name": "Alice", "age": 25, "tags": [], "operation": "archive"})
        )

        assert result.error.kind == ErrorKind.INVALID_ARGUMENTS
        assert result.error.details[0]["path"] == "operation"

    @pytest.mark.asyncio
    async def test_non_object_arguments(self, registry, counter):
        result = await registry.dispatch(call("get_weather", "{not json"))

        assert result.error.kind == ErrorKind.INVALID_ARGUMENTS
        assert result.error.details[0]["path"] == "$"
        assert counter.calls == 0

    @pytest.mark.asyncio
    async def test_non_json_arguments(self, registry, counter):
        result = await registry.dispatch(call("get_weather", {"city": object(), "country": "x"}))

        assert result.error.kind == ErrorKind.INVALID_ARGUMENTS
        assert result.error.details is None
        assert counter.calls == 0


class TestHandlerAndEncodeErrors:
    """Failures after decoding are reported, not raised."""

    @pytest.mark.asyncio
    async def test_domain_error_keeps_its_kind(self, registry, counter):
        result = await registry.dispatch(call("get_weather", {"city": "Atlantis", "country": "-"}))

        assert result.id == "c1"
        assert result.error.kind == "city_not_found"
        assert result.error.message == "City not found: Atlantis"
        assert counter.calls == 1

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_handler_error(self):
        @tool_function
        async def explode(params: RecordParams) -> str:
            raise ValueError("boom")

        registry = ToolRegistry().register_function(explode)
        result = await registry.dispatch(
            call("explode", {"name": "a", "age": 1, "tags": [], "operation": "delete"})
        )

        assert result.error.kind == ErrorKind.HANDLER_ERROR
        assert result.error.message == "ValueError: boom"

    @pytest.mark.asyncio
    async def test_unserializable_output_is_internal_error(self):
        @tool_function
        async def opaque(params: RecordParams) -> Any:
            return object()

        registry = ToolRegistry().register_function(opaque)
        result = await registry.dispatch(
            call("opaque", {"name": "a", "age": 1, "tags": [], "operation": "delete"})
        )

        assert result.error.kind == ErrorKind.INTERNAL_ERROR
        assert "object" not in result.error.message

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        started = asyncio.Event()

        @tool_function
        async def forever(params: RecordParams) -> str:
            started.set()
            await asyncio.Event().wait()
            return "unreachable"

        registry = ToolRegistry().register_function(forever)
        task = asyncio.create_task(
            registry.dispatch(call("forever", {"name": "a", "age": 1, "tags": [], "operation": "create"}))
        )
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestCallIdEcho:
    """Every response carries the id of the call that produced it."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name, arguments",
        [
            ("get_weather", {"city": "Tokyo", "country": "Japan"}),
            ("get_weather", {"country": "Japan"}),
            ("get_weather", {"city": "Atlantis", "country": "-"}),
            ("does_not_exist", {}),
        ],
    )
    async def test_call_id_is_echoed(self, registry, name, arguments):
        result = await registry.dispatch(call(name, arguments, call_id="call-xyz"))
        assert result.id == "call-xyz"


class TestConcurrentDispatch:
    """Concurrent calls to the same tool stay isolated."""

    @pytest.mark.asyncio
    async def test_concurrent_calls_to_same_tool(self, registry):
        slow = call("echo", {"text": "slow", "delay": 0.05}, call_id="a")
        fast = call("echo", {"text": "fast", "delay": 0.01}, call_id="b")

        results = await asyncio.gather(registry.dispatch(slow), registry.dispatch(fast))

        by_id = {r.id: json.loads(r.content)["text"] for r in results}
        assert by_id == {"a": "slow", "b": "fast"}

    @pytest.mark.asyncio
    async def test_dispatch_many_preserves_input_order(self, registry):
        calls = [
            call("echo", {"text": "first", "delay": 0.03}, call_id="1"),
            call("missing", {}, call_id="2"),
            call("echo", {"text": "third"}, call_id="3"),
        ]

        results = await registry.dispatch_many(calls)

        assert [r.id for r in results] == ["1", "2", "3"]
        assert json.loads(results[0].content)["text"] == "first"
        assert results[1].error.kind == ErrorKind.NOT_FOUND
        assert json.loads(results[2].content)["text"] == "third"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
