import asyncio
import json
import threading
import time
from collections import Counter
from typing import Annotated, Any, Dict, List

import pytest
from pydantic import BaseModel, Field

from parallel_tools.builtin_tools import SIMULATED_LATENCY, register_builtin_tools
from parallel_tools.core.exceptions import ToolExecutionError
from parallel_tools.core.tools import Err, Ok, ToolDefinition, ToolInvocationRequest, ToolRegistry


@pytest.mark.asyncio
@pytest.mark.parametrize("size", [0, 1, 5])
async def test_batch_returns_one_result_per_call(delayed_registry: ToolRegistry, size: int) -> None:
    calls = [{"id": f"call_{i}", "name": "fast_add", "args": {"a": i, "b": 1}} for i in range(size)]

    results = await delayed_registry.run_batch(calls)

    assert len(results) == size
    assert Counter(result.call_id for result in results) == Counter(call["id"] for call in calls)
    assert [result.value for result in results] == [i + 1 for i in range(size)]


@pytest.mark.asyncio
async def test_results_keep_input_order_and_duplicate_ids(delayed_registry: ToolRegistry) -> None:
    calls = [
        {"id": "dup", "name": "slow_lookup", "args": {"key": "a"}},
        {"id": "dup", "name": "fast_add", "args": {"a": 1, "b": 2}},
    ]

    results = await delayed_registry.run_batch(calls)

    assert [result.call_id for result in results] == ["dup", "dup"]
    assert [result.tool_name for result in results] == ["slow_lookup", "fast_add"]


@pytest.mark.asyncio
async def test_failing_tool_does_not_affect_siblings(delayed_registry: ToolRegistry) -> None:
    calls = [
        {"id": "c1", "name": "always_fails", "args": {"reason": "nope"}},
        {"id": "c2", "name": "fast_add", "args": {"a": 2, "b": 3}},
    ]

    failed, succeeded = await delayed_registry.run_batch(calls)

    assert isinstance(failed.outcome, Err)
    assert failed.error == "Error executing tool 'always_fails': boom: nope"
    assert failed.payload == {"error": failed.error}
    assert isinstance(succeeded.outcome, Ok)
    assert succeeded.value == 5
    assert succeeded.payload == {"result": 5}


@pytest.mark.asyncio
async def test_tool_raising_cancelled_error_does_not_affect_siblings(delayed_registry: ToolRegistry) -> None:
    @delayed_registry.tool
    async def abandoned() -> str:
        """Await an inner task that gets cancelled elsewhere."""
        inner = asyncio.ensure_future(asyncio.sleep(10))
        inner.cancel()
        await inner
        return "unreachable"

    cancelled, succeeded = await delayed_registry.run_batch(
        [
            {"id": "c1", "name": "abandoned", "args": {}},
            {"id": "c2", "name": "fast_add", "args": {"a": 2, "b": 3}},
        ]
    )

    assert cancelled.error == "Error executing tool 'abandoned': cancelled"
    assert succeeded.value == 5


@pytest.mark.asyncio
async def test_cancelling_the_batch_propagates(delayed_registry: ToolRegistry) -> None:
    batch = asyncio.ensure_future(
        delayed_registry.run_batch([{"id": "c1", "name": "slow_lookup", "args": {"key": "a"}}])
    )
    await asyncio.sleep(0.05)
    batch.cancel()

    with pytest.raises(asyncio.CancelledError):
        await batch


@pytest.mark.asyncio
async def test_timeout_error_raised_by_tool_keeps_its_message() -> None:
    registry = ToolRegistry(tool_timeout=60)

    @registry.tool
    async def pooled_query() -> str:
        """Query through an exhausted connection pool."""
        raise TimeoutError("connection pool exhausted after 5s")

    (result,) = await registry.run_batch([{"id": "c1", "name": "pooled_query", "args": {}}])

    assert result.error == "Error executing tool 'pooled_query': connection pool exhausted after 5s"


@pytest.mark.asyncio
async def test_unknown_tool_yields_error_without_raising(delayed_registry: ToolRegistry) -> None:
    results = await delayed_registry.run_batch(
        [
            {"id": "c1", "name": "teleport", "args": {}},
            {"id": "c2", "name": "fast_add", "args": {"a": 1, "b": 1}},
        ]
    )

    assert results[0].call_id == "c1"
    assert results[0].tool_name == "teleport"
    assert not results[0].ok
    assert "teleport" in results[0].error  # type: ignore[operator]
    assert results[1].value == 2


@pytest.mark.asyncio
async def test_malformed_calls_become_failed_results(delayed_registry: ToolRegistry) -> None:
    results = await delayed_registry.run_batch(
        [
            {"id": "c1", "function": {"name": "fast_add", "arguments": "{broken"}},
            {"id": "c2", "unexpected": True},
            {"id": "c3", "name": "fast_add", "args": {"a": 4, "b": 4}},
        ]
    )

    assert len(results) == 3
    assert results[0].call_id == "c1"
    assert results[0].tool_name == "fast_add"
    assert "Failed to parse arguments" in results[0].error  # type: ignore[operator]
    assert results[1].call_id == "c2"
    assert results[1].tool_name == "unknown"
    assert "Unknown tool call format" in results[1].error  # type: ignore[operator]
    assert results[2].value == 8


@pytest.mark.asyncio
async def test_malformed_call_without_id_gets_generated_id(delayed_registry: ToolRegistry) -> None:
    (result,) = await delayed_registry.run_batch([{"tool": "fast_add"}])
    assert result.call_id.startswith("call_")
    assert not result.ok


@pytest.mark.asyncio
async def test_modern_and_legacy_shapes_produce_equal_results(delayed_registry: ToolRegistry) -> None:
    modern = {"id": "c1", "name": "fast_add", "args": {"a": 20, "b": 22}}
    legacy = {
        "id": "c1",
        "type": "function",
        "function": {"name": "fast_add", "arguments": json.dumps({"a": 20, "b": 22})},
    }

    (modern_result,) = await delayed_registry.run_batch([modern])
    (legacy_result,) = await delayed_registry.run_batch([legacy])

    assert modern_result.outcome == legacy_result.outcome == Ok(42)
    assert modern_result.call_id == legacy_result.call_id


@pytest.mark.asyncio
async def test_tools_start_concurrently(delayed_registry: ToolRegistry, start_times: Dict[str, float]) -> None:
    started = time.perf_counter()
    results = await delayed_registry.run_batch(
        [
            {"id": "c1", "name": "slow_lookup", "args": {"key": "k"}},
            {"id": "c2", "name": "fast_add", "args": {"a": 1, "b": 2}},
        ]
    )
    elapsed = time.perf_counter() - started

    assert all(result.ok for result in results)
    # Both started before the shorter delay elapsed
    assert abs(start_times["slow_lookup"] - start_times["fast_add"]) < 0.1
    assert elapsed < 0.4
    assert results[0].execution_time_ms >= 250
    assert results[1].execution_time_ms < results[0].execution_time_ms


@pytest.mark.asyncio
async def test_weather_and_calculator_run_in_parallel(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(SIMULATED_LATENCY, "weather", 0.3)
    monkeypatch.setitem(SIMULATED_LATENCY, "calculator", 0.3)
    registry = register_builtin_tools(ToolRegistry())

    started = time.perf_counter()
    results = await registry.run_batch(
        [
            {"id": "w", "name": "weather", "args": {"location": "London"}},
            {"id": "c", "name": "calculator", "args": {"expression": "583 * 24"}},
        ]
    )
    elapsed = time.perf_counter() - started

    assert [result.ok for result in results] == [True, True]
    assert results[1].value["result"] == 13992
    # Well below the 0.6 s a sequential run takes
    assert elapsed < 0.5


@pytest.mark.asyncio
async def test_timeout_fails_only_the_slow_call() -> None:
    registry = ToolRegistry(tool_timeout=0.1)

    @registry.tool
    async def sleepy(seconds: Annotated[float, Field(description="Seconds to sleep")]) -> str:
        """Sleep for a while."""
        await asyncio.sleep(seconds)
        return "awake"

    slow, quick = await registry.run_batch(
        [
            {"id": "slow", "name": "sleepy", "args": {"seconds": 1.0}},
            {"id": "quick", "name": "sleepy", "args": {"seconds": 0.01}},
        ]
    )

    assert slow.error == "Tool 'sleepy' timed out after 0.1 seconds."
    assert quick.value == "awake"


@pytest.mark.asyncio
async def test_timeout_disabled() -> None:
    registry = ToolRegistry(tool_timeout=None)

    @registry.tool
    async def nap(seconds: Annotated[float, Field(description="Seconds to sleep")]) -> str:
        """Sleep briefly."""
        await asyncio.sleep(seconds)
        return "done"

    (result,) = await registry.run_batch([{"id": "c", "name": "nap", "args": {"seconds": 0.05}}])
    assert result.value == "done"


@pytest.mark.asyncio
async def test_max_concurrency_bounds_overlap() -> None:
    registry = ToolRegistry(max_concurrency=1)
    running = 0
    peak = 0

    @registry.tool
    async def tracked(tag: Annotated[str, Field(description="Tag")]) -> str:
        """Track how many invocations overlap."""
        nonlocal running, peak
        running += 1
        peak = max(peak, running)
        await asyncio.sleep(0.02)
        running -= 1
        return tag

    results = await registry.run_batch([{"id": f"c{i}", "name": "tracked", "args": {"tag": str(i)}} for i in range(4)])

    assert peak == 1
    assert [result.value for result in results] == ["0", "1", "2", "3"]


@pytest.mark.asyncio
async def test_sync_tools_run_in_worker_threads() -> None:
    registry = ToolRegistry()
    thread_names: List[str] = []

    @registry.tool
    def blocking(seconds: Annotated[float, Field(description="Seconds to block")]) -> str:
        """Block the calling thread."""
        thread_names.append(threading.current_thread().name)
        time.sleep(seconds)
        return "unblocked"

    started = time.perf_counter()
    results = await registry.run_batch(
        [{"id": f"c{i}", "name": "blocking", "args": {"seconds": 0.2}} for i in range(3)]
    )
    elapsed = time.perf_counter() - started

    assert [result.value for result in results] == ["unblocked"] * 3
    assert threading.main_thread().name not in thread_names
    assert elapsed < 0.5


@pytest.mark.asyncio
async def test_arguments_are_validated_and_coerced() -> None:
    class Window(BaseModel):
        start: int
        end: int

    registry = ToolRegistry()
    received: List[Any] = []

    @registry.tool
    async def span(window: Annotated[Window, Field(description="Time window")]) -> int:
        """Length of a window."""
        received.append(window)
        return window.end - window.start

    ok, bad = await registry.run_batch(
        [
            {"id": "ok", "name": "span", "args": {"window": {"start": "3", "end": 10}}},
            {"id": "bad", "name": "span", "args": {"window": {"start": 3}}},
        ]
    )

    assert ok.value == 7
    assert isinstance(received[0], Window)
    assert bad.error is not None
    assert bad.error.startswith("Argument validation failed for tool 'span'")
    assert len(received) == 1


@pytest.mark.asyncio
async def test_tool_execution_error_is_reported() -> None:
    async def refuse() -> None:
        raise ToolExecutionError("service unavailable")

    registry = ToolRegistry()
    registry.register(ToolDefinition(name="refuse", description="Always refuses", func=refuse))

    (result,) = await registry.run_batch([{"id": "c", "name": "refuse", "args": {}}])
    assert result.error == "Error executing tool 'refuse': service unavailable"


@pytest.mark.asyncio
async def test_error_shaped_return_value_is_a_success() -> None:
    registry = ToolRegistry()
    registry.register(
        ToolDefinition(name="lookup", description="Lookup", func=lambda: {"error": "not found"})
    )

    (result,) = await registry.run_batch([{"id": "c", "name": "lookup", "args": {}}])
    assert result.ok
    assert result.payload == {"result": {"error": "not found"}}


@pytest.mark.asyncio
async def test_normalized_requests_are_accepted(delayed_registry: ToolRegistry) -> None:
    request = ToolInvocationRequest(call_id="pre", tool_name="fast_add", arguments={"a": 1, "b": 1})
    (result,) = await delayed_registry.run_batch([request])
    assert result.call_id == "pre"
    assert result.value == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_batch", ["not a list", None, 42])
async def test_non_sequence_batch_raises_type_error(delayed_registry: ToolRegistry, bad_batch: Any) -> None:
    with pytest.raises(TypeError):
        await delayed_registry.run_batch(bad_batch)
