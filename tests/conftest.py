import asyncio
import time
from typing import Annotated, Any, Callable, Dict, List, Optional, Sequence, Tuple

import pytest
from pydantic import Field

from parallel_tools.builtin_tools import SIMULATED_LATENCY
from parallel_tools.core.base import ChatModel, ModelTurn
from parallel_tools.core.messages import BaseMessage
from parallel_tools.core.tools import ToolDefinition, ToolRegistry


class ScriptedChatModel(ChatModel[Any]):
    """Replays a fixed list of turns and records every request it receives."""

    def __init__(self, turns: Sequence[ModelTurn[Any]]) -> None:
        super().__init__(max_retries=0, base_retry_delay=0.0)
        self.turns = list(turns)
        self.requests: List[Tuple[List[BaseMessage], Optional[List[ToolDefinition]]]] = []

    async def _complete_impl(
        self, messages: List[BaseMessage], tools: Optional[Sequence[ToolDefinition]]
    ) -> ModelTurn[Any]:
        self.requests.append((list(messages), list(tools) if tools else None))
        if not self.turns:
            raise AssertionError("No scripted turn left.")
        return self.turns.pop(0)


@pytest.fixture
def scripted_model() -> Callable[..., ScriptedChatModel]:
    def factory(*turns: ModelTurn[Any]) -> ScriptedChatModel:
        return ScriptedChatModel(turns)

    return factory


@pytest.fixture
def start_times() -> Dict[str, float]:
    """Records when each delayed tool started, keyed by tool name."""
    return {}


@pytest.fixture
def delayed_registry(start_times: Dict[str, float]) -> ToolRegistry:
    """Registry with tools that sleep before answering, for concurrency assertions."""
    registry = ToolRegistry(tool_timeout=5.0)

    @registry.tool
    async def slow_lookup(key: Annotated[str, Field(description="Key to look up")]) -> Dict[str, str]:
        """Look up a key after a delay of 0.3 seconds."""
        start_times["slow_lookup"] = time.perf_counter()
        await asyncio.sleep(0.3)
        return {"key": key, "value": f"value-of-{key}"}

    @registry.tool
    async def fast_add(
        a: Annotated[int, Field(description="First addend")],
        b: Annotated[int, Field(description="Second addend")],
    ) -> int:
        """Add two integers after a delay of 0.1 seconds."""
        start_times["fast_add"] = time.perf_counter()
        await asyncio.sleep(0.1)
        return a + b

    @registry.tool
    async def always_fails(reason: Annotated[str, Field(description="Failure reason")]) -> None:
        """Always raise an error."""
        start_times["always_fails"] = time.perf_counter()
        raise RuntimeError(f"boom: {reason}")

    return registry


@pytest.fixture
def no_latency(monkeypatch: pytest.MonkeyPatch) -> None:
    """Removes the simulated latency of the demo tools."""
    for name in list(SIMULATED_LATENCY):
        monkeypatch.setitem(SIMULATED_LATENCY, name, 0.0)
