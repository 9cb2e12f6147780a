"""Concurrent dispatch of one batch of tool calls.

Every raw call becomes exactly one ToolInvocationResult. Calls are normalized,
fanned out as independent tasks and joined with ``asyncio.gather``; each task
settles its own failures into an ``Err`` outcome, so the join never short-circuits
and a single failing tool never affects its siblings.
"""

from __future__ import annotations

import asyncio
import inspect
import time
from contextlib import AsyncExitStack
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from ...exceptions import NormalizationError, ToolNotFoundError
from ...logger import get_logger
from ..models import Err, Ok, Outcome, ToolDefinition, ToolInvocationRequest, ToolInvocationResult
from ..normalization import describe_tool_name, new_call_id, normalize_tool_call

if TYPE_CHECKING:
    from ..registry import ToolRegistry

logger = get_logger(__name__)


class _ToolTimeout(Exception):
    """Internal marker for an invocation that exceeded the per-call timeout."""


class BatchDispatcher:
    """Executes batches of tool calls against a ToolRegistry.

    Attributes:
        tool_timeout: Per-invocation timeout in seconds, or None for no timeout.
        max_concurrency: Upper bound on concurrently running tools, or None for full fan-out.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        tool_timeout: Optional[float] = 180.0,
        max_concurrency: Optional[int] = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Registry used to resolve tool names.
            tool_timeout: Timeout in seconds for each tool execution. ``None`` disables it.
            max_concurrency: Maximum number of tools executing at once. ``None`` means unbounded.

        Raises:
            ValueError: If the timeout or the concurrency bound is not positive.
        """
        if tool_timeout is not None and tool_timeout <= 0:
            raise ValueError(f"tool_timeout must be positive, got {tool_timeout}.")
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}.")

        self._registry = registry
        self.tool_timeout = tool_timeout
        self.max_concurrency = max_concurrency

    async def run_batch(self, raw_calls: Sequence[Any]) -> List[ToolInvocationResult]:
        """Execute all calls of one batch concurrently and wait for every one of them.

        Args:
            raw_calls: Tool calls in either wire shape, or already normalized requests.

        Returns:
            One result per input entry, in input order.

        Raises:
            TypeError: If ``raw_calls`` is not a sequence of calls.
        """
        if isinstance(raw_calls, (str, bytes)) or not isinstance(raw_calls, Sequence):
            raise TypeError(f"run_batch expects a sequence of tool calls, got {type(raw_calls).__name__}.")

        if not raw_calls:
            logger.debug("Empty batch. Nothing to dispatch.")
            return []

        logger.info(f"Dispatching {len(raw_calls)} tool call(s) concurrently.")
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        tasks = [self._settle(raw_call, semaphore) for raw_call in raw_calls]
        results = await asyncio.gather(*tasks)

        failed = sum(1 for result in results if not result.ok)
        logger.info(f"Batch finished: {len(results) - failed} succeeded, {failed} failed.")
        return list(results)

    async def _settle(self, raw_call: Any, semaphore: Optional[asyncio.Semaphore]) -> ToolInvocationResult:
        """Bring a single raw call to a terminal result. Never raises for per-call failures."""
        try:
            request = normalize_tool_call(raw_call)
        except NormalizationError as exc:
            call_id = exc.call_id or new_call_id()
            tool_name = exc.tool_name or describe_tool_name(raw_call)
            logger.warning(f"Rejected malformed tool call (ID: {call_id}): {exc}")
            return self._result(call_id, tool_name, Err(str(exc)), 0.0)

        logger.debug(f"Handling tool call: {request.tool_name} (ID: {request.call_id})")

        try:
            tool_def = self._registry.require_tool(request.tool_name)
        except ToolNotFoundError as exc:
            logger.warning(str(exc))
            return self._result(request.call_id, request.tool_name, Err(str(exc)), 0.0)

        try:
            arguments = self._validate_arguments(tool_def, request.arguments)
        except Exception as validation_error:
            msg = f"Argument validation failed for tool '{request.tool_name}': {validation_error}"
            logger.warning(msg)
            return self._result(request.call_id, request.tool_name, Err(msg), 0.0)

        async with AsyncExitStack() as stack:
            if semaphore is not None:
                await stack.enter_async_context(semaphore)
            return await self._invoke(tool_def, request, arguments)

    async def _invoke(
        self, tool_def: ToolDefinition, request: ToolInvocationRequest, arguments: Dict[str, Any]
    ) -> ToolInvocationResult:
        """Run the tool, converting exceptions and timeouts into an Err outcome."""
        outcome: Outcome
        start = time.perf_counter()
        try:
            logger.info(f"Executing tool '{request.tool_name}' (ID: {request.call_id})...")
            value = await self._execute_tool(tool_def.func, arguments)
            outcome = Ok(value)
        except _ToolTimeout:
            msg = f"Tool '{request.tool_name}' timed out after {self.tool_timeout} seconds."
            logger.warning(msg)
            outcome = Err(msg)
        except asyncio.CancelledError:
            # Only a cancellation of the batch itself may propagate
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            msg = f"Error executing tool '{request.tool_name}': cancelled"
            logger.error(msg)
            outcome = Err(msg)
        except Exception as exc:
            msg = f"Error executing tool '{request.tool_name}': {exc}"
            logger.error(f"{msg} ({type(exc).__name__})", exc_info=True)
            outcome = Err(msg)

        elapsed_ms = (time.perf_counter() - start) * 1000
        if isinstance(outcome, Ok):
            logger.info(f"Tool '{request.tool_name}' executed in {elapsed_ms:.0f}ms.")
        return self._result(request.call_id, request.tool_name, outcome, elapsed_ms)

    async def _execute_tool(self, tool_function: Any, function_args: Dict[str, Any]) -> Any:
        """Execute the tool function, handling async/sync and timeouts.

        Coroutines are cancelled on timeout. Sync functions run in a worker thread,
        which keeps running in the background after a timeout. A ``TimeoutError``
        raised by the tool itself is an ordinary tool failure.

        Raises:
            _ToolTimeout: If execution exceeds the per-invocation timeout.
        """
        if inspect.iscoroutinefunction(tool_function):
            awaitable = tool_function(**function_args)
        else:
            awaitable = asyncio.to_thread(tool_function, **function_args)

        deadline = asyncio.timeout(self.tool_timeout)
        try:
            async with deadline:
                result = await awaitable
                # Sync callables may still hand back an awaitable (e.g. functools.partial over a coroutine function)
                if inspect.isawaitable(result):
                    result = await result
        except TimeoutError as exc:
            if deadline.expired():
                raise _ToolTimeout() from exc
            raise
        return result

    @staticmethod
    def _validate_arguments(tool_def: ToolDefinition, arguments: Dict[str, Any]) -> Dict[str, Any]:
        if tool_def.args_model is None:
            return arguments
        validated = tool_def.args_model(**arguments)
        # Keep nested models as instances, the tool signature expects them
        return {name: getattr(validated, name) for name in type(validated).model_fields}

    @staticmethod
    def _result(call_id: str, tool_name: str, outcome: Outcome, elapsed_ms: float) -> ToolInvocationResult:
        return ToolInvocationResult(
            call_id=call_id,
            tool_name=tool_name,
            outcome=outcome,
            execution_time_ms=elapsed_ms,
            completed_at=datetime.now(timezone.utc),
        )
