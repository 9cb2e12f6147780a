"""Tool registry and batch orchestration entry point."""

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from ..execution import BatchDispatcher
from ..models import ToolDefinition, ToolInvocationResult
from ..schema import build_tool_definition
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

ToolLike = Union[ToolDefinition, Callable]


class ToolRegistry:
    """
    Holds the available tools and executes batches of tool calls against them.

    Tools are registered once at startup and looked up by name afterwards. Registering
    a name twice is a configuration error. Registration must not overlap a running
    batch; the registry refuses it while ``run_batch`` is in flight.
    """

    def __init__(self, tool_timeout: Optional[float] = 180.0, max_concurrency: Optional[int] = None) -> None:
        """Initialize the ToolRegistry.

        Args:
            tool_timeout: Per-invocation timeout in seconds. ``None`` disables the timeout.
            max_concurrency: Maximum number of tools executing at once. ``None`` means unbounded.
        """
        self.tools: Dict[str, ToolDefinition] = {}
        self._dispatcher = BatchDispatcher(self, tool_timeout=tool_timeout, max_concurrency=max_concurrency)
        self._batches_in_flight = 0

    def register(
        self,
        name_or_tool: Union[str, ToolLike],
        description: Optional[str] = None,
        func: Optional[Callable] = None,
        parameters: Optional[Any] = None,
    ) -> ToolDefinition:
        """
        Register a new tool.

        Accepts a ready ``ToolDefinition``, a documented function whose definition is
        derived from its signature, or a name together with ``func`` (and optionally an
        explicit ``parameters`` schema plus ``description``).

        Args:
            name_or_tool: A ToolDefinition, a function, or the tool name.
            description: Overrides the docstring. Required together with ``parameters``.
            func: The implementation, when ``name_or_tool`` is a name.
            parameters: Explicit JSON schema of the arguments. Inferred from ``func`` if None.

        Returns:
            The registered ToolDefinition.

        Raises:
            ToolRegistrationError: If the name is taken, a batch is running, or the arguments are inconsistent.
            ToolValidationError: If the definition cannot be derived from the function.
        """
        if self._batches_in_flight:
            msg = "Cannot register tools while a batch is running. Register all tools at startup."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        tool = self._as_definition(name_or_tool, description, func, parameters)
        if not tool.name:
            raise ToolValidationError("Tool must have a name.")
        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.info(f"Registered tool: '{tool.name}'")
        return tool

    @staticmethod
    def _as_definition(
        name_or_tool: Union[str, ToolLike],
        description: Optional[str],
        func: Optional[Callable],
        parameters: Optional[Any],
    ) -> ToolDefinition:
        if isinstance(name_or_tool, ToolDefinition):
            return name_or_tool
        if callable(name_or_tool):
            return build_tool_definition(name_or_tool, description=description)

        if func is None:
            raise ToolRegistrationError(f"Tool '{name_or_tool}' is registered by name but has no func.")
        if parameters is None:
            return build_tool_definition(func, name=name_or_tool, description=description)
        if description is None:
            raise ToolRegistrationError(f"Tool '{name_or_tool}' has an explicit parameter schema but no description.")
        return ToolDefinition(name=name_or_tool, description=description, func=func, parameters=parameters)

    def register_tools(self, tools: Iterable[ToolLike]) -> "ToolRegistry":
        """Register several tools at once and return the registry for chaining."""
        for tool in tools:
            self.register(tool)
        return self

    def tool(self, func: Callable) -> Callable:
        """Decorator form of ``register``. The function is returned unchanged."""
        self.register(func)
        return func

    def get_tool(self, tool_name: str) -> Optional[ToolDefinition]:
        return self.tools.get(tool_name)

    def require_tool(self, tool_name: str) -> ToolDefinition:
        """Look up a tool by name.

        Raises:
            ToolNotFoundError: If no tool is registered under ``tool_name``.
        """
        tool = self.tools.get(tool_name)
        if tool is None:
            raise ToolNotFoundError(f"Tool '{tool_name}' not found in registry.")
        return tool

    @property
    def all_tools(self) -> List[ToolDefinition]:
        return list(self.tools.values())

    @property
    def tool_names(self) -> List[str]:
        return list(self.tools)

    @property
    def implementations(self) -> Dict[str, Callable]:
        return {name: tool.func for name, tool in self.tools.items()}

    @property
    def tool_schemas(self) -> List[Dict[str, Any]]:
        """Provider-agnostic description of every tool, as sent to a model binding."""
        return [
            {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.parameters or {"type": "object", "properties": {}},
            }
            for tool in self.tools.values()
        ]

    async def run_batch(self, raw_calls: Sequence[Any]) -> List[ToolInvocationResult]:
        """Execute one batch of tool calls concurrently.

        Every entry yields exactly one result: malformed calls, unknown tools, invalid
        arguments, exceptions and timeouts all become failed results instead of raising.

        Args:
            raw_calls: Tool calls in either wire shape, as emitted by a model turn.

        Returns:
            One ToolInvocationResult per entry of ``raw_calls``, in input order.

        Raises:
            TypeError: If ``raw_calls`` is not a sequence.
        """
        self._batches_in_flight += 1
        try:
            return await self._dispatcher.run_batch(raw_calls)
        finally:
            self._batches_in_flight -= 1
