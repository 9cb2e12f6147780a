"""The generalist agent: one model turn, one concurrent tool round, one final turn."""

from typing import Any, List, Optional, Sequence

from ..core.base import ChatModel, ModelTurn
from ..core.logger import get_logger
from ..core.messages import AssistantMessage, BaseMessage, SystemMessage, ToolMessage, UserMessage
from ..core.tools import ToolInvocationResult, ToolRegistry, describe_tool_name
from .models import AgentRunResult
from .prompts import GENERALIST_SYSTEM_PROMPT

logger = get_logger(__name__)


class GeneralistAgent:
    """
    Answers user input with a model bound to every registered tool.

    A run starts in the initial turn. If the model requests no tools, its answer is
    final. Otherwise all requested tools are executed as one concurrent batch, and
    once every result is in, a second request carrying the original input, the model's
    tool-call record and the results (keyed by call id) produces the final answer.

    ``max_tool_rounds`` bounds how often this can repeat. With the default of one
    round the final request is sent without tools, so tool use cannot chain.
    """

    def __init__(
        self,
        model: ChatModel[Any],
        registry: ToolRegistry,
        system_prompt: str = GENERALIST_SYSTEM_PROMPT,
        max_tool_rounds: int = 1,
    ) -> None:
        """Initialize the generalist agent.

        Args:
            model: Model binding used for every turn.
            registry: Registry providing the tools and executing their batches.
            system_prompt: System prompt prepended to every run.
            max_tool_rounds: Maximum number of tool rounds per run. Must be at least 1.

        Raises:
            ValueError: If ``max_tool_rounds`` is smaller than 1.
        """
        if max_tool_rounds < 1:
            raise ValueError(f"max_tool_rounds must be at least 1, got {max_tool_rounds}.")

        self.model = model
        self.registry = registry
        self.system_prompt = system_prompt
        self.max_tool_rounds = max_tool_rounds

    async def run(self, user_input: str, history: Optional[Sequence[BaseMessage]] = None) -> AgentRunResult:
        """Run the agent on one user input.

        Args:
            user_input: The user's message.
            history: Previous messages of the conversation. Not modified.

        Returns:
            The final answer together with every tool result of the run.
        """
        logger.info(f"Running generalist agent with input: {user_input[:80]}")

        messages = self._initial_messages(user_input, history)
        tools = self.registry.all_tools or None

        turn: ModelTurn[Any] = await self.model.complete(messages, tools)

        tool_results: List[ToolInvocationResult] = []
        used_tool_names: List[str] = []
        rounds = 0

        while turn.has_tool_calls and rounds < self.max_tool_rounds:
            rounds += 1
            logger.info(f"Round {rounds}/{self.max_tool_rounds}: agent requested {len(turn.tool_calls)} tool(s).")

            results = await self.registry.run_batch(turn.tool_calls)
            tool_results.extend(results)
            used_tool_names.extend(describe_tool_name(tool_call) for tool_call in turn.tool_calls)

            messages.append(AssistantMessage(content=turn.content, tool_calls=list(turn.tool_calls)))
            messages.extend(ToolMessage.from_result(result) for result in results)

            next_tools = tools if rounds < self.max_tool_rounds else None
            turn = await self.model.complete(messages, next_tools)

        if turn.has_tool_calls:
            logger.warning(
                f"Model requested {len(turn.tool_calls)} more tool(s) after the last allowed round. Ignoring them."
            )

        return AgentRunResult(
            answer=turn.content,
            tool_results=tool_results,
            used_tool_names=used_tool_names,
            rounds=rounds,
            raw=turn.raw,
        )

    def _initial_messages(self, user_input: str, history: Optional[Sequence[BaseMessage]]) -> List[BaseMessage]:
        messages: List[BaseMessage] = list(history or [])
        if self.system_prompt and not (messages and isinstance(messages[0], SystemMessage)):
            messages.insert(0, SystemMessage(content=self.system_prompt))
        messages.append(UserMessage(content=user_input))
        return messages
