"""Translation between provider-agnostic messages/tools and the OpenAI chat completions API."""

import json
from typing import Any, Dict, List, Mapping, Sequence

from openai.types.chat import ChatCompletion, ChatCompletionToolParam

from ...core.exceptions import NormalizationError
from ...core.logger import get_logger
from ...core.messages import AssistantMessage, BaseMessage, SystemMessage, ToolMessage, UserMessage
from ...core.tools import ToolDefinition, normalize_tool_call

logger = get_logger(__name__)


class OpenAIAdapter:
    """Stateless conversions used by OpenAIChatModel."""

    @staticmethod
    def convert_history(history: Sequence[BaseMessage]) -> List[Dict[str, Any]]:
        """
        Converts generic BaseMessage history to OpenAI message dictionaries.

        Args:
            history: List of BaseMessage objects.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_history: List[Dict[str, Any]] = []
        for msg in history:
            if isinstance(msg, UserMessage):
                openai_history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content or None}
                if msg.tool_calls:
                    openai_msg["tool_calls"] = [OpenAIAdapter.to_openai_tool_call(tc) for tc in msg.tool_calls]
                openai_history.append(openai_msg)
            elif isinstance(msg, SystemMessage):
                openai_history.append({"role": "system", "content": msg.content})
            elif isinstance(msg, ToolMessage):
                openai_history.append(
                    {"role": "tool", "content": msg.content, "tool_call_id": msg.tool_call_id, "name": msg.name}
                )
        return openai_history

    @staticmethod
    def to_openai_tool_call(raw_call: Any) -> Any:
        """Render a recorded tool call (either shape) as an OpenAI ``tool_calls`` entry.

        Entries that cannot be normalized are passed through unchanged so the record
        stays as the model emitted it.
        """
        try:
            request = normalize_tool_call(raw_call)
        except NormalizationError:
            logger.debug("Keeping malformed tool call record as-is.")
            return dict(raw_call) if isinstance(raw_call, Mapping) else raw_call

        return {
            "id": request.call_id,
            "type": "function",
            "function": {"name": request.tool_name, "arguments": json.dumps(request.arguments)},
        }

    @staticmethod
    def to_tool_params(tools: Sequence[ToolDefinition]) -> List[ChatCompletionToolParam]:
        """Build the ``tools`` parameter of a chat completion request."""
        tools_list: List[ChatCompletionToolParam] = []
        for tool in tools:
            tools_list.append(
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description,
                        # OpenAI expects an object schema even for tools without arguments
                        "parameters": tool.parameters or {"type": "object", "properties": {}},
                    },
                }
            )
        return tools_list

    @staticmethod
    def extract_tool_calls(response: ChatCompletion) -> List[Dict[str, Any]]:
        """Extract the requested tool calls in the legacy ``function.arguments`` shape.

        Args:
            response: The chat completion response from OpenAI.

        Returns:
            The tool calls as plain dictionaries.
        """
        if not response.choices:
            return []

        tool_calls = response.choices[0].message.tool_calls
        if not tool_calls:
            return []

        return [tool_call.model_dump() for tool_call in tool_calls if tool_call.type == "function"]
