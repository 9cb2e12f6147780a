"""Translation between provider-agnostic messages/tools and Gemini content structures."""

import json
from typing import Any, Dict, List, Optional, Sequence

from google.genai import types
from google.genai.types import GenerateContentResponse

from ...core.exceptions import NormalizationError
from ...core.logger import get_logger
from ...core.messages import AssistantMessage, BaseMessage, SystemMessage, ToolMessage, UserMessage
from ...core.tools import SchemaValidator, ToolDefinition, normalize_tool_call
from ...core.tools.normalization import new_call_id

logger = get_logger(__name__)


class GeminiAdapter:
    """Stateless conversions used by GeminiChatModel."""

    @staticmethod
    def system_instruction(history: Sequence[BaseMessage]) -> Optional[str]:
        """Gemini takes system prompts as configuration, not as history entries."""
        parts = [msg.content for msg in history if isinstance(msg, SystemMessage) and msg.content]
        return "\n\n".join(parts) or None

    @staticmethod
    def convert_history(history: Sequence[BaseMessage]) -> List[types.Content]:
        """
        Converts generic BaseMessage history to Gemini Content history.

        Consecutive tool messages are grouped into a single content entry, answering
        the function calls of the preceding model entry.

        Args:
            history: List of BaseMessage objects.

        Returns:
            List of Gemini Content objects.
        """
        contents: List[types.Content] = []
        pending_responses: List[types.Part] = []

        def flush_responses() -> None:
            if pending_responses:
                contents.append(types.Content(role="user", parts=list(pending_responses)))
                pending_responses.clear()

        for msg in history:
            if isinstance(msg, ToolMessage):
                pending_responses.append(GeminiAdapter.to_function_response(msg))
                continue

            flush_responses()
            if isinstance(msg, UserMessage):
                contents.append(types.Content(role="user", parts=[types.Part(text=msg.content)]))
            elif isinstance(msg, AssistantMessage):
                parts: List[types.Part] = []
                if msg.content:
                    parts.append(types.Part(text=msg.content))
                for raw_call in msg.tool_calls or []:
                    function_call = GeminiAdapter.to_function_call(raw_call)
                    if function_call is not None:
                        parts.append(types.Part(function_call=function_call))
                if parts:
                    contents.append(types.Content(role="model", parts=parts))

        flush_responses()
        return contents

    @staticmethod
    def to_function_call(raw_call: Any) -> Optional[types.FunctionCall]:
        try:
            request = normalize_tool_call(raw_call)
        except NormalizationError as exc:
            logger.debug(f"Dropping malformed tool call from Gemini history: {exc}")
            return None
        return types.FunctionCall(id=request.call_id, name=request.tool_name, args=request.arguments)

    @staticmethod
    def to_function_response(msg: ToolMessage) -> types.Part:
        try:
            response = json.loads(msg.content)
        except json.JSONDecodeError:
            response = {"result": msg.content}
        if not isinstance(response, dict):
            response = {"result": response}

        return types.Part(
            function_response=types.FunctionResponse(id=msg.tool_call_id, name=msg.name, response=response)
        )

    @staticmethod
    def to_tool(tools: Sequence[ToolDefinition]) -> types.Tool:
        """Build a Gemini Tool holding one function declaration per tool.

        Gemini rejects ``additionalProperties``, so schemas are re-sanitized as open objects.
        """
        declarations = []
        for tool in tools:
            if tool.parameters:
                parameters = SchemaValidator.sanitize_schema(tool.parameters, closed=False)
                declarations.append(
                    types.FunctionDeclaration(name=tool.name, description=tool.description, parameters=parameters)
                )
            else:
                declarations.append(types.FunctionDeclaration(name=tool.name, description=tool.description))
        return types.Tool(function_declarations=declarations)

    @staticmethod
    def response_parts(response: GenerateContentResponse) -> List[types.Part]:
        if not response.candidates:
            return []
        content = response.candidates[0].content
        if content is None or not content.parts:
            return []
        return list(content.parts)

    @staticmethod
    def extract_text(response: GenerateContentResponse) -> str:
        return "".join(part.text for part in GeminiAdapter.response_parts(response) if part.text)

    @staticmethod
    def extract_tool_calls(response: GenerateContentResponse) -> List[Dict[str, Any]]:
        """Extract function calls in the modern ``name``/``args``/``id`` shape.

        Gemini does not always assign call ids; missing ones are generated here so the
        tool results can be matched to their calls in the follow-up request.
        """
        tool_calls = []
        for part in GeminiAdapter.response_parts(response):
            function_call = part.function_call
            if function_call is None:
                continue
            tool_calls.append(
                {
                    "id": function_call.id or new_call_id(),
                    "name": function_call.name,
                    "args": dict(function_call.args or {}),
                }
            )
        return tool_calls
