"""Normalization of raw tool calls into ToolInvocationRequest objects.

Models emit tool calls in two shapes. The modern shape carries ``name``,
``args`` (an object) and ``id`` directly; the legacy shape nests
``function.name`` and a JSON-encoded ``function.arguments`` string. Both are
parsed into a tagged union first and then flattened into a request.
"""

from __future__ import annotations

import json
import uuid
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel

from ..exceptions import ToolArgumentsError, ToolCallFormatError
from ..logger import get_logger
from .models import (
    LegacyFunction,
    LegacyToolCall,
    ModernToolCall,
    RawToolCall,
    ToolInvocationRequest,
)

logger = get_logger(__name__)

UNKNOWN_TOOL_NAME = "unknown"


def new_call_id() -> str:
    """Generate a call id for requests that arrive without one."""
    return f"call_{uuid.uuid4().hex[:24]}"


def _as_mapping(raw: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(raw, Mapping):
        return raw
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def parse_tool_call(raw: Any) -> RawToolCall:
    """Detect the wire shape of a raw tool call.

    Args:
        raw: A mapping or pydantic model as emitted by a model binding.

    Returns:
        A ModernToolCall or LegacyToolCall.

    Raises:
        ToolCallFormatError: If the entry matches neither known shape.
        ToolArgumentsError: If modern-shape arguments are not an object.
    """
    if isinstance(raw, (ModernToolCall, LegacyToolCall)):
        return raw

    data = _as_mapping(raw)
    if data is None:
        raise ToolCallFormatError(f"Unknown tool call format: expected an object, got {type(raw).__name__}.")

    call_id = _optional_str(data.get("id"))
    name = data.get("name")

    if isinstance(name, str) and name and "args" in data:
        args = data.get("args")
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            raise ToolArgumentsError(
                f"Arguments for tool '{name}' must be an object, got {type(args).__name__}.",
                call_id=call_id,
                tool_name=name,
            )
        return ModernToolCall(id=call_id, name=name, args=dict(args))

    function = data.get("function")
    if function is not None:
        function_data = _as_mapping(function) or {}
        function_name = function_data.get("name")
        if not isinstance(function_name, str) or not function_name:
            raise ToolCallFormatError("Unknown tool call format: 'function.name' is missing.", call_id=call_id)
        return LegacyToolCall(
            id=call_id,
            function=LegacyFunction(name=function_name, arguments=function_data.get("arguments")),
        )

    raise ToolCallFormatError(
        "Unknown tool call format: expected 'name'/'args' or 'function.name'/'function.arguments'.",
        call_id=call_id,
        tool_name=name if isinstance(name, str) and name else None,
    )


def decode_arguments(tool_name: str, raw_args: Any, call_id: Optional[str] = None) -> Dict[str, Any]:
    """Decode legacy tool arguments into a dictionary.

    Handles JSON strings, dictionaries, or None values.

    Args:
        tool_name: Name of the tool (for error reporting).
        raw_args: The raw arguments (dict, JSON string, or None).
        call_id: Call id attached to any raised error.

    Returns:
        A dictionary of arguments.

    Raises:
        ToolArgumentsError: If arguments cannot be parsed or do not form an object.
    """
    if raw_args is None or raw_args == "":
        return {}

    if isinstance(raw_args, Mapping):
        return dict(raw_args)

    if isinstance(raw_args, str):
        try:
            parsed = json.loads(raw_args)
        except json.JSONDecodeError as exc:
            raise ToolArgumentsError(
                f"Failed to parse arguments for tool '{tool_name}': {exc}", call_id=call_id, tool_name=tool_name
            ) from exc

        if parsed is None:
            return {}

        if not isinstance(parsed, dict):
            raise ToolArgumentsError(
                f"Failed to parse arguments for tool '{tool_name}': arguments must decode to a JSON object.",
                call_id=call_id,
                tool_name=tool_name,
            )
        return parsed

    raise ToolArgumentsError(
        f"Failed to parse arguments for tool '{tool_name}': unsupported type {type(raw_args).__name__}.",
        call_id=call_id,
        tool_name=tool_name,
    )


def normalize_tool_call(raw: Any) -> ToolInvocationRequest:
    """Turn a raw tool call of either shape into a ToolInvocationRequest.

    Requests without an id get a generated one so that their result stays addressable.

    Raises:
        NormalizationError: If the shape is unknown or the arguments are malformed.
    """
    if isinstance(raw, ToolInvocationRequest):
        return raw

    call = parse_tool_call(raw)
    call_id = call.id or new_call_id()

    if isinstance(call, ModernToolCall):
        logger.debug(f"Normalized modern tool call '{call.name}' (ID: {call_id}).")
        return ToolInvocationRequest(call_id=call_id, tool_name=call.name, arguments=dict(call.args))

    arguments = decode_arguments(call.function.name, call.function.arguments, call_id=call_id)
    logger.debug(f"Normalized legacy tool call '{call.function.name}' (ID: {call_id}).")
    return ToolInvocationRequest(call_id=call_id, tool_name=call.function.name, arguments=arguments)


def describe_tool_name(raw: Any) -> str:
    """Best-effort tool name of a raw call, without validating its shape."""
    if isinstance(raw, ToolInvocationRequest):
        return raw.tool_name

    data = _as_mapping(raw)
    if data is None:
        return UNKNOWN_TOOL_NAME

    name = data.get("name")
    if isinstance(name, str) and name:
        return name

    function_data = _as_mapping(data.get("function"))
    if function_data is not None:
        function_name = function_data.get("name")
        if isinstance(function_name, str) and function_name:
            return function_name

    return UNKNOWN_TOOL_NAME
