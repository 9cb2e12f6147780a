"""Provider-agnostic conversation messages.

Model bindings translate these into their provider's request format; agents
never build provider messages themselves.
"""

import json
from abc import ABC
from typing import Any, List, Optional

from pydantic import BaseModel

from ..tools.models import ToolInvocationResult


class BaseMessage(ABC, BaseModel):
    """A single entry of a conversation.

    Attributes:
        author: Role of the sender ("system", "user", "assistant" or "tool").
        content: Text of the message.
    """

    author: str
    content: str


class SystemMessage(BaseMessage):
    author: str = "system"


class UserMessage(BaseMessage):
    author: str = "user"


class AssistantMessage(BaseMessage):
    """Model output. ``tool_calls`` records the requested calls exactly as the model emitted them."""

    author: str = "assistant"
    tool_calls: Optional[List[Any]] = None


class ToolMessage(BaseMessage):
    """Result of one tool invocation, answering the call with ``tool_call_id``."""

    author: str = "tool"
    tool_call_id: str
    name: str

    @classmethod
    def from_result(cls, result: ToolInvocationResult) -> "ToolMessage":
        """Serialize a tool result as ``{"result": ...}`` or ``{"error": ...}`` JSON."""
        return cls(
            content=json.dumps(result.payload, default=str),
            tool_call_id=result.call_id,
            name=result.tool_name,
        )
