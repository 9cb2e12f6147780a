"""Data models for tool invocation requests and their results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field


class ModernToolCall(BaseModel):
    """Tool call carrying ``name``/``args``/``id`` directly, arguments already decoded."""

    id: Optional[str] = None
    name: str
    args: Dict[str, Any] = Field(default_factory=dict)


class LegacyFunction(BaseModel):
    """The nested ``function`` member of a legacy tool call."""

    name: str
    arguments: Any = None


class LegacyToolCall(BaseModel):
    """Tool call nesting ``function.name`` and a JSON-encoded ``function.arguments``."""

    id: Optional[str] = None
    type: Literal["function"] = "function"
    function: LegacyFunction


RawToolCall = Union[ModernToolCall, LegacyToolCall]


@dataclass(frozen=True)
class ToolInvocationRequest:
    """A normalized tool call, ready for dispatch."""

    call_id: str
    tool_name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Ok:
    """Successful tool outcome."""

    value: Any


@dataclass(frozen=True)
class Err:
    """Failed tool outcome with a human-readable message."""

    message: str


Outcome = Union[Ok, Err]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ToolInvocationResult:
    """Terminal outcome of one tool invocation within a batch."""

    call_id: str
    tool_name: str
    outcome: Outcome
    execution_time_ms: float = 0.0
    completed_at: datetime = field(default_factory=_utcnow)

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Ok)

    @property
    def value(self) -> Any:
        return self.outcome.value if isinstance(self.outcome, Ok) else None

    @property
    def error(self) -> Optional[str]:
        return self.outcome.message if isinstance(self.outcome, Err) else None

    @property
    def payload(self) -> Dict[str, Any]:
        """The model-facing body of the result: ``{"result": ...}`` or ``{"error": ...}``."""
        if isinstance(self.outcome, Ok):
            return {"result": self.outcome.value}
        return {"error": self.outcome.message}
