"""Result models returned by agents."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel

from ..core.tools.models import ToolInvocationResult


class SpecialistReply(BaseModel):
    """Answer of a specialist agent to a single message."""

    name: str
    domain: str
    response: str
    timestamp: datetime


@dataclass
class AgentRunResult:
    """Outcome of one GeneralistAgent run.

    Attributes:
        answer: Final natural-language answer.
        tool_results: One result per tool call requested during the run.
        used_tool_names: Names of the requested tools, in request order.
        rounds: Number of tool rounds executed (0 when no tool was requested).
        raw: Provider payload of the final model turn.
    """

    answer: str
    tool_results: List[ToolInvocationResult] = field(default_factory=list)
    used_tool_names: List[str] = field(default_factory=list)
    rounds: int = 0
    raw: Optional[Any] = None
