"""Generalist and specialist agents."""

from .generalist import GeneralistAgent
from .models import AgentRunResult, SpecialistReply
from .prompts import GENERALIST_SYSTEM_PROMPT, SPECIALIST_PROMPTS
from .registry import AgentRegistry, TALK_TO_AGENT_TOOL_NAME
from .specialist import Specialist

__all__ = [
    "GeneralistAgent",
    "AgentRunResult",
    "SpecialistReply",
    "GENERALIST_SYSTEM_PROMPT",
    "SPECIALIST_PROMPTS",
    "AgentRegistry",
    "TALK_TO_AGENT_TOOL_NAME",
    "Specialist",
]
