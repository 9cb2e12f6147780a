"""Concurrent tool orchestration for LLM agents."""

from .agents import (
    AgentRegistry,
    AgentRunResult,
    GeneralistAgent,
    Specialist,
    SpecialistReply,
)
from .builtin_tools import register_builtin_tools
from .core import (
    ChatModel,
    ModelTurn,
    Settings,
    ToolDefinition,
    ToolInvocationRequest,
    ToolInvocationResult,
    ToolRegistry,
    Ok,
    Err,
    get_logger,
    setup_logging,
)
from .factory import build_agent, build_model
from .graph import GraphGenerator

__all__ = [
    "AgentRegistry",
    "AgentRunResult",
    "GeneralistAgent",
    "Specialist",
    "SpecialistReply",
    "register_builtin_tools",
    "ChatModel",
    "ModelTurn",
    "Settings",
    "ToolDefinition",
    "ToolInvocationRequest",
    "ToolInvocationResult",
    "ToolRegistry",
    "Ok",
    "Err",
    "get_logger",
    "setup_logging",
    "build_agent",
    "build_model",
    "GraphGenerator",
]
