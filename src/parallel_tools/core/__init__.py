"""Public exports for the core orchestration abstractions and utilities."""

from .base import ChatModel, ModelTurn
from .config import Settings
from .exceptions import (
    OrchestratorError,
    ToolRegistrationError,
    ToolValidationError,
    ToolNotFoundError,
    ToolExecutionError,
    NormalizationError,
    ToolCallFormatError,
    ToolArgumentsError,
    AgentError,
    AgentRegistrationError,
    AgentNotFoundError,
)
from .logger import get_logger, setup_logging
from .messages import (
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
)
from .tools import (
    ToolDefinition,
    ModernToolCall,
    LegacyToolCall,
    RawToolCall,
    ToolInvocationRequest,
    ToolInvocationResult,
    Ok,
    Err,
    Outcome,
    normalize_tool_call,
    parse_tool_call,
    describe_tool_name,
    BatchDispatcher,
    ToolRegistry,
    SchemaValidator,
)

__all__ = [
    "ChatModel",
    "ModelTurn",
    "Settings",
    "OrchestratorError",
    "ToolRegistrationError",
    "ToolValidationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "NormalizationError",
    "ToolCallFormatError",
    "ToolArgumentsError",
    "AgentError",
    "AgentRegistrationError",
    "AgentNotFoundError",
    "get_logger",
    "setup_logging",
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "ToolDefinition",
    "ModernToolCall",
    "LegacyToolCall",
    "RawToolCall",
    "ToolInvocationRequest",
    "ToolInvocationResult",
    "Ok",
    "Err",
    "Outcome",
    "normalize_tool_call",
    "parse_tool_call",
    "describe_tool_name",
    "BatchDispatcher",
    "ToolRegistry",
    "SchemaValidator",
]
