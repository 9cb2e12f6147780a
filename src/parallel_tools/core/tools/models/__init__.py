"""Tool-related data models."""

from .models import ToolDefinition
from .tool_call import (
    ModernToolCall,
    LegacyFunction,
    LegacyToolCall,
    RawToolCall,
    ToolInvocationRequest,
    ToolInvocationResult,
    Ok,
    Err,
    Outcome,
)

__all__ = [
    "ToolDefinition",
    "ModernToolCall",
    "LegacyFunction",
    "LegacyToolCall",
    "RawToolCall",
    "ToolInvocationRequest",
    "ToolInvocationResult",
    "Ok",
    "Err",
    "Outcome",
]
