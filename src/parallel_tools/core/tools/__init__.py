from .models import (
    ToolDefinition,
    ModernToolCall,
    LegacyToolCall,
    RawToolCall,
    ToolInvocationRequest,
    ToolInvocationResult,
    Ok,
    Err,
    Outcome,
)
from .normalization import normalize_tool_call, parse_tool_call, describe_tool_name
from .execution import BatchDispatcher
from .registry import ToolRegistry
from .schema import SchemaValidator

__all__ = [
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
