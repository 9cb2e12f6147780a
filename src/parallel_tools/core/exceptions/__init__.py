"""Export the exception hierarchy used across registration, normalization and execution paths."""

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

__all__ = [
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
]
