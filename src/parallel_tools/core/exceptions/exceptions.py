"""
Custom exception classes for the tool orchestrator.

Only registration and configuration problems are raised to the caller. Errors
that belong to a single tool call are converted into failed results by the
dispatcher, so most of these classes never leave a batch.
"""

from typing import Optional


class OrchestratorError(Exception):
    """Base exception for all orchestrator errors."""

    pass


class ToolRegistrationError(OrchestratorError):
    """Raised when a tool cannot be registered (duplicate name, registry busy)."""

    pass


class ToolValidationError(OrchestratorError):
    """Raised when a tool definition or its parameters are invalid."""

    pass


class ToolNotFoundError(OrchestratorError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolExecutionError(OrchestratorError):
    """Raised when a tool fails during execution.

    Tools may raise this for expected domain failures; the dispatcher turns it
    into a failed result like any other exception.
    """

    pass


class NormalizationError(OrchestratorError):
    """Raised when a raw tool call cannot be turned into a ToolInvocationRequest.

    Attributes:
        call_id: Best-effort call id of the offending entry.
        tool_name: Best-effort tool name of the offending entry.
    """

    def __init__(self, message: str, call_id: Optional[str] = None, tool_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.call_id = call_id
        self.tool_name = tool_name


class ToolCallFormatError(NormalizationError):
    """Raised when a raw tool call matches none of the known wire shapes."""

    pass


class ToolArgumentsError(NormalizationError):
    """Raised when tool call arguments cannot be decoded into an object."""

    pass


class AgentError(OrchestratorError):
    """Base exception for specialist agent errors."""

    pass


class AgentRegistrationError(AgentError):
    """Raised when a specialist cannot be registered."""

    pass


class AgentNotFoundError(AgentError):
    """Raised when a requested specialist is not registered."""

    pass
