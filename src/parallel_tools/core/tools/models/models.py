from typing import Optional, Any, Callable, Type
from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    Represents a tool that can be registered with the orchestrator.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        func: The callable implementing the tool's logic. May be sync or async and
              receives the call arguments as keyword arguments.
        parameters: A JSON schema describing the tool's input parameters.
        args_model: Optional Pydantic model used for validating and coercing arguments
                    before the tool is invoked.
    """

    name: str
    description: str
    func: Callable
    parameters: Optional[Any] = None
    args_model: Optional[Type[BaseModel]] = None
