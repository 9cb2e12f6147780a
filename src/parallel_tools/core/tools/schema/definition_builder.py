"""Derives a ToolDefinition from a plain Python function."""

import inspect
from typing import Any, Callable, Dict, Optional, Type

import jsonref  # type: ignore
from pydantic import BaseModel, create_model

from ...exceptions import ToolValidationError
from ...logger import get_logger
from ..models import ToolDefinition
from .schema_validator import SchemaValidator
from .tool_param_factory import ToolParameterFactory

logger = get_logger(__name__)


def build_tool_definition(
    func: Callable, name: Optional[str] = None, description: Optional[str] = None
) -> ToolDefinition:
    """Describe ``func`` as a tool.

    The name defaults to the function name and the description to its docstring.
    The parameters become fields of a generated pydantic model. Its JSON schema, with
    every ``$ref`` inlined, is what a model gets to see; the model class itself
    validates the arguments of each call before the function runs.

    Args:
        func: The tool implementation, sync or async.
        name: Overrides the function name.
        description: Overrides the docstring.

    Returns:
        The complete definition, including ``parameters`` and ``args_model``.

    Raises:
        ToolValidationError: If the function has no name, no docstring, an undocumented
            parameter or a recursive argument type.
    """
    tool_name = name or getattr(func, "__name__", "")
    if not tool_name:
        raise ToolValidationError("Tool must have a name.")

    if description is None:
        description = _docstring(func, tool_name)

    args_model = build_args_model(func, tool_name)
    return ToolDefinition(
        name=tool_name,
        description=description,
        func=func,
        parameters=args_schema(args_model),
        args_model=args_model,
    )


def build_args_model(func: Callable, tool_name: str) -> Type[BaseModel]:
    """Create the pydantic model holding the arguments of ``func``."""
    fields: Dict[str, Any] = {
        param_name: ToolParameterFactory.build_field_tuple(param_name, param, tool_name).as_tuple()
        for param_name, param in inspect.signature(func).parameters.items()
        if ToolParameterFactory.is_tool_parameter(param)
    }
    return create_model(f"{tool_name}Params", **fields)


def args_schema(args_model: Type[BaseModel]) -> Dict[str, Any]:
    """JSON schema of an argument model, with references inlined and metadata removed."""
    schema = args_model.model_json_schema()
    SchemaValidator.assert_no_recursive_refs(schema)

    # proxies=False yields plain dicts instead of lazy JsonRef objects
    return SchemaValidator.sanitize_schema(jsonref.replace_refs(schema, proxies=False))


def _docstring(func: Callable, tool_name: str) -> str:
    doc = inspect.getdoc(func)
    if not doc:
        msg = f"Tool '{tool_name}' missing docstring. Models need a description of what the tool does."
        logger.error(msg)
        raise ToolValidationError(msg)
    return doc
