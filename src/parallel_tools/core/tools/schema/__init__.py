"""Tool argument schema generation and validation."""

from .definition_builder import args_schema, build_args_model, build_tool_definition
from .schema_validator import SchemaValidator
from .tool_param_factory import ToolParameterFactory, FieldTuple

__all__ = [
    "args_schema",
    "build_args_model",
    "build_tool_definition",
    "SchemaValidator",
    "ToolParameterFactory",
    "FieldTuple",
]
