"""Turns the parameters of a tool function into fields of its argument model."""

import inspect
from typing import Annotated, Any, Optional, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_IMPLICIT_PARAMS = ("self", "cls")
_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class FieldTuple(BaseModel):
    """An ``(annotation, FieldInfo)`` pair as accepted by ``pydantic.create_model``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    annotation: Any
    field: FieldInfo

    def as_tuple(self) -> tuple:
        return self.annotation, self.field


class ToolParameterFactory:
    """Builds argument model fields from a tool function signature.

    Each parameter needs a description, given either through
    ``Annotated[T, Field(description=...)]`` or as ``x: T = Field(description=...)``.
    Models only see the schema, so undocumented parameters are rejected.
    """

    @classmethod
    def is_tool_parameter(cls, param: inspect.Parameter) -> bool:
        return param.name not in _IMPLICIT_PARAMS

    @classmethod
    def build_field_tuple(cls, param_name: str, param: inspect.Parameter, tool_name: str) -> FieldTuple:
        """Create the field of a single parameter.

        Args:
            param_name: The name of the parameter.
            param: The parameter as reported by ``inspect.signature``.
            tool_name: The name of the tool, used in error messages.

        Returns:
            The annotation and field configuration of the parameter.

        Raises:
            ToolValidationError: If the parameter is variadic or has no description.
        """
        if param.kind in _VARIADIC_KINDS:
            msg = f"Tool '{tool_name}' uses variadic parameter '{param_name}'. Tools need explicit, named parameters."
            logger.error(msg)
            raise ToolValidationError(msg)

        annotation = Any if param.annotation is inspect.Parameter.empty else param.annotation
        default = param.default

        # x: int = Field(description=...) carries the description and the real default in the FieldInfo
        if isinstance(default, FieldInfo):
            description = default.description or cls._annotated_description(annotation)
            default = default.get_default() if not default.is_required() else inspect.Parameter.empty
        else:
            description = cls._annotated_description(annotation)

        if not description:
            msg = (
                f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
                f"Usage: {param_name}: Annotated[Type, Field(description='...')] = ..."
            )
            logger.error(msg)
            raise ToolValidationError(msg)

        pydantic_default = ... if default is inspect.Parameter.empty else default
        return FieldTuple(annotation=annotation, field=Field(default=pydantic_default, description=description))

    @staticmethod
    def _annotated_description(annotation: Any) -> Optional[str]:
        if get_origin(annotation) is not Annotated:
            return None
        return next(
            (meta.description for meta in get_args(annotation)[1:] if isinstance(meta, FieldInfo) and meta.description),
            None,
        )
