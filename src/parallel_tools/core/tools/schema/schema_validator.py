"""Validation and clean-up of generated tool argument schemas."""

from typing import Any, Dict, FrozenSet, Optional, Tuple

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS: FrozenSet[str] = frozenset({"$defs", "definitions", "$schema", "$id", "title"})
# Values of these keys map arbitrary names to schemas; the names themselves are kept
_SCHEMA_MAPS: FrozenSet[str] = frozenset({"properties", "patternProperties"})
# Values of these keys are data, not schemas
_LITERAL_KEYS: FrozenSet[str] = frozenset({"default", "enum", "const", "examples"})


class SchemaValidator:
    """Checks and normalizes the JSON schema generated for a tool's arguments."""

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """Reject schemas whose ``$ref`` chain leads back to a definition that is being expanded.

        Recursive schemas cannot be inlined, and providers need inlined schemas.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        definitions = schema.get("$defs") or schema.get("definitions") or {}

        def visit(node: Any, expanding: Tuple[str, ...]) -> None:
            if isinstance(node, list):
                for item in node:
                    visit(item, expanding)
                return
            if not isinstance(node, dict):
                return

            ref = node.get("$ref")
            if ref is None:
                for value in node.values():
                    visit(value, expanding)
                return

            if ref in expanding:
                msg = f"Recursive structure detected: {ref}. Recursive structures are not allowed in tool arguments."
                logger.error(msg)
                raise ToolValidationError(msg)

            target = definitions.get(ref.rsplit("/", 1)[-1]) if ref.startswith("#/") else None
            if target is not None:
                visit(target, expanding + (ref,))

        visit(schema, ())

    @classmethod
    def sanitize_schema(cls, schema: Any, closed: bool = True) -> Any:
        """Return a provider-ready copy of an argument schema.

        Drops metadata (``$defs``, ``$schema``, ``$id``, ``title``), collapses
        ``Optional[T]`` to ``T`` and removes ``required`` names that no property
        defines. The input is not modified.

        Args:
            schema: The schema, or any node of it.
            closed: Close every object with ``additionalProperties: false``. Providers
                that reject the keyword (Gemini) pass False, which strips it instead.
        """
        if not isinstance(schema, dict):
            return schema

        collapsed = cls._collapse_optional(schema)
        if collapsed is not None:
            return cls.sanitize_schema(collapsed, closed)

        result: Dict[str, Any] = {}
        for key, value in schema.items():
            if key in _METADATA_KEYS or (key == "additionalProperties" and not closed):
                continue
            if key in _LITERAL_KEYS:
                result[key] = value
            elif key in _SCHEMA_MAPS and isinstance(value, dict):
                result[key] = {name: cls.sanitize_schema(sub_schema, closed) for name, sub_schema in value.items()}
            elif isinstance(value, list):
                result[key] = [cls.sanitize_schema(item, closed) for item in value]
            else:
                result[key] = cls.sanitize_schema(value, closed)

        cls._drop_undefined_required(result)
        if closed and result.get("type") == "object":
            result.setdefault("additionalProperties", False)
        return result

    @staticmethod
    def _drop_undefined_required(schema: Dict[str, Any]) -> None:
        required, properties = schema.get("required"), schema.get("properties")
        if not isinstance(required, list) or not isinstance(properties, dict):
            return
        defined = [name for name in required if name in properties]
        if defined:
            schema["required"] = defined
        else:
            del schema["required"]

    @staticmethod
    def _collapse_optional(schema: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """``anyOf: [T, null]`` becomes ``T``, keeping the field's own description and default."""
        variants = schema.get("anyOf")
        if not isinstance(variants, list):
            return None

        non_null = [
            variant for variant in variants if not (isinstance(variant, dict) and variant.get("type") == "null")
        ]
        if len(non_null) != 1 or not isinstance(non_null[0], dict):
            return None

        merged = dict(non_null[0])
        for key in ("description", "default"):
            if key in schema:
                merged[key] = schema[key]
        return merged
