"""
JSON Schema derivation for tool parameter types.

Schema generation is delegated to pydantic. The same `TypeAdapter` that
produces a tool's advertised schema is the one that later decodes its
arguments, so the two cannot drift apart.
"""

from __future__ import annotations

from typing import Any

from pydantic import PydanticUserError, TypeAdapter

from tool_bridge._exceptions import RegistrationError

__all__ = ["SchemaDescriptor", "params_adapter", "output_adapter", "schema_for"]

# Opaque JSON Schema document, forwarded verbatim to the model provider
SchemaDescriptor = dict[str, Any]


def _adapter(tp: Any, role: str) -> TypeAdapter[Any]:
    try:
        return TypeAdapter(tp)
    except PydanticUserError as exc:
        raise RegistrationError(
            f"{role} type {tp!r} cannot be handled as structured data: {exc}"
        ) from exc


def params_adapter(tp: Any) -> TypeAdapter[Any]:
    """Adapter used both for the parameter schema and for decoding arguments."""
    return _adapter(tp, "Parameter")


def output_adapter(tp: Any) -> TypeAdapter[Any]:
    """Adapter used to encode a handler's return value."""
    return _adapter(tp, "Output")


def schema_for(tp: Any) -> SchemaDescriptor:
    """
    Produce the JSON Schema for a tool parameter type.

    Args:
        tp: A pydantic model, dataclass, TypedDict, or an existing TypeAdapter.

    Returns:
        The schema document. Its top level is always an object schema, since
        function-calling providers only accept named arguments.

    Raises:
        RegistrationError: If pydantic cannot describe the type, or the type
            does not describe a JSON object.
    """
    adapter = tp if isinstance(tp, TypeAdapter) else params_adapter(tp)
    try:
        schema = adapter.json_schema()
    except PydanticUserError as exc:
        raise RegistrationError(f"Cannot generate a JSON schema: {exc}") from exc

    top = _resolve_top_level(schema)
    if top.get("type") != "object":
        raise RegistrationError(
            f"Tool parameters must be described by an object schema, got {top.get('type')!r}"
        )
    return schema


def _resolve_top_level(schema: SchemaDescriptor) -> SchemaDescriptor:
    # Recursive models come out as {"$ref": "#/$defs/Node", "$defs": {...}}
    ref = schema.get("$ref")
    if not isinstance(ref, str) or not ref.startswith("#/$defs/"):
        return schema
    return schema.get("$defs", {}).get(ref.removeprefix("#/$defs/"), {})
