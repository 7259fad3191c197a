"""Type-erased tool definitions held by the registry."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Protocol

from tool_bridge._exceptions import RegistrationError
from tool_bridge.schema import SchemaDescriptor
from tool_bridge.types import ToolCallResult

__all__ = ["Invoker", "ToolDefinition"]


class Invoker(Protocol):
    """Run a tool from raw JSON arguments, tagging the result with ``call_id``."""

    async def __call__(self, arguments: Any, call_id: str) -> ToolCallResult:
        ...


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """
    Name, description and parameter schema of a tool, paired with the invoker
    that runs it.

    Instances are immutable. The schema is copied on the way in and on the way
    out, so the document the registry advertises cannot be changed through an
    alias.
    """

    name: str
    description: str
    schema: SchemaDescriptor
    invoker: Invoker = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise RegistrationError("Tool name must be a non-empty string")
        if not callable(self.invoker):
            raise RegistrationError(f"Invoker for tool '{self.name}' is not callable")
        object.__setattr__(self, "schema", copy.deepcopy(dict(self.schema)))

    def to_dict(self) -> dict[str, Any]:
        """Advertisement entry: ``{name, description, parameters}``."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": copy.deepcopy(self.schema),
        }

    async def run(self, arguments: Any, call_id: str) -> ToolCallResult:
        return await self.invoker(arguments, call_id)
