"""Protocol shared by the provider adapters."""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence

from tool_bridge.definition import ToolDefinition
from tool_bridge.types import ToolCallRequest, ToolCallResult

__all__ = ["ChatMessage", "ToolAdapter"]

# Type alias for chat messages
ChatMessage = dict[str, Any]


class ToolAdapter(Protocol):
    """Protocol for translating between registry types and a provider's wire format."""

    def tool_spec(self, definition: ToolDefinition) -> dict[str, Any]:
        """Convert one definition to the provider's tool declaration."""
        ...

    def tool_specs(self, definitions: Iterable[ToolDefinition]) -> list[dict[str, Any]]:
        """Convert definitions, keeping their order, for the request's tool list."""
        ...

    def tool_calls_from(self, raw: Any) -> list[ToolCallRequest]:
        """Extract the tool calls requested in a raw provider response."""
        ...

    def tool_result_message(self, result: ToolCallResult) -> ChatMessage:
        """Convert a single ToolCallResult to a provider-specific ChatMessage."""
        ...

    def tool_result_messages(self, results: Sequence[ToolCallResult]) -> list[ChatMessage]:
        """Convert all results answering one assistant turn."""
        ...
