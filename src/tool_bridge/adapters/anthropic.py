"""Anthropic adapter for pure tool request/response transformations."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from anthropic.types import Message

from tool_bridge.adapters.base import ChatMessage
from tool_bridge.definition import ToolDefinition
from tool_bridge.types import ToolCallRequest, ToolCallResult


class AnthropicToolAdapter:
    """Adapter for converting between registry types and Anthropic messages."""

    def tool_spec(self, definition: ToolDefinition) -> dict[str, Any]:
        """Convert a definition to an Anthropic client tool."""
        spec = definition.to_dict()
        return {
            "name": spec["name"],
            "description": spec["description"],
            "input_schema": spec["parameters"],
        }

    def tool_specs(self, definitions: Iterable[ToolDefinition]) -> list[dict[str, Any]]:
        return [self.tool_spec(d) for d in definitions]

    def tool_calls_from(self, raw: Message) -> list[ToolCallRequest]:
        """Extract ``tool_use`` blocks, in the order the model emitted them."""
        return [
            ToolCallRequest(id=block.id, name=block.name, arguments=block.input)
            for block in raw.content or []
            if block.type == "tool_use"
        ]

    def tool_result_block(self, result: ToolCallResult) -> dict[str, Any]:
        block: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": result.id,
            "content": result.as_text(),
        }
        if result.is_error:
            block["is_error"] = True
        return block

    def tool_result_message(self, result: ToolCallResult) -> ChatMessage:
        """Convert ToolCallResult to Anthropic ChatMessage."""
        return {"role": "user", "content": [self.tool_result_block(result)]}

    def tool_result_messages(self, results: Sequence[ToolCallResult]) -> list[ChatMessage]:
        """Anthropic expects every result of a turn inside one user message."""
        if not results:
            return []
        return [{"role": "user", "content": [self.tool_result_block(r) for r in results]}]
