"""OpenAI adapter for pure tool request/response transformations."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Sequence

from openai.types.chat import ChatCompletion

from tool_bridge.adapters.base import ChatMessage
from tool_bridge.definition import ToolDefinition
from tool_bridge.types import ToolCallRequest, ToolCallResult

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())


class OpenAIToolAdapter:
    """Adapter for converting between registry types and OpenAI chat completions."""

    def tool_spec(self, definition: ToolDefinition) -> dict[str, Any]:
        """Convert a definition to an OpenAI function tool."""
        return {
            "type": "function",
            "function": definition.to_dict(),
        }

    def tool_specs(self, definitions: Iterable[ToolDefinition]) -> list[dict[str, Any]]:
        return [self.tool_spec(d) for d in definitions]

    def tool_calls_from(self, raw: ChatCompletion) -> list[ToolCallRequest]:
        """
        Extract function calls from the first choice of a completion.

        Argument text is JSON-decoded. Text that does not parse is passed on
        as the raw string, so dispatch answers the model with an
        ``invalid_arguments`` error it can correct instead of silently
        dropping the call.
        """
        if not raw.choices or not raw.choices[0].message:
            return []

        calls: list[ToolCallRequest] = []
        for tc in raw.choices[0].message.tool_calls or []:
            function = getattr(tc, "function", None)
            if function is None:
                # Custom (non-function) tools are not dispatched here
                continue

            raw_args = function.arguments
            arguments: Any = {}
            if isinstance(raw_args, dict):
                arguments = raw_args
            elif isinstance(raw_args, str) and raw_args.strip():
                try:
                    arguments = json.loads(raw_args)
                except json.JSONDecodeError:
                    _logger.warning("Bad JSON in tool call %s: %s", tc.id, raw_args)
                    arguments = raw_args

            calls.append(ToolCallRequest(id=tc.id, name=function.name, arguments=arguments))
        return calls

    def tool_result_message(self, result: ToolCallResult) -> ChatMessage:
        """Convert ToolCallResult to OpenAI ChatMessage."""
        return {
            "role": "tool",
            "tool_call_id": result.id,
            "content": result.as_text(),
        }

    def tool_result_messages(self, results: Sequence[ToolCallResult]) -> list[ChatMessage]:
        return [self.tool_result_message(r) for r in results]
