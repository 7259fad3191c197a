"""
The dispatch pipeline: decode -> invoke -> encode.

`TypedInvoker` is the narrow, non-generic face of a typed `ToolFunction`.
It takes raw JSON arguments and a call id and always answers with exactly one
`ToolCallResult` for that id; nothing short of cancellation escapes it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from tool_bridge._exceptions import classify_error, invalid_arguments
from tool_bridge.types import ErrorKind, ToolCallResult

if TYPE_CHECKING:
    from tool_bridge.function import ToolFunction

__all__ = ["TypedInvoker"]

_INTERNAL_MESSAGE = "The tool produced a result that could not be serialized"


class TypedInvoker:
    """Invoker backed by a `ToolFunction`."""

    __slots__ = ("_tool", "logger")

    def __init__(
        self,
        tool: ToolFunction[Any, Any],
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._tool = tool
        self.logger = logger or logging.getLogger(__name__)

    async def __call__(self, arguments: Any, call_id: str) -> ToolCallResult:
        tool = self._tool

        # Decode
        try:
            params = tool.decode(arguments)
        except (TypeError, ValueError) as exc:
            error = invalid_arguments(tool.name, exc)
            self.logger.info("[%s] Rejected arguments for call %s: %s", tool.name, call_id, error.message)
            return ToolCallResult(id=call_id, error=error)

        # Invoke
        try:
            output = await tool(params)
        except Exception as exc:
            return ToolCallResult(id=call_id, error=classify_error(exc, self.logger))

        # Encode
        try:
            content = tool.encode(output)
        except Exception:
            self.logger.exception("[%s] Failed to encode result of call %s", tool.name, call_id)
            return ToolCallResult.failure(call_id, ErrorKind.INTERNAL_ERROR, _INTERNAL_MESSAGE)

        return ToolCallResult(id=call_id, content=content)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tool={self._tool.name!r})"
