"""
Provider‑neutral dataclasses exchanged with the orchestrator.

They are intentionally minimal: everything provider‑specific lives in adapters.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Optional

__all__ = ["ErrorKind", "ToolError", "ToolCallRequest", "ToolCallResult"]


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    INVALID_ARGUMENTS = "invalid_arguments"
    HANDLER_ERROR = "handler_error"
    INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True, slots=True)
class ToolError:
    """Structured failure payload sent back instead of content."""
    kind: str
    message: str
    details: Optional[list[dict[str, Any]]] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"kind": str(self.kind), "message": self.message}
        if self.details is not None:
            result["details"] = self.details
        return result


@dataclass(slots=True)
class ToolCallRequest:
    """A model‑agnostic request emitted by the LLM to call a local tool."""
    id: str
    name: str
    arguments: Any

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ToolCallRequest:
        """Build a request from the ``{call_id, tool_name, arguments}`` envelope."""
        return cls(
            id=data["call_id"],
            name=data["tool_name"],
            arguments=data.get("arguments", {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"call_id": self.id, "tool_name": self.name, "arguments": self.arguments}


@dataclass(slots=True)
class ToolCallResult:
    """Payload to send back to the LLM after the tool finished running."""
    id: str                     # must match the request id
    content: Optional[str] = None
    error: Optional[ToolError] = None

    def __post_init__(self) -> None:
        # exactly one of these must be non‑None
        if (self.content is None) == (self.error is None):
            raise ValueError("Provide exactly one of 'content' or 'error'")

    @classmethod
    def failure(
        cls,
        call_id: str,
        kind: str,
        message: str,
        details: Optional[list[dict[str, Any]]] = None,
    ) -> ToolCallResult:
        return cls(id=call_id, error=ToolError(kind=kind, message=message, details=details))

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def raise_for_error(self) -> None:
        if self.error is not None:
            from tool_bridge._exceptions import ToolExecutionError

            raise ToolExecutionError(
                f"{self.error.kind}: {self.error.message}", kind=self.error.kind
            )

    def as_text(self) -> str:
        """Content string, or the JSON‑encoded error for text‑only transports."""
        if self.error is not None:
            return json.dumps({"error": self.error.to_dict()})
        return self.content or ""

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"call_id": self.id, "error": self.error.to_dict()}
        return {"call_id": self.id, "content": self.content}
