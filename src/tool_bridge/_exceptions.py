"""
Exceptions raised by tool-bridge, and the translation of noisy handler and
validation failures into the structured `ToolError` payload sent to the model.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from tool_bridge.types.tool import ErrorKind, ToolError

__all__: tuple[str, ...] = (
    "ToolBridgeError",
    "RegistrationError",
    "DuplicateToolError",
    "ToolExecutionError",
    "classify_error",
    "invalid_arguments",
)


class ToolBridgeError(RuntimeError):
    """Public bridge‐level exception."""


class RegistrationError(ToolBridgeError):
    """A tool could not be declared or registered."""


class DuplicateToolError(RegistrationError):
    """A tool with the same name is already registered.

    Attributes:
        name: The clashing tool name.
    """

    name: str

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool '{name}' is already registered")
        self.name = name


class ToolExecutionError(ToolBridgeError):
    """Domain failure raised by a handler, e.g. "city not found".

    The ``kind`` is forwarded verbatim to the model so it can tell failures
    apart; it defaults to ``handler_error``.
    """

    kind: str

    def __init__(self, message: str, *, kind: str = ErrorKind.HANDLER_ERROR) -> None:
        super().__init__(message)
        self.kind = kind


def _error_details(exc: ValidationError) -> list[dict[str, Any]]:
    details = []
    for err in exc.errors(include_url=False):
        details.append(
            {
                "path": ".".join(str(part) for part in err["loc"]) or "$",
                "message": err["msg"],
                "type": err["type"],
                "input": err.get("input"),
            }
        )
    return details


def invalid_arguments(tool_name: str, exc: Exception) -> ToolError:
    """Describe a decode failure with enough detail for the model to retry."""
    if isinstance(exc, ValidationError):
        details = _error_details(exc)
        summary = "; ".join(f"{d['path']}: {d['message']}" for d in details)
        return ToolError(
            kind=ErrorKind.INVALID_ARGUMENTS,
            message=f"Invalid arguments for tool '{tool_name}': {summary}",
            details=details,
        )
    return ToolError(
        kind=ErrorKind.INVALID_ARGUMENTS,
        message=f"Invalid arguments for tool '{tool_name}': {exc}",
    )


def classify_error(
    exc: Exception,
    logger: Optional[logging.Logger] = None,
) -> ToolError:
    """Wrap a handler exception in a ToolError with a concise message."""
    log = logger or logging.getLogger("tool_bridge.exceptions")

    if isinstance(exc, ToolExecutionError):
        kind, msg = exc.kind, str(exc)
    else:
        kind, msg = ErrorKind.HANDLER_ERROR, f"{exc.__class__.__name__}: {exc}"

    log.warning("Tool handler failed: %s", msg, extra={"exc": exc})
    return ToolError(kind=kind, message=msg)
