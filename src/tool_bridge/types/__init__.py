from .tool import ErrorKind, ToolError, ToolCallRequest, ToolCallResult

__all__ = [
    "ErrorKind",
    "ToolError",
    "ToolCallRequest",
    "ToolCallResult",
]
