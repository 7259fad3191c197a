"""
Tool Bridge - Typed tool registry and dispatch for LLM function calling.
"""

from ._exceptions import (
    ToolBridgeError,
    RegistrationError,
    DuplicateToolError,
    ToolExecutionError,
)
from .types import ErrorKind, ToolError, ToolCallRequest, ToolCallResult
from .schema import SchemaDescriptor, schema_for
from .definition import Invoker, ToolDefinition
from .function import ToolFunction, tool_function
from .invoker import TypedInvoker
from .registry import ToolRegistry
from .config import DuplicatePolicy, RegistryConfig, load_config
from .providers import Provider
from .factory import create_adapter

__version__ = "0.1.0"

__all__ = [
    "ToolBridgeError",
    "RegistrationError",
    "DuplicateToolError",
    "ToolExecutionError",
    "ErrorKind",
    "ToolError",
    "ToolCallRequest",
    "ToolCallResult",
    "SchemaDescriptor",
    "schema_for",
    "Invoker",
    "ToolDefinition",
    "ToolFunction",
    "tool_function",
    "TypedInvoker",
    "ToolRegistry",
    "DuplicatePolicy",
    "RegistryConfig",
    "load_config",
    "Provider",
    "create_adapter",
]
