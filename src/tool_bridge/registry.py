"""
Name-keyed registry of tool definitions and the entry point for dispatch.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Iterable, Iterator, Optional, Self, Sequence

from tool_bridge._exceptions import DuplicateToolError
from tool_bridge.config import DuplicatePolicy, RegistryConfig
from tool_bridge.definition import ToolDefinition
from tool_bridge.function import ToolFunction
from tool_bridge.types import ErrorKind, ToolCallRequest, ToolCallResult

__all__ = ["ToolRegistry"]


class ToolRegistry:
    """
    Insertion-ordered collection of `ToolDefinition`s.

    Writers serialize on a lock and publish a new mapping, so concurrent
    readers (lookups, advertisement) never lock and never observe a
    half-finished registration. Create one per application and pass it
    around explicitly.

    Example:
        registry = ToolRegistry()
        registry.register_function(get_weather)

        tools = registry.advertise()
        result = await registry.dispatch(call)
    """

    def __init__(
        self,
        *,
        config: Optional[RegistryConfig] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.config = config or RegistryConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.name = name if name is not None else self.__class__.__name__
        self._tools: dict[str, ToolDefinition] = {}
        self._lock = threading.Lock()

    # --- registration ------------------------------------------------------
    def register(self, definition: ToolDefinition, *, replace: Optional[bool] = None) -> Self:
        """
        Add a tool under ``definition.name``.

        Args:
            definition: The tool to add.
            replace: Overrides ``config.on_duplicate`` for this call. A
                replaced tool keeps its position in the advertised list.

        Raises:
            DuplicateToolError: The name is taken and replacing is not allowed.
        """
        if not isinstance(definition, ToolDefinition):
            raise TypeError(
                f"register expects ToolDefinition; got {type(definition).__name__}"
            )
        if replace is None:
            replace = self.config.on_duplicate is DuplicatePolicy.REPLACE

        with self._lock:
            if definition.name in self._tools:
                if not replace:
                    raise DuplicateToolError(definition.name)
                self._log(f"Replacing tool '{definition.name}'", logging.WARNING)
            tools = dict(self._tools)
            tools[definition.name] = definition
            self._tools = tools

        self._log(f"Registered tool '{definition.name}'", logging.DEBUG)
        return self

    def register_function(self, tool: ToolFunction[Any, Any], *, replace: Optional[bool] = None) -> Self:
        """Register a `tool_function`-decorated handler."""
        if self.config.self_check:
            tool.self_check()
        return self.register(tool.definition(logger=self.logger), replace=replace)

    def register_functions(
        self,
        tools: Iterable[ToolFunction[Any, Any]],
        *,
        replace: Optional[bool] = None,
    ) -> Self:
        for tool in tools:
            self.register_function(tool, replace=replace)
        return self

    def merge(self, other: ToolRegistry, *, replace: Optional[bool] = None) -> Self:
        """Register every tool of ``other``, subject to this registry's duplicate policy."""
        for definition in other.list():
            self.register(definition, replace=replace)
        return self

    def unregister(self, name: str) -> bool:
        """Remove a tool. Returns False if no tool had that name."""
        with self._lock:
            if name not in self._tools:
                return False
            tools = dict(self._tools)
            del tools[name]
            self._tools = tools
        self._log(f"Unregistered tool '{name}'", logging.DEBUG)
        return True

    def clear(self) -> None:
        with self._lock:
            self._tools = {}

    # --- lookup ------------------------------------------------------------
    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools

    def names(self) -> list[str]:
        return list(self._tools)

    def list(self) -> list[ToolDefinition]:
        """Definitions in registration order."""
        return list(self._tools.values())

    def advertise(self) -> list[dict[str, Any]]:
        """``{name, description, parameters}`` for every tool, in registration order."""
        return [definition.to_dict() for definition in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self.list())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tool_count={len(self)}, tool_names={self.names()!r})"

    # --- dispatch ----------------------------------------------------------
    async def dispatch(self, call: ToolCallRequest) -> ToolCallResult:
        """
        Resolve ``call.name`` and run the tool.

        Never raises for a failed call: unknown tools, bad arguments, handler
        errors and internal defects all come back as an error result carrying
        ``call.id``.
        """
        definition = self._tools.get(call.name)
        if definition is None:
            self._log(f"Tool '{call.name}' not found (call {call.id})", logging.WARNING)
            return ToolCallResult.failure(
                call.id,
                ErrorKind.NOT_FOUND,
                f"Tool '{call.name}' not found in registry",
            )

        self._log(f"Dispatching '{call.name}' (call {call.id})", logging.DEBUG)
        try:
            result = await definition.run(call.arguments, call.id)
        except Exception:
            self.logger.exception(f"[{self.name}] Invoker for '{call.name}' raised")
            return self._internal_error(call)

        if not isinstance(result, ToolCallResult) or result.id != call.id:
            self._log(
                f"Invoker for '{call.name}' returned {result!r} for call {call.id}",
                logging.ERROR,
            )
            return self._internal_error(call)
        return result

    async def dispatch_many(self, calls: Sequence[ToolCallRequest]) -> list[ToolCallResult]:
        """Dispatch calls concurrently; results line up with ``calls``."""
        return list(await asyncio.gather(*(self.dispatch(call) for call in calls)))

    @staticmethod
    def _internal_error(call: ToolCallRequest) -> ToolCallResult:
        return ToolCallResult.failure(
            call.id,
            ErrorKind.INTERNAL_ERROR,
            f"Tool '{call.name}' failed with an internal error",
        )

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
