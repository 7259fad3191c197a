"""
Typed tool declaration.

`tool_function` turns an ``async def`` that takes one typed parameter into a
`ToolFunction`. Both the advertised schema and the argument decoder are built
from that single parameter annotation when the decorator runs, and all
signature problems surface right there instead of at call time.

Example:

    class WeatherParams(BaseModel):
        city: str = Field(description="The city name")
        country: str = Field(description="The country of the city")

    @tool_function(name="get_weather", description="Get the current weather")
    async def get_weather(params: WeatherParams) -> WeatherResult:
        ...

    registry.register_function(get_weather)
"""

from __future__ import annotations

import functools
import inspect
import json
import logging
import typing
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, overload

from pydantic import ValidationError

from tool_bridge._exceptions import RegistrationError
from tool_bridge.definition import ToolDefinition
from tool_bridge.invoker import TypedInvoker
from tool_bridge.schema import SchemaDescriptor, output_adapter, params_adapter, schema_for

__all__ = ["ToolFunction", "tool_function"]

P = TypeVar("P")
R = TypeVar("R")

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _normalize_integers(value: Any) -> Any:
    # JSON Schema counts 3.0 as an integer; strict validation does not.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {key: _normalize_integers(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_integers(item) for item in value]
    return value


def _first_paragraph(doc: Optional[str]) -> Optional[str]:
    if not doc:
        return None
    paragraph = doc.strip().split("\n\n", 1)[0]
    return " ".join(line.strip() for line in paragraph.splitlines()) or None


class ToolFunction(Generic[P, R]):
    """
    A typed async handler together with its tool metadata.

    The wrapped coroutine function stays directly callable with a typed
    argument; `definition()` erases the types for the registry.
    """

    def __init__(
        self,
        fn: Callable[[P], Awaitable[R]],
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        strict: bool = True,
    ) -> None:
        """
        Args:
            fn: ``async def`` with exactly one annotated parameter and an
                explicit return annotation.
            name: Dispatch key, defaults to the function name.
            description: Text shown to the model, defaults to the first
                paragraph of the docstring.
            strict: Decode without type coercion, so arguments are accepted
                exactly when they match the advertised JSON schema.

        Raises:
            RegistrationError: On any signature or type problem.
        """
        qualname = getattr(fn, "__qualname__", repr(fn))
        if not inspect.iscoroutinefunction(fn):
            raise RegistrationError(f"Tool functions must be async: {qualname}")

        parameters = list(inspect.signature(fn).parameters.values())
        if len(parameters) != 1 or parameters[0].kind not in _POSITIONAL:
            raise RegistrationError(
                f"Tool functions must take exactly one positional parameter: {qualname}"
            )
        param = parameters[0]

        try:
            hints = typing.get_type_hints(fn, include_extras=True)
        except NameError as exc:
            raise RegistrationError(f"Cannot resolve annotations of {qualname}: {exc}") from exc
        if param.name not in hints:
            raise RegistrationError(
                f"Tool function parameter must be a typed parameter: {qualname}({param.name})"
            )
        if "return" not in hints:
            raise RegistrationError(f"Tool functions must have an explicit return type: {qualname}")

        self.name: str = fn.__name__ if name is None else name
        if not isinstance(self.name, str) or not self.name:
            raise RegistrationError("Tool name must be a non-empty string")
        self.description: str = (
            description
            or _first_paragraph(inspect.getdoc(fn))
            or f"Tool function: {self.name}"
        )
        self.strict = strict
        self.params_type: Any = hints[param.name]
        self.output_type: Any = hints["return"]

        self._params = params_adapter(self.params_type)
        self._output = output_adapter(self.output_type)
        self._schema: SchemaDescriptor = schema_for(self._params)
        self._fn = fn
        functools.update_wrapper(self, fn)

    @property
    def schema(self) -> SchemaDescriptor:
        return self._schema

    async def __call__(self, params: P) -> R:
        return await self._fn(params)

    def decode(self, arguments: Any) -> P:
        """
        Convert raw JSON arguments into the parameter type.

        Raises:
            ValidationError: The arguments do not match the schema.
            TypeError: The arguments are not JSON data at all.
        """
        return self._params.validate_json(
            json.dumps(_normalize_integers(arguments)), strict=self.strict
        )

    def encode(self, output: R) -> str:
        """Serialize a handler result to JSON text; mismatching values raise."""
        return self._output.dump_json(output, warnings="error").decode()

    def self_check(self) -> None:
        """
        Decode every example embedded in the schema.

        Examples come from ``json_schema_extra={"examples": [...]}`` on the
        parameter model. A rejected example means the advertised schema and
        the decoder disagree.
        """
        for index, example in enumerate(self._schema.get("examples", [])):
            try:
                self.decode(example)
            except (TypeError, ValidationError) as exc:
                raise RegistrationError(
                    f"Schema example {index} of tool '{self.name}' is rejected by its decoder: {exc}"
                ) from exc

    def definition(self, *, logger: Optional[logging.Logger] = None) -> ToolDefinition:
        """Erase the parameter and output types behind a `TypedInvoker`."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            schema=self._schema,
            invoker=TypedInvoker(self, logger=logger),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


@overload
def tool_function(fn: Callable[[P], Awaitable[R]], /) -> ToolFunction[P, R]: ...


@overload
def tool_function(
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    strict: bool = True,
) -> Callable[[Callable[[P], Awaitable[R]]], ToolFunction[P, R]]: ...


def tool_function(
    fn: Optional[Callable[[P], Awaitable[R]]] = None,
    /,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    strict: bool = True,
) -> Any:
    """
    Declare a tool. Usable bare (``@tool_function``) or with arguments
    (``@tool_function(name=..., description=...)``).
    """

    def wrap(f: Callable[[P], Awaitable[R]]) -> ToolFunction[P, R]:
        return ToolFunction(f, name=name, description=description, strict=strict)

    if fn is None:
        return wrap
    return wrap(fn)
