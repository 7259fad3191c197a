"""
Declare a couple of typed tools, advertise them, and dispatch the kind of
calls a model would send, including a few broken ones. Runs offline.
"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import StrEnum

from pydantic import BaseModel, Field

from tool_bridge import (
    ToolCallRequest,
    ToolExecutionError,
    ToolRegistry,
    load_config,
    tool_function,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


class TemperatureUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


class WeatherParams(BaseModel):
    city: str = Field(description="The city name")
    country: str = Field(description="The country of the city")
    unit: TemperatureUnit = Field(description="Temperature unit (C for Celsius, F for Fahrenheit)")


class WeatherResult(BaseModel):
    temperature: float
    condition: str
    humidity: int
    unit: str


class Operation(StrEnum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class CalculateParams(BaseModel):
    a: float = Field(description="First number")
    b: float = Field(description="Second number")
    operation: Operation = Field(description="Operation to perform")


class CalculateResult(BaseModel):
    result: float
    expression: str


@tool_function(name="get_weather", description="Get the current weather for a location")
async def get_weather(params: WeatherParams) -> WeatherResult:
    # imagine we call a real weather API here
    await asyncio.sleep(0.1)

    if params.city.lower() == "atlantis":
        raise ToolExecutionError(f"City not found: {params.city}", kind="city_not_found")

    celsius = params.unit is TemperatureUnit.CELSIUS
    return WeatherResult(
        temperature=22.5 if celsius else 72.5,
        condition="Sunny",
        humidity=65,
        unit="°C" if celsius else "°F",
    )


@tool_function
async def calculate(params: CalculateParams) -> CalculateResult:
    """Perform a basic arithmetic operation on two numbers."""
    a, b = params.a, params.b
    match params.operation:
        case Operation.ADD:
            value, symbol = a + b, "+"
        case Operation.SUBTRACT:
            value, symbol = a - b, "-"
        case Operation.MULTIPLY:
            value, symbol = a * b, "*"
        case Operation.DIVIDE:
            if b == 0:
                raise ToolExecutionError("Division by zero", kind="division_by_zero")
            value, symbol = a / b, "/"
    return CalculateResult(result=value, expression=f"{a} {symbol} {b} = {value}")


async def main() -> None:
    registry = ToolRegistry(config=load_config())
    registry.register_functions([get_weather, calculate])

    logger.info("Advertised tools:\n%s", json.dumps(registry.advertise(), indent=2))

    calls = [
        ToolCallRequest("call_1", "get_weather", {"city": "Tokyo", "country": "Japan", "unit": "C"}),
        ToolCallRequest("call_2", "calculate", {"a": 6, "b": 7, "operation": "multiply"}),
        ToolCallRequest("call_3", "get_weather", {"country": "Japan", "unit": "K"}),
        ToolCallRequest("call_4", "get_weather", {"city": "Atlantis", "country": "-", "unit": "F"}),
        ToolCallRequest("call_5", "calculate", {"a": 1, "b": 0, "operation": "divide"}),
        ToolCallRequest("call_6", "get_stock_price", {"symbol": "ACME"}),
    ]

    for result in await registry.dispatch_many(calls):
        logger.info("%s", json.dumps(result.to_dict()))


if __name__ == "__main__":
    asyncio.run(main())
