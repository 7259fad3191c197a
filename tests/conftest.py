"""Shared tool declarations for the test suite."""

from __future__ import annotations

import asyncio
from enum import StrEnum
from typing import Literal, Optional

import pytest
from pydantic import BaseModel, ConfigDict, Field

from tool_bridge import ToolExecutionError, ToolFunction, ToolRegistry, tool_function


class WeatherParams(BaseModel):
    city: str = Field(description="The city name")
    country: str = Field(description="The country of the city")


class ForecastParams(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"examples": [{"city": "Tokyo", "days": 3, "unit": "C"}]}
    )

    city: str = Field(description="The city name")
    days: int = Field(description="Number of days to forecast")
    unit: Literal["C", "F"] = Field(description="Temperature unit")


class BrokenExampleParams(BaseModel):
    model_config = ConfigDict(json_schema_extra={"examples": [{"count": "three"}]})

    count: int


class Operation(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class RecordParams(BaseModel):
    name: str
    age: int
    email: Optional[str] = None
    tags: list[str]
    operation: Operation


class WeatherResult(BaseModel):
    temperature: float
    condition: str


class EchoParams(BaseModel):
    text: str
    delay: float = 0.0


class CallCounter:
    def __init__(self) -> None:
        self.calls = 0


@pytest.fixture
def counter() -> CallCounter:
    return CallCounter()


@pytest.fixture
def get_weather(counter: CallCounter) -> ToolFunction[WeatherParams, str]:
    @tool_function(name="get_weather", description="Get the current weather for a location")
    async def get_weather(params: WeatherParams) -> str:
        counter.calls += 1
        if params.city == "Atlantis":
            raise ToolExecutionError(f"City not found: {params.city}", kind="city_not_found")
        return params.city

    return get_weather


@pytest.fixture
def get_forecast() -> ToolFunction[ForecastParams, WeatherResult]:
    @tool_function
    async def get_forecast(params: ForecastParams) -> WeatherResult:
        """Forecast the weather.

        The second paragraph is not part of the description.
        """
        temperature = 22.5 if params.unit == "C" else 72.5
        return WeatherResult(temperature=temperature, condition="Sunny")

    return get_forecast


@pytest.fixture
def echo() -> ToolFunction[EchoParams, EchoParams]:
    @tool_function(description="Return the input after an optional delay")
    async def echo(params: EchoParams) -> EchoParams:
        if params.delay:
            await asyncio.sleep(params.delay)
        return params

    return echo


@pytest.fixture
def registry(get_weather, get_forecast, echo) -> ToolRegistry:
    return ToolRegistry().register_functions([get_weather, get_forecast, echo])
