from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any

from anthropic import AsyncAnthropic
from dotenv import load_dotenv
from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from tool_bridge import Provider, ToolRegistry, create_adapter, load_config, tool_function

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class WeatherParams(BaseModel):
    location: str = Field(description="City and state, e.g. San Francisco, CA")


@tool_function(name="get_weather", description="Get the current weather in a given location")
async def get_weather(params: WeatherParams) -> str:
    """Stub implementation of get_weather."""
    # imagine we call a real weather API here
    return "15 °C, mostly cloudy"


async def complete(provider: Provider, model: str, messages: list[dict[str, Any]], tools: list[dict[str, Any]]) -> Any:
    """Send one request straight through the provider SDK."""
    if provider == Provider.ANTHROPIC:
        client = AsyncAnthropic()
        return await client.messages.create(model=model, max_tokens=1024, messages=messages, tools=tools)
    if provider == Provider.GEMINI:
        client = AsyncOpenAI(base_url=_GEMINI_BASE_URL)
    else:
        client = AsyncOpenAI()
    return await client.chat.completions.create(model=model, messages=messages, tools=tools)


def assistant_message(provider: Provider, raw: Any) -> dict[str, Any]:
    if provider == Provider.ANTHROPIC:
        return {"role": "assistant", "content": [block.model_dump(exclude_none=True) for block in raw.content]}
    return raw.choices[0].message.model_dump(exclude_none=True)


async def single_tool_roundtrip(provider: Provider, model: str) -> None:
    """
    Run a single tool‐calling roundtrip with the given provider + model.

    1) Send user prompt with the registry's tools
    2) Let model emit tool calls
    3) Dispatch them through the registry, re‐inject call + results
    4) Ask model to finish using tool results
    """
    registry = ToolRegistry(config=load_config())
    registry.register_function(get_weather)
    adapter = create_adapter(provider)
    tools = adapter.tool_specs(registry.list())

    messages: list[dict[str, Any]] = [
        {"role": "user", "content": "What's the weather in San Francisco?"}
    ]

    # Step 1 → get first response
    rsp1 = await complete(provider, model, messages, tools)

    # Step 2 → extract tool calls
    calls = adapter.tool_calls_from(rsp1)
    if not calls:
        logger.warning("Model answered directly: %s", rsp1)
        return

    # Step 3 → inject the assistant turn and the tool results
    messages.append(assistant_message(provider, rsp1))
    results = await registry.dispatch_many(calls)
    messages.extend(adapter.tool_result_messages(results))

    # Step 4 → final completion
    rsp2 = await complete(provider, model, messages, tools)
    logger.info("%s says: %s", provider.value.capitalize(), rsp2)


if __name__ == "__main__":
    load_dotenv()

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--provider",
        choices=[p.value for p in Provider],
        default=Provider.ANTHROPIC.value,
    )
    parser.add_argument(
        "--model",
        default="claude-3-5-haiku-20241022",  # "gpt-4.1-nano-2025-04-14", "gemini-2.0-flash-lite", "claude-3-5-haiku-20241022"
    )
    args = parser.parse_args()

    asyncio.run(single_tool_roundtrip(Provider(args.provider), args.model))
