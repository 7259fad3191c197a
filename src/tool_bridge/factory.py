from __future__ import annotations

from typing import Type

from tool_bridge.adapters import (
    AnthropicToolAdapter,
    GeminiToolAdapter,
    OpenAIToolAdapter,
    ToolAdapter,
)
from tool_bridge.providers import Provider

# map Provider enum to its adapter implementation
_ADAPTER_REGISTRY: dict[Provider, Type[ToolAdapter]] = {
    Provider.OPENAI: OpenAIToolAdapter,
    Provider.ANTHROPIC: AnthropicToolAdapter,
    Provider.GEMINI: GeminiToolAdapter,
}


def create_adapter(provider: Provider | str) -> ToolAdapter:
    """
    Factory for the tool adapter of a supported provider.

    Args:
        provider: Which provider to use (OPENAI, ANTHROPIC, GEMINI), as the
            enum member or its string value.
    """
    try:
        adapter_cls = _ADAPTER_REGISTRY[Provider(provider)]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unsupported provider: {provider}") from exc
    return adapter_cls()
