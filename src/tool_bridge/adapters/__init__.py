"""Pure transformation adapters for different LLM providers."""

from .base import ChatMessage, ToolAdapter
from .openai import OpenAIToolAdapter
from .anthropic import AnthropicToolAdapter
from .gemini import GeminiToolAdapter

__all__ = [
    "ChatMessage",
    "ToolAdapter",
    "OpenAIToolAdapter",
    "AnthropicToolAdapter",
    "GeminiToolAdapter",
]
