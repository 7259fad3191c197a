"""Gemini adapter for pure tool request/response transformations.

Since Gemini is driven through its OpenAI-compatible endpoint, we just re-export the OpenAI adapter.
"""

from .openai import OpenAIToolAdapter

# Tool declarations, calls and results share the OpenAI wire shape there
GeminiToolAdapter = OpenAIToolAdapter
