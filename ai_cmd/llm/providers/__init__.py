"""LLM Provider modules for AI Cmd."""

from .base_provider import BaseProvider
from .anthropic_provider import AnthropicProvider
from .openai_provider import OpenAIProvider

__all__ = ["BaseProvider", "AnthropicProvider", "OpenAIProvider"]
