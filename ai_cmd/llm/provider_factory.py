"""
Provider Factory for AI Cmd.

Selects the provider implementation for a configured identifier.
"""

import logging
from enum import Enum
from typing import Dict, Type

from .providers.base_provider import BaseProvider
from .providers.anthropic_provider import AnthropicProvider
from .providers.openai_provider import OpenAIProvider
from .types import ProviderConfig

logger = logging.getLogger(__name__)


class LLMType(str, Enum):
    """Available LLM provider types."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


class UnsupportedProviderError(ValueError):
    """The configured provider identifier has no implementation."""

    def __init__(self, provider: str):
        super().__init__(f"Unsupported provider: {provider}")
        self.provider = provider


class ProviderFactory:
    """Factory for creating LLM provider instances."""

    # Adding a provider means adding an entry here
    _registry: Dict[LLMType, Type[BaseProvider]] = {
        LLMType.ANTHROPIC: AnthropicProvider,
        LLMType.OPENAI: OpenAIProvider,
    }

    @staticmethod
    def resolve_type(provider: str) -> LLMType:
        """
        Map a provider identifier to its LLMType.

        Raises:
            UnsupportedProviderError: If no provider matches
        """
        try:
            return LLMType(provider)
        except ValueError:
            raise UnsupportedProviderError(provider) from None

    @classmethod
    def create_provider(cls, provider: str, provider_config: ProviderConfig) -> BaseProvider:
        """
        Create an LLM provider instance.

        Args:
            provider: Provider identifier from configuration
            provider_config: Credential, endpoint and model for it

        Returns:
            Configured provider instance

        Raises:
            UnsupportedProviderError: If the identifier is unknown
        """
        llm_type = cls.resolve_type(provider)
        provider_cls = cls._registry.get(llm_type)
        if provider_cls is None:
            raise UnsupportedProviderError(provider)
        logger.debug(f"Creating {provider_cls.__name__} for model {provider_config.model}")
        return provider_cls(provider_config)
