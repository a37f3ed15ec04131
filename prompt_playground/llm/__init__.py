"""
LLM module - Generation provider abstractions.

Provides a unified interface for different text-generation providers:
- Google Gemini (REST)
- AWS Bedrock (Claude)
- Mock (for testing)
"""

from .base import (
    NO_CONTENT_OUTPUT,
    GenerationProvider,
    GenerationParams,
    PlaygroundError,
    ConfigurationError,
    AuthenticationError,
    ProviderError,
    RequestError,
)
from .bedrock_client import BedrockClient
from .gemini_client import GeminiClient
from .mock_client import MockProvider

__all__ = [
    # Base classes
    'GenerationProvider',
    'GenerationParams',
    'NO_CONTENT_OUTPUT',
    # Errors
    'PlaygroundError',
    'ConfigurationError',
    'AuthenticationError',
    'ProviderError',
    'RequestError',
    # Implementations
    'BedrockClient',
    'GeminiClient',
    'MockProvider',
    'create_provider',
]


def create_provider(provider: str = "gemini", **kwargs) -> GenerationProvider:
    """
    Factory function to create a generation provider.

    Args:
        provider: Provider name ("gemini", "bedrock", "mock")
        **kwargs: Provider-specific configuration

    Returns:
        Configured provider instance

    Raises:
        ConfigurationError: If provider is not supported
    """
    providers = {
        "gemini": GeminiClient,
        "bedrock": BedrockClient,
        "mock": MockProvider,
    }

    if provider not in providers:
        raise ConfigurationError(f"Unsupported provider: {provider}. Available: {list(providers.keys())}")

    return providers[provider](**kwargs)
