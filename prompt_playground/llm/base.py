"""
Abstract base class for generation providers.

Defines the capability the playground engines depend on: turn a fully
composed prompt plus sampling parameters into generated text. Concrete
providers (Gemini, Bedrock, mock) are interchangeable behind it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


# Returned by providers when the call succeeds but carries no text
NO_CONTENT_OUTPUT = "No content generated"


class PlaygroundError(Exception):
    """Base exception for playground errors."""


class ConfigurationError(PlaygroundError):
    """Invalid configuration. Fatal to the whole run."""


class AuthenticationError(ConfigurationError):
    """No credential is configured for the provider."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message)
        self.provider = provider


class ProviderError(PlaygroundError):
    """A generation call did not succeed."""

    def __init__(self, message: str, provider: str = ""):
        super().__init__(message)
        self.provider = provider


class RequestError(ProviderError):
    """The remote request failed or returned an unusable body."""

    def __init__(self, message: str, provider: str = "", status_code: Optional[int] = None):
        super().__init__(message, provider=provider)
        self.status_code = status_code


@dataclass(frozen=True)
class GenerationParams:
    """Sampling parameters sent with a single generation call."""
    model: str
    temperature: float
    max_output_tokens: int
    stop_sequences: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the provider request shape."""
        return {
            "model": self.model,
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
            "stopSequences": list(self.stop_sequences),
        }


class GenerationProvider(ABC):
    """
    Abstract base class for generation providers.

    Implementations must raise AuthenticationError before any network I/O
    when no credential is available, raise RequestError when the remote
    call fails, and return NO_CONTENT_OUTPUT when the call succeeds
    without producing text.
    """

    @abstractmethod
    def generate(self, prompt: str, params: GenerationParams) -> str:
        """
        Generate text for a fully composed prompt.

        Args:
            prompt: System prompt and user prompt, already joined
            params: Model and sampling parameters

        Returns:
            Generated text, or NO_CONTENT_OUTPUT

        Raises:
            AuthenticationError: If no credential is configured
            RequestError: If the remote call does not succeed
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check whether the provider has what it needs to make calls.

        Returns:
            True if credentials are present
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name (e.g., 'gemini', 'bedrock')."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self.provider_name})"
