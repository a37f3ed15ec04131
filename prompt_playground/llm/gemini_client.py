"""
Google Gemini provider implementation.

Calls the Gemini ``generateContent`` REST endpoint over httpx.
"""

import os
from typing import Any, Dict, Optional

import httpx

from .base import (
    NO_CONTENT_OUTPUT,
    AuthenticationError,
    GenerationParams,
    GenerationProvider,
    RequestError,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiClient(GenerationProvider):
    """
    Gemini provider over the public REST API.

    The API key is resolved, in order, from the constructor argument,
    GEMINI_API_KEY and GOOGLE_API_KEY. A missing key is reported when a
    call is attempted, before any request is sent.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: API key (default: from environment)
            base_url: API base URL, without trailing slash
            timeout: Read timeout in seconds
            http_client: Pre-built httpx client (tests inject a MockTransport)
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or ""
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(connect=30.0, read=timeout, write=30.0, pool=30.0)
        self._client = http_client

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def _build_body(self, prompt: str, params: GenerationParams) -> Dict[str, Any]:
        return {
            "contents": [{
                "parts": [{
                    "text": prompt
                }]
            }],
            "generationConfig": {
                "temperature": params.temperature,
                "maxOutputTokens": params.max_output_tokens,
                "stopSequences": list(params.stop_sequences),
            }
        }

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        try:
            text = data["candidates"][0]["content"]["parts"][0].get("text")
        except (KeyError, IndexError, TypeError, AttributeError):
            return NO_CONTENT_OUTPUT
        return text or NO_CONTENT_OUTPUT

    def generate(self, prompt: str, params: GenerationParams) -> str:
        """
        Generate text via Gemini.

        Args:
            prompt: The composed prompt
            params: Model and sampling parameters

        Returns:
            Generated text, or NO_CONTENT_OUTPUT

        Raises:
            AuthenticationError: If no API key is configured
            RequestError: On HTTP or transport failure
        """
        if not self.api_key:
            raise AuthenticationError(
                "Gemini API key not found. Please set GEMINI_API_KEY in your environment variables.",
                provider=self.provider_name,
            )

        url = f"{self.base_url}/models/{params.model}:generateContent"
        logger.debug(f"Invoking model {params.model} (temperature={params.temperature})")

        try:
            response = self.client.post(
                url,
                params={"key": self.api_key},
                json=self._build_body(prompt, params),
            )
        except httpx.HTTPError as e:
            raise RequestError(
                f"API request failed: {type(e).__name__}: {e}",
                provider=self.provider_name,
            ) from e

        if response.is_error:
            raise RequestError(
                f"API request failed: {response.status_code} {response.reason_phrase}",
                provider=self.provider_name,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RequestError(
                f"Failed to parse response: {e}",
                provider=self.provider_name,
                status_code=response.status_code,
            ) from e

        return self._extract_text(data)

    def is_available(self) -> bool:
        """Check whether an API key is configured."""
        return bool(self.api_key)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None
