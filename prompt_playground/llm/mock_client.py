"""
Mock generation provider for testing.

Provides configurable responses without making actual API calls.
"""

from typing import Any, Callable, Dict, List, Optional
import time

from .base import (
    NO_CONTENT_OUTPUT,
    AuthenticationError,
    GenerationParams,
    GenerationProvider,
    RequestError,
)


class MockProvider(GenerationProvider):
    """
    Mock provider for testing.

    Can be configured with:
    - Static responses
    - Response sequences
    - Custom response functions
    - Simulated delays
    - Error simulation (always, or after N calls)
    - A missing credential
    """

    def __init__(
        self,
        default_response: str = "This is a mock response.",
        delay: float = 0.0,
        authenticated: bool = True,
    ):
        """
        Initialize the mock provider.

        Args:
            default_response: Response when no specific response is set
            delay: Simulated delay in seconds
            authenticated: If False, every call raises AuthenticationError
        """
        self.default_response = default_response
        self.delay = delay
        self.authenticated = authenticated

        self._responses: List[str] = []
        self._response_index = 0
        self._response_function: Optional[Callable[[str, GenerationParams], str]] = None
        self._error_after: Optional[int] = None
        self._call_count = 0

        # Call tracking
        self.calls: List[Dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    def set_responses(self, responses: List[str]) -> None:
        """
        Set a sequence of responses to return.

        Responses are returned in order, then cycle back to the beginning.

        Args:
            responses: List of response strings
        """
        self._responses = list(responses)
        self._response_index = 0

    def set_response_function(self, func: Callable[[str, GenerationParams], str]) -> None:
        """
        Set a function to generate responses.

        The function receives the prompt and params and returns the response.

        Args:
            func: Response generator function
        """
        self._response_function = func

    def set_error_after(self, n: int) -> None:
        """
        Configure to fail after N successful calls.

        Args:
            n: Number of successful calls before every later call fails
        """
        self._error_after = n

    def fail_always(self) -> None:
        """Make every call fail with RequestError."""
        self._error_after = 0

    def reset(self) -> None:
        """Reset call tracking and response index."""
        self._response_index = 0
        self._call_count = 0
        self.calls.clear()

    def generate(self, prompt: str, params: GenerationParams) -> str:
        """
        Return a mock response.

        Args:
            prompt: The composed prompt
            params: Sampling parameters (recorded, otherwise ignored)

        Returns:
            Scripted content, or NO_CONTENT_OUTPUT for an empty script entry

        Raises:
            AuthenticationError: If configured as unauthenticated
            RequestError: If error simulation is active
        """
        if not self.authenticated:
            raise AuthenticationError("Mock provider has no credential", provider=self.provider_name)

        self.calls.append({
            "prompt": prompt,
            "params": params,
        })

        if self.delay > 0:
            time.sleep(self.delay)

        self._call_count += 1

        if self._error_after is not None and self._call_count > self._error_after:
            raise RequestError(
                "Simulated request failure",
                provider=self.provider_name,
                status_code=500,
            )

        if self._response_function:
            content = self._response_function(prompt, params)
        elif self._responses:
            content = self._responses[self._response_index % len(self._responses)]
            self._response_index += 1
        else:
            content = self.default_response

        return content or NO_CONTENT_OUTPUT

    def is_available(self) -> bool:
        return self.authenticated

    @property
    def last_call(self) -> Optional[Dict[str, Any]]:
        """Get the most recent call."""
        return self.calls[-1] if self.calls else None

    @property
    def call_count(self) -> int:
        """Get total number of calls."""
        return len(self.calls)
