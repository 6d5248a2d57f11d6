"""LLM client exceptions.

Raised by the client layer and translated by the generation service into
its own errors, which the API maps to HTTP responses.
"""

from __future__ import annotations


class LLMError(Exception):
    """Base exception for LLM client errors."""


class LLMUnavailableError(LLMError):
    """Raised when the LLM service cannot be reached.

    Covers connection errors and exhausted retries.
    """


class LLMTimeoutError(LLMUnavailableError):
    """Raised when an LLM request times out.

    A timeout is a form of unavailability, so callers that handle
    LLMUnavailableError handle this too.
    """


class LLMResponseError(LLMError):
    """Raised when the LLM returns an error response or an unusable body."""


class LLMRateLimitError(LLMError):
    """Raised when the LLM service answers HTTP 429."""

    def __init__(self, message: str, retry_after: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            retry_after: Value of the ``Retry-After`` header, if sent.
        """
        self.retry_after = retry_after
        super().__init__(message)
