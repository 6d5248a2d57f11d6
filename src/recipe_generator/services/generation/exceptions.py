"""Exceptions for the recipe generation service."""

from __future__ import annotations


class GenerationError(Exception):
    """Base exception for recipe generation errors."""

    def __init__(self, message: str, model: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            model: Model the request was sent to.
        """
        self.model = model
        super().__init__(message)


class GenerationUnavailableError(GenerationError):
    """Raised when the LLM backend cannot be reached or timed out."""


class GenerationFailedError(GenerationError):
    """Raised when the LLM backend answered with an error."""
