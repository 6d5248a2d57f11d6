"""Base class for LLM prompts.

Provides a standardized interface for defining prompts with:
- Typed input variables
- A system prompt
- Per-prompt sampling overrides
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class BasePrompt(ABC):
    """Base class for all LLM prompts.

    Sampling values left as None fall back to the client's configured
    defaults.

    Example:
        ```python
        class TaggingPrompt(BasePrompt):
            system_prompt = "You label recipes."
            temperature = 0.2

            def format(self, recipe_name: str) -> str:
                return f"Suggest tags for {recipe_name}"
        ```
    """

    system_prompt: ClassVar[str | None] = None
    """Optional system prompt to set context for the LLM."""

    temperature: ClassVar[float | None] = None
    """Sampling temperature override."""

    top_p: ClassVar[float | None] = None
    """Nucleus sampling override."""

    max_tokens: ClassVar[int | None] = None
    """Maximum tokens to generate override."""

    @abstractmethod
    def format(self, **kwargs: Any) -> str:
        """Format the prompt template with input variables.

        Args:
            **kwargs: Variables to substitute into template.

        Returns:
            Formatted prompt string ready for LLM.

        Raises:
            ValueError: If required variables are missing.
        """
        ...

    @property
    def name(self) -> str:
        """Prompt identifier for logging."""
        return self.__class__.__name__

    def get_options(self) -> dict[str, Any]:
        """Sampling options this prompt overrides."""
        options = {
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
        }
        return {key: value for key, value in options.items() if value is not None}
