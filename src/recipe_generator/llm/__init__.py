"""LLM integration module.

Provides a client for OpenAI-compatible text-generation servers and the
prompts the service sends to them.
"""

from recipe_generator.llm.client.openai_compatible import OpenAICompatibleClient
from recipe_generator.llm.client.protocol import LLMClientProtocol
from recipe_generator.llm.exceptions import (
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from recipe_generator.llm.models import LLMCompletionResult
from recipe_generator.llm.prompts import BasePrompt, RecipeGenerationPrompt


__all__ = [
    "BasePrompt",
    "LLMClientProtocol",
    "LLMCompletionResult",
    "LLMError",
    "LLMRateLimitError",
    "LLMResponseError",
    "LLMTimeoutError",
    "LLMUnavailableError",
    "OpenAICompatibleClient",
    "RecipeGenerationPrompt",
]
