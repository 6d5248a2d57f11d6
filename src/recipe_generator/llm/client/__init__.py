"""LLM client implementations."""

from recipe_generator.llm.client.openai_compatible import OpenAICompatibleClient
from recipe_generator.llm.client.protocol import LLMClientProtocol


__all__ = [
    "LLMClientProtocol",
    "OpenAICompatibleClient",
]
