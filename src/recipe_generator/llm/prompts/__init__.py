"""LLM prompt templates."""

from recipe_generator.llm.prompts.base import BasePrompt
from recipe_generator.llm.prompts.recipe_generation import RecipeGenerationPrompt


__all__ = [
    "BasePrompt",
    "RecipeGenerationPrompt",
]
