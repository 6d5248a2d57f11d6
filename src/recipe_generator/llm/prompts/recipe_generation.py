"""Recipe generation prompt.

Asks the model for a single JSON recipe built from the user's ingredients.
The answer is free text as far as the client is concerned; structuring it
is the response normalizer's job.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from .base import BasePrompt


def _ingredient_line(ingredient: Any) -> str:
    if isinstance(ingredient, Mapping):
        name = str(ingredient.get("name", "")).strip()
        quantity = str(ingredient.get("quantity", "")).strip()
    else:
        name = str(getattr(ingredient, "name", ingredient)).strip()
        quantity = str(getattr(ingredient, "quantity", "")).strip()
    return f"- {quantity} {name}".rstrip() if quantity else f"- {name}"


class RecipeGenerationPrompt(BasePrompt):
    """Prompt for generating one recipe from available ingredients.

    Example output:
        {
            "name": "Garlic Butter Chicken",
            "ingredients": [{"name": "chicken breast", "quantity": "2"}],
            "instructions": ["Season the chicken.", "Sear in butter."],
            "dietaryPreference": ["Gluten-Free"],
            "additionalInformation": {"tips": "Rest the meat before slicing."}
        }
    """

    system_prompt: ClassVar[str | None] = """You are a creative home cook and recipe writer.
You answer with exactly one JSON object and nothing else: no markdown, no commentary."""

    def format(self, **kwargs: Any) -> str:
        """Format the prompt with ingredients and dietary preferences.

        Args:
            **kwargs: Must contain 'ingredients', a non-empty sequence of
                objects or mappings with 'name' and 'quantity'. May contain
                'dietary_preferences', a sequence of preference labels.

        Returns:
            Formatted prompt string.

        Raises:
            ValueError: If 'ingredients' is missing or empty.
        """
        ingredients = kwargs.get("ingredients")
        if not ingredients:
            msg = "Missing required 'ingredients' argument"
            raise ValueError(msg)

        preferences = [str(p) for p in kwargs.get("dietary_preferences") or []]
        ingredient_lines = "\n".join(_ingredient_line(item) for item in ingredients)
        preference_text = ", ".join(preferences) if preferences else "None"

        return f"""Create one recipe that uses the following ingredients.
You may add common pantry staples (salt, pepper, oil, water).

Ingredients:
{ingredient_lines}

Dietary preferences: {preference_text}

Respond with a single JSON object with these keys:
- "name": recipe name (string)
- "ingredients": array of objects with "name" and "quantity" (strings)
- "instructions": array of step strings, in order
- "dietaryPreference": array of dietary labels the recipe satisfies
- "additionalInformation": object with optional "tips", "variations",
  "servingSuggestions" and "nutritionalInformation" strings

Every dietary preference listed above must be respected."""
