"""User-facing notices for non-complete generation results."""

from __future__ import annotations

from typing import Final


INCOMPLETE_RECIPE_NOTICE: Final[str] = (
    "The recipe is missing {fields}. You can read it, but it cannot be saved "
    "or turned into a shopping list."
)

UNSTRUCTURED_RESPONSE_NOTICE: Final[str] = (
    "We could not structure this response into a recipe. The text the model "
    "returned is shown as-is."
)
