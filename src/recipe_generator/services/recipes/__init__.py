"""Recipe persistence policies."""

from recipe_generator.services.recipes.duplicates import (
    DuplicateMatch,
    DuplicateRecipeGuard,
    ingredient_similarity,
)


__all__ = [
    "DuplicateMatch",
    "DuplicateRecipeGuard",
    "ingredient_similarity",
]
