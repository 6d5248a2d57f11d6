"""Near-duplicate detection for saved recipes.

Generation is often retried, and users tend to save the same result twice.
A recipe is a near-duplicate of a saved one when it belongs to the same
user, has the same name (trimmed, case-insensitive), the saved copy is
recent, and their ingredient names mostly overlap.

The guard only decides; the persistence layer acts on the decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from recipe_generator.services.recipes.constants import (
    DUPLICATE_SIMILARITY_THRESHOLD,
    DUPLICATE_WINDOW,
    MAX_SAVED_RECIPES_PER_USER,
)


if TYPE_CHECKING:
    from collections.abc import Iterable

    from recipe_generator.core.config.settings import RecipeSettings
    from recipe_generator.schemas.recipe import (
        Recipe,
        RecipeIngredient,
        SavedRecipeSummary,
    )


@dataclass(frozen=True, slots=True)
class DuplicateMatch:
    """A saved recipe the candidate duplicates."""

    recipe_id: str
    similarity: float


def normalize_recipe_name(name: str) -> str:
    """Name used for duplicate comparison."""
    return name.strip().casefold()


def ingredient_names(ingredients: Iterable[RecipeIngredient]) -> set[str]:
    """Trimmed, case-folded ingredient names."""
    return {name for ingredient in ingredients if (name := ingredient.name.strip().casefold())}


def ingredient_similarity(first: set[str], second: set[str]) -> float:
    """Shared names divided by the size of the larger set (0 when both are empty)."""
    largest = max(len(first), len(second))
    if largest == 0:
        return 0.0
    return len(first & second) / largest


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps from the store are taken as UTC
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=UTC)


class DuplicateRecipeGuard:
    """Decide whether a recipe about to be saved duplicates a recent one."""

    def __init__(
        self,
        window: timedelta = DUPLICATE_WINDOW,
        threshold: float = DUPLICATE_SIMILARITY_THRESHOLD,
        max_saved_per_user: int = MAX_SAVED_RECIPES_PER_USER,
    ) -> None:
        """Initialize the guard.

        Args:
            window: How far back a saved recipe counts as recent.
            threshold: Minimum ingredient-name overlap (0-1) for a duplicate.
            max_saved_per_user: Saved recipe cap per user.
        """
        self.window = window
        self.threshold = threshold
        self.max_saved_per_user = max_saved_per_user

    @classmethod
    def from_settings(cls, settings: RecipeSettings) -> DuplicateRecipeGuard:
        """Build a guard from the ``recipes`` settings section."""
        return cls(
            window=timedelta(seconds=settings.duplicate_window_seconds),
            threshold=settings.duplicate_similarity_threshold,
            max_saved_per_user=settings.max_saved_per_user,
        )

    def find_duplicate(
        self,
        owner_id: str,
        recipe: Recipe,
        saved_recipes: Iterable[SavedRecipeSummary],
        *,
        now: datetime | None = None,
    ) -> DuplicateMatch | None:
        """Return the most recent saved recipe the candidate duplicates.

        Args:
            owner_id: User saving the recipe.
            recipe: Candidate recipe.
            saved_recipes: Saved recipes to compare against, any owner.
            now: Reference time, defaults to the current UTC time.

        Returns:
            The match, or None when the recipe is new.
        """
        now = _as_utc(now or datetime.now(UTC))
        cutoff = now - self.window
        name = normalize_recipe_name(recipe.name)
        names = ingredient_names(recipe.ingredients)

        recent = sorted(
            (
                saved
                for saved in saved_recipes
                if saved.owner_id == owner_id
                and normalize_recipe_name(saved.name) == name
                and _as_utc(saved.created_at) >= cutoff
            ),
            key=lambda saved: _as_utc(saved.created_at),
            reverse=True,
        )
        for saved in recent:
            similarity = ingredient_similarity(names, ingredient_names(saved.ingredients))
            if similarity >= self.threshold:
                return DuplicateMatch(recipe_id=saved.id, similarity=round(similarity, 4))
        return None

    def recipes_to_evict(
        self,
        owner_id: str,
        saved_recipes: Iterable[SavedRecipeSummary],
    ) -> list[str]:
        """IDs of the oldest recipes to delete so one more fits under the cap."""
        owned = sorted(
            (saved for saved in saved_recipes if saved.owner_id == owner_id),
            key=lambda saved: _as_utc(saved.created_at),
        )
        excess = len(owned) - (self.max_saved_per_user - 1)
        return [saved.id for saved in owned[: max(excess, 0)]]
