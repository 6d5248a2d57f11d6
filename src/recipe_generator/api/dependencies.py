"""FastAPI dependencies for service access.

LLM-backed services are initialized during application startup and stored
in app.state; the pure components are built on demand.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from recipe_generator.core.config import Settings, get_settings
from recipe_generator.parsing.recipe_response import ResponseNormalizer
from recipe_generator.services.recipes.duplicates import DuplicateRecipeGuard
from recipe_generator.services.shopping.composer import ShoppingListComposer


if TYPE_CHECKING:
    from recipe_generator.services.generation.service import RecipeGenerationService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    settings: Settings | None = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_generation_service(request: Request) -> RecipeGenerationService:
    """Get the recipe generation service from app state.

    Raises:
        HTTPException: 503 if the service is not initialized.
    """
    service: RecipeGenerationService | None = getattr(
        request.app.state, "generation_service", None
    )
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe generation service not available",
        )
    return service


@lru_cache
def get_response_normalizer() -> ResponseNormalizer:
    """Shared, stateless response normalizer."""
    return ResponseNormalizer()


@lru_cache
def get_shopping_list_composer() -> ShoppingListComposer:
    """Shared, stateless shopping-list composer."""
    return ShoppingListComposer()


def get_duplicate_guard(request: Request) -> DuplicateRecipeGuard:
    """Duplicate guard configured from the ``recipes`` settings section."""
    return DuplicateRecipeGuard.from_settings(get_app_settings(request).recipes)
