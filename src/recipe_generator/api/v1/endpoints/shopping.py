"""Shopping-list endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_generator.api.dependencies import get_shopping_list_composer
from recipe_generator.core.exceptions import (
    BadRequestException,
    UnprocessableRecipeException,
)
from recipe_generator.observability.logging import get_logger
from recipe_generator.parsing.exceptions import IncompleteRecipeError
from recipe_generator.schemas.shopping import (
    ComposeShoppingListRequest,
    ShoppingListDraft,
)
from recipe_generator.services.shopping.composer import ShoppingListComposer  # noqa: TC001
from recipe_generator.services.shopping.exceptions import InvalidMultiplierError


logger = get_logger(__name__)

router = APIRouter(prefix="/shopping-lists", tags=["Shopping Lists"])


@router.post(
    "/compose",
    response_model=ShoppingListDraft,
    summary="Compose a shopping list from a recipe",
    responses={
        400: {"description": "Servings is not a positive finite number"},
        422: {"description": "Recipe lacks a name or ingredients"},
    },
)
async def compose_shopping_list(
    request_body: ComposeShoppingListRequest,
    composer: Annotated[ShoppingListComposer, Depends(get_shopping_list_composer)],
) -> ShoppingListDraft:
    """Categorize and scale a recipe's ingredients into a shopping list.

    Raises:
        BadRequestException: If ``servings`` is zero, negative or not finite.
        UnprocessableRecipeException: If the recipe is incomplete.
    """
    try:
        draft = composer.draft(
            request_body.recipe,
            request_body.servings,
            name=request_body.name,
            recipe_id=request_body.recipe_id,
        )
    except InvalidMultiplierError as e:
        raise BadRequestException(str(e), error="INVALID_MULTIPLIER") from e
    except IncompleteRecipeError as e:
        raise UnprocessableRecipeException(str(e), missing_fields=e.missing_fields) from e

    logger.info(
        "Shopping list composed",
        recipe_name=request_body.recipe.name,
        servings=draft.servings,
        item_count=draft.item_count,
    )
    return draft
