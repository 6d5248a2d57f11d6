"""Recipe endpoints.

Provides:
- POST /recipes/generate for generating a recipe from ingredients
- POST /recipes/normalize for structuring an already generated response
- POST /recipes/duplicate-check for the near-duplicate save guard
"""

# Annotations stay evaluated: slowapi's wrapper exposes its own globals to FastAPI

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from recipe_generator.api.dependencies import (
    get_duplicate_guard,
    get_generation_service,
    get_response_normalizer,
)
from recipe_generator.cache.rate_limit import rate_limit_generation
from recipe_generator.core.exceptions import (
    BadGatewayException,
    ServiceUnavailableException,
)
from recipe_generator.observability.logging import get_logger
from recipe_generator.parsing.recipe_response import ResponseNormalizer
from recipe_generator.schemas.recipe import (
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    GenerateRecipeRequest,
    GenerateRecipeResponse,
    NormalizeRecipeRequest,
    RecipeParseResponse,
)
from recipe_generator.services.generation.exceptions import (
    GenerationFailedError,
    GenerationUnavailableError,
)
from recipe_generator.services.generation.service import (
    RecipeGenerationService,
    interpret_response,
)
from recipe_generator.services.recipes.duplicates import DuplicateRecipeGuard


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])


@router.post(
    "/generate",
    response_model=GenerateRecipeResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate a recipe from ingredients",
    description=(
        "Asks the LLM for a recipe that uses the given ingredients and respects "
        "the dietary preferences, then structures the answer. A response that "
        "cannot be structured is returned with status 'failed' and the raw text."
    ),
    responses={
        422: {"description": "Request validation error"},
        429: {"description": "Rate limit exceeded"},
        502: {"description": "LLM backend returned an error"},
        503: {"description": "LLM backend unavailable"},
    },
)
@rate_limit_generation()
async def generate_recipe(
    request: Request,
    response: Response,
    request_body: GenerateRecipeRequest,
    service: Annotated[RecipeGenerationService, Depends(get_generation_service)],
) -> GenerateRecipeResponse:
    """Generate one recipe and return it in structured form.

    Args:
        request: The incoming HTTP request (used by the rate limiter).
        response: Outgoing response (rate limit headers are added to it).
        request_body: Ingredients and dietary preferences.
        service: Recipe generation service.

    Returns:
        The parse result with model usage information.

    Raises:
        ServiceUnavailableException: If the LLM backend is unreachable.
        BadGatewayException: If the LLM backend answered with an error.
    """
    try:
        return await service.generate(
            request_body.ingredients,
            request_body.dietary_preferences,
        )
    except GenerationUnavailableError as e:
        raise ServiceUnavailableException(
            message="Recipe generation is temporarily unavailable. Please try again later."
        ) from e
    except GenerationFailedError as e:
        raise BadGatewayException(message=str(e)) from e


@router.post(
    "/normalize",
    response_model=RecipeParseResponse,
    summary="Structure a raw model response",
    description="Runs only the normalization half of generation; no LLM call is made.",
)
async def normalize_recipe(
    request_body: NormalizeRecipeRequest,
    normalizer: Annotated[ResponseNormalizer, Depends(get_response_normalizer)],
) -> RecipeParseResponse:
    """Structure a raw model response into a recipe."""
    return interpret_response(request_body.raw_response, normalizer)


@router.post(
    "/duplicate-check",
    response_model=DuplicateCheckResponse,
    summary="Check a recipe against recently saved ones",
)
async def check_duplicate(
    request_body: DuplicateCheckRequest,
    guard: Annotated[DuplicateRecipeGuard, Depends(get_duplicate_guard)],
) -> DuplicateCheckResponse:
    """Decide whether saving the recipe would create a near-duplicate.

    When it would not, also report which saved recipes must be evicted to
    stay under the per-user cap.
    """
    match = guard.find_duplicate(
        request_body.owner_id,
        request_body.recipe,
        request_body.existing_recipes,
    )
    if match is not None:
        logger.info(
            "Duplicate recipe detected",
            owner_id=request_body.owner_id,
            duplicate_of=match.recipe_id,
            similarity=match.similarity,
        )
        return DuplicateCheckResponse(
            is_duplicate=True,
            duplicate_of=match.recipe_id,
            similarity=match.similarity,
        )

    return DuplicateCheckResponse(
        is_duplicate=False,
        recipes_to_evict=guard.recipes_to_evict(
            request_body.owner_id,
            request_body.existing_recipes,
        ),
    )
