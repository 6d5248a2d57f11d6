"""Recipe generation service.

Orchestrates:
1. Prompt formatting from the user's ingredients and dietary preferences
2. A single completion call to the LLM client
3. Normalization of the raw text into a structured recipe
4. Logging of the outcome on behalf of the pure components
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_generator.llm.exceptions import LLMError, LLMUnavailableError
from recipe_generator.llm.prompts.recipe_generation import RecipeGenerationPrompt
from recipe_generator.observability.logging import get_logger
from recipe_generator.parsing.recipe_response import ParseFailure, ResponseNormalizer
from recipe_generator.schemas.enums import ParseStatus
from recipe_generator.schemas.recipe import GenerateRecipeResponse, RecipeParseResponse
from recipe_generator.services.generation.constants import (
    INCOMPLETE_RECIPE_NOTICE,
    UNSTRUCTURED_RESPONSE_NOTICE,
)
from recipe_generator.services.generation.exceptions import (
    GenerationFailedError,
    GenerationUnavailableError,
)


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_generator.llm.client.protocol import LLMClientProtocol
    from recipe_generator.schemas.recipe import IngredientInput

logger = get_logger(__name__)


class RecipeGenerationService:
    """Generate recipes from ingredients and structure the model's answer.

    A response that cannot be structured is still a successful generation:
    it comes back with status ``failed``, the cleaned text and a notice.
    Only LLM transport errors raise.
    """

    def __init__(
        self,
        llm_client: LLMClientProtocol,
        normalizer: ResponseNormalizer | None = None,
        model: str | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            llm_client: Client for the text-generation backend.
            normalizer: Response normalizer, a default instance if None.
            model: Model override; the client's default when None.
        """
        self._llm_client = llm_client
        self._normalizer = normalizer or ResponseNormalizer()
        self._model = model
        self._prompt = RecipeGenerationPrompt()

    async def generate(
        self,
        ingredients: Sequence[IngredientInput],
        dietary_preferences: Sequence[str] = (),
    ) -> GenerateRecipeResponse:
        """Generate one recipe and structure it.

        Args:
            ingredients: Ingredients the recipe should use.
            dietary_preferences: Dietary constraints to respect.

        Returns:
            The parse result plus model usage information.

        Raises:
            GenerationUnavailableError: If the backend is unreachable or timed out.
            GenerationFailedError: If the backend answered with an error.
        """
        prompt = self._prompt.format(
            ingredients=ingredients,
            dietary_preferences=dietary_preferences,
        )
        model = self._model or self._llm_client.model

        logger.info(
            "Generating recipe",
            model=model,
            ingredient_count=len(ingredients),
            dietary_preferences=list(dietary_preferences),
        )

        try:
            completion = await self._llm_client.generate(
                prompt,
                model=self._model,
                system=self._prompt.system_prompt,
                options=self._prompt.get_options(),
            )
        except LLMUnavailableError as e:
            logger.warning("LLM unavailable for recipe generation", model=model, error=str(e))
            msg = f"Recipe generation backend is unavailable: {e}"
            raise GenerationUnavailableError(msg, model=model) from e
        except LLMError as e:
            logger.error("LLM error during recipe generation", model=model, error=str(e))
            msg = f"Recipe generation failed: {e}"
            raise GenerationFailedError(msg, model=model) from e

        parsed = self.parse(completion.raw_response)

        return GenerateRecipeResponse(
            **dict(parsed),
            model=completion.model,
            prompt_tokens=completion.prompt_tokens,
            completion_tokens=completion.completion_tokens,
        )

    def parse(self, raw: str) -> RecipeParseResponse:
        """Structure a raw model response without calling the LLM."""
        return interpret_response(raw, self._normalizer)


def _failed(failure: ParseFailure) -> RecipeParseResponse:
    logger.warning(
        "Could not structure model response",
        reason=failure.reason,
        response_length=len(failure.raw_text),
    )
    return RecipeParseResponse(
        status=ParseStatus.FAILED,
        raw_response=failure.raw_text,
        cleaned_text=failure.cleaned_text,
        notice=UNSTRUCTURED_RESPONSE_NOTICE,
    )


def interpret_response(
    raw: str,
    normalizer: ResponseNormalizer | None = None,
) -> RecipeParseResponse:
    """Structure a raw model response and log the outcome.

    Args:
        raw: Text returned by the model.
        normalizer: Response normalizer, a default instance if None.

    Returns:
        A complete, incomplete or failed parse result.
    """
    normalizer = normalizer or ResponseNormalizer()
    extracted = normalizer.extract(raw)
    if isinstance(extracted, ParseFailure):
        return _failed(extracted)

    outcome = normalizer.build_recipe(extracted)
    if isinstance(outcome, ParseFailure):
        return _failed(outcome)

    step = extracted.step.value
    missing = outcome.missing_fields

    if missing:
        logger.info(
            "Model response structured as incomplete recipe",
            parse_step=step,
            missing_fields=missing,
        )
        return RecipeParseResponse(
            status=ParseStatus.INCOMPLETE,
            recipe=outcome,
            missing_fields=missing,
            has_instructions=outcome.has_instructions,
            parse_step=step,
            raw_response=raw,
            notice=INCOMPLETE_RECIPE_NOTICE.format(fields=" and ".join(missing)),
        )

    logger.info(
        "Model response structured",
        parse_step=step,
        recipe_name=outcome.name,
        ingredient_count=len(outcome.ingredients),
        has_instructions=outcome.has_instructions,
    )
    return RecipeParseResponse(
        status=ParseStatus.COMPLETE,
        recipe=outcome,
        has_instructions=outcome.has_instructions,
        parse_step=step,
        raw_response=raw,
    )
