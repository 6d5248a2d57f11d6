"""Recipe generation service."""

from recipe_generator.services.generation.exceptions import (
    GenerationError,
    GenerationFailedError,
    GenerationUnavailableError,
)
from recipe_generator.services.generation.service import (
    RecipeGenerationService,
    interpret_response,
)


__all__ = [
    "GenerationError",
    "GenerationFailedError",
    "GenerationUnavailableError",
    "RecipeGenerationService",
    "interpret_response",
]
