"""Recipe schemas.

The structured Recipe is built from JSON that a language model wrote, so its
validators coerce rather than reject: numbers become strings, a bare string
ingredient becomes an ingredient without quantity, a single dietary tag
becomes a one-element list. Whether the result is usable is reported by
``Recipe.missing_fields`` instead of a validation error.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Annotated, Any

from pydantic import Field, StringConstraints, field_validator, model_validator

from recipe_generator.parsing.exceptions import IncompleteRecipeError
from recipe_generator.schemas.base import APIRequest, APIResponse, ModelOutput
from recipe_generator.schemas.enums import DietaryPreference, ParseStatus


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Keys a model uses for the text of an instruction step given as an object
_STEP_TEXT_KEYS: tuple[str, ...] = ("text", "instruction", "description", "step")


def to_text(value: Any) -> str:
    """Render an arbitrary decoded JSON value as display text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return "\n".join(text for text in (to_text(item) for item in value) if text)
    if isinstance(value, dict):
        return "; ".join(
            f"{key}: {text}" for key, item in value.items() if (text := to_text(item))
        )
    return str(value).strip()


def _step_text(item: Any) -> str:
    """Text of one instruction step, which may be an object like {"step": 1, "text": ...}."""
    if isinstance(item, dict):
        for key in _STEP_TEXT_KEYS:
            if isinstance(item.get(key), str):
                return item[key].strip()
    return to_text(item)


# =============================================================================
# Structured Recipe
# =============================================================================


class RecipeIngredient(ModelOutput):
    """A single ingredient with a free-form quantity string."""

    name: str = Field(default="", description="Ingredient name", examples=["onion"])
    quantity: str = Field(
        default="",
        description="Free-form quantity including any unit",
        examples=["2 cups"],
    )

    @model_validator(mode="before")
    @classmethod
    def _coerce_entry(cls, data: Any) -> Any:
        if isinstance(data, RecipeIngredient):
            return data
        if not isinstance(data, dict):
            return {"name": to_text(data)}

        entry = dict(data)
        if "name" not in entry:
            entry["name"] = entry.get("ingredient", entry.get("item"))
        if "quantity" not in entry and "amount" in entry:
            # {"amount": 2, "unit": "cups"} -> "2 cups"
            parts = (to_text(entry.get("amount")), to_text(entry.get("unit")))
            entry["quantity"] = " ".join(part for part in parts if part)
        return entry

    @field_validator("name", "quantity", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return to_text(value)


class Recipe(ModelOutput):
    """A recipe after normalization of a model response."""

    name: str = Field(default="", description="Recipe name")
    ingredients: list[RecipeIngredient] = Field(
        default_factory=list,
        description="Ingredients in the order the recipe lists them",
    )
    instructions: list[str] = Field(
        default_factory=list,
        description="Preparation steps, one per entry",
    )
    dietary_preference: list[str] = Field(
        default_factory=list,
        description="Dietary tags, without duplicates",
        examples=[["vegan", "gluten-free"]],
    )
    additional_information: dict[str, str] | None = Field(
        default=None,
        description="Tips, variations, serving suggestions, nutrition notes",
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_plural_tags(cls, data: Any) -> Any:
        if (
            isinstance(data, dict)
            and "dietaryPreferences" in data
            and "dietaryPreference" not in data
            and "dietary_preference" not in data
        ):
            data = {**data, "dietaryPreference": data["dietaryPreferences"]}
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _name_text(cls, value: Any) -> str:
        return to_text(value)

    @field_validator("ingredients", mode="before")
    @classmethod
    def _ingredient_entries(cls, value: Any) -> list[Any]:
        if isinstance(value, dict):
            # {"onion": "1", "salt": "to taste"}
            return [{"name": key, "quantity": item} for key, item in value.items()]
        if isinstance(value, (list, tuple)):
            return [item for item in value if item]
        return []

    @field_validator("ingredients")
    @classmethod
    def _drop_nameless(cls, value: list[RecipeIngredient]) -> list[RecipeIngredient]:
        return [ingredient for ingredient in value if ingredient.name]

    @field_validator("instructions", mode="before")
    @classmethod
    def _instruction_steps(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            items: list[Any] = value.splitlines()
        elif isinstance(value, (list, tuple)):
            items = list(value)
        else:
            items = [value]

        return [text for text in (_step_text(item) for item in items) if text]

    @field_validator("dietary_preference", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        elif not isinstance(value, (list, tuple, set)):
            value = [value]

        tags: list[str] = []
        seen: set[str] = set()
        for item in value:
            tag = to_text(item)
            if tag and tag.casefold() not in seen:
                seen.add(tag.casefold())
                tags.append(tag)
        return tags

    @field_validator("additional_information", mode="before")
    @classmethod
    def _information(cls, value: Any) -> dict[str, str] | None:
        if value is None or value == "":
            return None
        if not isinstance(value, dict):
            return {"notes": to_text(value)}
        information = {str(key): to_text(item) for key, item in value.items()}
        return {key: text for key, text in information.items() if text} or None

    @property
    def missing_fields(self) -> list[str]:
        """Required fields that are missing or empty."""
        missing: list[str] = []
        if not self.name:
            missing.append("name")
        if not self.ingredients:
            missing.append("ingredients")
        return missing

    @property
    def is_complete(self) -> bool:
        """Whether the recipe can be saved, shared or shopped for."""
        return not self.missing_fields

    @property
    def has_instructions(self) -> bool:
        """Recipes without steps are usable but flagged to the user."""
        return bool(self.instructions)

    def require_complete(self) -> None:
        """Raise IncompleteRecipeError unless name and ingredients are present."""
        if missing := self.missing_fields:
            msg = f"Recipe is missing required fields: {', '.join(missing)}"
            raise IncompleteRecipeError(msg, missing_fields=missing)


# =============================================================================
# Generation / Normalization API
# =============================================================================


class IngredientInput(APIRequest):
    """Ingredient supplied by the user for recipe generation."""

    name: NonEmptyStr = Field(..., description="Ingredient name")
    quantity: NonEmptyStr = Field(..., description="Available quantity")


class GenerateRecipeRequest(APIRequest):
    """Request body for recipe generation."""

    ingredients: list[IngredientInput] = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Ingredients the recipe should be built around",
    )
    dietary_preferences: list[DietaryPreference] = Field(
        default_factory=list,
        description="Dietary constraints the recipe must respect",
    )


class NormalizeRecipeRequest(APIRequest):
    """Request body for structuring an already generated response."""

    raw_response: str = Field(..., description="Raw text returned by the model")


class RecipeParseResponse(APIResponse):
    """Structured view of a raw model response."""

    status: ParseStatus = Field(..., description="complete, incomplete or failed")
    recipe: Recipe | None = Field(
        default=None, description="Structured recipe, absent when parsing failed"
    )
    missing_fields: list[str] = Field(
        default_factory=list, description="Required recipe fields that are missing"
    )
    has_instructions: bool = Field(
        default=False, description="Whether the recipe lists preparation steps"
    )
    parse_step: str | None = Field(
        default=None, description="Normalization step that decoded the response"
    )
    raw_response: str = Field(..., description="Raw text returned by the model")
    cleaned_text: str | None = Field(
        default=None, description="Cleaned text shown when structuring failed"
    )
    notice: str | None = Field(
        default=None, description="User-facing message for non-complete results"
    )


class GenerateRecipeResponse(RecipeParseResponse):
    """Generation result including model usage information."""

    model: str = Field(..., description="Model that produced the response")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(
        default=None, description="Output token count"
    )


# =============================================================================
# Duplicate Check API
# =============================================================================


class SavedRecipeSummary(APIRequest):
    """A previously saved recipe as seen by the duplicate guard."""

    id: str = Field(..., description="Recipe identifier")
    owner_id: str = Field(..., description="Owning user identifier")
    name: str = Field(..., description="Recipe name")
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    created_at: datetime = Field(..., description="Creation timestamp")


class DuplicateCheckRequest(APIRequest):
    """Request body for the near-duplicate check."""

    owner_id: NonEmptyStr = Field(..., description="User saving the recipe")
    recipe: Recipe = Field(..., description="Recipe about to be saved")
    existing_recipes: list[SavedRecipeSummary] = Field(
        default_factory=list,
        description="The user's saved recipes to compare against",
    )


class DuplicateCheckResponse(APIResponse):
    """Result of the near-duplicate check."""

    is_duplicate: bool
    duplicate_of: str | None = Field(
        default=None, description="Identifier of the matching saved recipe"
    )
    similarity: float | None = Field(
        default=None, description="Ingredient-name overlap with the match (0-1)"
    )
    recipes_to_evict: list[str] = Field(
        default_factory=list,
        description="Oldest saved recipes to delete so the new one fits under the per-user cap",
    )
