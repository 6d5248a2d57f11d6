"""Shopping-list schemas."""

from __future__ import annotations

from pydantic import Field

from recipe_generator.schemas.base import APIRequest, APIResponse
from recipe_generator.schemas.enums import ShoppingCategory
from recipe_generator.schemas.recipe import Recipe


class ShoppingListItem(APIResponse):
    """One line of a shopping list."""

    name: str = Field(..., description="Ingredient name")
    quantity: str = Field(..., description="Quantity scaled to the requested servings")
    category: ShoppingCategory = Field(..., description="Shelf category")
    source_recipe_id: str | None = Field(
        default=None, description="Recipe the item was generated from"
    )
    is_completed: bool = Field(default=False, description="Ticked off by the user")


class ShoppingListGroup(APIResponse):
    """Items sharing a shelf category."""

    category: ShoppingCategory
    items: list[ShoppingListItem]


class ShoppingListDraft(APIResponse):
    """A composed shopping list, ready to be stored by the persistence layer."""

    name: str = Field(..., description="List name")
    description: str = Field(..., description="Human readable origin of the list")
    servings: float = Field(..., description="Serving multiplier applied")
    source_recipe_id: str | None = Field(default=None)
    item_count: int = Field(..., description="Number of items")
    items: list[ShoppingListItem] = Field(..., description="Items in shelf order")
    groups: list[ShoppingListGroup] = Field(..., description="Items grouped by category")


class ComposeShoppingListRequest(APIRequest):
    """Request body for composing a shopping list from a recipe."""

    recipe: Recipe = Field(..., description="Structured recipe to shop for")
    servings: float = Field(
        default=1,
        description="Serving multiplier applied to every numeric quantity",
    )
    recipe_id: str | None = Field(
        default=None, description="Identifier of the stored recipe, if any"
    )
    name: str | None = Field(default=None, description="Custom list name")
