"""Enumeration types shared by the API schemas and services."""

from __future__ import annotations

from enum import StrEnum


class DietaryPreference(StrEnum):
    """Dietary preferences a generation request may ask for."""

    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    GLUTEN_FREE = "gluten-free"
    DAIRY_FREE = "dairy-free"
    KETO = "keto"
    PALEO = "paleo"
    LOW_CARB = "low-carb"
    HIGH_PROTEIN = "high-protein"
    NUT_FREE = "nut-free"
    SOY_FREE = "soy-free"


class ShoppingCategory(StrEnum):
    """Shelf categories for shopping-list items.

    Declaration order is the order categories appear in a shopping list.
    """

    PRODUCE = "Produce"
    MEAT = "Meat"
    SEAFOOD = "Seafood"
    DAIRY = "Dairy"
    GRAIN = "Grain"
    SEASONING = "Seasoning"
    OTHER = "Other"


class ParseStatus(StrEnum):
    """Outcome of structuring a raw model response."""

    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    FAILED = "failed"
