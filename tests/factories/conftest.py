"""Factory configuration and exports.

This module exports all factories for convenient importing in tests.
"""

from tests.factories.recipe import (
    RecipeFactory,
    RecipeIngredientFactory,
    SavedRecipeSummaryFactory,
)
from tests.factories.settings import SettingsFactory


__all__ = [
    "RecipeFactory",
    "RecipeIngredientFactory",
    "SavedRecipeSummaryFactory",
    "SettingsFactory",
]
