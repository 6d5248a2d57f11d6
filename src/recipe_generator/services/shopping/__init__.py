"""Shopping-list composition.

Turns recipe ingredients into categorized shopping-list items with quantities
scaled to a serving multiplier.
"""

from recipe_generator.services.shopping.composer import (
    ShoppingListComposer,
    group_by_category,
    scale_quantity,
)
from recipe_generator.services.shopping.exceptions import (
    InvalidMultiplierError,
    ShoppingListError,
)


__all__ = [
    "InvalidMultiplierError",
    "ShoppingListComposer",
    "ShoppingListError",
    "group_by_category",
    "scale_quantity",
]
