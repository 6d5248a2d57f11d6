"""Shopping-list composition from recipe ingredients.

Provides:
- Rule-based shelf categorization (lookup table, then keyword fallback)
- Best-effort scaling of free-form quantity strings
- Composition of ordered, grouped shopping-list items

Everything here is pure and synchronous; callers own logging and storage.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import TYPE_CHECKING, Any

from recipe_generator.schemas.enums import ShoppingCategory
from recipe_generator.schemas.shopping import (
    ShoppingListDraft,
    ShoppingListGroup,
    ShoppingListItem,
)
from recipe_generator.services.shopping.constants import (
    CATEGORY_KEYWORDS,
    DEFAULT_LIST_NAME_TEMPLATE,
    INGREDIENT_CATEGORIES,
    SCALED_QUANTITY_QUANTUM,
)
from recipe_generator.services.shopping.exceptions import InvalidMultiplierError


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from recipe_generator.schemas.recipe import Recipe, RecipeIngredient


# Mixed number ("1 1/2"), fraction ("3/4"), then decimal or integer
_NUMERIC_TOKEN = re.compile(
    r"(?P<whole>\d+)\s+(?P<mixed_num>\d+)/(?P<mixed_den>[1-9]\d*)"
    r"|(?P<num>\d+)/(?P<den>[1-9]\d*)"
    r"|(?P<number>\d*\.\d+|\d+)"
)

# Digits kept beyond an amount's integer part when rounding
_FRACTION_HEADROOM = 4

_SHELF_ORDER: dict[ShoppingCategory, int] = {
    category: position for position, category in enumerate(ShoppingCategory)
}


def validate_multiplier(multiplier: Any) -> Decimal:
    """Return the multiplier as a Decimal.

    Raises:
        InvalidMultiplierError: If it is not a finite number greater than zero.
    """
    if isinstance(multiplier, bool):
        raise InvalidMultiplierError(multiplier)
    try:
        factor = Decimal(str(multiplier))
    except (InvalidOperation, ValueError) as e:
        raise InvalidMultiplierError(multiplier) from e
    if not factor.is_finite() or factor <= 0:
        raise InvalidMultiplierError(multiplier)
    return factor


def _token_value(match: re.Match[str]) -> Decimal:
    if match.group("whole") is not None:
        return Decimal(match.group("whole")) + Decimal(match.group("mixed_num")) / Decimal(
            match.group("mixed_den")
        )
    if match.group("num") is not None:
        return Decimal(match.group("num")) / Decimal(match.group("den"))
    return Decimal(match.group("number"))


def format_amount(value: Decimal) -> str:
    """Render an amount without trailing zeros and at most three decimals."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 1 + _FRACTION_HEADROOM)
        if value != value.to_integral_value():
            value = value.quantize(SCALED_QUANTITY_QUANTUM, rounding=ROUND_HALF_UP)
        return format(value.normalize(), "f")


def scale_quantity(quantity: str, multiplier: Any = 1) -> str:
    """Multiply the first numeric token of a quantity string.

    The token is replaced in place so units and notes survive
    ("2 cups" x 1.5 -> "3 cups"). Quantities without a number
    ("a pinch", "to taste") and multiplier 1 return the input unchanged.

    Args:
        quantity: Free-form quantity text.
        multiplier: Serving multiplier, a finite number above zero.

    Returns:
        The scaled quantity text.

    Raises:
        InvalidMultiplierError: If the multiplier is invalid.
    """
    factor = validate_multiplier(multiplier)
    if factor == 1:
        return quantity

    match = _NUMERIC_TOKEN.search(quantity)
    if match is None:
        return quantity

    # Exact product: quantities are free text and may be arbitrarily long
    with localcontext() as ctx:
        digits = len(match.group(0)) + len(factor.as_tuple().digits)
        ctx.prec = max(ctx.prec, digits + _FRACTION_HEADROOM)
        scaled = format_amount(_token_value(match) * factor)
    return f"{quantity[: match.start()]}{scaled}{quantity[match.end() :]}"


def group_by_category(items: Iterable[ShoppingListItem]) -> list[ShoppingListGroup]:
    """Group items by category in shelf order, keeping item order within groups."""
    grouped: dict[ShoppingCategory, list[ShoppingListItem]] = {}
    for item in items:
        grouped.setdefault(ShoppingCategory(item.category), []).append(item)
    return [
        ShoppingListGroup(category=category, items=grouped[category])
        for category in sorted(grouped, key=_SHELF_ORDER.__getitem__)
    ]


class ShoppingListComposer:
    """Turn recipe ingredients into categorized, scaled shopping-list items.

    The rule set is data: pass another lookup table or keyword list to
    change categorization without touching the control flow.

    Example:
        ```python
        composer = ShoppingListComposer()
        items = composer.compose(recipe.ingredients, multiplier=2)
        ```
    """

    def __init__(
        self,
        ingredient_categories: Mapping[str, ShoppingCategory] = INGREDIENT_CATEGORIES,
        category_keywords: Sequence[
            tuple[ShoppingCategory, Sequence[str]]
        ] = CATEGORY_KEYWORDS,
    ) -> None:
        """Initialize the composer.

        Args:
            ingredient_categories: Name fragment -> category lookup table.
            category_keywords: Ordered (category, keywords) fallback rules.
        """
        # Longest key first; ties broken alphabetically for a stable order
        self._lookup: tuple[tuple[str, ShoppingCategory], ...] = tuple(
            sorted(
                ((key.casefold(), category) for key, category in ingredient_categories.items()),
                key=lambda entry: (-len(entry[0]), entry[0]),
            )
        )
        self._keywords = tuple(
            (category, tuple(keyword.casefold() for keyword in keywords))
            for category, keywords in category_keywords
        )

    def categorize(self, name: str) -> ShoppingCategory:
        """Assign a shelf category to an ingredient name.

        Unknown names fall through to ``ShoppingCategory.OTHER``.
        """
        lowered = name.casefold()

        for key, category in self._lookup:
            if key in lowered:
                return category

        for category, keywords in self._keywords:
            if any(keyword in lowered for keyword in keywords):
                return category

        return ShoppingCategory.OTHER

    def compose(
        self,
        ingredients: Iterable[RecipeIngredient],
        multiplier: Any = 1,
        source_recipe_id: str | None = None,
    ) -> list[ShoppingListItem]:
        """Build one shopping-list item per ingredient.

        Args:
            ingredients: Recipe ingredients in recipe order.
            multiplier: Serving multiplier applied to numeric quantities.
            source_recipe_id: Optional back-reference stored on every item.

        Returns:
            Items ordered by shelf category, then by ingredient order.

        Raises:
            InvalidMultiplierError: If the multiplier is not a finite number
                above zero. Checked before any ingredient is processed.
        """
        factor = validate_multiplier(multiplier)

        items = [
            ShoppingListItem(
                name=ingredient.name,
                quantity=scale_quantity(ingredient.quantity, factor),
                category=self.categorize(ingredient.name),
                source_recipe_id=source_recipe_id,
            )
            for ingredient in ingredients
        ]
        # sorted() is stable, so ingredient order survives within a category
        return sorted(items, key=lambda item: _SHELF_ORDER[ShoppingCategory(item.category)])

    def draft(
        self,
        recipe: Recipe,
        servings: Any = 1,
        *,
        name: str | None = None,
        recipe_id: str | None = None,
    ) -> ShoppingListDraft:
        """Compose a named shopping list for a complete recipe.

        Args:
            recipe: Recipe to shop for.
            servings: Serving multiplier.
            name: Custom list name, defaults to "<recipe> - Shopping List".
            recipe_id: Identifier of the stored recipe, if any.

        Raises:
            InvalidMultiplierError: If ``servings`` is invalid.
            IncompleteRecipeError: If the recipe lacks a name or ingredients.
        """
        factor = validate_multiplier(servings)
        recipe.require_complete()

        items = self.compose(recipe.ingredients, factor, source_recipe_id=recipe_id)
        servings_label = format_amount(factor)
        unit = "serving" if factor == 1 else "servings"

        return ShoppingListDraft(
            name=name or DEFAULT_LIST_NAME_TEMPLATE.format(recipe_name=recipe.name),
            description=f'Generated from recipe "{recipe.name}" ({servings_label} {unit})',
            servings=float(factor),
            source_recipe_id=recipe_id,
            item_count=len(items),
            items=items,
            groups=group_by_category(items),
        )
