"""Rule data for shopping-list composition.

Contains:
- The curated ingredient -> category lookup table
- The ordered keyword fallback used when the table has no entry
- Formatting constants for scaled quantities
"""

from __future__ import annotations

from decimal import Decimal
from typing import Final

from recipe_generator.schemas.enums import ShoppingCategory


_PRODUCE = ShoppingCategory.PRODUCE
_MEAT = ShoppingCategory.MEAT
_SEAFOOD = ShoppingCategory.SEAFOOD
_DAIRY = ShoppingCategory.DAIRY
_GRAIN = ShoppingCategory.GRAIN
_SEASONING = ShoppingCategory.SEASONING
_OTHER = ShoppingCategory.OTHER


# =============================================================================
# Curated Lookup Table
# =============================================================================
# Keys are matched as case-insensitive substrings of the ingredient name,
# longest key first, so "peanut butter" wins over "butter" and "bell pepper"
# over "pepper". Processed forms of a base ingredient ("chicken stock",
# "garlic powder") get their own keys so they never fall to the base entry.

INGREDIENT_CATEGORIES: Final[dict[str, ShoppingCategory]] = {
    # Produce
    "onion": _PRODUCE,
    "scallion": _PRODUCE,
    "shallot": _PRODUCE,
    "leek": _PRODUCE,
    "garlic": _PRODUCE,
    "ginger": _PRODUCE,
    "tomato": _PRODUCE,
    "potato": _PRODUCE,
    "carrot": _PRODUCE,
    "celery": _PRODUCE,
    "cucumber": _PRODUCE,
    "zucchini": _PRODUCE,
    "eggplant": _PRODUCE,
    "butternut": _PRODUCE,
    "bell pepper": _PRODUCE,
    "chili pepper": _PRODUCE,
    "jalapeno": _PRODUCE,
    "mushroom": _PRODUCE,
    "spinach": _PRODUCE,
    "lettuce": _PRODUCE,
    "cabbage": _PRODUCE,
    "kale": _PRODUCE,
    "broccoli": _PRODUCE,
    "cauliflower": _PRODUCE,
    "green bean": _PRODUCE,
    "pea": _PRODUCE,
    "corn": _PRODUCE,
    "avocado": _PRODUCE,
    "lemon": _PRODUCE,
    "lime": _PRODUCE,
    "apple": _PRODUCE,
    "banana": _PRODUCE,
    "melon": _PRODUCE,
    "cilantro": _PRODUCE,
    "parsley": _PRODUCE,
    "basil": _PRODUCE,
    "mint": _PRODUCE,
    # Meat
    "chicken": _MEAT,
    "beef": _MEAT,
    "pork": _MEAT,
    "lamb": _MEAT,
    "turkey": _MEAT,
    "duck": _MEAT,
    "veal": _MEAT,
    "bacon": _MEAT,
    "ham": _MEAT,
    "sausage": _MEAT,
    "chorizo": _MEAT,
    # Seafood
    "salmon": _SEAFOOD,
    "tuna": _SEAFOOD,
    "cod": _SEAFOOD,
    "tilapia": _SEAFOOD,
    "anchovy": _SEAFOOD,
    "shrimp": _SEAFOOD,
    "prawn": _SEAFOOD,
    "crab": _SEAFOOD,
    "lobster": _SEAFOOD,
    "scallop": _SEAFOOD,
    "mussel": _SEAFOOD,
    "clam": _SEAFOOD,
    "squid": _SEAFOOD,
    # Dairy
    "milk": _DAIRY,
    "butter": _DAIRY,
    "cream": _DAIRY,
    "cheese": _DAIRY,
    "parmesan": _DAIRY,
    "mozzarella": _DAIRY,
    "yogurt": _DAIRY,
    "egg": _DAIRY,
    # Grain
    "rice": _GRAIN,
    "flour": _GRAIN,
    "pasta": _GRAIN,
    "spaghetti": _GRAIN,
    "noodle": _GRAIN,
    "bread": _GRAIN,
    "tortilla": _GRAIN,
    "oats": _GRAIN,
    "oatmeal": _GRAIN,
    "quinoa": _GRAIN,
    "barley": _GRAIN,
    "couscous": _GRAIN,
    "cornmeal": _GRAIN,
    "cornstarch": _GRAIN,
    "graham cracker": _GRAIN,
    # Seasoning
    "salt": _SEASONING,
    "pepper": _SEASONING,
    "sugar": _SEASONING,
    "honey": _SEASONING,
    "oil": _SEASONING,
    "vinegar": _SEASONING,
    "soy sauce": _SEASONING,
    "fish sauce": _SEASONING,
    "chili powder": _SEASONING,
    "paprika": _SEASONING,
    "cumin": _SEASONING,
    "cinnamon": _SEASONING,
    "oregano": _SEASONING,
    "thyme": _SEASONING,
    "rosemary": _SEASONING,
    "curry": _SEASONING,
    "mustard": _SEASONING,
    "ketchup": _SEASONING,
    "mayonnaise": _SEASONING,
    "vanilla": _SEASONING,
    "baking powder": _SEASONING,
    "baking soda": _SEASONING,
    "cream of tartar": _SEASONING,
    "garlic powder": _SEASONING,
    "onion powder": _SEASONING,
    "ginger powder": _SEASONING,
    "garlic salt": _SEASONING,
    "onion salt": _SEASONING,
    "celery salt": _SEASONING,
    # Other
    "peanut": _OTHER,
    "peanut butter": _OTHER,
    "coconut milk": _OTHER,
    "tomato paste": _OTHER,
    "tomato sauce": _OTHER,
    "tomato puree": _OTHER,
    "broth": _OTHER,
    "stock": _OTHER,
    "chicken broth": _OTHER,
    "chicken stock": _OTHER,
    "turkey broth": _OTHER,
    "turkey stock": _OTHER,
    "beef broth": _OTHER,
    "beef stock": _OTHER,
    "bouillon": _OTHER,
    "tofu": _OTHER,
    "water": _OTHER,
}


# =============================================================================
# Keyword Fallback
# =============================================================================
# Tried in order after the lookup table misses. Keywords avoid short
# fragments that occur inside unrelated words ("sea" in "seasoning").

CATEGORY_KEYWORDS: Final[tuple[tuple[ShoppingCategory, tuple[str, ...]], ...]] = (
    (_MEAT, ("meat", "steak", "loin", "breast", "thigh", "drumstick", "mince")),
    (_SEAFOOD, ("fish", "seafood", "oyster", "octopus")),
    (_PRODUCE, ("vegetable", "veggie", "greens", "leaves", "fruit", "berr", "squash", "sprout")),
    (_DAIRY, ("dairy", "yoghurt", "curd", "whey", "ghee", "kefir")),
    (_SEASONING, ("spice", "seasoning", "sauce", "powder", "extract", "syrup", "dressing")),
    (_GRAIN, ("grain", "cereal", "wheat", "cracker", "bagel", "meal", "loaf")),
)


# =============================================================================
# Quantity Formatting
# =============================================================================

SCALED_QUANTITY_QUANTUM: Final[Decimal] = Decimal("0.001")  # at most 3 decimals

DEFAULT_LIST_NAME_TEMPLATE: Final[str] = "{recipe_name} - Shopping List"
