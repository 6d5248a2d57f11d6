"""Default recipe persistence policy values.

Overridable through the ``recipes`` settings section.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Final


# A re-save of the same recipe shortly after the first one is a duplicate
DUPLICATE_WINDOW: Final[timedelta] = timedelta(minutes=5)

# Share of ingredient names two recipes must have in common
DUPLICATE_SIMILARITY_THRESHOLD: Final[float] = 0.8

# Oldest recipes are evicted beyond this many per user
MAX_SAVED_RECIPES_PER_USER: Final[int] = 100
