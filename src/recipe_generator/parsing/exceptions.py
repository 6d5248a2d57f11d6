"""Parsing exceptions.

Structural failures of the response normalizer are returned as
``ParseFailure`` values, not raised; the exceptions here are for callers
that need a complete recipe.
"""

from __future__ import annotations


class ParsingError(Exception):
    """Base exception for parsing errors."""


class IncompleteRecipeError(ParsingError):
    """Raised when an action needs a recipe with a name and ingredients.

    The model response decoded, but required fields were missing or empty.
    Saving, sharing and shopping-list generation refuse such recipes.
    """

    def __init__(self, message: str, missing_fields: list[str]) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            missing_fields: Names of the missing recipe fields.
        """
        self.missing_fields = missing_fields
        super().__init__(message)
