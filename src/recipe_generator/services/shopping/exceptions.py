"""Exceptions for shopping-list composition."""

from __future__ import annotations

from typing import Any


class ShoppingListError(Exception):
    """Base exception for shopping-list errors."""


class InvalidMultiplierError(ShoppingListError):
    """Raised when the serving multiplier is not a finite number above zero.

    Raised before any item is produced; composition never returns a
    partial list.
    """

    def __init__(self, multiplier: Any) -> None:
        """Initialize the exception.

        Args:
            multiplier: The rejected value.
        """
        self.multiplier = multiplier
        super().__init__(
            f"Serving multiplier must be a finite number greater than zero, got {multiplier!r}"
        )
