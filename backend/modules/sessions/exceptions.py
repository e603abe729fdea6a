"""
Sessions module exceptions.
"""

from typing import Any

from shared.exceptions import ValidationError


class InvalidRecipeError(ValidationError):
    """Raised when a recipe lacks a usable string ``id``."""

    def __init__(self, recipe_id: Any = None):
        super().__init__(
            "Recipe must have a non-empty string id",
            code="INVALID_RECIPE",
            details={"id": recipe_id},
        )


class InvalidBasketError(ValidationError):
    """Raised when a basket update is not a list."""

    def __init__(self):
        super().__init__(
            "Basket must be a list",
            code="INVALID_BASKET",
        )
