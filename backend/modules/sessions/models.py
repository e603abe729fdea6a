"""
Sessions module data models.

A user session is the per-user application state: saved recipes and the
shopping basket. Recipes and basket items are free-form JSON; recipes only
need a string ``id``.
"""

from typing import Any
from pydantic import BaseModel, Field


Recipe = dict[str, Any]


class UserSession(BaseModel):
    """Stored state for one user."""

    recipes: list[Recipe] = Field(default_factory=list)
    basket: list[Any] = Field(default_factory=list)


class BasketUpdateRequest(BaseModel):
    """Body of a basket update. The list replaces the basket wholesale."""

    basket: list[Any]


class SuccessResponse(BaseModel):
    """Acknowledgement for mutations that return no data."""

    success: bool = True


class RecipeSavedResponse(BaseModel):
    """Result of saving a recipe."""

    success: bool = True
    recipe: Recipe
