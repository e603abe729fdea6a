"""
Sessions module interface.
"""

from typing import Any, Protocol, runtime_checkable

from .models import Recipe, UserSession


@runtime_checkable
class ISessionStore(Protocol):
    """
    Interface for per-user recipe and basket storage.

    Every operation creates the user's session on first access.
    Mutations persist before returning.
    """

    def get(self, user_id: str) -> UserSession:
        """Return the user's session, creating an empty one if needed."""
        ...

    def get_recipes(self, user_id: str) -> list[Recipe]:
        """Saved recipes in insertion order."""
        ...

    def upsert_recipe(self, user_id: str, recipe: Recipe) -> Recipe:
        """
        Replace the recipe with the same ``id`` or append it.

        Raises:
            InvalidRecipeError: If ``id`` is missing or not a non-empty string
        """
        ...

    def delete_recipe(self, user_id: str, recipe_id: str) -> None:
        """Remove every recipe with ``recipe_id``. No-op if none match."""
        ...

    def get_basket(self, user_id: str) -> list[Any]:
        """Basket items in order."""
        ...

    def replace_basket(self, user_id: str, items: list[Any]) -> None:
        """Replace the basket wholesale."""
        ...

    def clear_basket(self, user_id: str) -> None:
        """Empty the basket."""
        ...

    def count(self) -> int:
        """Number of stored sessions."""
        ...
