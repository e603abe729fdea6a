"""
Sessions module.

Per-user application state: saved recipes and the shopping basket.

Public API:
- ISessionStore: Interface for session storage
- UserSession, Recipe: Data models
- InvalidRecipeError, InvalidBasketError: Validation exceptions
"""

from .interfaces import ISessionStore
from .models import UserSession, Recipe
from .exceptions import InvalidRecipeError, InvalidBasketError

__all__ = [
    "ISessionStore",
    "UserSession",
    "Recipe",
    "InvalidRecipeError",
    "InvalidBasketError",
]
