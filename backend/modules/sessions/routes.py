"""
Recipe and basket API endpoints.

Every route requires authentication and operates on the caller's own session.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_session_store
from shared.models import AuthenticatedUser

from .interfaces import ISessionStore
from .models import (
    BasketUpdateRequest,
    Recipe,
    RecipeSavedResponse,
    SuccessResponse,
)

router = APIRouter()


@router.get("/recipes", response_model=list[Recipe])
def list_recipes(
    user: AuthenticatedUser = Depends(get_current_user),
    store: ISessionStore = Depends(get_session_store),
) -> list[Recipe]:
    """Get the current user's saved recipes."""
    return store.get_recipes(user.id)


@router.post("/recipes", response_model=RecipeSavedResponse)
def save_recipe(
    recipe: Recipe = Body(...),
    user: AuthenticatedUser = Depends(get_current_user),
    store: ISessionStore = Depends(get_session_store),
) -> RecipeSavedResponse:
    """
    Save a recipe.

    Replaces the saved recipe with the same id, otherwise appends.
    """
    stored = store.upsert_recipe(user.id, recipe)
    return RecipeSavedResponse(recipe=stored)


@router.delete("/recipes/{recipe_id}", response_model=SuccessResponse)
def delete_recipe(
    recipe_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: ISessionStore = Depends(get_session_store),
) -> SuccessResponse:
    """Delete a recipe. Deleting an unknown id succeeds."""
    store.delete_recipe(user.id, recipe_id)
    return SuccessResponse()


@router.get("/basket", response_model=list[Any])
def get_basket(
    user: AuthenticatedUser = Depends(get_current_user),
    store: ISessionStore = Depends(get_session_store),
) -> list[Any]:
    """Get the current user's basket."""
    return store.get_basket(user.id)


@router.post("/basket", response_model=SuccessResponse)
def update_basket(
    request: BasketUpdateRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: ISessionStore = Depends(get_session_store),
) -> SuccessResponse:
    """Replace the basket with the submitted list."""
    store.replace_basket(user.id, request.basket)
    return SuccessResponse()


@router.delete("/basket", response_model=SuccessResponse)
def clear_basket(
    user: AuthenticatedUser = Depends(get_current_user),
    store: ISessionStore = Depends(get_session_store),
) -> SuccessResponse:
    """Empty the basket."""
    store.clear_basket(user.id)
    return SuccessResponse()
