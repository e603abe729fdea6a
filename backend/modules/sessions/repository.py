"""
Session store.

Holds user id -> {recipes, basket} in memory and persists the whole mapping
to a JSON snapshot after every mutation. Sessions are created lazily the
first time a user touches recipes or basket.

Note: This repository does NOT perform authentication. Routes resolve the
user id from a verified token before calling in.
"""

import copy
import logging
from typing import Any

from shared.exceptions import StorageError
from shared.repository import BaseRepository

from .interfaces import ISessionStore
from .models import Recipe, UserSession
from .exceptions import InvalidBasketError, InvalidRecipeError

logger = logging.getLogger(__name__)


def normalize_session(user_id: str, raw: Any) -> dict[str, Any]:
    """
    Coerce a stored session record into ``{"recipes": [...], "basket": [...]}``.

    Missing or null fields become empty lists quietly. Other non-list values
    and non-object recipes are repaired with a warning.
    """
    if not isinstance(raw, dict):
        logger.warning("Session %r is not an object; starting it empty", user_id)
        raw = {}

    recipes = raw.get("recipes")
    if not isinstance(recipes, list):
        if recipes is not None:
            logger.warning("Session %r has non-list recipes; resetting them", user_id)
        recipes = []
    kept = [r for r in recipes if isinstance(r, dict)]
    if len(kept) != len(recipes):
        logger.warning(
            "Session %r: dropped %d non-object recipes", user_id, len(recipes) - len(kept)
        )

    basket = raw.get("basket")
    if not isinstance(basket, list):
        if basket is not None:
            logger.warning("Session %r has a non-list basket; resetting it", user_id)
        basket = []

    return UserSession(recipes=kept, basket=basket).model_dump()


class SessionStore(BaseRepository[UserSession], ISessionStore):
    """
    Snapshot-backed per-user session store.

    Each read-modify-persist cycle runs under the store lock. A failed write
    restores the user's previous record before the error propagates.
    """

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """
        Load sessions from disk, creating an empty snapshot on first run.

        Records written by older deployments may carry a ``null`` or non-list
        ``recipes``/``basket`` or non-object recipes. Those are normalised
        instead of failing the whole load.

        Raises:
            StorageError: If the file is unreadable or not a JSON object
        """
        with self._lock:
            data = self._file.load()
            if data is None:
                self._records = {}
                self._persist()
                return

            self._records = {
                user_id: normalize_session(user_id, raw) for user_id, raw in data.items()
            }
            logger.info("Loaded %d sessions from %s", len(self._records), self._file.path)

    # -------------------------------------------------------------------------
    # Session access
    # -------------------------------------------------------------------------

    def get(self, user_id: str) -> UserSession:
        with self._lock:
            return UserSession.model_validate(copy.deepcopy(self._ensure(user_id)))

    # -------------------------------------------------------------------------
    # Recipes
    # -------------------------------------------------------------------------

    def get_recipes(self, user_id: str) -> list[Recipe]:
        with self._lock:
            return copy.deepcopy(self._ensure(user_id)["recipes"])

    def upsert_recipe(self, user_id: str, recipe: Recipe) -> Recipe:
        if not isinstance(recipe, dict):
            raise InvalidRecipeError()
        recipe_id = recipe.get("id")
        if not isinstance(recipe_id, str) or not recipe_id:
            raise InvalidRecipeError(recipe_id)

        stored = copy.deepcopy(recipe)
        with self._lock:
            session = self._ensure(user_id)
            recipes = list(session["recipes"])
            for index, existing in enumerate(recipes):
                if existing.get("id") == recipe_id:
                    recipes[index] = stored
                    break
            else:
                recipes.append(stored)

            self._commit(user_id, {**session, "recipes": recipes})
            logger.debug("Saved recipe %s for %s", recipe_id, user_id)
            return copy.deepcopy(stored)

    def delete_recipe(self, user_id: str, recipe_id: str) -> None:
        with self._lock:
            session = self._ensure(user_id)
            recipes = [r for r in session["recipes"] if r.get("id") != recipe_id]
            self._commit(user_id, {**session, "recipes": recipes})
            logger.debug("Deleted recipe %s for %s", recipe_id, user_id)

    # -------------------------------------------------------------------------
    # Basket
    # -------------------------------------------------------------------------

    def get_basket(self, user_id: str) -> list[Any]:
        with self._lock:
            return copy.deepcopy(self._ensure(user_id)["basket"])

    def replace_basket(self, user_id: str, items: list[Any]) -> None:
        if not isinstance(items, list):
            raise InvalidBasketError()

        with self._lock:
            session = self._ensure(user_id)
            self._commit(user_id, {**session, "basket": copy.deepcopy(items)})
            logger.debug("Replaced basket for %s (%d items)", user_id, len(items))

    def clear_basket(self, user_id: str) -> None:
        self.replace_basket(user_id, [])

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _ensure(self, user_id: str) -> dict[str, Any]:
        """Return the user's record, creating and persisting it if absent."""
        session = self._records.get(user_id)
        if session is None:
            session = UserSession().model_dump()
            self._commit(user_id, session)
            logger.info("Created session for %s", user_id)
        return session

    def _commit(self, user_id: str, session: dict[str, Any]) -> None:
        previous = self._records.get(user_id)
        self._records[user_id] = session
        try:
            self._persist()
        except StorageError:
            if previous is None:
                self._records.pop(user_id, None)
            else:
                self._records[user_id] = previous
            raise
