import logging
from collections.abc import Callable
from typing import Any

from foodie.domain.storage import KeyValueStore, MemoryStore


logger = logging.getLogger(__name__)


FAVORITES_KEY = "favoriteRecipes"


FavoritesListener = Callable[[list[dict[str, Any]]], None]


class FavoritesStore:
    """Favourite recipes, persisted as a list of recipe dicts."""

    def __init__(self, storage: KeyValueStore | None = None) -> None:
        self.storage = MemoryStore() if storage is None else storage
        self._listeners: list[FavoritesListener] = []
        stored = self.storage.get(FAVORITES_KEY, [])
        self._favorites: list[dict[str, Any]] = stored if isinstance(stored, list) else []

    def all(self) -> list[dict[str, Any]]:
        return list(self._favorites)

    def count(self) -> int:
        return len(self._favorites)

    def is_favorite(self, recipe_id: int | str) -> bool:
        return any(str(f.get("id")) == str(recipe_id) for f in self._favorites)

    def add(self, recipe: dict[str, Any]) -> bool:
        if self.is_favorite(recipe["id"]):
            return False
        self._favorites.append(dict(recipe))
        logger.info("Added to favorites: %s", recipe.get("title"))
        self._changed()
        return True

    def remove(self, recipe_id: int | str) -> bool:
        kept = [f for f in self._favorites if str(f.get("id")) != str(recipe_id)]
        if len(kept) == len(self._favorites):
            return False
        self._favorites = kept
        logger.info("Removed from favorites: %s", recipe_id)
        self._changed()
        return True

    def toggle(self, recipe: dict[str, Any]) -> bool:
        """Returns whether the recipe is a favourite afterwards."""
        if self.remove(recipe["id"]):
            return False
        self.add(recipe)
        return True

    def clear(self) -> None:
        self._favorites = []
        logger.info("Cleared all favorites")
        self._changed()

    def subscribe(self, listener: FavoritesListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        self.storage.set(FAVORITES_KEY, self._favorites)
        for listener in list(self._listeners):
            try:
                listener(self.all())
            except Exception:
                logger.exception("Error in favorites listener")
