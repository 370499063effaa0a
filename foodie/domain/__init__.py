"""The recipe side of Foodie.

Recipes live in an in-process ``RecipeBook``; favourites in a small
key-value store. Screens reach both through ``ScreenServices`` rather than
globals. None of it is durable beyond the favourites file.
"""
from foodie.domain.favorites import FavoritesStore
from foodie.domain.models import Recipe, RecipeIn, RecipeUpdate
from foodie.domain.recipe_book import RecipeBook, RecipeNotFound
from foodie.domain.storage import JsonFileStore, KeyValueStore, MemoryStore


__all__ = [
    "FavoritesStore",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "Recipe",
    "RecipeBook",
    "RecipeIn",
    "RecipeNotFound",
    "RecipeUpdate",
]
