import json
from pathlib import Path
from typing import Any

import pytest

from foodie.domain.favorites import FAVORITES_KEY, FavoritesStore
from foodie.domain.storage import JsonFileStore, MemoryStore


COOKIES = {"id": 1, "title": "Classic Chocolate Chip Cookies"}
SALAD = {"id": 2, "title": "Mediterranean Pasta Salad"}


@pytest.fixture
def favorites() -> FavoritesStore:
    return FavoritesStore(MemoryStore())


def test_add_and_remove(favorites: FavoritesStore) -> None:
    assert favorites.add(COOKIES)
    assert not favorites.add(COOKIES)
    assert favorites.count() == 1
    assert favorites.is_favorite(1)
    assert favorites.is_favorite("1")

    assert favorites.remove(1)
    assert not favorites.remove(1)
    assert favorites.all() == []


def test_toggle(favorites: FavoritesStore) -> None:
    assert favorites.toggle(SALAD)
    assert favorites.is_favorite(2)
    assert not favorites.toggle(SALAD)
    assert not favorites.is_favorite(2)


def test_clear(favorites: FavoritesStore) -> None:
    favorites.add(COOKIES)
    favorites.add(SALAD)
    favorites.clear()
    assert favorites.count() == 0


def test_all_returns_a_copy(favorites: FavoritesStore) -> None:
    favorites.add(COOKIES)
    favorites.all().clear()
    assert favorites.count() == 1


def test_listeners(favorites: FavoritesStore) -> None:
    seen: list[list[dict[str, Any]]] = []
    unsubscribe = favorites.subscribe(seen.append)
    favorites.add(COOKIES)
    unsubscribe()
    favorites.add(SALAD)
    assert seen == [[COOKIES]]


def test_failing_listener_does_not_block_changes(favorites: FavoritesStore) -> None:
    def boom(items: list[dict[str, Any]]) -> None:
        raise RuntimeError("boom")

    favorites.subscribe(boom)
    assert favorites.add(COOKIES)
    assert favorites.is_favorite(1)


def test_persisted_between_stores() -> None:
    storage = MemoryStore()
    FavoritesStore(storage).add(COOKIES)
    assert FavoritesStore(storage).all() == [COOKIES]
    assert storage.get(FAVORITES_KEY) == [COOKIES]


def test_corrupt_stored_value_is_ignored() -> None:
    storage = MemoryStore()
    storage.set(FAVORITES_KEY, "not a list")
    assert FavoritesStore(storage).all() == []


def test_json_file_store(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "favorites.json"
    store = JsonFileStore(path)
    assert store.get("missing", 7) == 7

    FavoritesStore(store).add(SALAD)
    assert json.loads(path.read_text(encoding="utf-8")) == {FAVORITES_KEY: [SALAD]}
    assert FavoritesStore(JsonFileStore(path)).is_favorite(2)

    store.delete(FAVORITES_KEY)
    assert store.get(FAVORITES_KEY) is None


@pytest.mark.parametrize("content", ("{not json", "[1, 2]"))
def test_json_file_store_tolerates_bad_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "favorites.json"
    path.write_text(content, encoding="utf-8")
    assert FavoritesStore(JsonFileStore(path)).all() == []


def test_memory_store_does_not_share_values() -> None:
    store = MemoryStore()
    value = {"a": [1]}
    store.set("k", value)
    value["a"].append(2)
    assert store.get("k") == {"a": [1]}
