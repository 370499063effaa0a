import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from foodie.navigation.errors import AtRootError
from foodie.navigation.routes import Route


@dataclass(frozen=True, slots=True)
class NavigationEntry:
    route: Route
    params: Mapping[str, Any] = field(hash=False)

    @classmethod
    def create(
        cls,
        route: Route | str,
        params: Mapping[str, Any] | None = None,
    ) -> "NavigationEntry":
        # Held by value: callers keep mutating their own dicts.
        owned = copy.deepcopy(dict(params or {}))
        return cls(route=Route.parse(route), params=MappingProxyType(owned))

    def to_dict(self) -> dict[str, Any]:
        return {"route": self.route.value, "params": copy.deepcopy(dict(self.params))}

    def same_as(self, route: Route, params: Mapping[str, Any]) -> bool:
        return self.route is route and dict(self.params) == dict(params)


class HistoryStack:
    """Ordered navigation entries plus the pointer to the current one.

    Seeded with an initial entry and never empty afterwards. Pushing after
    going back discards everything ahead of the pointer.
    """

    def __init__(self, initial: NavigationEntry) -> None:
        self._entries: list[NavigationEntry] = [initial]
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> tuple[NavigationEntry, ...]:
        return tuple(self._entries)

    def current(self) -> NavigationEntry:
        return self._entries[self._index]

    def can_go_back(self) -> bool:
        return self._index > 0

    def push(self, entry: NavigationEntry) -> NavigationEntry:
        del self._entries[self._index + 1 :]
        self._entries.append(entry)
        self._index = len(self._entries) - 1
        return entry

    def back(self) -> NavigationEntry:
        if not self.can_go_back():
            raise AtRootError()
        self._index -= 1
        return self.current()

    def replace(self, entry: NavigationEntry) -> NavigationEntry:
        self._entries[self._index] = entry
        return entry

    def reset(self, entry: NavigationEntry) -> NavigationEntry:
        self._entries = [entry]
        self._index = 0
        return entry

    def seek(self, index: int) -> NavigationEntry:
        if not 0 <= index < len(self._entries):
            raise IndexError(index)
        self._index = index
        return self.current()

    def find(self, route: Route, params: Mapping[str, Any]) -> int | None:
        """Index of the entry closest to the pointer matching route and params."""
        matches = [
            i for i, entry in enumerate(self._entries) if entry.same_as(route, params)
        ]
        if not matches:
            return None
        return min(matches, key=lambda i: abs(i - self._index))

    def snapshot(self) -> dict[str, Any]:
        return {
            "index": self._index,
            "routes": [
                {"name": e.route.value, "params": copy.deepcopy(dict(e.params))}
                for e in self._entries
            ],
        }
