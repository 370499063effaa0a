"""Mirrors the navigation stack into the browser's session history."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from foodie.navigation.deep_links import DEFAULT_TABLE, DeepLinkTable
from foodie.navigation.errors import DeepLinkError, UnknownRouteError
from foodie.navigation.history import NavigationEntry
from foodie.navigation.routes import Route

if TYPE_CHECKING:
    from foodie.navigation.controller import NavigationController


logger = logging.getLogger(__name__)


class BrowserHistory(Protocol):
    def push_state(self, state: dict[str, Any], url: str, title: str) -> None: ...

    def replace_state(self, state: dict[str, Any], url: str, title: str) -> None: ...


@dataclass(frozen=True, slots=True)
class HistoryRecord:
    state: dict[str, Any] | None
    url: str
    title: str = ""


PopStateHandler = Callable[[dict[str, Any] | None, str], None]


class MemoryHistory:
    """Session history as a browser keeps it, without a browser."""

    def __init__(self, url: str = "/") -> None:
        self.records: list[HistoryRecord] = [HistoryRecord(state=None, url=url)]
        self.index = 0
        self._handlers: list[PopStateHandler] = []

    @property
    def location(self) -> str:
        return self.records[self.index].url

    @property
    def state(self) -> dict[str, Any] | None:
        return self.records[self.index].state

    def push_state(self, state: dict[str, Any], url: str, title: str) -> None:
        del self.records[self.index + 1 :]
        self.records.append(HistoryRecord(state=state, url=url, title=title))
        self.index += 1

    def replace_state(self, state: dict[str, Any], url: str, title: str) -> None:
        self.records[self.index] = HistoryRecord(state=state, url=url, title=title)

    def on_popstate(self, handler: PopStateHandler) -> Callable[[], None]:
        self._handlers.append(handler)
        return lambda: self._handlers.remove(handler)

    def go(self, delta: int) -> bool:
        target = self.index + delta
        if delta == 0 or not 0 <= target < len(self.records):
            return False
        self.index = target
        record = self.records[target]
        for handler in list(self._handlers):
            handler(record.state, record.url)
        return True

    def back(self) -> bool:
        return self.go(-1)

    def forward(self) -> bool:
        return self.go(1)


class BrowserIntegration:
    def __init__(
        self,
        history: BrowserHistory,
        *,
        deep_links: DeepLinkTable | None = None,
    ) -> None:
        self.history = history
        self.deep_links = DEFAULT_TABLE if deep_links is None else deep_links
        self.controller: "NavigationController | None" = None

    def attach(self, controller: "NavigationController") -> None:
        self.controller = controller

    def url_for(self, entry: NavigationEntry) -> str:
        try:
            return self.deep_links.get_deep_link(entry.route, entry.params)
        except DeepLinkError as e:
            logger.warning("%s Falling back to '/'.", e)
            return "/"

    def push(self, entry: NavigationEntry, title: str) -> None:
        self.history.push_state(entry.to_dict(), self.url_for(entry), title)

    def replace(self, entry: NavigationEntry, title: str) -> None:
        self.history.replace_state(entry.to_dict(), self.url_for(entry), title)

    def resolve(
        self,
        state: Mapping[str, Any] | None,
        path: str,
    ) -> tuple[Route, dict[str, Any]]:
        if isinstance(state, Mapping) and state.get("route"):
            params = state.get("params")
            try:
                route = Route.parse(state["route"])
            except UnknownRouteError:
                logger.warning("Unknown route in history state: %r", state["route"])
            else:
                return route, dict(params) if isinstance(params, Mapping) else {}
        elif state:
            logger.warning("Ignoring history state that is not an object: %r", state)
        return self.deep_links.parse_deep_link(path)

    def initial_entry(self, path: str) -> NavigationEntry:
        route, params = self.deep_links.parse_deep_link(path)
        return NavigationEntry.create(route, params)

    def handle_popstate(
        self,
        state: Mapping[str, Any] | None,
        path: str,
    ) -> NavigationEntry | None:
        if self.controller is None:
            raise RuntimeError("Browser integration is not attached.")
        route, params = self.resolve(state, path)
        return self.controller.restore(route, params)
