from collections.abc import Callable
from typing import Any

import pytest

from foodie.domain.favorites import FavoritesStore
from foodie.domain.recipe_book import RecipeBook
from foodie.domain.storage import MemoryStore
from foodie.navigation.browser import BrowserIntegration, MemoryHistory
from foodie.navigation.controller import NavigationController
from foodie.navigation.registry import ScreenDescriptor, ScreenRegistry
from foodie.navigation.routes import Route
from foodie.screens import SCREENS, ScreenServices, make_environment


class Timer:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when a test says so."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[Timer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> Timer:
        timer = Timer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds
        due = [t for t in self.timers if t.when <= self.now]
        self.timers = [t for t in self.timers if t.when > self.now]
        for timer in due:
            if not timer.cancelled:
                timer.callback()

    @property
    def pending(self) -> int:
        return sum(1 for t in self.timers if not t.cancelled)


def stub_renderer(route: Route) -> Callable[[Any, Any], str]:
    def render(params: Any, services: Any) -> str:
        return f"<p>{route.value} {dict(params)}</p>"

    return render


def stub_registry() -> ScreenRegistry:
    descriptors = [
        ScreenDescriptor(
            route=d.route,
            renderer=stub_renderer(d.route),
            animation=d.animation,
            gesture_enabled=d.gesture_enabled,
            title=d.title,
            initial_params=d.initial_params,
        )
        for d in SCREENS
    ]
    return ScreenRegistry(descriptors).freeze()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def registry() -> ScreenRegistry:
    return stub_registry()


@pytest.fixture
def services() -> ScreenServices:
    return ScreenServices(
        recipes=RecipeBook(),
        favorites=FavoritesStore(MemoryStore()),
        templates=make_environment(),
    )


@pytest.fixture
def history() -> MemoryHistory:
    return MemoryHistory()


@pytest.fixture
def make_controller(
    registry: ScreenRegistry,
    scheduler: ManualScheduler,
) -> Callable[..., NavigationController]:
    def make(**kwargs: Any) -> NavigationController:
        kwargs.setdefault("scheduler", scheduler)
        return NavigationController(registry, **kwargs)

    return make


@pytest.fixture
def controller(make_controller: Callable[..., NavigationController]) -> NavigationController:
    return make_controller()


@pytest.fixture
def browser_controller(
    make_controller: Callable[..., NavigationController],
    history: MemoryHistory,
) -> NavigationController:
    browser = BrowserIntegration(history)
    nav = make_controller(browser=browser)
    history.on_popstate(browser.handle_popstate)
    return nav

