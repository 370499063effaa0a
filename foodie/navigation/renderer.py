import logging
from dataclasses import dataclass
from typing import Any

from markupsafe import Markup, escape

from foodie.navigation.history import NavigationEntry
from foodie.navigation.registry import ScreenDescriptor, ScreenRegistry
from foodie.navigation.routes import Animation, Route


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class View:
    """What the page should show: markup plus how to transition to it."""

    route: Route
    html: str
    animation: Animation
    title: str
    header_shown: bool = False

    @property
    def screen_class(self) -> str:
        return f"screen-{self.route.value.lower()}"

    @property
    def body_classes(self) -> tuple[str, ...]:
        return ("screen-transitioning", self.screen_class, self.animation.css_class)


class Viewport:
    """Which screens are mounted and which one is visible."""

    def __init__(self) -> None:
        self._mounted: dict[Route, bool] = {}

    def show(self, route: Route) -> None:
        for mounted in self._mounted:
            self._mounted[mounted] = False
        self._mounted[route] = True

    def visible(self) -> tuple[Route, ...]:
        return tuple(r for r, shown in self._mounted.items() if shown)

    def mounted(self) -> tuple[Route, ...]:
        return tuple(self._mounted)


class Renderer:
    def __init__(
        self,
        registry: ScreenRegistry,
        *,
        services: Any = None,
        viewport: Viewport | None = None,
    ) -> None:
        self.registry = registry
        self.services = services
        self.viewport = Viewport() if viewport is None else viewport
        self.view: View | None = None

    def render(
        self,
        entry: NavigationEntry,
        animation: Animation | None = None,
    ) -> View:
        descriptor = self.registry.lookup(entry.route)
        animation = descriptor.animation if animation is None else animation
        html = self._screen_html(descriptor, entry)
        self.viewport.show(entry.route)
        self.view = View(
            route=entry.route,
            html=html,
            animation=animation,
            title=descriptor.title,
            header_shown=descriptor.header_shown,
        )
        return self.view

    def _screen_html(self, descriptor: ScreenDescriptor, entry: NavigationEntry) -> str:
        params = {**descriptor.initial_params, **entry.params}
        try:
            return descriptor.renderer(params, self.services)
        except Exception as e:
            logger.exception("No renderer output for screen: %s", entry.route)
            return Markup(
                '<div class="screen screen-error" role="alert">'
                "<p>Something went wrong showing this screen.</p>"
                "<pre>{}</pre></div>"
            ).format(escape(repr(e)))
