from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from foodie.navigation.errors import RegistryFrozenError, UnknownRouteError
from foodie.navigation.routes import Animation, Route


ScreenRenderer = Callable[[Mapping[str, Any], Any], str]


@dataclass(frozen=True, slots=True)
class ScreenDescriptor:
    """Static metadata and render function for one route."""

    route: Route
    renderer: ScreenRenderer
    animation: Animation = Animation.SLIDE_FROM_RIGHT
    gesture_enabled: bool = True
    header_shown: bool = False
    title: str = "Foodie - Recipe App"
    initial_params: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )


class ScreenRegistry:
    def __init__(self, descriptors: list[ScreenDescriptor] | None = None) -> None:
        self._screens: dict[Route, ScreenDescriptor] = {}
        self._frozen = False
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: ScreenDescriptor) -> None:
        if self._frozen:
            raise RegistryFrozenError()
        if descriptor.route in self._screens:
            raise ValueError(f"Screen {descriptor.route} registered twice.")
        self._screens[descriptor.route] = descriptor

    def freeze(self) -> "ScreenRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, route: Route | str) -> ScreenDescriptor:
        try:
            return self._screens[Route.parse(route)]
        except KeyError:
            raise UnknownRouteError(route) from None

    def routes(self) -> tuple[Route, ...]:
        return tuple(self._screens)

    def __contains__(self, route: object) -> bool:
        return route in self._screens

    def __iter__(self) -> Iterator[ScreenDescriptor]:
        return iter(self._screens.values())

    def __len__(self) -> int:
        return len(self._screens)
