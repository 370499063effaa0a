import pytest

from foodie.navigation.errors import RegistryFrozenError, UnknownRouteError
from foodie.navigation.registry import ScreenDescriptor, ScreenRegistry
from foodie.navigation.routes import Animation, Route
from foodie.screens import build_registry


def render(params: object, services: object) -> str:
    return "<p></p>"


def test_lookup_registered() -> None:
    registry = ScreenRegistry([ScreenDescriptor(route=Route.HOME, renderer=render)])
    got = registry.lookup("Home")
    assert got.route is Route.HOME
    assert got.animation is Animation.SLIDE_FROM_RIGHT
    assert got.gesture_enabled


@pytest.mark.parametrize("route", ("Favorite", "NoSuchScreen", Route.FAVORITE))
def test_lookup_unknown(route: Route | str) -> None:
    registry = ScreenRegistry([ScreenDescriptor(route=Route.HOME, renderer=render)])
    with pytest.raises(UnknownRouteError):
        registry.lookup(route)


def test_frozen_registry_is_read_only() -> None:
    registry = ScreenRegistry().freeze()
    with pytest.raises(RegistryFrozenError):
        registry.register(ScreenDescriptor(route=Route.HOME, renderer=render))


def test_duplicate_registration() -> None:
    registry = ScreenRegistry([ScreenDescriptor(route=Route.HOME, renderer=render)])
    with pytest.raises(ValueError):
        registry.register(ScreenDescriptor(route=Route.HOME, renderer=render))


def test_app_registry_covers_every_route() -> None:
    registry = build_registry()
    assert registry.frozen
    assert set(registry.routes()) == set(Route)
    assert not registry.lookup(Route.WELCOME).gesture_enabled
    assert registry.lookup(Route.WELCOME).animation is Animation.FADE
    assert registry.lookup(Route.MY_FOOD).animation is Animation.SLIDE_FROM_BOTTOM
    assert registry.lookup(Route.RECIPE_DETAIL).title == "Recipe Details - Foodie"
    assert not any(d.header_shown for d in registry)
