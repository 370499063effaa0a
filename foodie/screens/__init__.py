"""Screen render functions and the table that registers them.

Every renderer is ``(params, services) -> html``: it reads what it needs from
the injected services and hands plain data to a jinja2 template. Behaviour is
bound with ``hx-vals`` attributes built by the ``nav``/``action`` globals and
escaped by jinja2.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from foodie.domain.favorites import FavoritesStore
from foodie.domain.recipe_book import RecipeBook, RecipeNotFound
from foodie.navigation.registry import ScreenDescriptor, ScreenRegistry
from foodie.navigation.routes import Animation, Route
from foodie.screens.recipe_detail import RecipeDetail


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def nav(route: Route | str, **params: Any) -> dict[str, Any]:
    """hx-vals payload asking the session to navigate."""
    return {"type": "navigate", "route": str(route), **params}


def action(kind: str, **values: Any) -> dict[str, Any]:
    return {"type": kind, **values}


def make_environment(html_dir: Path | None = None) -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR if html_dir is None else html_dir),
        autoescape=select_autoescape(),
    )
    env.globals["nav"] = nav
    env.globals["action"] = action
    env.globals["Route"] = Route
    return env


@dataclass
class ScreenServices:
    recipes: RecipeBook
    favorites: FavoritesStore
    templates: Environment


def _render(services: ScreenServices, name: str, **context: Any) -> str:
    return services.templates.get_template(f"screens/{name}.html").render(**context)


def welcome(params: Mapping[str, Any], services: ScreenServices) -> str:
    return _render(services, "welcome")


def home(params: Mapping[str, Any], services: ScreenServices) -> str:
    category = params.get("category") or "All"
    query = str(params.get("q") or "")
    recipes = services.recipes.search(
        query, None if category == "All" else str(category)
    )
    return _render(
        services,
        "home",
        categories=["All", *services.recipes.list_categories()],
        active_category=category,
        query=query,
        recipes=recipes,
        favorites_count=services.favorites.count(),
    )


def recipe_detail(params: Mapping[str, Any], services: ScreenServices) -> str:
    return RecipeDetail.from_params(params, services).render(services)


def _custom_recipes(services: ScreenServices) -> list[Any]:
    return [r for r in services.recipes.list_recipes() if r.created_at is not None]


def my_food(params: Mapping[str, Any], services: ScreenServices) -> str:
    tab = params.get("tab") or "custom"
    return _render(
        services,
        "my-food",
        tab=tab,
        custom=_custom_recipes(services),
        favorites=services.favorites.all(),
    )


def custom_recipes(params: Mapping[str, Any], services: ScreenServices) -> str:
    return _render(services, "custom-recipes", recipes=_custom_recipes(services))


def recipes_form(params: Mapping[str, Any], services: ScreenServices) -> str:
    recipe = None
    is_edit = bool(params.get("is_edit"))
    if is_edit and params.get("recipe_id") is not None:
        try:
            recipe = services.recipes.get_recipe(params["recipe_id"])
        except RecipeNotFound:
            is_edit = False
    return _render(
        services,
        "recipes-form",
        recipe=recipe,
        is_edit=is_edit,
        errors=params.get("errors") or {},
    )


def favorite(params: Mapping[str, Any], services: ScreenServices) -> str:
    return _render(services, "favorites", favorites=services.favorites.all())


SCREENS: tuple[ScreenDescriptor, ...] = (
    ScreenDescriptor(
        route=Route.WELCOME,
        renderer=welcome,
        animation=Animation.FADE,
        gesture_enabled=False,
        title="Welcome - Foodie",
    ),
    ScreenDescriptor(
        route=Route.HOME,
        renderer=home,
        title="Home - Foodie",
    ),
    ScreenDescriptor(
        route=Route.RECIPE_DETAIL,
        renderer=recipe_detail,
        title="Recipe Details - Foodie",
    ),
    ScreenDescriptor(
        route=Route.MY_FOOD,
        renderer=my_food,
        animation=Animation.SLIDE_FROM_BOTTOM,
        title="My Recipes - Foodie",
    ),
    ScreenDescriptor(
        route=Route.CUSTOM_RECIPES,
        renderer=custom_recipes,
        title="Custom Recipes - Foodie",
    ),
    ScreenDescriptor(
        route=Route.RECIPES_FORM,
        renderer=recipes_form,
        animation=Animation.SLIDE_FROM_BOTTOM,
        title="Add Recipe - Foodie",
        initial_params=MappingProxyType({"is_edit": False}),
    ),
    ScreenDescriptor(
        route=Route.FAVORITE,
        renderer=favorite,
        title="Favorites - Foodie",
    ),
)


def build_registry() -> ScreenRegistry:
    return ScreenRegistry(list(SCREENS)).freeze()


__all__ = [
    "SCREENS",
    "ScreenServices",
    "build_registry",
    "make_environment",
]
