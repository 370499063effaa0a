"""Typed navigation targets.

Each screen gets its own record carrying exactly the parameters it accepts, so
``controller.navigate(RecipeDetail(id="42"))`` cannot name a screen that does
not exist or hand it a parameter bag it does not understand.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from foodie.navigation.routes import Route


@dataclass(frozen=True, slots=True)
class Welcome:
    route: ClassVar[Route] = Route.WELCOME

    def params(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True, slots=True)
class Home:
    route: ClassVar[Route] = Route.HOME

    def params(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True, slots=True)
class RecipeDetail:
    route: ClassVar[Route] = Route.RECIPE_DETAIL

    id: str
    recipe: dict[str, Any] | None = None

    def params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"id": self.id}
        if self.recipe is not None:
            params["recipe"] = self.recipe
        return params


@dataclass(frozen=True, slots=True)
class MyFood:
    route: ClassVar[Route] = Route.MY_FOOD

    tab: str = "custom"

    def params(self) -> dict[str, Any]:
        return {"tab": self.tab}


@dataclass(frozen=True, slots=True)
class CustomRecipes:
    route: ClassVar[Route] = Route.CUSTOM_RECIPES

    def params(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True, slots=True)
class RecipesForm:
    route: ClassVar[Route] = Route.RECIPES_FORM

    recipe_id: str | None = None
    is_edit: bool = False

    def params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"is_edit": self.is_edit}
        if self.recipe_id is not None:
            params["recipe_id"] = self.recipe_id
        return params


@dataclass(frozen=True, slots=True)
class Favorite:
    route: ClassVar[Route] = Route.FAVORITE

    def params(self) -> dict[str, Any]:
        return {}


NavigationTarget = (
    Welcome | Home | RecipeDetail | MyFood | CustomRecipes | RecipesForm | Favorite
)

TARGET_TYPES: tuple[type, ...] = (
    Welcome,
    Home,
    RecipeDetail,
    MyFood,
    CustomRecipes,
    RecipesForm,
    Favorite,
)


def is_target(value: object) -> bool:
    return isinstance(value, TARGET_TYPES)
