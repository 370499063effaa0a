from enum import Enum

from foodie.navigation.errors import UnknownRouteError


class Route(Enum):
    WELCOME = "Welcome"
    HOME = "Home"
    RECIPE_DETAIL = "RecipeDetail"
    MY_FOOD = "MyFood"
    CUSTOM_RECIPES = "CustomRecipesScreen"
    RECIPES_FORM = "RecipesFormScreen"
    FAVORITE = "FavoriteScreen"

    @classmethod
    def parse(cls, value: "Route | str") -> "Route":
        if isinstance(value, Route):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownRouteError(value) from None

    def __str__(self) -> str:
        return self.value


class Animation(Enum):
    SLIDE_FROM_RIGHT = "slide_from_right"
    SLIDE_FROM_LEFT = "slide_from_left"
    SLIDE_FROM_BOTTOM = "slide_from_bottom"
    SLIDE_FROM_TOP = "slide_from_top"
    FADE = "fade"
    SCALE = "scale"
    NONE = "none"

    @property
    def css_class(self) -> str:
        return f"animation-{self.value}"
