from collections.abc import Mapping
from typing import Any

from markupsafe import Markup

from foodie.domain.models import Recipe
from foodie.domain.recipe_book import RecipeNotFound


class RecipeDetail:
    """The recipe detail screen for one recipe."""

    def __init__(
        self,
        recipe: Recipe | None,
        *,
        is_favorite: bool = False,
    ) -> None:
        self.recipe = recipe
        self.is_favorite = is_favorite

    @classmethod
    def from_params(cls, params: Mapping[str, Any], services: Any) -> "RecipeDetail":
        recipe: Recipe | None = None
        try:
            recipe = services.recipes.get_recipe(params.get("id"))
        except RecipeNotFound:
            # Recipes handed over whole (e.g. from favourites) need not be in the book.
            passed = params.get("recipe")
            if isinstance(passed, Mapping) and "id" in passed:
                recipe = Recipe.from_dict(dict(passed))  # pyright: ignore[reportUnknownArgumentType]
        if recipe is None:
            return cls(None)
        return cls(recipe, is_favorite=services.favorites.is_favorite(recipe.id))

    @property
    def title(self) -> str:
        return self.recipe.title if self.recipe else "Recipe not found"

    @property
    def content(self) -> str:
        return Markup(self.recipe.html) if self.recipe else ""

    def render(self, services: Any, template_name: str = "screens/recipe-detail.html") -> str:
        return services.templates.get_template(template_name).render(detail=self)
