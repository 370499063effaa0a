"""The recipe book: an in-process list of recipes.

Nothing is persisted, a restart brings back the two demo recipes.
"""

import logging
from collections.abc import Iterable

from foodie.domain.models import Recipe, RecipeIn, RecipeUpdate, utcnow_iso


logger = logging.getLogger(__name__)


class RecipeNotFound(Exception):
    pass


DEMO_RECIPES: tuple[dict[str, object], ...] = (
    {
        "id": 1,
        "title": "Classic Chocolate Chip Cookies",
        "description": "Delicious homemade chocolate chip cookies",
        "ingredients": [
            "2¼ cups all-purpose flour",
            "1 tsp baking soda",
            "1 tsp salt",
            "1 cup butter, softened",
            "¾ cup granulated sugar",
            "¾ cup brown sugar",
            "2 large eggs",
            "2 tsp vanilla extract",
            "2 cups chocolate chips",
        ],
        "instructions": [
            "Preheat oven to 375°F (190°C)",
            "Mix flour, baking soda, and salt in a bowl",
            "Cream together butter and sugars",
            "Beat in eggs and vanilla",
            "Gradually blend in flour mixture",
            "Stir in chocolate chips",
            "Drop rounded tablespoons on ungreased cookie sheets",
            "Bake 9-11 minutes until golden brown",
        ],
        "cookTime": "25 minutes",
        "servings": "48 cookies",
        "category": "Dessert",
    },
    {
        "id": 2,
        "title": "Mediterranean Pasta Salad",
        "description": "Fresh and healthy pasta salad with Mediterranean flavors",
        "ingredients": [
            "1 lb pasta",
            "2 cups cherry tomatoes, halved",
            "1 cup kalamata olives",
            "1 cup feta cheese, crumbled",
            "½ red onion, thinly sliced",
            "¼ cup olive oil",
            "2 tbsp red wine vinegar",
            "2 tsp oregano",
            "Salt and pepper to taste",
        ],
        "instructions": [
            "Cook pasta according to package directions",
            "Drain and rinse with cold water",
            "Combine pasta with tomatoes, olives, feta, and onion",
            "Whisk together olive oil, vinegar, oregano, salt, and pepper",
            "Toss salad with dressing",
            "Chill for at least 1 hour before serving",
        ],
        "cookTime": "20 minutes",
        "servings": "6-8 people",
        "category": "Salad",
    },
)


class RecipeBook:
    def __init__(self, recipes: Iterable[Recipe] | None = None) -> None:
        if recipes is None:
            recipes = (Recipe.from_dict(dict(r)) for r in DEMO_RECIPES)
        self._recipes: list[Recipe] = list(recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    def list_recipes(self) -> list[Recipe]:
        return list(self._recipes)

    def get_recipe(self, id: int | str) -> Recipe:
        return self._recipes[self._index(id)]

    def create_recipe(self, data: RecipeIn) -> Recipe:
        next_id = max((r.id for r in self._recipes), default=0) + 1
        recipe = Recipe(
            id=next_id,
            title=data.title,
            description=data.description,
            category=data.category,
            ingredients=data.ingredients,
            instructions=data.instructions,
            cook_time=data.cook_time,
            servings=data.servings,
            created_at=utcnow_iso(),
        )
        self._recipes.append(recipe)
        logger.info("Added recipe %s: %s", recipe.id, recipe.title)
        return recipe

    def update_recipe(self, id: int | str, data: RecipeUpdate) -> Recipe:
        recipe = self.get_recipe(id)
        for name, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(recipe, name, value)
        logger.info("Updated recipe %s", recipe.id)
        return recipe

    def delete_recipe(self, id: int | str) -> Recipe:
        recipe = self._recipes.pop(self._index(id))
        logger.info("Deleted recipe %s", recipe.id)
        return recipe

    def search(self, query: str = "", category: str | None = None) -> list[Recipe]:
        query = query.lower()
        found = [
            r
            for r in self._recipes
            if query in r.title.lower()
            or query in r.description.lower()
            or any(query in i.lower() for i in r.ingredients)
        ]
        if category:
            found = [r for r in found if r.category.lower() == category.lower()]
        return found

    def list_categories(self) -> list[str]:
        # dict keeps first-seen order
        return list(dict.fromkeys(r.category for r in self._recipes))

    def _index(self, id: int | str) -> int:
        try:
            key = int(id)
        except (TypeError, ValueError):
            raise RecipeNotFound(f"{id}") from None
        for i, recipe in enumerate(self._recipes):
            if recipe.id == key:
                return i
        raise RecipeNotFound(f"{id}")
