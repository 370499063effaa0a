import pytest
from pydantic import ValidationError

from foodie.domain.models import Recipe, RecipeIn, RecipeUpdate
from foodie.domain.recipe_book import RecipeBook, RecipeNotFound


@pytest.fixture
def book() -> RecipeBook:
    return RecipeBook()


def test_demo_recipes(book: RecipeBook) -> None:
    assert [r.id for r in book.list_recipes()] == [1, 2]
    assert book.get_recipe(1).title == "Classic Chocolate Chip Cookies"
    assert book.get_recipe("2").category == "Salad"


@pytest.mark.parametrize("id", (3, "abc", None, ""))
def test_get_missing_recipe(book: RecipeBook, id: object) -> None:
    with pytest.raises(RecipeNotFound):
        book.get_recipe(id)  # pyright: ignore[reportArgumentType]


def test_create_recipe(book: RecipeBook) -> None:
    recipe = book.create_recipe(
        RecipeIn.model_validate(
            {
                "title": "  Tomato Soup ",
                "category": "Soup",
                "cookTime": "30 minutes",
                "ingredients": ["tomatoes", "stock"],
            }
        )
    )
    assert recipe.id == 3
    assert recipe.title == "Tomato Soup"
    assert recipe.cook_time == "30 minutes"
    assert recipe.created_at is not None and recipe.created_at.endswith("Z")
    assert book.get_recipe(3) is recipe
    assert recipe.to_dict()["createdAt"] == recipe.created_at


def test_new_ids_never_collide_after_delete(book: RecipeBook) -> None:
    book.delete_recipe(1)
    recipe = book.create_recipe(RecipeIn(title="Flatbread"))
    assert recipe.id == 3
    assert len({r.id for r in book.list_recipes()}) == len(book)


def test_create_requires_title() -> None:
    with pytest.raises(ValidationError):
        RecipeIn.model_validate({"title": "   "})


def test_update_recipe_only_touches_sent_fields(book: RecipeBook) -> None:
    recipe = book.update_recipe(2, RecipeUpdate.model_validate({"servings": "4"}))
    assert recipe.servings == "4"
    assert recipe.title == "Mediterranean Pasta Salad"
    assert len(recipe.ingredients) == 9


def test_update_missing_recipe(book: RecipeBook) -> None:
    with pytest.raises(RecipeNotFound):
        book.update_recipe(99, RecipeUpdate(title="Nope"))


def test_delete_recipe(book: RecipeBook) -> None:
    deleted = book.delete_recipe("1")
    assert deleted.id == 1
    assert [r.id for r in book.list_recipes()] == [2]
    with pytest.raises(RecipeNotFound):
        book.delete_recipe(1)


@pytest.mark.parametrize(
    "query,category,expected",
    (
        ("", None, [1, 2]),
        ("cookie", None, [1]),
        ("COOKIE", None, [1]),
        ("feta", None, [2]),
        ("healthy", None, [2]),
        ("", "salad", [2]),
        ("cookie", "Salad", []),
        ("nothing like this", None, []),
    ),
)
def test_search(book: RecipeBook, query: str, category: str | None, expected: list[int]) -> None:
    assert [r.id for r in book.search(query, category)] == expected


def test_categories(book: RecipeBook) -> None:
    book.create_recipe(RecipeIn(title="Brownies", category="Dessert"))
    book.create_recipe(RecipeIn(title="Pho", category="Soup"))
    assert book.list_categories() == ["Dessert", "Salad", "Soup"]


def test_recipe_dict_round_trip() -> None:
    data = {
        "id": 5,
        "title": "Pancakes",
        "description": "Fluffy",
        "category": "Breakfast",
        "ingredients": ["flour"],
        "instructions": ["mix", "fry"],
        "cookTime": "15 minutes",
        "servings": "2",
        "createdAt": "2024-01-01T00:00:00Z",
    }
    assert Recipe.from_dict(data).to_dict() == data


def test_recipe_html_escapes_markup() -> None:
    recipe = Recipe(id=1, title="x", description="**Rich** <script>alert(1)</script>")
    assert "<strong>Rich</strong>" in recipe.html
    assert "<script>" not in recipe.html
