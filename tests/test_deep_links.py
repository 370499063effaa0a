import pytest

from foodie.navigation.deep_links import DeepLinkTable, get_deep_link, parse_deep_link
from foodie.navigation.errors import DeepLinkError
from foodie.navigation.routes import Route


def test_recipe_detail_link() -> None:
    assert get_deep_link("RecipeDetail", {"id": "42"}) == "/recipe/42"


def test_parse_recipe_detail_link() -> None:
    assert parse_deep_link("/recipe/42") == (Route.RECIPE_DETAIL, {"id": "42"})


@pytest.mark.parametrize(
    "route,path",
    (
        (Route.WELCOME, "/welcome"),
        (Route.HOME, "/home"),
        (Route.MY_FOOD, "/my-recipes"),
        (Route.CUSTOM_RECIPES, "/custom-recipes"),
        (Route.RECIPES_FORM, "/add-recipe"),
        (Route.FAVORITE, "/favorites"),
    ),
)
def test_static_links(route: Route, path: str) -> None:
    assert get_deep_link(route) == path
    assert parse_deep_link(path) == (route, {})


@pytest.mark.parametrize(
    "path,expected",
    (
        ("/", (Route.HOME, {})),
        ("", (Route.HOME, {})),
        ("/no/such/place", (Route.HOME, {})),
        ("/recipe", (Route.HOME, {})),
        ("/favorites/", (Route.FAVORITE, {})),
        ("/Favorites", (Route.FAVORITE, {})),
        ("/recipe/7?ref=share#top", (Route.RECIPE_DETAIL, {"id": "7"})),
    ),
)
def test_parse_edge_cases(path: str, expected: tuple[Route, dict[str, str]]) -> None:
    assert parse_deep_link(path) == expected


def test_params_are_encoded_both_ways() -> None:
    link = get_deep_link(Route.RECIPE_DETAIL, {"id": "a b/c"})
    assert link == "/recipe/a%20b%2Fc"
    assert parse_deep_link(link) == (Route.RECIPE_DETAIL, {"id": "a b/c"})


def test_extra_params_are_not_in_the_link() -> None:
    assert get_deep_link("RecipeDetail", {"id": 3, "recipe": {"id": 3}}) == "/recipe/3"


def test_missing_placeholder() -> None:
    with pytest.raises(DeepLinkError):
        get_deep_link(Route.RECIPE_DETAIL, {})


def test_custom_table() -> None:
    table = DeepLinkTable({Route.HOME: "/", Route.RECIPE_DETAIL: "/r/:id"}, fallback=Route.HOME)
    assert table.get_deep_link(Route.RECIPE_DETAIL, {"id": "9"}) == "/r/9"
    assert table.parse_deep_link("/r/9") == (Route.RECIPE_DETAIL, {"id": "9"})
    assert table.get_deep_link(Route.FAVORITE) == "/"


def test_templates_compile_like_starlette_routes() -> None:
    from starlette.routing import Match
    from starlette.routing import Route as HTTPRoute

    from foodie.navigation.deep_links import DEEP_LINKS, starlette_path

    assert starlette_path(DEEP_LINKS[Route.RECIPE_DETAIL]) == "/recipe/{id}"
    route = HTTPRoute(
        starlette_path(DEEP_LINKS[Route.RECIPE_DETAIL]), lambda r: None, name="recipe"
    )
    scope = {"type": "http", "path": "/recipe/42", "root_path": "", "method": "GET"}
    match, child = route.matches(scope)
    assert match is Match.FULL
    assert child["path_params"] == {"id": "42"}
    link = get_deep_link(Route.RECIPE_DETAIL, {"id": "42"})
    assert route.url_path_for("recipe", id="42") == link
