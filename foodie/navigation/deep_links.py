"""Bidirectional mapping between routes and URL paths.

Templates use ``:name`` placeholders, one per path segment::

    "/recipe/:id"  <->  (Route.RECIPE_DETAIL, {"id": "42"})

They are compiled with Starlette's path compiler, so a deep link matches
exactly what a ``/recipe/{id}`` route would. Paths that match no template
resolve to the home screen.
"""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, unquote

from starlette.convertors import Convertor
from starlette.routing import compile_path

from foodie.navigation.errors import DeepLinkError
from foodie.navigation.routes import Route


DEEP_LINKS: dict[Route, str] = {
    Route.WELCOME: "/welcome",
    Route.HOME: "/home",
    Route.RECIPE_DETAIL: "/recipe/:id",
    Route.MY_FOOD: "/my-recipes",
    Route.CUSTOM_RECIPES: "/custom-recipes",
    Route.RECIPES_FORM: "/add-recipe",
    Route.FAVORITE: "/favorites",
}

FALLBACK_ROUTE = Route.HOME

PLACEHOLDER = re.compile(r":(\w+)")


def starlette_path(template: str) -> str:
    """``/recipe/:id`` -> ``/recipe/{id}``"""
    return PLACEHOLDER.sub(r"{\1}", template)


class CompiledLink:
    def __init__(self, template: str) -> None:
        regex, self.path_format, self.convertors = compile_path(starlette_path(template))
        # Hand-typed URLs get some slack on case.
        self.regex = re.compile(regex.pattern, re.IGNORECASE)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(self.convertors)

    def match(self, path: str) -> dict[str, str] | None:
        match = self.regex.match(path)
        if match is None:
            return None
        return {
            name: unquote(self.convertors[name].convert(value))
            for name, value in match.groupdict().items()
        }

    def url(self, params: Mapping[str, Any]) -> str:
        values: dict[str, str] = {}
        for name in self.param_names:
            value = params.get(name)
            if value is None or value == "":
                raise DeepLinkError(f"link needs a value for {name!r}.")
            convertor: Convertor[Any] = self.convertors[name]
            values[name] = convertor.to_string(quote(str(value), safe=""))
        return self.path_format.format(**values)


class DeepLinkTable:
    def __init__(
        self,
        links: Mapping[Route, str] | None = None,
        *,
        fallback: Route = FALLBACK_ROUTE,
    ) -> None:
        links = DEEP_LINKS if links is None else links
        self._templates = dict(links)
        self._compiled = {route: CompiledLink(t) for route, t in links.items()}
        self.fallback = fallback

    def template(self, route: Route | str) -> str:
        return self._templates.get(Route.parse(route), "/")

    def get_deep_link(
        self,
        route: Route | str,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        route = Route.parse(route)
        link = self._compiled.get(route)
        if link is None:
            return "/"
        try:
            return link.url(params or {})
        except DeepLinkError as e:
            raise DeepLinkError(f"{route} {e}") from None

    def parse_deep_link(self, path: str) -> tuple[Route, dict[str, str]]:
        path = path.split("?", 1)[0].split("#", 1)[0]
        path = "/" + path.strip("/")
        for route, link in self._compiled.items():
            params = link.match(path)
            if params is not None:
                return route, params
        return self.fallback, {}


DEFAULT_TABLE = DeepLinkTable()


def get_deep_link(route: Route | str, params: Mapping[str, Any] | None = None) -> str:
    return DEFAULT_TABLE.get_deep_link(route, params)


def parse_deep_link(path: str) -> tuple[Route, dict[str, str]]:
    return DEFAULT_TABLE.parse_deep_link(path)
