"""One navigation session per connected page.

The page forwards clicks, keys, touches and ``popstate`` as JSON messages;
the session feeds them to its ``NavigationController`` and answers with htmx
out-of-band fragments for the screen and for the browser history.
"""

import json
import logging
from typing import Any

from markupsafe import Markup
from pydantic import ValidationError

from foodie.domain.models import RecipeIn, RecipeUpdate
from foodie.domain.recipe_book import RecipeNotFound
from foodie.hub import RECIPE_ADDED, RECIPE_DELETED, RECIPE_UPDATED, RecipeHub
from foodie.navigation.browser import BrowserIntegration
from foodie.navigation.controller import ANIMATION_DURATION, NavigationController, Scheduler
from foodie.navigation.input import GESTURE_THRESHOLD, GestureRecognizer, KeyboardShortcuts
from foodie.navigation.registry import ScreenRegistry
from foodie.navigation.renderer import View
from foodie.navigation.routes import Route
from foodie.screens import ScreenServices


logger = logging.getLogger(__name__)


# Keys htmx and the page add to every message that are not screen params.
RESERVED_KEYS = frozenset({"type", "route", "HEADERS"})


class ClientHistory:
    """Queues history updates until they can be sent to the page."""

    def __init__(self) -> None:
        self.pending: list[tuple[str, dict[str, Any], str, str]] = []

    def push_state(self, state: dict[str, Any], url: str, title: str) -> None:
        self.pending.append(("push", state, url, title))

    def replace_state(self, state: dict[str, Any], url: str, title: str) -> None:
        self.pending.append(("replace", state, url, title))

    def drain(self) -> list[tuple[str, dict[str, Any], str, str]]:
        pending, self.pending = self.pending, []
        return pending


def screen_fragment(view: View, *, duration: float = ANIMATION_DURATION) -> str:
    return Markup(
        '<div id="screen" hx-swap-oob="true" class="{cls}" '
        'data-body-classes="{body}" data-duration="{ms}">{html}</div>'
    ).format(
        cls=view.screen_class,
        body=" ".join(view.body_classes),
        ms=int(duration * 1000),
        html=Markup(view.html),
    )


def history_fragment(mode: str, state: dict[str, Any], url: str, title: str) -> str:
    return Markup(
        '<div id="nav-history" hx-swap-oob="true" hidden data-mode="{mode}" '
        'data-url="{url}" data-title="{title}" data-state="{state}"></div>'
    ).format(mode=mode, url=url, title=title, state=json.dumps(state))


def split_lines(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    return [line.strip() for line in str(value or "").splitlines() if line.strip()]


class NavigationSession:
    def __init__(
        self,
        *,
        registry: ScreenRegistry,
        services: ScreenServices,
        path: str = "/",
        hub: RecipeHub | None = None,
        scheduler: Scheduler | None = None,
        animation_duration: float = ANIMATION_DURATION,
        gesture_threshold: float = GESTURE_THRESHOLD,
    ) -> None:
        self.services = services
        self.hub = hub
        self.history = ClientHistory()
        self.browser = BrowserIntegration(self.history)
        initial = self.browser.initial_entry(path)
        self.controller = NavigationController(
            registry,
            initial=initial.route,
            initial_params=initial.params,
            services=services,
            browser=self.browser,
            scheduler=scheduler,
            animation_duration=animation_duration,
        )
        self.gestures = GestureRecognizer(self.controller, threshold=gesture_threshold)
        self.keys = KeyboardShortcuts(self.controller)

    def opening_fragments(self) -> list[str]:
        return [history_fragment(*update) for update in self.history.drain()]

    async def handle(self, message: dict[str, Any]) -> list[str]:
        before = self.controller.view
        kind = message.get("type")
        try:
            await self._dispatch(kind, message)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Malformed %s message: %r", kind, e)

        fragments: list[str] = []
        view = self.controller.view
        if view is not None and view is not before:
            fragments.append(
                screen_fragment(view, duration=self.controller.animation_duration)
            )
        fragments.extend(history_fragment(*update) for update in self.history.drain())
        return fragments

    async def _dispatch(self, kind: Any, message: dict[str, Any]) -> None:
        params = {k: v for k, v in message.items() if k not in RESERVED_KEYS}
        route = message.get("route")
        match kind:
            case "navigate":
                self.controller.navigate(route or "", params)
            case "replace":
                self.controller.replace(route or self.controller.current().route, params)
            case "reset":
                self.controller.reset(route or Route.WELCOME, params)
            case "back":
                self.controller.go_back()
            case "key":
                self.keys.handle(
                    str(message.get("key", "")),
                    alt=bool(message.get("altKey")),
                    ctrl=bool(message.get("ctrlKey")),
                    shift=bool(message.get("shiftKey")),
                )
            case "touchstart":
                self.gestures.touch_start(float(message["x"]), float(message["y"]))
            case "touchmove":
                self.gestures.touch_move(float(message["x"]), float(message["y"]))
            case "touchend":
                self.gestures.touch_end()
            case "popstate":
                self.browser.handle_popstate(
                    message.get("state"), str(message.get("path") or "/")
                )
            case "favorite":
                self.toggle_favorite(message.get("id"))
            case "save_recipe":
                await self.save_recipe(message)
            case "delete_recipe":
                await self.delete_recipe(message.get("id"))
            case _:
                logger.warning("Unknown message type: %r", kind)

    def toggle_favorite(self, recipe_id: Any) -> None:
        try:
            recipe = self.services.recipes.get_recipe(recipe_id)
        except RecipeNotFound:
            self.services.favorites.remove(recipe_id)
        else:
            self.services.favorites.toggle(recipe.to_dict())
        self.controller.refresh()

    async def save_recipe(self, message: dict[str, Any]) -> None:
        fields = {
            "title": message.get("title", ""),
            "description": message.get("description", ""),
            "category": message.get("category", ""),
            "cookTime": message.get("cookTime", ""),
            "servings": message.get("servings", ""),
            "ingredients": split_lines(message.get("ingredients")),
            "instructions": split_lines(message.get("instructions")),
        }
        recipe_id = message.get("id") or None
        try:
            if recipe_id is None:
                recipe = self.services.recipes.create_recipe(RecipeIn.model_validate(fields))
                event = RECIPE_ADDED
            else:
                recipe = self.services.recipes.update_recipe(
                    recipe_id, RecipeUpdate.model_validate(fields)
                )
                event = RECIPE_UPDATED
        except ValidationError as e:
            errors = {".".join(str(p) for p in err["loc"]): err["msg"] for err in e.errors()}
            self.controller.replace(
                Route.RECIPES_FORM,
                {"recipe_id": recipe_id, "is_edit": recipe_id is not None, "errors": errors},
            )
            return
        except RecipeNotFound:
            logger.warning("Cannot update missing recipe %s", recipe_id)
            return

        if self.hub is not None:
            await self.hub.broadcast(event, recipe.to_dict())
        self.controller.navigate(Route.CUSTOM_RECIPES)

    async def delete_recipe(self, recipe_id: Any) -> None:
        try:
            recipe = self.services.recipes.delete_recipe(recipe_id)
        except RecipeNotFound:
            logger.warning("Cannot delete missing recipe %s", recipe_id)
            return
        self.services.favorites.remove(recipe.id)
        if self.hub is not None:
            await self.hub.broadcast(RECIPE_DELETED, recipe.id)
        self.controller.refresh()

    def close(self) -> None:
        self.controller.close()


def parse_message(text: str) -> dict[str, Any]:
    try:
        message = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Ignoring malformed message: %r", text[:200])
        return {}
    if not isinstance(message, dict):
        return {}
    return message


__all__ = [
    "ClientHistory",
    "NavigationSession",
    "parse_message",
]
