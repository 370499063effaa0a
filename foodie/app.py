import contextlib
import functools
import json
import logging
from typing import Any, AsyncIterator, Awaitable, Callable
from urllib.parse import quote

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Mount, Route, WebSocketRoute
from starlette.staticfiles import StaticFiles
from starlette.websockets import WebSocket, WebSocketDisconnect

from foodie import config
from foodie.domain.favorites import FavoritesStore
from foodie.domain.models import RecipeIn, RecipeUpdate
from foodie.domain.recipe_book import RecipeBook, RecipeNotFound
from foodie.domain.storage import JsonFileStore
from foodie.hub import RECIPE_ADDED, RECIPE_DELETED, RECIPE_UPDATED, RecipeHub
from foodie.logs import install_broadcast, setup_logging
from foodie.navigation.deep_links import parse_deep_link
from foodie.navigation.history import NavigationEntry
from foodie.navigation.renderer import Renderer
from foodie.navigation.routes import Animation
from foodie.screens import ScreenServices, build_registry, make_environment
from foodie.session import NavigationSession, parse_message


logger = logging.getLogger(__name__)


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def not_found() -> JSONResponse:
    return JSONResponse({"error": "Recipe not found"}, status_code=404)


def invalid(e: ValidationError) -> JSONResponse:
    return JSONResponse({"error": json.loads(e.json())}, status_code=422)


async def read_json(request: Request) -> Any:
    try:
        return await request.json()
    except json.JSONDecodeError:
        return None


def services(request: Request | WebSocket) -> ScreenServices:
    return request.app.state.services


@aHTMLResponse
async def page(request: Request) -> str:
    """Page shell with the screen the URL deep-links to already rendered."""
    path = request.url.path
    state = request.app.state
    entry = NavigationEntry.create(*parse_deep_link(path))
    view = Renderer(state.registry, services=state.services).render(
        entry, Animation.NONE
    )
    return state.services.templates.get_template("index.html").render(
        view=view,
        ws_url=f"/ws/navigation?path={quote(path)}",
    )


async def list_recipes(request: Request) -> JSONResponse:
    return JSONResponse([r.to_dict() for r in services(request).recipes.list_recipes()])


async def get_recipe(request: Request) -> JSONResponse:
    try:
        recipe = services(request).recipes.get_recipe(request.path_params["id"])
    except RecipeNotFound:
        return not_found()
    return JSONResponse(recipe.to_dict())


async def create_recipe(request: Request) -> JSONResponse:
    try:
        data = RecipeIn.model_validate(await read_json(request))
    except ValidationError as e:
        return invalid(e)
    recipe = services(request).recipes.create_recipe(data)
    await request.app.state.hub.broadcast(RECIPE_ADDED, recipe.to_dict())
    return JSONResponse(recipe.to_dict(), status_code=201)


async def update_recipe(request: Request) -> JSONResponse:
    try:
        data = RecipeUpdate.model_validate(await read_json(request))
        recipe = services(request).recipes.update_recipe(request.path_params["id"], data)
    except ValidationError as e:
        return invalid(e)
    except RecipeNotFound:
        return not_found()
    await request.app.state.hub.broadcast(RECIPE_UPDATED, recipe.to_dict())
    return JSONResponse(recipe.to_dict())


async def delete_recipe(request: Request) -> JSONResponse:
    try:
        recipe = services(request).recipes.delete_recipe(request.path_params["id"])
    except RecipeNotFound:
        return not_found()
    await request.app.state.hub.broadcast(RECIPE_DELETED, recipe.id)
    return JSONResponse(recipe.to_dict())


async def search(request: Request) -> JSONResponse:
    query = request.query_params.get("q", "")
    category = request.query_params.get("category")
    recipes = services(request).recipes.search(query, category)
    return JSONResponse([r.to_dict() for r in recipes])


async def categories(request: Request) -> JSONResponse:
    return JSONResponse(services(request).recipes.list_categories())


async def recipes_ws(ws: WebSocket) -> None:
    """Push channel for recipe changes."""
    hub: RecipeHub = ws.app.state.hub
    await hub.connect(ws)
    try:
        while True:
            message = parse_message(await ws.receive_text())
            if message.get("event") == "requestRecipes":
                recipes = services(ws).recipes.list_recipes()
                await ws.send_json(
                    {"event": "recipesList", "data": [r.to_dict() for r in recipes]}
                )
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(ws)


async def navigation_ws(ws: WebSocket) -> None:
    """Navigation session for one page."""
    CONFIG: config.Config = ws.app.state.config
    await ws.accept()
    session = NavigationSession(
        registry=ws.app.state.registry,
        services=services(ws),
        path=ws.query_params.get("path", "/"),
        hub=ws.app.state.hub,
        animation_duration=CONFIG.animation_duration,
        gesture_threshold=CONFIG.gesture_threshold,
    )
    try:
        for fragment in session.opening_fragments():
            await ws.send_text(fragment)
        while True:
            message = parse_message(await ws.receive_text())
            for fragment in await session.handle(message):
                await ws.send_text(fragment)
    except WebSocketDisconnect:
        pass
    finally:
        session.close()


def create_app(cfg: config.Config | None = None) -> Starlette:
    CONFIG = config.Config() if cfg is None else cfg

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        setup_logging(CONFIG)
        CONFIG.files_directory.mkdir(parents=True, exist_ok=True)
        handler = install_broadcast(CONFIG, app.state.hub)
        logger.info("🍳 Food Recipe Server is running on http://%s:%s", CONFIG.host, CONFIG.port)
        logger.info("📁 Files directory: %s", CONFIG.files_directory)
        yield
        if handler is not None:
            logging.getLogger().removeHandler(handler)

    app = Starlette(
        debug=True if CONFIG.env == config.Env.local else False,
        routes=[
            Route("/api/recipes", list_recipes, methods=["GET"]),
            Route("/api/recipes", create_recipe, methods=["POST"]),
            Route("/api/recipes/{id:int}", get_recipe, methods=["GET"]),
            Route("/api/recipes/{id:int}", update_recipe, methods=["PUT"]),
            Route("/api/recipes/{id:int}", delete_recipe, methods=["DELETE"]),
            Route("/api/search", search),
            Route("/api/categories", categories),
            WebSocketRoute("/ws/recipes", recipes_ws),
            WebSocketRoute("/ws/navigation", navigation_ws),
            Mount(
                "/assets",
                StaticFiles(directory=CONFIG.assets_dir, check_dir=False),
                name="assets",
            ),
            Mount(
                "/files",
                StaticFiles(directory=CONFIG.files_directory, check_dir=False),
                name="files",
            ),
            Route("/", page),
            Route("/{path:path}", page),
        ],
        middleware=[Middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"])],
        lifespan=lifespan,
    )

    app.state.config = CONFIG
    app.state.hub = RecipeHub()
    app.state.registry = build_registry()
    app.state.services = ScreenServices(
        recipes=RecipeBook(),
        favorites=FavoritesStore(JsonFileStore(CONFIG.favorites_file)),
        templates=make_environment(CONFIG.html_dir),
    )
    return app


app = create_app()
