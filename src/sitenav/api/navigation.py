"""Navigation API endpoints.

Renders the navigation tree for a page URI, with selection state and the
attributes of every item resolved for that page.
"""

import json
import logging

from aiohttp import web

from sitenav.app_keys import loader_key, settings_key, verbose_key
from sitenav.core.container import NavigationContainer
from sitenav.core.context import NavigationContext, URLRequestContext
from sitenav.core.navigation import render_navigation

logger = logging.getLogger(__name__)


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/navigation", get_navigation),
        web.get("/api/navigation/active", get_active_navigation),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    path = request.query.get("path", "/")
    tree = _load_tree(request)
    context = _make_context(request, path)

    return web.json_response(
        {
            "path": path,
            "selected": tree.selected(context),
            "attributes": tree.dom_attributes_for(),
            "items": render_navigation(tree, context),
        }
    )


async def get_active_navigation(request: web.Request) -> web.Response:
    path = request.query.get("path", "/")
    try:
        level = int(request.query.get("level", "0"))
    except ValueError:
        return web.json_response(
            {"error": "level must be an integer", "level": request.query["level"]},
            status=400,
        )

    tree = _load_tree(request)
    context = _make_context(request, path)

    container = tree.active_item_container_for(level, context)
    if container is None:
        return web.json_response(
            {"error": "No active navigation at level", "level": level, "path": path},
            status=404,
        )

    return web.json_response(
        {
            "path": path,
            "level": container.level,
            "items": render_navigation(container, context),
        }
    )


def _load_tree(request: web.Request) -> NavigationContainer:
    loader = request.app[loader_key]
    try:
        return loader.load()
    except FileNotFoundError as e:
        raise web.HTTPNotFound(
            text=_error_json("Menu file not found", str(loader.menu_file)),
            content_type="application/json",
        ) from e
    except ValueError as e:
        logger.error(f"Invalid navigation definition: {e}")
        raise web.HTTPInternalServerError(
            text=_error_json("Invalid navigation definition", str(e)),
            content_type="application/json",
        ) from e


def _make_context(request: web.Request, path: str) -> NavigationContext:
    context = NavigationContext(
        settings=request.app[settings_key],
        request=URLRequestContext(path),
    )
    if request.app[verbose_key]:
        logger.info(f"Rendering navigation for {path}")
    return context


def _error_json(error: str, detail: str) -> str:
    return json.dumps({"error": error, "detail": detail})
