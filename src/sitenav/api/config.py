"""Config API endpoint."""

from aiohttp import web

from sitenav.app_keys import live_reload_enabled_key, settings_key


def create_config_routes() -> list[web.RouteDef]:
    return [web.get("/api/config", get_config)]


async def get_config(request: web.Request) -> web.Response:
    settings = request.app[settings_key]
    return web.json_response(
        {
            "liveReloadEnabled": request.app[live_reload_enabled_key],
            "autoHighlight": settings.auto_highlight,
            "selectedClass": settings.selected_class,
            "activeLeafClass": settings.active_leaf_class,
        }
    )
