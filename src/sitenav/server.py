"""aiohttp server for sitenav.

Application factory and route registration.
"""

import logging

from aiohttp import web

from sitenav.api.config import create_config_routes
from sitenav.api.navigation import create_navigation_routes
from sitenav.app_keys import (
    live_reload_enabled_key,
    live_reload_manager_key,
    loader_key,
    settings_key,
    verbose_key,
)
from sitenav.config import Config
from sitenav.core.loader import NavigationLoader
from sitenav.live.reload import LiveReloadManager, create_live_reload_routes

logger = logging.getLogger(__name__)


def create_app(config: Config, *, verbose: bool = False) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        verbose: Log every rendered navigation request

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    loader = NavigationLoader(config.navigation.menu_file)

    app[loader_key] = loader
    app[settings_key] = config.navigation.to_settings()
    app[live_reload_enabled_key] = config.live_reload.enabled
    app[verbose_key] = verbose

    app.router.add_routes(create_navigation_routes())
    app.router.add_routes(create_config_routes())

    if config.live_reload.enabled:
        manager = LiveReloadManager(loader, watch_patterns=config.live_reload.watch_patterns)
        app[live_reload_manager_key] = manager
        app.router.add_routes(create_live_reload_routes(manager))
        app.on_startup.append(_start_live_reload)
        app.on_cleanup.append(_stop_live_reload)

    return app


async def _start_live_reload(app: web.Application) -> None:
    await app[live_reload_manager_key].start()


async def _stop_live_reload(app: web.Application) -> None:
    await app[live_reload_manager_key].stop()


def run_server(config: Config, *, verbose: bool = False) -> None:
    """Run the server.

    Args:
        config: Application configuration
        verbose: Log every rendered navigation request
    """
    app = create_app(config, verbose=verbose)
    logger.info(f"Serving navigation from {config.navigation.menu_file}")
    web.run_app(app, host=config.server.host, port=config.server.port)
