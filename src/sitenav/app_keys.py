"""Application keys for type-safe app configuration access."""

from aiohttp import web

from sitenav.core.context import NavigationSettings
from sitenav.core.loader import NavigationLoader
from sitenav.live import LiveReloadManager

loader_key = web.AppKey("loader", NavigationLoader)
settings_key = web.AppKey("settings", NavigationSettings)
live_reload_enabled_key = web.AppKey("live_reload_enabled", bool)
verbose_key = web.AppKey("verbose", bool)
live_reload_manager_key = web.AppKey("live_reload_manager", LiveReloadManager)
