"""WebSocket-based live reload for development mode.

Monitors the menu file for changes, drops the cached navigation tree and
notifies connected clients via WebSocket to re-fetch the navigation.
"""

from __future__ import annotations

import asyncio
import json
import logging
import weakref
from pathlib import Path
from typing import TYPE_CHECKING

from aiohttp import WSMsgType, web
from watchfiles import Change, awatch

if TYPE_CHECKING:
    from sitenav.core.loader import NavigationLoader

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload."""

    def __init__(
        self,
        loader: NavigationLoader,
        watch_patterns: list[str] | None = None,
    ) -> None:
        """Initialize the live reload manager.

        Args:
            loader: NavigationLoader whose menu file is watched and whose
                    cached tree is invalidated on change
            watch_patterns: Glob patterns, relative to the menu file
                            directory (default: the menu file name)
        """
        self._loader = loader
        self._watch_dir = loader.menu_file.parent
        self._watch_patterns = watch_patterns or [loader.menu_file.name]
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    @property
    def connection_count(self) -> int:
        """Number of connected WebSocket clients."""
        return len(self._connections)

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        logger.info(f"Watching {self._watch_dir} for navigation changes")
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload."""
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        async for changes in awatch(self._watch_dir):
            await self.handle_changes(changes)

    async def handle_changes(self, changes: set[tuple[Change, str]]) -> bool:
        """Process a batch of file changes.

        Args:
            changes: Change set as reported by watchfiles

        Returns:
            True if a watched file changed and clients were notified
        """
        changed = [
            Path(path_str)
            for change_type, path_str in changes
            if change_type != Change.deleted and self._matches_patterns(Path(path_str))
        ]
        if not changed:
            return False

        logger.info(f"Navigation changed: {', '.join(str(path) for path in changed)}")
        self._loader.invalidate()
        await self._broadcast_reload()
        return True

    def _matches_patterns(self, path: Path) -> bool:
        try:
            relative = path.relative_to(self._watch_dir)
        except ValueError:
            return False

        return any(relative.match(pattern) for pattern in self._watch_patterns)

    async def _broadcast_reload(self) -> None:
        if not self._connections:
            return

        message = json.dumps({"type": "reload", "target": "navigation"})

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket."""
    return [web.get("/ws/live-reload", manager.handle_websocket)]
