"""Live reload support."""

from sitenav.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
