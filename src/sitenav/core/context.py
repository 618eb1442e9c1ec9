"""Render pass context.

Bundles the two collaborators navigation items consult while rendering
(settings and the current request) with the selection memo of one pass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from aiohttp import web
from yarl import URL

from sitenav.core.types import ItemKey, RequestURI

if TYPE_CHECKING:
    from sitenav.core.item import NavigationItem

logger = logging.getLogger(__name__)


def _plain_name(name: str, item: Any) -> str:
    return name


@dataclass(frozen=True)
class NavigationSettings:
    """Global navigation options consulted while rendering."""

    auto_highlight: bool = True
    autogenerate_item_ids: bool = True
    selected_class: str | None = "selected"
    active_leaf_class: str | None = "simple-navigation-active-leaf"
    id_generator: Callable[[ItemKey], str] = str
    name_generator: Callable[[str, Any], str] = _plain_name


class RequestContext(Protocol):
    """Access to the request being rendered."""

    @property
    def request_path(self) -> str: ...

    @property
    def request_uri(self) -> str: ...

    def is_current_page(self, url: str) -> bool: ...


class URLRequestContext:
    """Request context backed by the URL of the current request.

    Page matching ignores trailing slashes. A URL with a query string only
    matches when the query is identical, and a URL with a host only matches
    requests to that host.
    """

    __slots__ = ("_url",)

    def __init__(self, uri: str | URL) -> None:
        """Initialize from a raw request URI.

        Args:
            uri: Path with optional query (e.g., "/products?page=2") or
                 an absolute URL
        """
        self._url = uri if isinstance(uri, URL) else URL(uri)

    @classmethod
    def from_request(cls, request: web.Request) -> URLRequestContext:
        """Create context for an aiohttp request."""
        return cls(request.url)

    @property
    def request_path(self) -> str:
        return self._url.path or "/"

    @property
    def request_uri(self) -> RequestURI:
        uri = self._url.raw_path_qs
        if self._url.raw_fragment:
            uri = f"{uri}#{self._url.raw_fragment}"
        return RequestURI(uri)

    def is_current_page(self, url: str) -> bool:
        target = URL(url)
        if target.host is not None and self._url.host is not None:
            if target.host.lower() != self._url.host.lower():
                return False
        if _normalize_path(target.path) != _normalize_path(self.request_path):
            return False
        if target.query_string:
            return target.query == self._url.query
        return True

    def __repr__(self) -> str:
        return f"URLRequestContext({str(self._url)!r})"


def _normalize_path(path: str) -> str:
    """Strip trailing slashes, keeping the root path."""
    return path.rstrip("/") or "/"


@dataclass
class NavigationContext:
    """State of a single render pass.

    Selection of every item is computed at most once per context. Create a
    context per request, or call reset() before reusing one, so selection
    from a previous request never leaks into the next.
    """

    settings: NavigationSettings
    request: RequestContext
    _selection: dict[NavigationItem, bool] = field(default_factory=dict, repr=False)

    @classmethod
    def for_uri(
        cls,
        uri: str,
        settings: NavigationSettings | None = None,
    ) -> NavigationContext:
        """Create context for a raw request URI.

        Args:
            uri: Request URI (e.g., "/products/7?tab=specs")
            settings: Navigation settings, defaults when omitted

        Returns:
            Fresh NavigationContext
        """
        return cls(
            settings=settings if settings is not None else NavigationSettings(),
            request=URLRequestContext(uri),
        )

    def memoized(self, item: NavigationItem, compute: Callable[[], bool]) -> bool:
        """Return cached selection of item, computing it on first access."""
        if item in self._selection:
            return self._selection[item]
        selected = bool(compute())
        self._selection[item] = selected
        logger.debug(f"Item {item.key!r} selected={selected}")
        return selected

    def forget(self, item: NavigationItem) -> None:
        """Drop the cached selection of a single item."""
        self._selection.pop(item, None)

    def reset(self, request: RequestContext | None = None) -> None:
        """Clear all cached selections, optionally switching request.

        Args:
            request: Request for the next pass, keeps current one when None
        """
        self._selection.clear()
        if request is not None:
            self.request = request
