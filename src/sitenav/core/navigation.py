"""Navigation tree serialization.

Walks a navigation container for one render pass and produces plain
dictionaries for JSON responses and the CLI.
"""

from __future__ import annotations

from typing import Any, NotRequired, TypedDict

from sitenav.core.container import NavigationContainer
from sitenav.core.context import NavigationContext
from sitenav.core.item import NavigationItem


class NavItemDict(TypedDict):
    """Dictionary representation of a rendered navigation item."""

    key: str
    name: str
    url: str | None
    selected: bool
    options: dict[str, Any]
    method: NotRequired[str]
    children: NotRequired[list[NavItemDict]]


def render_navigation(
    container: NavigationContainer,
    context: NavigationContext,
) -> list[NavItemDict]:
    """Render all items of a container, recursing into sub-navigations.

    Args:
        container: Container to render
        context: Current render pass

    Returns:
        List of NavItemDict in rendering order
    """
    return [render_item(item, context) for item in container]


def render_item(item: NavigationItem, context: NavigationContext) -> NavItemDict:
    """Render a single item with its sub-navigation."""
    result: NavItemDict = {
        "key": str(item.key),
        "name": item.name(context),
        "url": item.url,
        "selected": item.selected(context),
        "options": item.rendered_options(context),
    }
    if item.method is not None:
        result["method"] = item.method
    if item.sub_navigation is not None and not item.sub_navigation.is_empty():
        result["children"] = render_navigation(item.sub_navigation, context)
    return result
