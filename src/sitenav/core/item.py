"""Navigation item.

One entry of a navigation menu. Items resolve their own selection state for
a render pass and compute the attributes needed to render them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from sitenav.core.highlight import HighlightRule, parse_highlight_rule, rule_matches, strip_anchor
from sitenav.core.types import ItemKey, NameSource

if TYPE_CHECKING:
    from sitenav.core.container import NavigationContainer
    from sitenav.core.context import NavigationContext

logger = logging.getLogger(__name__)

ROOT_PATH = "/"


class NavigationItem:
    """Single navigation entry, possibly owning a sub-navigation.

    An item is selected if

    * it has a sub-navigation and one of the sub-navigation items is selected, or
    * its highlight rule matches the request, or
    * without a highlight rule, its URL is the current page (auto highlighting).
    """

    def __init__(
        self,
        container: NavigationContainer,
        key: ItemKey,
        name: NameSource,
        url_or_options: object = None,
        options: Mapping[str, Any] | None = None,
        *,
        items: Iterable[NavigationItem] | None = None,
        builder: Callable[[NavigationContainer], object] | None = None,
    ) -> None:
        """Initialize item.

        Args:
            container: Container the item belongs to
            key: Identifier, unique within the container
            name: Display name or zero-argument producer of it
            url_or_options: URL, zero-argument producer of the URL (called
                            once, immediately) or the options mapping when
                            the item has no URL
            options: Options mapping when url_or_options holds the URL.
                     "method" and "highlights_on" are consumed, everything
                     else is passed to the renderer as html options
            items: Pre-built items forming the sub-navigation
            builder: Callback populating the freshly created sub-navigation

        Raises:
            ValueError: If both items and builder are given, or if
                        highlights_on is not a supported rule
        """
        if items is not None and builder is not None:
            raise ValueError(f"Item {key!r}: pass either items or builder, not both")

        url, bag = _split_url_and_options(url_or_options, options)

        self._key = key
        self._name = name
        self._url = url
        self._method: str | None = bag.pop("method", None)
        self._highlights_on = parse_highlight_rule(bag.pop("highlights_on", None))
        self.html_options: dict[str, Any] = bag
        self._container = container
        self._sub_navigation: NavigationContainer | None = None

        if items is not None or builder is not None:
            self._setup_sub_navigation(container, items, builder)

    @property
    def key(self) -> ItemKey:
        return self._key

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def method(self) -> str | None:
        return self._method

    @property
    def highlights_on(self) -> HighlightRule | None:
        return self._highlights_on

    @property
    def sub_navigation(self) -> NavigationContainer | None:
        return self._sub_navigation

    @property
    def container(self) -> NavigationContainer:
        """Container owning this item."""
        return self._container

    def name(self, context: NavigationContext, *, apply_generator: bool = True) -> str:
        """Return the display name.

        Args:
            context: Current render pass
            apply_generator: Pass the raw name through the configured
                             name generator

        Returns:
            Display name
        """
        raw = self._name() if callable(self._name) else self._name
        if apply_generator:
            return context.settings.name_generator(raw, self)
        return raw

    def selected(self, context: NavigationContext) -> bool:
        """Return True if the item should be rendered as selected.

        Computed once per render pass and cached in the context.
        """
        return context.memoized(
            self,
            lambda: self.selected_by_subnav(context) or self.selected_by_condition(context),
        )

    def selected_by_subnav(self, context: NavigationContext) -> bool:
        """Return True if the sub-navigation has a selected item."""
        return self._sub_navigation is not None and self._sub_navigation.selected(context)

    def selected_by_condition(self, context: NavigationContext) -> bool:
        """Return True if the item matches the request on its own."""
        if self._highlights_on is not None:
            return rule_matches(self._highlights_on, self._url, context)
        return self._selected_by_autohighlight(context)

    def rendered_options(self, context: NavigationContext) -> dict[str, Any]:
        """Return html options with generated id and classes applied.

        The configured class comes first, followed by the selected class and
        the active leaf class. The "class" key is left out when no class
        applies.
        """
        options = dict(self.html_options)

        if options.get("id") is None:
            item_id = self._autogenerated_item_id(context)
            if item_id is not None:
                options["id"] = item_id
            else:
                options.pop("id", None)

        classes = " ".join(
            _flatten_classes(
                [
                    self.html_options.get("class"),
                    self.selected_class(context),
                    self.active_leaf_class(context),
                ]
            )
        )
        if classes:
            options["class"] = classes
        else:
            options.pop("class", None)

        return options

    def selected_class(self, context: NavigationContext) -> str | None:
        """Return the selected class if the item is selected."""
        if not self.selected(context):
            return None
        return self.container.selected_class or context.settings.selected_class

    def active_leaf_class(self, context: NavigationContext) -> str | None:
        """Return the active leaf class if the item is the selected leaf.

        The selected leaf is matched by its own condition, not by one of its
        sub-navigation items.
        """
        if not self.selected_by_subnav(context) and self.selected_by_condition(context):
            return context.settings.active_leaf_class
        return None

    def auto_highlight(self, context: NavigationContext) -> bool:
        """Return True if auto highlighting applies to this item."""
        return context.settings.auto_highlight and self.container.auto_highlight

    def url_without_anchor(self) -> str | None:
        return strip_anchor(self._url)

    def _selected_by_autohighlight(self, context: NavigationContext) -> bool:
        if not self.auto_highlight(context):
            return False
        if self._root_path_match(context):
            return True
        url = self.url_without_anchor()
        return bool(url) and context.request.is_current_page(url)

    def _root_path_match(self, context: NavigationContext) -> bool:
        return self._url == ROOT_PATH and context.request.request_path == ROOT_PATH

    def _autogenerated_item_id(self, context: NavigationContext) -> str | None:
        if context.settings.autogenerate_item_ids:
            return context.settings.id_generator(self._key)
        return None

    def _setup_sub_navigation(
        self,
        container: NavigationContainer,
        items: Iterable[NavigationItem] | None,
        builder: Callable[[NavigationContainer], object] | None,
    ) -> None:
        sub_navigation = type(container)(container.level + 1)
        self._sub_navigation = sub_navigation
        if builder is not None:
            builder(sub_navigation)
        else:
            sub_navigation.items = list(items or [])
        logger.debug(
            f"Item {self._key!r}: sub-navigation at level {sub_navigation.level} "
            f"with {len(sub_navigation)} items"
        )

    def _adopt(self, container: NavigationContainer) -> None:
        """Re-attach the item to the container now holding it.

        A sub-navigation built at another depth is moved to the level below
        the new container, together with everything nested in it.
        """
        self._container = container
        sub_navigation = self._sub_navigation
        if sub_navigation is not None and sub_navigation.level != container.level + 1:
            self._sub_navigation = sub_navigation.relocated(container.level + 1)

    def __repr__(self) -> str:
        return f"NavigationItem(key={self._key!r}, url={self._url!r})"


def _split_url_and_options(
    url_or_options: object,
    options: Mapping[str, Any] | None,
) -> tuple[str | None, dict[str, Any]]:
    """Resolve the flexible trailing constructor arguments.

    Returns:
        Tuple of (url, copy of the options mapping)
    """
    if isinstance(url_or_options, Mapping):
        return None, dict(url_or_options)
    if callable(url_or_options):
        url = url_or_options()
    else:
        url = url_or_options
    return url, dict(options or {})


def _flatten_classes(values: Iterable[object]) -> list[str]:
    """Flatten nested class values, dropping empty entries."""
    result: list[str] = []
    for value in values:
        if value is None or value == "":
            continue
        if isinstance(value, str):
            result.append(value)
        elif isinstance(value, Iterable):
            result.extend(_flatten_classes(value))
        else:
            result.append(str(value))
    return result
