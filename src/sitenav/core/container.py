"""Navigation container.

Ordered group of navigation items at one nesting level. The root container
has level 0; every sub-navigation sits one level deeper than its parent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from sitenav.core.item import NavigationItem
from sitenav.core.types import ItemKey, NameSource

if TYPE_CHECKING:
    from sitenav.core.context import NavigationContext

logger = logging.getLogger(__name__)


class NavigationContainer:
    """Ordered collection of navigation items.

    Insertion order is rendering order. Item keys are unique within a
    container.
    """

    def __init__(
        self,
        level: int = 0,
        *,
        auto_highlight: bool = True,
        selected_class: str | None = None,
        dom_id: str | None = None,
        dom_class: str | None = None,
        dom_attributes: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize container.

        Args:
            level: Nesting depth, 0 for the root
            auto_highlight: Allow auto highlighting for items of this container
            selected_class: Overrides the configured selected class for
                            items of this container
            dom_id: Id attribute of the rendered list element
            dom_class: Class attribute of the rendered list element
            dom_attributes: Further attributes of the rendered list element
        """
        self._level = level
        self._items: list[NavigationItem] = []
        self.auto_highlight = auto_highlight
        self.selected_class = selected_class
        self.dom_id = dom_id
        self.dom_class = dom_class
        self.dom_attributes: dict[str, Any] = dict(dom_attributes or {})

    @property
    def level(self) -> int:
        return self._level

    @property
    def items(self) -> list[NavigationItem]:
        return self._items

    @items.setter
    def items(self, items: Iterable[NavigationItem]) -> None:
        new_items = list(items)
        _check_unique_keys(new_items)
        for item in new_items:
            item._adopt(self)
        self._items = new_items

    def item(
        self,
        key: ItemKey,
        name: NameSource,
        url_or_options: object = None,
        options: Mapping[str, Any] | None = None,
        *,
        items: Iterable[NavigationItem] | None = None,
        builder: Callable[[NavigationContainer], object] | None = None,
    ) -> NavigationItem | None:
        """Create an item and append it to the container.

        Options may carry "if" and "unless" zero-argument callables deciding
        whether the item is added at all. All other arguments are passed to
        NavigationItem.

        Returns:
            Created item, or None if a condition excluded it

        Raises:
            ValueError: If the key is already used in this container
        """
        if isinstance(url_or_options, Mapping):
            url_or_options, condition_options = _pop_conditions(url_or_options)
        else:
            options, condition_options = _pop_conditions(options or {})

        if not _should_add(condition_options):
            logger.debug(f"Skipping item {key!r}: condition not met")
            return None

        if self.get(key) is not None:
            raise ValueError(f"Duplicate navigation item key at level {self._level}: {key!r}")

        new_item = NavigationItem(
            self,
            key,
            name,
            url_or_options,
            options,
            items=items,
            builder=builder,
        )
        self._items.append(new_item)
        return new_item

    def get(self, key: ItemKey) -> NavigationItem | None:
        """Return the item with the given key, or None."""
        for item in self._items:
            if item.key == key:
                return item
        return None

    def __getitem__(self, key: ItemKey) -> NavigationItem:
        item = self.get(key)
        if item is None:
            raise KeyError(key)
        return item

    def __iter__(self) -> Iterator[NavigationItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def selected(self, context: NavigationContext) -> bool:
        """Return True if any item of this container is selected."""
        return any(item.selected(context) for item in self._items)

    def selected_item(self, context: NavigationContext) -> NavigationItem | None:
        """Return the first selected item, or None."""
        for item in self._items:
            if item.selected(context):
                return item
        return None

    def selected_sub_navigation(self, context: NavigationContext) -> bool:
        """Return True if the selected item has a sub-navigation."""
        item = self.selected_item(context)
        return item is not None and item.sub_navigation is not None

    def level_for_item(self, key: ItemKey) -> int | None:
        """Return the level of the container holding key anywhere below.

        Args:
            key: Item key to look for

        Returns:
            Level of the first container (depth-first) holding the key,
            None if not found
        """
        if self.get(key) is not None:
            return self._level
        for item in self._items:
            if item.sub_navigation is None:
                continue
            level = item.sub_navigation.level_for_item(key)
            if level is not None:
                return level
        return None

    def active_item_container_for(
        self,
        level: int,
        context: NavigationContext,
    ) -> NavigationContainer | None:
        """Return the container at level on the selected branch.

        Args:
            level: Wanted nesting level
            context: Current render pass

        Returns:
            Container at that level, None if the selected branch does not
            reach it
        """
        if level == self._level:
            return self
        item = self.selected_item(context)
        if item is None or item.sub_navigation is None:
            return None
        return item.sub_navigation.active_item_container_for(level, context)

    def active_leaf_container(self, context: NavigationContext) -> NavigationContainer | None:
        """Return the deepest container on the selected branch.

        Returns:
            Deepest container holding a selected item, None if nothing
            is selected
        """
        item = self.selected_item(context)
        if item is None:
            return None
        if item.sub_navigation is not None:
            deeper = item.sub_navigation.active_leaf_container(context)
            if deeper is not None:
                return deeper
        return self

    def dom_attributes_for(self) -> dict[str, Any]:
        """Return attributes of the rendered list element, without empty values."""
        attributes = {"id": self.dom_id, "class": self.dom_class, **self.dom_attributes}
        return {name: value for name, value in attributes.items() if value not in (None, "")}

    def relocated(self, level: int) -> NavigationContainer:
        """Return a copy of this container at another nesting level.

        Items are moved to the copy, and their sub-navigations follow one
        level below it.
        """
        container = type(self)(
            level,
            auto_highlight=self.auto_highlight,
            selected_class=self.selected_class,
            dom_id=self.dom_id,
            dom_class=self.dom_class,
            dom_attributes=self.dom_attributes,
        )
        container.items = self._items
        return container

    def reset_selection(self, context: NavigationContext) -> None:
        """Forget cached selection of every item in this subtree."""
        for item in self._items:
            context.forget(item)
            if item.sub_navigation is not None:
                item.sub_navigation.reset_selection(context)

    def __repr__(self) -> str:
        return f"NavigationContainer(level={self._level}, items={len(self._items)})"


def _pop_conditions(options: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split "if" / "unless" conditions off a copy of options."""
    remaining = dict(options)
    conditions = {name: remaining.pop(name) for name in ("if", "unless") if name in remaining}
    return remaining, conditions


def _should_add(conditions: Mapping[str, Callable[[], object]]) -> bool:
    if_condition = conditions.get("if")
    if if_condition is not None and not if_condition():
        return False
    unless_condition = conditions.get("unless")
    if unless_condition is not None and unless_condition():
        return False
    return True


def _check_unique_keys(items: list[NavigationItem]) -> None:
    seen: set[ItemKey] = set()
    for item in items:
        if item.key in seen:
            raise ValueError(f"Duplicate navigation item key: {item.key!r}")
        seen.add(item.key)
