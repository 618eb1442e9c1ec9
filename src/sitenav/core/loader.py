"""Navigation definitions loaded from TOML.

Menu file structure:

    [[menu]]
    key = "home"
    name = "Home"
    url = "/"

    [[menu]]
    key = "products"
    name = "Products"
    url = "/products"
    highlights_on = "subpath"
    class = ["menu-products"]

    [[menu.items]]
    key = "catalog"
    name = "Catalog"
    url = "/products/catalog"
"""

import logging
import re
import tomllib
from collections.abc import Callable
from pathlib import Path

from sitenav.core.container import NavigationContainer
from sitenav.core.highlight import SUBPATH, HighlightRule, PatternRule, SubpathRule

logger = logging.getLogger(__name__)

_RESERVED_KEYS = frozenset(
    {"key", "name", "url", "method", "highlights_on", "class", "id", "auto_highlight", "items"}
)


def build_navigation(
    entries: object,
    *,
    level: int = 0,
    auto_highlight: bool = True,
    location: str = "menu",
) -> NavigationContainer:
    """Build a navigation container from parsed menu entries.

    Args:
        entries: List of entry tables
        level: Level of the container to build
        auto_highlight: Auto highlighting flag of the container
        location: Dotted location of entries, used in error messages

    Returns:
        Populated NavigationContainer

    Raises:
        ValueError: If an entry is malformed
    """
    if not isinstance(entries, list):
        raise ValueError(f"{location} must be a list")

    container = NavigationContainer(level, auto_highlight=auto_highlight)
    for index, entry in enumerate(entries):
        _add_entry(container, entry, f"{location}[{index}]")
    return container


def _add_entry(container: NavigationContainer, entry: object, location: str) -> None:
    if not isinstance(entry, dict):
        raise ValueError(f"{location} must be a table")

    key = entry.get("key")
    if not isinstance(key, str):
        raise ValueError(f"{location}.key must be a string")

    name = entry.get("name")
    if not isinstance(name, str):
        raise ValueError(f"{location}.name must be a string")

    url = entry.get("url")
    if url is not None and not isinstance(url, str):
        raise ValueError(f"{location}.url must be a string")

    options: dict[str, object] = {}

    method = entry.get("method")
    if method is not None:
        if not isinstance(method, str):
            raise ValueError(f"{location}.method must be a string")
        options["method"] = method

    highlights_on = _parse_highlights_on(entry.get("highlights_on"), location)
    if highlights_on is not None:
        options["highlights_on"] = highlights_on

    css_class = entry.get("class")
    if css_class is not None:
        if isinstance(css_class, list):
            if not all(isinstance(value, str) for value in css_class):
                raise ValueError(f"{location}.class items must be strings")
        elif not isinstance(css_class, str):
            raise ValueError(f"{location}.class must be a string or a list of strings")
        options["class"] = css_class

    item_id = entry.get("id")
    if item_id is not None:
        if not isinstance(item_id, str):
            raise ValueError(f"{location}.id must be a string")
        options["id"] = item_id

    for option_name, value in entry.items():
        if option_name in _RESERVED_KEYS:
            continue
        if option_name in ("if", "unless"):
            raise ValueError(f"{location}.{option_name} is not supported in menu files")
        if not isinstance(value, str | int | bool):
            raise ValueError(f"{location}.{option_name} must be a string, integer or boolean")
        options[option_name] = value

    sub_auto_highlight = entry.get("auto_highlight", True)
    if not isinstance(sub_auto_highlight, bool):
        raise ValueError(f"{location}.auto_highlight must be a boolean")

    if container.get(key) is not None:
        raise ValueError(f"{location}.key duplicates {key!r}")

    sub_entries = entry.get("items")
    builder = None
    if sub_entries is not None:
        builder = _sub_navigation_builder(sub_entries, sub_auto_highlight, f"{location}.items")

    container.item(key, name, url, options, builder=builder)


def _sub_navigation_builder(
    entries: object,
    auto_highlight: bool,
    location: str,
) -> Callable[[NavigationContainer], None]:
    if not isinstance(entries, list):
        raise ValueError(f"{location} must be a list")

    def populate(sub_navigation: NavigationContainer) -> None:
        sub_navigation.auto_highlight = auto_highlight
        for index, entry in enumerate(entries):
            _add_entry(sub_navigation, entry, f"{location}[{index}]")

    return populate


def _parse_highlights_on(value: object, location: str) -> HighlightRule | None:
    """Parse highlights_on: "subpath" or a table with a pattern."""
    if value is None:
        return None

    if isinstance(value, str):
        if value != SUBPATH:
            raise ValueError(f"{location}.highlights_on must be 'subpath' or a pattern table")
        return SubpathRule()

    if not isinstance(value, dict):
        raise ValueError(f"{location}.highlights_on must be 'subpath' or a pattern table")

    pattern = value.get("pattern")
    if not isinstance(pattern, str):
        raise ValueError(f"{location}.highlights_on.pattern must be a string")

    flags = re.IGNORECASE if value.get("ignore_case", False) else 0
    try:
        return PatternRule(re.compile(pattern, flags))
    except re.error as e:
        raise ValueError(f"{location}.highlights_on.pattern is invalid: {e}") from e


class NavigationLoader:
    """Loads the navigation tree from a TOML menu file.

    The built tree is cached and rebuilt when the file mtime changes or
    after invalidate(). The tree holds no request state, so the cached
    instance is shared by all requests.
    """

    def __init__(self, menu_file: Path) -> None:
        """Initialize loader.

        Args:
            menu_file: Path to the TOML menu file
        """
        self._menu_file = menu_file
        self._cached: NavigationContainer | None = None
        self._cached_mtime: float | None = None

    @property
    def menu_file(self) -> Path:
        return self._menu_file

    def load(self) -> NavigationContainer:
        """Return the navigation tree, rebuilding it if the file changed.

        Raises:
            FileNotFoundError: If the menu file doesn't exist
            ValueError: If the menu definition is invalid
        """
        if not self._menu_file.exists():
            raise FileNotFoundError(f"Menu file not found: {self._menu_file}")

        mtime = self._menu_file.stat().st_mtime
        if self._cached is not None and self._cached_mtime == mtime:
            return self._cached

        logger.info(f"Loading navigation from {self._menu_file}")
        with self._menu_file.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid menu file {self._menu_file}: {e}") from e

        container = build_navigation(data.get("menu", []))
        logger.debug(f"Loaded {len(container)} top-level navigation items")

        self._cached = container
        self._cached_mtime = mtime
        return container

    def invalidate(self) -> None:
        """Drop the cached tree so the next load() rebuilds it."""
        self._cached = None
        self._cached_mtime = None
