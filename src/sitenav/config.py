"""Configuration management for sitenav.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from sitenav.core.context import NavigationSettings
from sitenav.core.types import ItemKey

CONFIG_FILENAME = "sitenav.toml"
MENU_FILENAME = "navigation.toml"

ID_GENERATORS = ("key", "prefixed")
NAME_GENERATORS = ("plain", "title")


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class NavigationConfig:
    """Navigation rendering configuration."""

    menu_file: Path = field(default_factory=lambda: Path(MENU_FILENAME))
    auto_highlight: bool = True
    autogenerate_item_ids: bool = True
    selected_class: str | None = "selected"
    active_leaf_class: str | None = "simple-navigation-active-leaf"
    id_generator: str = "key"
    id_prefix: str = "nav-"
    name_generator: str = "plain"

    def to_settings(self) -> NavigationSettings:
        """Create the settings consulted by navigation items."""
        return NavigationSettings(
            auto_highlight=self.auto_highlight,
            autogenerate_item_ids=self.autogenerate_item_ids,
            selected_class=self.selected_class,
            active_leaf_class=self.active_leaf_class,
            id_generator=self._make_id_generator(),
            name_generator=self._make_name_generator(),
        )

    def _make_id_generator(self) -> Callable[[ItemKey], str]:
        if self.id_generator == "prefixed":
            prefix = self.id_prefix
            return lambda key: f"{prefix}{key}"
        return str

    def _make_name_generator(self) -> Callable[[str, Any], str]:
        if self.name_generator == "title":
            return lambda name, item: name.title()
        return lambda name, item: name


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    navigation: NavigationConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Read sitenav.toml, or fall back to defaults when none is found.

        Args:
            config_path: Explicit file; skips the upward directory search

        Raises:
            FileNotFoundError: If config_path is given but missing
            ValueError: If a section holds a value of the wrong type
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Walk up from the working directory to the first sitenav.toml."""
        cwd = Path.cwd()
        for directory in (cwd, *cwd.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.exists():
                return candidate
        return None

    @classmethod
    def _default(cls) -> Config:
        """Create config with all defaults."""
        return cls(
            server=ServerConfig(),
            navigation=NavigationConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid configuration file {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            navigation=cls._parse_navigation(data.get("navigation"), config_dir),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_navigation(cls, data: object, config_dir: Path) -> NavigationConfig:
        """Parse navigation configuration section.

        Args:
            data: Raw navigation section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            NavigationConfig instance
        """
        if data is None:
            return NavigationConfig(menu_file=config_dir / MENU_FILENAME)

        if not isinstance(data, dict):
            raise ValueError("navigation section must be a dictionary")

        menu_file = data.get("menu_file", MENU_FILENAME)
        if not isinstance(menu_file, str):
            raise ValueError("navigation.menu_file must be a string")

        flags: dict[str, bool] = {}
        for name in ("auto_highlight", "autogenerate_item_ids"):
            value = data.get(name, True)
            if not isinstance(value, bool):
                raise ValueError(f"navigation.{name} must be a boolean")
            flags[name] = value

        class_names: dict[str, str | None] = {}
        for name, default in (
            ("selected_class", "selected"),
            ("active_leaf_class", "simple-navigation-active-leaf"),
        ):
            value = data.get(name, default)
            if not isinstance(value, str):
                raise ValueError(f"navigation.{name} must be a string")
            # An empty string disables the class
            class_names[name] = value or None

        id_generator = data.get("id_generator", "key")
        if id_generator not in ID_GENERATORS:
            raise ValueError(f"navigation.id_generator must be one of {', '.join(ID_GENERATORS)}")

        id_prefix = data.get("id_prefix", "nav-")
        if not isinstance(id_prefix, str):
            raise ValueError("navigation.id_prefix must be a string")

        name_generator = data.get("name_generator", "plain")
        if name_generator not in NAME_GENERATORS:
            raise ValueError(
                f"navigation.name_generator must be one of {', '.join(NAME_GENERATORS)}"
            )

        return NavigationConfig(
            menu_file=config_dir / menu_file,
            auto_highlight=flags["auto_highlight"],
            autogenerate_item_ids=flags["autogenerate_item_ids"],
            selected_class=class_names["selected_class"],
            active_leaf_class=class_names["active_leaf_class"],
            id_generator=id_generator,
            id_prefix=id_prefix,
            name_generator=name_generator,
        )

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        watch_patterns_raw = data.get("watch_patterns")
        watch_patterns: list[str] | None = None
        if watch_patterns_raw is not None:
            if not isinstance(watch_patterns_raw, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            watch_patterns = []
            for item in watch_patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("live_reload.watch_patterns items must be strings")
                watch_patterns.append(item)

        return LiveReloadConfig(enabled=enabled, watch_patterns=watch_patterns)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        menu_file: Path | None = None,
        live_reload_enabled: bool | None = None,
    ) -> Config:
        """Return a copy with the command line options of serve applied.

        Options left as None keep the value read from the file.
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        navigation = self.navigation
        if menu_file is not None:
            navigation = replace(self.navigation, menu_file=menu_file)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(
            self,
            server=server,
            navigation=navigation,
            live_reload=live_reload,
        )
