"""Shared test fixtures."""

from pathlib import Path

import pytest
from sitenav.config import Config, LiveReloadConfig, NavigationConfig, ServerConfig
from sitenav.core.context import URLRequestContext

MENU_TOML = """
[[menu]]
key = "home"
name = "Home"
url = "/"

[[menu]]
key = "products"
name = "Products"
url = "/products"
highlights_on = "subpath"

[[menu.items]]
key = "catalog"
name = "Catalog"
url = "/products/catalog"

[[menu.items]]
key = "offers"
name = "Offers"
url = "/products/offers"

[[menu]]
key = "about"
name = "About"
url = "/about#team"
"""


class CountingRequestContext(URLRequestContext):
    """URL request context recording how often pages are matched."""

    __slots__ = ("calls",)

    def __init__(self, uri: str) -> None:
        super().__init__(uri)
        self.calls: list[str] = []

    def is_current_page(self, url: str) -> bool:
        self.calls.append(url)
        return super().is_current_page(url)


@pytest.fixture
def menu_file(tmp_path: Path) -> Path:
    """Write the sample menu to a temporary navigation.toml."""
    path = tmp_path / "navigation.toml"
    path.write_text(MENU_TOML)
    return path


@pytest.fixture
def test_config(menu_file: Path) -> Config:
    """Create a test configuration pointing at the sample menu."""
    return Config(
        server=ServerConfig(),
        navigation=NavigationConfig(menu_file=menu_file),
        live_reload=LiveReloadConfig(enabled=False),
    )
