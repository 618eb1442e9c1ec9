"""Tests for render pass context and request matching."""

from sitenav.core.container import NavigationContainer
from sitenav.core.context import NavigationContext, NavigationSettings, URLRequestContext


class TestURLRequestContext:
    """Tests for URLRequestContext."""

    def test__request_path__excludes_query(self) -> None:
        request = URLRequestContext("/products/7?tab=specs")

        assert request.request_path == "/products/7"

    def test__request_uri__includes_query(self) -> None:
        request = URLRequestContext("/products/7?tab=specs")

        assert request.request_uri == "/products/7?tab=specs"

    def test__absolute_url__uri_is_path_and_query(self) -> None:
        request = URLRequestContext("https://shop.example.com/products?x=1")

        assert request.request_uri == "/products?x=1"
        assert request.request_path == "/products"

    def test__empty_path__is_root(self) -> None:
        request = URLRequestContext("https://shop.example.com")

        assert request.request_path == "/"

    def test__is_current_page__same_path(self) -> None:
        request = URLRequestContext("/about")

        assert request.is_current_page("/about") is True
        assert request.is_current_page("/contact") is False

    def test__is_current_page__ignores_trailing_slash(self) -> None:
        request = URLRequestContext("/about/")

        assert request.is_current_page("/about") is True

    def test__is_current_page__does_not_match_subpaths(self) -> None:
        request = URLRequestContext("/about/team")

        assert request.is_current_page("/about") is False

    def test__is_current_page__request_query_ignored_without_url_query(self) -> None:
        request = URLRequestContext("/search?q=shoes")

        assert request.is_current_page("/search") is True

    def test__is_current_page__url_query_must_match(self) -> None:
        request = URLRequestContext("/search?q=shoes")

        assert request.is_current_page("/search?q=shoes") is True
        assert request.is_current_page("/search?q=hats") is False

    def test__is_current_page__absolute_url_host_must_match(self) -> None:
        request = URLRequestContext("https://shop.example.com/about")

        assert request.is_current_page("https://shop.example.com/about") is True
        assert request.is_current_page("https://blog.example.com/about") is False

    def test__is_current_page__absolute_url_for_relative_request(self) -> None:
        request = URLRequestContext("/about")

        assert request.is_current_page("https://shop.example.com/about") is True


class TestNavigationContext:
    """Tests for NavigationContext."""

    def test__for_uri__uses_default_settings(self) -> None:
        context = NavigationContext.for_uri("/")

        assert context.settings == NavigationSettings()
        assert context.request.request_path == "/"

    def test__memoized__computes_once(self) -> None:
        container = NavigationContainer()
        item = container.item("home", "Home", "/")
        assert item is not None
        context = NavigationContext.for_uri("/")
        calls: list[int] = []

        def compute() -> bool:
            calls.append(1)
            return True

        assert context.memoized(item, compute) is True
        assert context.memoized(item, compute) is True
        assert len(calls) == 1

    def test__reset__clears_selection_and_switches_request(self) -> None:
        container = NavigationContainer()
        item = container.item("home", "Home", "/")
        assert item is not None
        context = NavigationContext.for_uri("/")

        assert item.selected(context) is True

        context.reset(URLRequestContext("/elsewhere"))

        assert item.selected(context) is False

    def test__forget__drops_single_item(self) -> None:
        container = NavigationContainer()
        item = container.item("home", "Home", "/")
        assert item is not None
        context = NavigationContext.for_uri("/")
        item.selected(context)

        context.forget(item)

        assert context.memoized(item, lambda: False) is False
