"""Tests for highlight rules."""

import re

import pytest
from sitenav.core.context import NavigationContext
from sitenav.core.highlight import (
    PatternRule,
    PredicateRule,
    SubpathRule,
    parse_highlight_rule,
    rule_matches,
    strip_anchor,
    subpath_matches,
)


class TestParseHighlightRule:
    """Tests for parse_highlight_rule()."""

    def test__none__returns_none(self) -> None:
        assert parse_highlight_rule(None) is None

    def test__pattern__returns_pattern_rule(self) -> None:
        pattern = re.compile(r"^/admin")

        rule = parse_highlight_rule(pattern)

        assert rule == PatternRule(pattern)

    def test__callable__returns_predicate_rule(self) -> None:
        def predicate() -> bool:
            return True

        rule = parse_highlight_rule(predicate)

        assert rule == PredicateRule(predicate)

    def test__subpath_string__returns_subpath_rule(self) -> None:
        assert parse_highlight_rule("subpath") == SubpathRule()

    def test__existing_rule__returned_unchanged(self) -> None:
        rule = SubpathRule()

        assert parse_highlight_rule(rule) is rule

    def test__other_string__raises(self) -> None:
        """Plain strings are not treated as patterns."""
        with pytest.raises(ValueError, match="highlights_on must be"):
            parse_highlight_rule("^/admin")

    def test__unsupported_type__raises(self) -> None:
        with pytest.raises(ValueError, match="got int"):
            parse_highlight_rule(42)


class TestRuleMatches:
    """Tests for rule_matches()."""

    def test__pattern__matches_anywhere_in_request_uri(self) -> None:
        context = NavigationContext.for_uri("/shop/admin/users?page=2")
        rule = PatternRule(re.compile(r"admin"))

        assert rule_matches(rule, "/elsewhere", context) is True

    def test__pattern__sees_query_string(self) -> None:
        context = NavigationContext.for_uri("/search?tab=images")
        rule = PatternRule(re.compile(r"tab=images"))

        assert rule_matches(rule, None, context) is True

    def test__pattern__no_match__returns_false(self) -> None:
        context = NavigationContext.for_uri("/products")
        rule = PatternRule(re.compile(r"^/admin"))

        assert rule_matches(rule, "/products", context) is False

    def test__predicate__result_is_authoritative(self) -> None:
        context = NavigationContext.for_uri("/anything")

        assert rule_matches(PredicateRule(lambda: True), None, context) is True
        assert rule_matches(PredicateRule(lambda: False), "/anything", context) is False

    def test__predicate__truthy_value__returns_bool(self) -> None:
        context = NavigationContext.for_uri("/")

        assert rule_matches(PredicateRule(lambda: "yes"), None, context) is True

    def test__subpath__uses_item_url(self) -> None:
        context = NavigationContext.for_uri("/products/42")

        assert rule_matches(SubpathRule(), "/products", context) is True

    def test__unknown_rule__raises(self) -> None:
        context = NavigationContext.for_uri("/")

        with pytest.raises(ValueError, match="Unsupported highlight rule"):
            rule_matches("subpath", "/", context)  # type: ignore[arg-type]


class TestSubpathMatches:
    """Tests for subpath_matches()."""

    @pytest.mark.parametrize(
        ("request_uri", "expected"),
        [
            ("/products", True),
            ("/products/42", True),
            ("/products?x=1", True),
            ("/PRODUCTS/42", True),
            ("/products-other", False),
            ("/productsother", False),
            ("/shop/products", False),
        ],
    )
    def test__products_url(self, request_uri: str, expected: bool) -> None:
        assert subpath_matches("/products", request_uri) is expected

    def test__anchor_is_ignored(self) -> None:
        assert subpath_matches("/products#top", "/products/42") is True

    def test__special_characters_are_literal(self) -> None:
        assert subpath_matches("/a.b", "/a.b/c") is True
        assert subpath_matches("/a.b", "/axb/c") is False

    def test__no_url__returns_false(self) -> None:
        assert subpath_matches(None, "/products") is False


class TestStripAnchor:
    """Tests for strip_anchor()."""

    def test__removes_fragment(self) -> None:
        assert strip_anchor("/about#team") == "/about"

    def test__without_fragment__unchanged(self) -> None:
        assert strip_anchor("/about") == "/about"

    def test__none__returns_none(self) -> None:
        assert strip_anchor(None) is None
