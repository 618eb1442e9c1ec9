"""Explicit highlight rules for navigation items.

An item either relies on auto highlighting (URL matching against the current
page) or carries one of the rules below, which then decides on its own whether
the item is selected.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sitenav.core.context import NavigationContext

SUBPATH = "subpath"


@dataclass(frozen=True)
class PatternRule:
    """Selected when the pattern matches anywhere in the raw request URI."""

    pattern: re.Pattern[str]


@dataclass(frozen=True)
class PredicateRule:
    """Selected when the zero-argument predicate returns a truthy value."""

    predicate: Callable[[], object]


@dataclass(frozen=True)
class SubpathRule:
    """Selected when the request URI lies under the item's URL.

    ``/products`` is selected for ``/products``, ``/products/42`` and
    ``/products?page=2`` but not for ``/products-other``.
    """


HighlightRule = PatternRule | PredicateRule | SubpathRule


def parse_highlight_rule(value: object) -> HighlightRule | None:
    """Convert a raw ``highlights_on`` option into a rule.

    Args:
        value: Compiled pattern, callable, the string "subpath", an existing
               rule or None

    Returns:
        Matching rule, None when no rule was given

    Raises:
        ValueError: If the value is not a supported rule
    """
    match value:
        case None:
            return None
        case PatternRule() | PredicateRule() | SubpathRule():
            return value
        case re.Pattern():
            return PatternRule(value)
        case str() if value == SUBPATH:
            return SubpathRule()
        case str():
            raise ValueError(
                f"highlights_on must be a pattern, a callable or 'subpath', got {value!r}"
            )
        case _ if callable(value):
            return PredicateRule(value)
        case _:
            raise ValueError(
                "highlights_on must be a pattern, a callable or 'subpath', "
                f"got {type(value).__name__}"
            )


def rule_matches(
    rule: HighlightRule,
    url: str | None,
    context: NavigationContext,
) -> bool:
    """Evaluate an explicit highlight rule for the current request.

    Args:
        rule: Rule attached to the item
        url: Item URL, used by the subpath rule only
        context: Render pass providing the current request

    Returns:
        True if the rule selects the item

    Raises:
        ValueError: If rule is not a known rule type
    """
    match rule:
        case PatternRule(pattern=pattern):
            return pattern.search(context.request.request_uri) is not None
        case PredicateRule(predicate=predicate):
            return bool(predicate())
        case SubpathRule():
            return subpath_matches(url, context.request.request_uri)
        case _:
            raise ValueError(f"Unsupported highlight rule: {rule!r}")


def subpath_matches(url: str | None, request_uri: str) -> bool:
    """Check if request_uri is url itself or lies below it."""
    base = strip_anchor(url)
    if base is None:
        return False
    pattern = rf"^{re.escape(base)}(/|$|\?)"
    return re.search(pattern, request_uri, re.IGNORECASE) is not None


def strip_anchor(url: str | None) -> str | None:
    """Return url without its ``#fragment`` suffix."""
    if url is None:
        return None
    return url.split("#", 1)[0]
