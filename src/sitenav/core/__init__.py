"""Navigation core: items, containers and selection."""

from sitenav.core.container import NavigationContainer
from sitenav.core.context import NavigationContext, NavigationSettings, URLRequestContext
from sitenav.core.highlight import PatternRule, PredicateRule, SubpathRule
from sitenav.core.item import NavigationItem

__all__ = [
    "NavigationContainer",
    "NavigationContext",
    "NavigationItem",
    "NavigationSettings",
    "PatternRule",
    "PredicateRule",
    "SubpathRule",
    "URLRequestContext",
]
