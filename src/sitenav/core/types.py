"""Core type definitions."""

from collections.abc import Callable, Hashable
from typing import NewType

# Raw request URI as received (path plus query, e.g. "/products?page=2")
# Distinct from a decoded path to catch type mismatches
RequestURI = NewType("RequestURI", str)

# Identifier of a navigation item, unique within its container
ItemKey = Hashable

# Literal display name or a zero-argument producer evaluated lazily
NameSource = str | Callable[[], str]
