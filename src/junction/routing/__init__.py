"""Routing: pattern parsing and a linear, first-match route table.

Routes are registered during setup and frozen into an immutable
lookup structure when the app freezes.
"""

from junction.routing.pattern import parse_pattern, split_path
from junction.routing.route import (
    Literal,
    Named,
    NamedRegex,
    NoMatchForMethod,
    NotFound,
    Route,
    RouteMatch,
    RoutePattern,
    Segment,
)
from junction.routing.router import Router

__all__ = [
    "Literal",
    "Named",
    "NamedRegex",
    "NoMatchForMethod",
    "NotFound",
    "Route",
    "RouteMatch",
    "RoutePattern",
    "Router",
    "Segment",
    "parse_pattern",
    "split_path",
]
