"""Tests for junction.routing.route: frozen routing dataclasses."""

import re

import pytest

from junction.routing.pattern import parse_pattern
from junction.routing.route import (
    Literal,
    Named,
    NamedRegex,
    NoMatchForMethod,
    NotFound,
    Route,
    RouteMatch,
)


def _handler() -> str:
    return "ok"


class TestSegments:
    def test_literal_matches_exactly(self) -> None:
        assert Literal("users").matches("users")
        assert not Literal("users").matches("Users")

    def test_named_matches_non_empty(self) -> None:
        assert Named("id").matches("anything")
        assert not Named("id").matches("")

    def test_named_regex_full_match(self) -> None:
        seg = NamedRegex("id", re.compile(r"\d+"))
        assert seg.matches("123")
        assert not seg.matches("123abc")

    def test_str_round_trips_syntax(self) -> None:
        pattern = parse_pattern(r"/items/:id[\d+]/:slug")
        assert str(pattern) == r"/items/:id[\d+]/:slug"


class TestRoutePattern:
    def test_match_returns_captures(self) -> None:
        pattern = parse_pattern("/a/:x/b/:y")
        assert pattern.match(["a", "1", "b", "2"]) == {"x": "1", "y": "2"}

    def test_match_length_mismatch(self) -> None:
        assert parse_pattern("/a/:x").match(["a"]) is None

    def test_match_literal_mismatch(self) -> None:
        assert parse_pattern("/a/:x").match(["b", "1"]) is None


class TestRoute:
    def test_creation(self) -> None:
        route = Route(method="GET", pattern=parse_pattern("/users"), handler=_handler)
        assert route.path == "/users"
        assert route.name is None

    def test_frozen(self) -> None:
        route = Route(method="GET", pattern=parse_pattern("/"), handler=_handler)
        with pytest.raises(AttributeError):
            route.method = "POST"  # type: ignore[misc]


class TestRouteMatch:
    def test_creation(self) -> None:
        route = Route(method="GET", pattern=parse_pattern("/users/:id"), handler=_handler)
        match = RouteMatch(route=route, captures={"id": "42"})
        assert match.route is route
        assert match.captures == {"id": "42"}


class TestNotFound:
    def test_detail(self) -> None:
        assert NotFound("GET", "/x").detail == "No route matches GET '/x'"

    def test_no_match_for_method_detail(self) -> None:
        miss = NoMatchForMethod("PATCH", "/x")
        assert miss.detail == "No routes registered for method PATCH"

    def test_equality(self) -> None:
        assert NotFound("GET", "/x") == NotFound("GET", "/x")
