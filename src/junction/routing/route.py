"""Segment, pattern, Route, RouteMatch and NotFound frozen dataclasses."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class Literal:
    """A segment that must equal ``value`` exactly: ``/users``."""

    value: str

    def matches(self, part: str) -> bool:
        return part == self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Named:
    """A segment that captures any non-empty text: ``/:id``."""

    name: str

    def matches(self, part: str) -> bool:
        return part != ""

    def __str__(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True, slots=True)
class NamedRegex:
    """A capture constrained by a regex the whole segment must match: ``/:id[\\d+]``."""

    name: str
    regex: re.Pattern[str]

    def matches(self, part: str) -> bool:
        return self.regex.fullmatch(part) is not None

    def __str__(self) -> str:
        return f":{self.name}[{self.regex.pattern}]"


Segment: TypeAlias = Literal | Named | NamedRegex


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """A parsed route pattern.

    ``source`` is the string the pattern was registered with;
    ``segments`` is the ordered parse of it.
    """

    source: str
    segments: tuple[Segment, ...]

    @property
    def param_names(self) -> tuple[str, ...]:
        """Names of the capturing segments, in path order."""
        return tuple(
            seg.name for seg in self.segments if isinstance(seg, Named | NamedRegex)
        )

    def match(self, parts: list[str]) -> dict[str, str] | None:
        """Match already-split path parts. Returns captures or ``None``."""
        if len(parts) != len(self.segments):
            return None
        captures: dict[str, str] = {}
        for seg, part in zip(self.segments, parts, strict=True):
            if not seg.matches(part):
                return None
            if not isinstance(seg, Literal):
                captures[seg.name] = part
        return captures

    def __str__(self) -> str:
        return "/" + "/".join(str(seg) for seg in self.segments)


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition. Owned by the Router once registered."""

    method: str
    pattern: RoutePattern
    handler: Callable[..., Any]
    name: str | None = None

    @property
    def path(self) -> str:
        """The pattern string the route was registered with."""
        return self.pattern.source


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    captures: dict[str, str]


@dataclass(frozen=True, slots=True)
class NotFound:
    """Result of a match that found no route.

    A normal per-request outcome, returned by ``Router.match`` rather
    than raised.
    """

    method: str
    path: str

    @property
    def detail(self) -> str:
        return f"No route matches {self.method} {self.path!r}"


@dataclass(frozen=True, slots=True)
class NoMatchForMethod(NotFound):
    """No routes are registered for the request method at all."""

    @property
    def detail(self) -> str:
        return f"No routes registered for method {self.method}"
