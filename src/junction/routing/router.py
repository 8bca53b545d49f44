"""Route table with linear, first-match path matching.

Routes are registered during setup and frozen into an immutable lookup
structure when the app freezes. Matching scans the method's routes in
registration order and returns the first full match: not the longest
prefix, not the most specific.
"""

from collections.abc import Callable
from typing import Any

from junction.errors import URLBuildError
from junction.routing.pattern import parse_pattern, split_path
from junction.routing.route import (
    Literal,
    NamedRegex,
    NoMatchForMethod,
    NotFound,
    Route,
    RouteMatch,
)


class Router:
    """Route table keyed by HTTP method.

    Usage::

        router = Router()
        router.add("GET", "/users/:id[\\d+]", handler)
        router.compile()
        match = router.match("GET", "/users/42")
    """

    __slots__ = ("_compiled", "_named", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, list[Route] | tuple[Route, ...]] = {}
        self._named: dict[str, Route] = {}
        self._compiled = False

    def add(
        self,
        method: str,
        pattern: str,
        handler: Callable[..., Any],
        *,
        name: str | None = None,
    ) -> Route:
        """Parse *pattern* and append a route. Must be called before compile().

        Raises ``InvalidPatternError`` if the pattern is malformed; the
        table is left unchanged in that case. Duplicate patterns are
        accepted and the earlier registration wins at match time.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        route = Route(
            method=method.upper(),
            pattern=parse_pattern(pattern),
            handler=handler,
            name=name,
        )
        self._routes[route.method] = [*self._routes.get(route.method, ()), route]
        if name is not None:
            self._named.setdefault(name, route)
        return route

    def compile(self) -> None:
        """Freeze the router. No more routes can be added.

        Each method's route list becomes a tuple in registration order.
        """
        self._routes = {method: tuple(routes) for method, routes in self._routes.items()}
        self._compiled = True

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, grouped by method in first-seen order."""
        return [route for routes in self._routes.values() for route in routes]

    @property
    def methods(self) -> frozenset[str]:
        """Methods that have at least one route."""
        return frozenset(self._routes)

    def match(self, method: str, path: str) -> RouteMatch | NotFound:
        """Match a request method and path against the route table.

        Returns a ``RouteMatch`` on success. Returns ``NoMatchForMethod``
        if nothing is registered for *method*, otherwise ``NotFound``.
        """
        method = method.upper()
        candidates = self._routes.get(method)
        if not candidates:
            return NoMatchForMethod(method=method, path=path)

        parts = split_path(path)
        for route in candidates:
            captures = route.pattern.match(parts)
            if captures is not None:
                return RouteMatch(route=route, captures=captures)

        return NotFound(method=method, path=path)

    def url_for(self, name: str, /, **params: object) -> str:
        """Build a path for the route registered under *name*.

        Raises ``KeyError`` for an unknown name and ``URLBuildError`` when
        params are missing, unexpected, or violate a regex constraint.
        """
        route = self._named[name]
        pattern = route.pattern

        missing = [p for p in pattern.param_names if p not in params]
        if missing:
            msg = f"Route {name!r} requires params: {', '.join(missing)}"
            raise URLBuildError(msg)
        extra = sorted(set(params) - set(pattern.param_names))
        if extra:
            msg = f"Route {name!r} got unexpected params: {', '.join(extra)}"
            raise URLBuildError(msg)

        parts: list[str] = []
        for seg in pattern.segments:
            if isinstance(seg, Literal):
                parts.append(seg.value)
                continue
            value = str(params[seg.name])
            if "/" in value or not seg.matches(value):
                constraint = seg.regex.pattern if isinstance(seg, NamedRegex) else "non-empty"
                msg = f"Value {value!r} for {seg.name!r} does not satisfy {constraint!r}"
                raise URLBuildError(msg)
            parts.append(value)

        return "/" + "/".join(parts)
