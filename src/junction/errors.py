"""Junction exception hierarchy.

Shared across Router, MiddlewareChain, App and the ASGI handler so every
module raises and catches the same types.

Unmatched paths are not exceptions: the router returns a ``NotFound``
result value (see ``junction.routing.route``).
"""

from dataclasses import dataclass


class JunctionError(Exception):
    """Base for all junction-specific errors."""


class ConfigurationError(JunctionError):
    """Raised when setup-time configuration is invalid.

    Raised at registration time, while the App is still mutable, so the
    failing call can be reported without tearing down the process.
    """


class InvalidPatternError(ConfigurationError):
    """A route pattern string could not be parsed.

    The offending pattern is kept on ``.pattern`` for reporting.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


class DuplicateMiddlewareError(ConfigurationError):
    """A middleware with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Middleware {name!r} is already registered.")


class URLBuildError(ConfigurationError):
    """Reverse routing could not build a path from the given params."""


@dataclass(frozen=True, slots=True)
class HTTPError(JunctionError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware or handlers. The ASGI handler catches these
    and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)
