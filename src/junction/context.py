"""Per-request Context and the ContextVar that exposes it.

Provides:
- ``Context``: the mutable bag passed through the middleware chain to
  the terminal handler. Created once per matched request.
- ``context_var`` / ``get_context()``: the active Context for this
  task or thread, set by the dispatcher for the duration of the chain.

Thread safety:
    Each request gets a fresh Context. A resource swapped onto it is
    only read within that request's flow. If the resource object itself
    is shared across requests, it is responsible for its own locking.
"""

from contextvars import ContextVar
from typing import Any

from junction.http.request import Request


class Context:
    """Mutable per-request state.

    ``method`` and ``path`` come from the immutable request. ``captures``
    holds the values extracted by the matcher. The resource slot holds an
    opaque reference (a backing-store handle, for example) that middleware
    may swap for the rest of the request.

    Usage::

        async def use_archive(ctx: Context, next: Next) -> Response:
            if ctx.path.startswith("/archive"):
                ctx.set_resource(archive_store)
            return await next(ctx)
    """

    __slots__ = ("_resource", "captures", "request", "state")

    def __init__(
        self,
        request: Request,
        captures: dict[str, str] | None = None,
        *,
        resource: Any = None,
    ) -> None:
        self.request = request
        self.captures: dict[str, str] = dict(captures or {})
        self.state: dict[str, Any] = {}
        self._resource = resource

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.path

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the capture *name*, or *default* if the pattern had no such segment."""
        return self.captures.get(name, default)

    def __getitem__(self, name: str) -> str:
        return self.captures[name]

    def __contains__(self, name: object) -> bool:
        return name in self.captures

    # -- Resource slot --

    def set_resource(self, resource: Any) -> None:
        """Swap the pluggable resource for the remainder of this request."""
        self._resource = resource

    def get_resource(self) -> Any:
        """Return the current pluggable resource (``None`` if never set)."""
        return self._resource

    @property
    def resource(self) -> Any:
        return self._resource

    def __repr__(self) -> str:
        return f"<Context {self.method} {self.path!r} captures={self.captures!r}>"


# -- Active context --

context_var: ContextVar[Context] = ContextVar("junction_context")
"""The current Context. Set by the dispatcher around the middleware chain."""


def get_context() -> Context:
    """Return the Context of the request being dispatched.

    Raises ``LookupError`` if called outside a request.
    """
    return context_var.get()
