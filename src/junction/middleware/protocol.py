"""Middleware protocol.

A middleware is any callable matching::

    async def my_mw(ctx: Context, next: Next) -> Any: ...

No base class required. Plain ``def`` works too; its return value is
awaited if awaitable. Whatever the middleware returns is the response
for everything upstream of it: ``await next(ctx)`` to continue, or
return a value without calling ``next`` to short-circuit.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias

from junction.context import Context

if TYPE_CHECKING:
    from junction.middleware.chain import Next

# The terminal handler the chain ends in
Terminal: TypeAlias = Callable[[Context], Any]


class Middleware(Protocol):
    """Protocol for junction middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(ctx: Context, next: Next) -> Any:
            start = time.monotonic()
            response = await next(ctx)
            ctx.state["elapsed"] = time.monotonic() - start
            return response

        # Class middleware
        class Deny:
            async def __call__(self, ctx: Context, next: Next) -> Any:
                return Response("Forbidden", status=403)
    """

    def __call__(self, ctx: Context, next: Next, /) -> Any: ...
