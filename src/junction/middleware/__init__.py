"""Middleware: named, ordered, protocol-based (no inheritance required).

A middleware is any callable matching:
    async def mw(ctx: Context, next: Next) -> Response

Built-in middleware:
    Guard -- Stop the chain unless a predicate holds
    RequestLogger -- Log one line per request with status and timing
    ResourceByPrefix -- Swap the context resource by path prefix
"""

from junction.middleware.builtin import Guard, RequestLogger, ResourceByPrefix
from junction.middleware.chain import MiddlewareChain, MiddlewareEntry, Next
from junction.middleware.protocol import Middleware

__all__ = [
    "Guard",
    "Middleware",
    "MiddlewareChain",
    "MiddlewareEntry",
    "Next",
    "RequestLogger",
    "ResourceByPrefix",
]
