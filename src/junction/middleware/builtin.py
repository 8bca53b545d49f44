"""Built-in middleware: resource switching, guards and request logging."""

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from junction._internal.invoke import invoke
from junction.context import Context
from junction.errors import HTTPError
from junction.http.response import Response
from junction.middleware.chain import Next


class ResourceByPrefix:
    """Swap the context resource based on the request path prefix.

    The longest matching prefix wins. Prefixes match on segment
    boundaries, so ``/archive`` matches ``/archive`` and ``/archive/1``
    but not ``/archived``. Paths with no matching prefix keep the
    resource they arrived with.

    Usage::

        app.add_middleware("store", ResourceByPrefix({
            "/archive": archive_store,
            "/reports": readonly_replica,
        }))
    """

    __slots__ = ("_prefixes",)

    def __init__(self, mapping: Mapping[str, Any]) -> None:
        # Sorted longest first so the first hit is the most specific.
        self._prefixes: tuple[tuple[str, Any], ...] = tuple(
            sorted(
                ((prefix.rstrip("/") or "/", resource) for prefix, resource in mapping.items()),
                key=lambda item: len(item[0]),
                reverse=True,
            )
        )

    def resolve(self, path: str) -> tuple[bool, Any]:
        """Return ``(True, resource)`` for the longest matching prefix, else ``(False, None)``."""
        for prefix, resource in self._prefixes:
            if prefix == "/" or path == prefix or path.startswith(prefix + "/"):
                return True, resource
        return False, None

    async def __call__(self, ctx: Context, next: Next) -> Any:
        found, resource = self.resolve(ctx.path)
        if found:
            ctx.set_resource(resource)
        return await next(ctx)


class Guard:
    """Continue only when ``predicate(ctx)`` is true.

    Otherwise the chain stops here and an error response is returned;
    the route handler never runs. The predicate may be ``async def``.

    Usage::

        def is_internal(ctx: Context) -> bool:
            return ctx.request.headers.get("x-internal") == "1"

        app.add_middleware("internal-only", Guard(is_internal))
    """

    __slots__ = ("detail", "predicate", "status")

    def __init__(
        self,
        predicate: Callable[[Context], Any],
        *,
        status: int = 403,
        detail: str = "Forbidden",
    ) -> None:
        self.predicate = predicate
        self.status = status
        self.detail = detail

    async def __call__(self, ctx: Context, next: Next) -> Any:
        if not await invoke(self.predicate, ctx):
            return Response(self.detail, status=self.status)
        return await next(ctx)


class RequestLogger:
    """Log method, path, status and elapsed time for each request.

    A request that fails downstream is still logged, with the
    ``HTTPError`` status or 500, and the error is re-raised.
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("junction.access")

    async def __call__(self, ctx: Context, next: Next) -> Any:
        start = time.perf_counter()
        try:
            response = await next(ctx)
        except HTTPError as exc:
            self._log(ctx, exc.status, start)
            raise
        except Exception:
            self._log(ctx, 500, start)
            raise
        self._log(ctx, getattr(response, "status", 200), start)
        return response

    def _log(self, ctx: Context, status: int, start: float) -> None:
        elapsed_ms = (time.perf_counter() - start) * 1000
        self.logger.info("%s %s %s %.1fms", ctx.method, ctx.path, status, elapsed_ms)
