"""Dispatcher: the frozen configuration object that serves requests.

Bundles the compiled router, the frozen middleware chain, the default
resource and the error handlers. ``handle`` runs one request through
matcher, chain and terminal handler, and returns a Response.

Errors raised by middleware or handlers propagate out of ``handle``;
the caller (the ASGI handler) maps them to responses.
"""

import inspect
from collections.abc import Callable
from contextvars import Token
from typing import Any

from junction._internal.invoke import invoke, invoke_offloaded
from junction.context import Context, context_var
from junction.http.request import Request
from junction.http.response import Response
from junction.middleware.chain import MiddlewareChain
from junction.routing.route import NotFound, RouteMatch
from junction.routing.router import Router
from junction.server.errors import handle_not_found
from junction.server.negotiation import TEXT_CONTENT_TYPE, negotiate


class Dispatcher:
    """Serve requests from a frozen router and middleware chain.

    Both collaborators are read-only once handed over, so one Dispatcher
    can be shared by every concurrent request without locking.
    """

    __slots__ = (
        "chain",
        "debug",
        "error_handlers",
        "not_found_detail",
        "offload_sync_handlers",
        "resource",
        "router",
        "text_content_type",
    )

    def __init__(
        self,
        router: Router,
        chain: MiddlewareChain,
        *,
        resource: Any = None,
        error_handlers: dict[int | type, Callable[..., Any]] | None = None,
        debug: bool = False,
        offload_sync_handlers: bool = False,
        not_found_detail: str = "Not Found",
        text_content_type: str = TEXT_CONTENT_TYPE,
    ) -> None:
        self.router = router
        self.chain = chain
        self.resource = resource
        self.error_handlers = dict(error_handlers or {})
        self.debug = debug
        self.offload_sync_handlers = offload_sync_handlers
        self.not_found_detail = not_found_detail
        self.text_content_type = text_content_type

    def match(self, method: str, path: str) -> RouteMatch | NotFound:
        return self.router.match(method, path)

    async def handle(self, request: Request) -> Response:
        """Run *request* through matcher, middleware chain and route handler.

        An unmatched route is answered with a 404 response without
        running the chain.
        """
        match = self.router.match(request.method, request.path)
        if isinstance(match, NotFound):
            return await handle_not_found(
                match,
                request,
                self.error_handlers,
                self.not_found_detail,
                self.debug,
            )

        async def terminal(final_ctx: Context) -> Response:
            return await self._invoke_handler(match, final_ctx)

        ctx = Context(request, match.captures, resource=self.resource)
        token: Token[Context] = context_var.set(ctx)
        try:
            result = await self.chain.run(ctx, terminal)
        finally:
            context_var.reset(token)

        return negotiate(result, text_content_type=self.text_content_type)

    async def _invoke_handler(self, match: RouteMatch, ctx: Context) -> Response:
        """Call the matched route handler and negotiate its return value."""
        handler = match.route.handler
        kwargs = build_handler_kwargs(handler, ctx)
        if self.offload_sync_handlers:
            result = await invoke_offloaded(handler, **kwargs)
        else:
            result = await invoke(handler, **kwargs)
        return negotiate(result, text_content_type=self.text_content_type)


def build_handler_kwargs(handler: Callable[..., Any], ctx: Context) -> dict[str, Any]:
    """Inspect the handler signature and build kwargs from the Context.

    Resolution order:
    1. ``ctx`` / ``context`` parameter (by name or ``Context`` annotation)
    2. ``request`` parameter (by name or ``Request`` annotation)
    3. ``resource`` parameter: the Context's current resource
    4. Captures, by name, converted to the annotated type when possible
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name in ("ctx", "context") or param.annotation is Context:
            kwargs[name] = ctx
        elif name == "request" or param.annotation is Request:
            kwargs[name] = ctx.request
        elif name == "resource":
            kwargs[name] = ctx.get_resource()
        elif name in ctx.captures:
            value = ctx.captures[name]
            if param.annotation is not inspect.Parameter.empty and param.annotation is not str:
                try:
                    kwargs[name] = param.annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value

    return kwargs
