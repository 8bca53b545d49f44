"""junction: path routing with ordered, named middleware dispatch.

Routes match by linear scan in registration order (first match wins).
Middleware runs in registration order and decides, through an explicit
``next`` continuation, whether the rest of the chain and the route
handler run at all.

Basic usage::

    from junction import App, Context, Next

    app = App(resource=primary_store)

    @app.get("/items/:id[\\d+]")
    def item(id: int, resource):
        return resource.fetch(id)

    @app.middleware("archive")
    async def archive(ctx: Context, next: Next):
        if ctx.path.startswith("/archive/"):
            ctx.set_resource(archive_store)
        return await next(ctx)

``App`` is an ASGI 3 application; serve it with any ASGI server.
"""

import importlib

__version__ = "0.1.0"

# Public name -> defining module. Resolved on first attribute access so
# ``import junction`` stays cheap.
_LAZY_IMPORTS: dict[str, str] = {
    "App": "junction.app",
    "AppConfig": "junction.config",
    "ConfigurationError": "junction.errors",
    "Context": "junction.context",
    "DuplicateMiddlewareError": "junction.errors",
    "HTTPError": "junction.errors",
    "InvalidPatternError": "junction.errors",
    "JunctionError": "junction.errors",
    "Middleware": "junction.middleware.protocol",
    "MiddlewareChain": "junction.middleware.chain",
    "Next": "junction.middleware.chain",
    "NoMatchForMethod": "junction.routing.route",
    "NotFound": "junction.routing.route",
    "Redirect": "junction.http.response",
    "Request": "junction.http.request",
    "Response": "junction.http.response",
    "RouteMatch": "junction.routing.route",
    "Router": "junction.routing.router",
    "URLBuildError": "junction.errors",
    "get_context": "junction.context",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for the public API."""
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_name), name)
