"""Junction application class.

Mutable during setup (route, middleware and error handler registration).
Frozen at runtime when ``app.dispatcher`` or ``__call__()`` is first used.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from junction._internal.asgi import Receive, Scope, Send
from junction._internal.invoke import invoke
from junction._internal.types import ErrorHandler, Handler
from junction.config import AppConfig
from junction.http.request import Request
from junction.http.response import Response
from junction.middleware.chain import MiddlewareChain
from junction.middleware.protocol import Middleware
from junction.routing.route import Route
from junction.routing.router import Router
from junction.server.dispatch import Dispatcher
from junction.server.handler import handle_request

logger = logging.getLogger("junction.server")


class App:
    """The junction application.

    Mutable during setup. Frozen into a ``Dispatcher`` the first time a
    request is served; registering anything after that raises
    ``RuntimeError``.

    Usage::

        app = App(resource=primary_store)

        @app.get("/items/:id[\\d+]")
        def item(id: int, resource):
            return resource.fetch(id)

        app.add_middleware("archive", ResourceByPrefix({"/archive": archive_store}))

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        caller compiles the app, even if several workers receive their
        first request at the same moment.
    """

    __slots__ = (
        "_chain",
        "_dispatcher",
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_resource",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None, *, resource: Any = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._resource = resource
        self._router = Router()
        self._chain = MiddlewareChain()
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._dispatcher: Dispatcher | None = None

    # -- Route registration --

    def add_route(
        self,
        method: str,
        pattern: str,
        handler: Handler,
        *,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *method* and *pattern*.

        The pattern is parsed immediately: ``InvalidPatternError`` is
        raised here, and earlier registrations are unaffected.
        """
        self._check_not_frozen()
        route = self._router.add(method, pattern, handler, name=name)
        logger.debug("Registered route %s %s -> %s", route.method, route.path, _name_of(handler))
        return route

    def route(
        self,
        pattern: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            pattern: Path pattern. ``:name`` captures a segment,
                ``:name[regex]`` captures a segment that fully matches *regex*.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name for ``url_for``.
        """

        def decorator(func: Handler) -> Handler:
            for method in methods or ["GET"]:
                self.add_route(method, pattern, func, name=name)
            return func

        return decorator

    def get(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(pattern, methods=["GET"], name=name)

    def post(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(pattern, methods=["POST"], name=name)

    def put(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(pattern, methods=["PUT"], name=name)

    def patch(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(pattern, methods=["PATCH"], name=name)

    def delete(self, pattern: str, *, name: str | None = None) -> Callable[[Handler], Handler]:
        return self.route(pattern, methods=["DELETE"], name=name)

    def url_for(self, name: str, /, **params: object) -> str:
        """Build a path for the route registered under *name*."""
        return self._router.url_for(name, **params)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, grouped by method."""
        return self._router.routes

    # -- Middleware --

    def add_middleware(self, name: str, middleware: Middleware) -> None:
        """Append a named middleware to the chain.

        Middleware runs in registration order. Raises
        ``DuplicateMiddlewareError`` if *name* is already registered.
        """
        self._check_not_frozen()
        self._chain.add(name, middleware)

    def middleware(self, name: str | Middleware | None = None) -> Any:
        """Register a middleware via decorator. Defaults to the function name.

        Works bare (``@app.middleware``) or called (``@app.middleware("auth")``).
        """
        if callable(name):
            self.add_middleware(_name_of(name), name)
            return name

        def decorator(func: Middleware) -> Middleware:
            self.add_middleware(name or _name_of(func), func)
            return func

        return decorator

    @property
    def middleware_names(self) -> tuple[str, ...]:
        return self._chain.names

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator.

        Keyed by status code (``404``, ``500``...) or exception type.
        """

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Dispatch --

    @property
    def dispatcher(self) -> Dispatcher:
        """The frozen dispatcher. Freezes the app on first access."""
        self._ensure_frozen()
        assert self._dispatcher is not None
        return self._dispatcher

    async def handle(self, request: Request) -> Response:
        """Serve one request. Handler exceptions propagate to the caller."""
        return await self.dispatcher.handle(request)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, dispatcher=self.dispatcher)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Speak the ASGI lifespan protocol.

        The app is frozen before startup hooks run, so the route table is
        final by the time the server sends the first HTTP request.
        """
        self._ensure_frozen()

        while True:
            match (await receive())["type"]:
                case "lifespan.startup":
                    try:
                        await self.startup()
                    except Exception as exc:
                        logger.exception("Startup hook failed")
                        await send({"type": "lifespan.startup.failed", "message": str(exc)})
                        return
                    await send({"type": "lifespan.startup.complete"})
                case "lifespan.shutdown":
                    await self.shutdown()
                    await send({"type": "lifespan.shutdown.complete"})
                    return

    async def startup(self) -> None:
        """Run startup hooks in registration order."""
        await _run_hooks(self._startup_hooks)

    async def shutdown(self) -> None:
        """Run shutdown hooks in registration order."""
        await _run_hooks(self._shutdown_hooks)

    # -- Internal --

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware and hooks before the first request."
            )
            raise RuntimeError(msg)

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        if self.config.log_level:
            logging.getLogger("junction").setLevel(self.config.log_level.upper())

        self._router.compile()
        self._chain.freeze()
        self._dispatcher = Dispatcher(
            self._router,
            self._chain,
            resource=self._resource,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
            offload_sync_handlers=self.config.offload_sync_handlers,
            not_found_detail=self.config.not_found_detail,
            text_content_type=self.config.text_content_type,
        )
        self._frozen = True
        logger.debug(
            "App frozen: %d routes, middleware %s",
            len(self._router.routes),
            ", ".join(self._chain.names) or "(none)",
        )


def _name_of(obj: object) -> str:
    return getattr(obj, "__name__", None) or type(obj).__name__


async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
    for hook in hooks:
        await invoke(hook)
