"""Turn unmatched routes and raised errors into responses.

Each path first looks for a registered error handler (by exception type,
then by status code) and falls back to a plain-text body.
"""

import inspect
import logging
import traceback
from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

from junction._internal.types import ErrorHandler
from junction.errors import HTTPError
from junction.http.request import Request
from junction.http.response import Response
from junction.routing.route import NotFound
from junction.server.negotiation import negotiate

logger = logging.getLogger("junction.server")

ErrorHandlers: TypeAlias = Mapping[int | type, ErrorHandler]


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    error: Exception | NotFound,
) -> Response:
    """Call *handler* with as many of ``(request, error)`` as it accepts."""
    arity = len(inspect.signature(handler).parameters)
    result = handler(*(request, error)[: min(arity, 2)])
    if inspect.isawaitable(result):
        result = await result
    return negotiate(result)


async def _from_handler(
    handler: Callable[..., Any],
    request: Request,
    error: Exception | NotFound,
    status: int,
) -> Response:
    # A handler that returns a plain value keeps the error's status
    response = await call_error_handler(handler, request, error)
    return response.with_status(status) if response.status == 200 else response


async def handle_not_found(
    miss: NotFound,
    request: Request,
    error_handlers: ErrorHandlers,
    detail: str,
    debug: bool,
) -> Response:
    """404 for a request no route matched."""
    logger.debug("404 %s %s: %s", request.method, request.path, miss.detail)

    if (handler := error_handlers.get(404)) is not None:
        return await _from_handler(handler, request, miss, 404)
    return Response(f"{detail}: {miss.detail}" if debug else detail, status=404)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """Response for an ``HTTPError`` raised by middleware or a handler."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        return await _from_handler(handler, request, exc, exc.status)

    if not exc.detail:
        body = f"Error {exc.status}"
    elif debug:
        body = f"{exc.status}: {exc.detail}"
    else:
        body = exc.detail
    return Response(body, status=exc.status, headers=exc.headers)


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: ErrorHandlers,
    debug: bool,
) -> Response:
    """500 for anything else. Always logged with its traceback."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        return await _from_handler(handler, request, exc, 500)

    if debug:
        return Response("".join(traceback.format_exception(exc)), status=500)
    return Response("Internal Server Error", status=500)
