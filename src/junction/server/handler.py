"""ASGI handler: translates ASGI scope/messages to junction types.

The only component that touches raw ASGI HTTP messages. Converts the
scope to a typed Request, runs it through the Dispatcher, and sends the
Response back through ASGI send(). This is the layer that invokes
``Dispatcher.handle``, so it is the one that catches handler failures.
"""

from junction._internal.asgi import Receive, Scope, Send
from junction.errors import HTTPError
from junction.http.request import Request
from junction.server.dispatch import Dispatcher
from junction.server.errors import handle_http_error, handle_internal_error
from junction.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await dispatcher.handle(request)
    except HTTPError as exc:
        response = await handle_http_error(
            exc, request, dispatcher.error_handlers, dispatcher.debug
        )
    except Exception as exc:
        response = await handle_internal_error(
            exc, request, dispatcher.error_handlers, dispatcher.debug
        )

    await send_response(response, send)
