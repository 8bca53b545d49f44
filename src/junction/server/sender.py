"""Write a Response out as ASGI ``http.response.*`` messages."""

from junction._internal.asgi import Send
from junction.http.response import Response

# Statuses that never carry a message body
_BODYLESS = frozenset({204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Emit ``http.response.start`` then a single ``http.response.body``.

    Header names are lower-cased. Content-Length always reflects what is
    actually sent, which is nothing for 1xx, 204 and 304.
    """
    status = response.status
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes

    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    )
    headers.append((b"content-length", b"%d" % len(body)))

    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body})
