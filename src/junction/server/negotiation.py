"""Content negotiation: maps return values to Response objects.

Handlers and short-circuiting middleware may return plain values;
``negotiate`` turns them into a ``Response``. isinstance-based dispatch,
no magic, fully predictable.
"""

import json as json_module
from typing import Any

from junction.http.response import Redirect, Response

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


def negotiate(value: Any, *, text_content_type: str = TEXT_CONTENT_TYPE) -> Response:
    """Convert a handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``Redirect``            -> status (302) with Location header
    3. ``None``                -> 204, empty body
    4. ``str``                 -> 200, *text_content_type*
    5. ``bytes``               -> 200, application/octet-stream
    6. ``dict`` / ``list``     -> 200, application/json
    7. ``(value, int)``        -> negotiate value, override status
    8. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case Redirect():
            return (
                Response(body="")
                .with_status(value.status)
                .with_header("Location", value.url)
                .with_headers(dict(value.headers))
            )
        case None:
            return Response(body="", status=204)
        case str():
            return Response(body=value, content_type=text_content_type)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type="application/json; charset=utf-8",
            )
        case (inner, int() as status):
            return negotiate(inner, text_content_type=text_content_type).with_status(status)
        case (inner, int() as status, dict() as headers):
            return (
                negotiate(inner, text_content_type=text_content_type)
                .with_status(status)
                .with_headers(headers)
            )
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, None, Response, or Redirect."
            )
            raise TypeError(msg)
