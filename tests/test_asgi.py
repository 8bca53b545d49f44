"""Tests for the ASGI entry point and the in-process TestClient."""

from typing import Any

import pytest

from junction.app import App
from junction.context import Context
from junction.server.handler import handle_request
from junction.testing import TestClient


def _app() -> App:
    app = App()

    @app.get("/search")
    def search(request):
        return request.query.get("q", "")

    @app.put("/items/:id")
    async def replace(id: str, request):
        return f"{id}={(await request.body()).decode()}"

    @app.get("/whoami")
    def whoami(ctx: Context):
        return ctx.request.headers.get("x-user", "anonymous")

    return app


class TestHandleRequest:
    @pytest.mark.anyio
    async def test_non_http_scope_is_ignored(self) -> None:
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await handle_request({"type": "websocket"}, receive, send, dispatcher=_app().dispatcher)
        assert sent == []

    @pytest.mark.anyio
    async def test_raw_asgi_roundtrip(self) -> None:
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        scope = {"type": "http", "method": "GET", "path": "/search", "query_string": b"q=router"}
        await _app()(scope, receive, send)

        assert sent[0]["status"] == 200
        assert sent[1]["body"] == b"router"


class TestTestClient:
    @pytest.mark.anyio
    async def test_query_string(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/search?q=junction")
        assert response.text == "junction"

    @pytest.mark.anyio
    async def test_body_and_capture(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.put("/items/9", body=b"nine")
        assert response.text == "9=nine"

    @pytest.mark.anyio
    async def test_headers(self) -> None:
        async with TestClient(_app()) as client:
            anonymous = await client.get("/whoami")
            named = await client.get("/whoami", headers={"X-User": "ada"})
        assert anonymous.text == "anonymous"
        assert named.text == "ada"

    @pytest.mark.anyio
    async def test_content_length_not_exposed(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/search?q=a")
        assert response.header("content-length") is None
        assert response.content_type == "text/plain; charset=utf-8"

    @pytest.mark.anyio
    async def test_unknown_method_is_404(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.request("PATCH", "/search")
        assert response.status == 404

    def test_client_is_documented_and_not_collected(self) -> None:
        assert TestClient.__doc__ is not None
        assert TestClient.__doc__.startswith("Drive a junction App")
        assert TestClient.__test__ is False
