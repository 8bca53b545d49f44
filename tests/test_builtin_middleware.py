"""Tests for the built-in middleware: ResourceByPrefix, Guard, RequestLogger."""

import logging

import pytest

from junction import App, HTTPError
from junction.context import Context
from junction.middleware import Guard, RequestLogger, ResourceByPrefix
from junction.testing import TestClient


class TestResourceByPrefix:
    def test_longest_prefix_wins(self) -> None:
        mw = ResourceByPrefix({"/archive": "archive", "/archive/old": "cold"})
        assert mw.resolve("/archive/old/1") == (True, "cold")
        assert mw.resolve("/archive/new") == (True, "archive")

    def test_segment_boundaries(self) -> None:
        mw = ResourceByPrefix({"/archive": "archive"})
        assert mw.resolve("/archive") == (True, "archive")
        assert mw.resolve("/archived") == (False, None)

    def test_root_prefix_matches_everything(self) -> None:
        mw = ResourceByPrefix({"/": "any"})
        assert mw.resolve("/whatever/here") == (True, "any")

    def test_trailing_slash_in_prefix(self) -> None:
        mw = ResourceByPrefix({"/archive/": "archive"})
        assert mw.resolve("/archive/1") == (True, "archive")

    @pytest.mark.anyio
    async def test_swaps_resource_for_handler(self) -> None:
        app = App(resource="primary")
        app.add_middleware("store", ResourceByPrefix({"/archive": "archive"}))

        @app.get("/archive/:id")
        def archived(id: str, resource: str) -> str:
            return f"{resource}:{id}"

        @app.get("/live/:id")
        def live(id: str, resource: str) -> str:
            return f"{resource}:{id}"

        async with TestClient(app) as client:
            assert (await client.get("/archive/7")).text == "archive:7"
            assert (await client.get("/live/7")).text == "primary:7"


class TestGuard:
    @pytest.mark.anyio
    async def test_blocks_when_predicate_false(self) -> None:
        calls: list[str] = []
        app = App()
        app.add_middleware("internal", Guard(lambda ctx: ctx.request.headers.get("x-internal") == "1"))

        @app.get("/admin")
        def admin() -> str:
            calls.append("admin")
            return "secret"

        async with TestClient(app) as client:
            denied = await client.get("/admin")
            allowed = await client.get("/admin", headers={"X-Internal": "1"})

        assert denied.status == 403
        assert denied.text == "Forbidden"
        assert allowed.status == 200
        assert allowed.text == "secret"
        assert calls == ["admin"]

    @pytest.mark.anyio
    async def test_custom_status_and_detail(self) -> None:
        app = App()
        app.add_middleware("closed", Guard(lambda ctx: False, status=503, detail="Closed"))

        @app.get("/")
        def index() -> str:
            return "open"

        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 503
        assert response.text == "Closed"

    @pytest.mark.anyio
    async def test_async_predicate_is_awaited(self) -> None:
        ran: list[str] = []

        async def never(ctx: Context) -> bool:
            return False

        app = App()
        app.add_middleware("never", Guard(never))

        @app.get("/secret")
        def secret() -> str:
            ran.append("handler")
            return "secret"

        async with TestClient(app) as client:
            response = await client.get("/secret")

        assert response.status == 403
        assert ran == []


class TestRequestLogger:
    @pytest.mark.anyio
    async def test_logs_one_line(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()
        app.add_middleware("access", RequestLogger())

        @app.get("/ping")
        def ping() -> str:
            return "pong"

        with caplog.at_level(logging.INFO, logger="junction.access"):
            async with TestClient(app) as client:
                await client.get("/ping")

        records = [r for r in caplog.records if r.name == "junction.access"]
        assert len(records) == 1
        assert records[0].getMessage().startswith("GET /ping 200 ")

    @pytest.mark.anyio
    async def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        custom = logging.getLogger("tests.access")
        app = App()
        app.add_middleware("access", RequestLogger(custom))

        @app.get("/")
        def index(ctx: Context) -> str:
            return ctx.path

        with caplog.at_level(logging.INFO, logger="tests.access"):
            async with TestClient(app) as client:
                await client.get("/")

        assert any(r.name == "tests.access" for r in caplog.records)

    @pytest.mark.anyio
    async def test_logs_when_downstream_raises(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()
        app.add_middleware("access", RequestLogger())

        @app.get("/denied")
        def denied() -> str:
            raise HTTPError(status=401, detail="Login required")

        @app.get("/boom")
        def boom() -> str:
            raise RuntimeError("boom")

        with caplog.at_level(logging.INFO, logger="junction.access"):
            async with TestClient(app) as client:
                denied_response = await client.get("/denied")
                boom_response = await client.get("/boom")

        assert denied_response.status == 401
        assert boom_response.status == 500
        lines = [r.getMessage() for r in caplog.records if r.name == "junction.access"]
        assert len(lines) == 2
        assert lines[0].startswith("GET /denied 401 ")
        assert lines[1].startswith("GET /boom 500 ")
