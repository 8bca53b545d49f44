"""Tests for junction.cli: entrypoint, app resolution and ``junction routes``."""

import sys
import types

import pytest

from junction.app import App
from junction.cli import main
from junction.cli._resolve import resolve_app


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with a junction App on sys.modules."""
    app = App()

    @app.get("/", name="home")
    def index():
        return "home"

    @app.get("/users/:id[\\d+]")
    def user(id: int):
        return str(id)

    @app.post("/users")
    def create_user():
        return "created"

    async def auth(ctx, next):
        return await next(ctx)

    async def store(ctx, next):
        return await next(ctx)

    app.add_middleware("auth", auth)
    app.add_middleware("store", store)

    mod = types.ModuleType("_fake_junction_app")
    mod.app = app  # type: ignore[attr-defined]
    mod.empty = App()  # type: ignore[attr-defined]
    mod.factory = App  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    mod.holder = types.SimpleNamespace(app=app)  # type: ignore[attr-defined]
    mod.bad_factory = lambda: "nope"  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_junction_app", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_routes_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert "junction" in captured.out


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_junction_app:app"), App)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        assert resolve_app("_fake_junction_app") is resolve_app("_fake_junction_app:app")

    def test_factory_is_called(self) -> None:
        assert isinstance(resolve_app("_fake_junction_app:factory"), App)

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_junction_app:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a junction\.App instance"):
            resolve_app("_fake_junction_app:not_an_app")

    def test_dotted_attribute(self) -> None:
        assert resolve_app("_fake_junction_app:holder.app") is resolve_app("_fake_junction_app")

    def test_factory_returning_non_app(self) -> None:
        with pytest.raises(TypeError, match=r"returned str, not a junction\.App instance"):
            resolve_app("_fake_junction_app:bad_factory")


@pytest.mark.usefixtures("_fake_app_module")
class TestRoutesCommand:
    def test_lists_routes_in_match_order(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_junction_app:app"])
        out = capsys.readouterr().out.splitlines()

        assert out[0].split() == ["METHOD", "PATTERN", "HANDLER"]
        body = [line.split() for line in out[2:5]]
        assert body == [
            ["GET", "/", "index", "(home)"],
            ["GET", "/users/:id[\\d+]", "user"],
            ["POST", "/users", "create_user"],
        ]

    def test_prints_middleware_chain(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_junction_app:app"])
        assert "Middleware: auth -> store" in capsys.readouterr().out

    def test_method_filter(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_junction_app:app", "--method", "post"])
        out = capsys.readouterr().out
        assert "/users" in out
        assert "index" not in out

    def test_empty_app(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_junction_app:empty"])
        out = capsys.readouterr().out
        assert "No routes registered." in out
        assert "Middleware" not in out

    def test_bad_import_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_junction_app:not_an_app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
