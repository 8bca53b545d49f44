"""Find the App named by a ``module:attribute`` string on the command line."""

import importlib
from functools import reduce

from junction.app import App


def resolve_app(target: str) -> App:
    """Import *target* and return the junction App it names.

    ``target`` is ``module`` or ``module:attr``; ``attr`` defaults to
    ``app`` and may be dotted (``pkg.web:server.app``). If it names a
    zero-argument factory instead of an App, the factory is called.

    Import and lookup failures propagate as ``ModuleNotFoundError`` and
    ``AttributeError``. Anything that does not end up as an App, a
    failing factory included, is reported as ``TypeError``.
    """
    module_name, _, attr_path = target.partition(":")
    module = importlib.import_module(module_name)
    found = reduce(getattr, (attr_path or "app").split("."), module)

    if isinstance(found, App):
        return found
    if not callable(found):
        msg = f"{target!r} is a {type(found).__name__}, not a junction.App instance"
        raise TypeError(msg)

    try:
        built = found()
    except Exception as exc:
        msg = f"App factory {target!r} failed: {exc}"
        raise TypeError(msg) from exc
    if not isinstance(built, App):
        msg = f"Factory {target!r} returned {type(built).__name__}, not a junction.App instance"
        raise TypeError(msg)
    return built
