"""``junction routes``: list registered routes.

Resolves an import string to an App and prints the route table in
match order, followed by the middleware chain in execution order.
"""

import argparse
import sys

from junction.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATTERN and handler for every route, in match order."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if args.method:
        routes = [route for route in routes if route.method == args.method.upper()]

    if not routes:
        print("No routes registered.")
    else:
        rows: list[tuple[str, str, str]] = []
        for route in routes:
            handler_name = getattr(route.handler, "__name__", str(route.handler))
            if route.name:
                handler_name = f"{handler_name} ({route.name})"
            rows.append((route.method, route.path, handler_name))

        max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
        max_path = max(7, *(len(r[1]) for r in rows))  # "PATTERN" header

        fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
        print(fmt.format("METHOD", "PATTERN", "HANDLER"))
        sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
        print("-" * min(sep_len, 80))
        for method, path, handler_name in rows:
            print(fmt.format(method, path, handler_name))

    names = app.middleware_names
    if names:
        print()
        print("Middleware: " + " -> ".join(names))
