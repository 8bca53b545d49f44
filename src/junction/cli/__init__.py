"""Junction CLI: route table inspection.

Entry point registered as ``junction`` in ``pyproject.toml``::

    [project.scripts]
    junction = "junction.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``junction`` command."""
    parser = argparse.ArgumentParser(
        prog="junction",
        description="junction: path routing with ordered middleware dispatch.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- junction routes --------------------------------------------------
    routes_parser = subparsers.add_parser(
        "routes", help="List registered routes and the middleware chain"
    )
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    routes_parser.add_argument(
        "--method",
        default=None,
        help="Only list routes for this HTTP method",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from junction.cli._routes import run_routes

        run_routes(args)
