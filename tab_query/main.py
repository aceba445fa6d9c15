"""Main entry point for the tab query script filter."""

import argparse
import json
import locale
import logging
import sys
from typing import List, Optional

from .commands import CommandExecutor
from .config import Config
from .exceptions import ConfigError
from .monitoring import ArcTabSource
from .pipeline import QueryPipeline
from .results import ResultBuilder, render

logger = logging.getLogger(__name__)

SUBCOMMANDS = ("search", "run-action")


def setup_logging(debug: bool = False) -> None:
    """Log to stderr; stdout carries the result document."""
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tab-query",
        description="Search the spaces and tabs of a running browser.",
    )
    subparsers = parser.add_subparsers(dest="command")

    search = subparsers.add_parser("search", help="Print matching items as script filter JSON")
    search.add_argument("query", nargs="*", help="Search phrase (may be empty)")

    action = subparsers.add_parser("run-action", help="Execute the arg of a chosen item")
    action.add_argument("action", help='JSON action argument, e.g. \'["full", 0, 1, 3]\'')
    return parser


def search(query: str, config: Config) -> dict:
    """Run a query and return the launcher document."""
    pipeline = QueryPipeline(config, ArcTabSource(config.source_app))
    return render(pipeline.run(query))


def run_action(raw_action: str, config: Config) -> bool:
    try:
        action = json.loads(raw_action)
    except json.JSONDecodeError as e:
        logger.error("Invalid action argument %r: %s", raw_action, e)
        return False
    return CommandExecutor(config).execute(action)


def emit(document: dict) -> None:
    """Write the launcher document to stdout as ASCII-only JSON."""
    print(json.dumps(document))


def parse_args(argv: List[str]) -> argparse.Namespace:
    """
    Parse the command line.

    The script filter passes the typed query as a single argument, so a lone
    argument is always a query, even one spelled like a subcommand or option.
    """
    if len(argv) > 1 and argv[0] in SUBCOMMANDS:
        return build_parser().parse_args(argv)
    return argparse.Namespace(command="search", query=argv)


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    args = parse_args(argv)
    query = " ".join(args.query) if args.command == "search" else ""

    try:
        config = Config.from_env()
    except ConfigError as e:
        setup_logging()
        logger.error("%s", e)
        if args.command == "search":
            emit(render([ResultBuilder().config_error_item(str(e))]))
            return 0
        return 1

    setup_logging(config.debug)
    try:
        # Alphabetical ordering follows the user's collation rules
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.debug("Using default collation: %s", e)

    if args.command == "run-action":
        return 0 if run_action(args.action, config) else 1

    emit(search(query, config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
