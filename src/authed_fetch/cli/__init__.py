"""The ``authed-fetch`` command line.

Subcommand modules expose ``COMMAND``, ``register_parser`` and ``run``. ``run`` returns the exit
code for a completed command and raises on failure; errors are reported here for all commands.
"""

from __future__ import annotations

import argparse
import logging
import sys
from types import ModuleType

from authed_fetch.cli import call, stored_token
from authed_fetch.errors import UnauthorizedError

logger = logging.getLogger(__name__)

_SUBCOMMANDS: dict[str, ModuleType] = {module.COMMAND: module for module in (call, stored_token)}

EXIT_OK = 0
EXIT_FAILURE = 1


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="authed-fetch",
        description="Make HTTP requests with an automatically refreshed bearer token",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    for module in _SUBCOMMANDS.values():
        module.register_parser(subparsers)
    return parser


def _configure_logging(verbose: bool = False) -> None:
    package_logger = logging.getLogger("authed_fetch")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _error_message(error: Exception) -> str:
    if isinstance(error, UnauthorizedError):
        return "Unauthorized, the session could not be refreshed"
    return str(error) or type(error).__name__


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed = parser.parse_args(args)
    _configure_logging(verbose=parsed.verbose)

    module = _SUBCOMMANDS.get(parsed.command)
    if module is None:
        parser.print_help()
        return EXIT_OK

    try:
        return module.run(parsed)
    except Exception as e:
        logger.debug(f"Command {parsed.command} failed", exc_info=True)
        print(f"Error: {_error_message(e)}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
