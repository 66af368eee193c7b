"""Command line tool implementing the helm pipeline resource verbs."""

import argparse
import asyncio
import logging
import sys
import traceback

from helm_resource.exceptions import HelmResourceException
from . import check, get, put

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pipeline resource for tracking and deploying helm releases.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    check.CheckAction.register(subparsers)
    get.GetAction.register(subparsers)
    put.PutAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Helm resource command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    # stdout is reserved for the response
    logging.basicConfig(level=args.log_level, stream=sys.stderr, format="%(message)s")

    action = args.cls()
    try:
        asyncio.run(action.run(**vars(args)))
    except HelmResourceException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("helm-resource error: ", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
