"""Command line tool for the check verb."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import logging
from typing import cast

from helm_resource import resource
from helm_resource.manifest import CheckRequest

from . import common, protocol

_LOGGER = logging.getLogger(__name__)


class CheckAction:
    """Helm resource check action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "check",
                help="Report the version of the deployed releases",
                description="Reads a check request from stdin and writes the current version.",
            ),
        )
        common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        helm_bin: str,
        chart_repository: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        request = CheckRequest.parse_doc(protocol.read_request())
        _LOGGER.info("Checking releases in %s", request.source.namespace)
        versions = await resource.check(
            request.source,
            request.version,
            common.resource_config(helm_bin, chart_repository),
        )
        protocol.write_response([version.to_dict() for version in versions])
