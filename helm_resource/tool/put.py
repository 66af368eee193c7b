"""Command line tool for the out verb."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import logging
from typing import cast

from helm_resource import resource
from helm_resource.manifest import OutRequest

from . import common, protocol

_LOGGER = logging.getLogger(__name__)


class PutAction:
    """Helm resource out action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "out",
                help="Install or upgrade releases",
                description="Reads an out request from stdin, upgrades each chart in order and writes the resulting version.",
            ),
        )
        common.add_common_flags(args)
        common.add_directory_flag(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        helm_bin: str,
        chart_repository: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        request = OutRequest.parse_doc(protocol.read_request())
        _LOGGER.info(
            "Upgrading %d releases in %s", len(request.params), request.source.namespace
        )
        response = await resource.out(
            request.source,
            request.params,
            common.resource_config(helm_bin, chart_repository),
        )
        protocol.write_response(response.to_dict())
