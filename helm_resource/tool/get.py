"""Command line tool for the in verb."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import logging
from typing import cast

from helm_resource import resource
from helm_resource.manifest import InRequest

from . import common, protocol

_LOGGER = logging.getLogger(__name__)


class GetAction:
    """Helm resource in action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "in",
                help="Fetch the version of the deployed releases",
                description="Reads an in request from stdin and writes the current version.",
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
        request = InRequest.parse_doc(protocol.read_request())
        _LOGGER.info("Fetching releases in %s", request.source.namespace)
        response = await resource.in_(
            request.source,
            request.version,
            common.resource_config(helm_bin, chart_repository),
        )
        protocol.write_response(response.to_dict())
