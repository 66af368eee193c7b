"""Common flags shared by all verbs."""

from argparse import ArgumentParser

from helm_resource.config import ResourceConfig


def add_common_flags(args: ArgumentParser) -> None:
    """Add common flags to the arguments object."""
    args.add_argument(
        "--helm-bin",
        default=ResourceConfig.helm_bin,
        help="Path of the helm binary",
    )
    args.add_argument(
        "--chart-repository",
        default=ResourceConfig.chart_repository,
        help="Repository used to resolve chart names on upgrade",
    )


def add_directory_flag(args: ArgumentParser) -> None:
    """Add the working directory the pipeline passes to in and out."""
    args.add_argument(
        "directory",
        help="Working directory provided by the pipeline (unused)",
        nargs="?",
        default=None,
    )


def resource_config(helm_bin: str, chart_repository: str) -> ResourceConfig:
    """Build the resource config from command line flags."""
    return ResourceConfig(helm_bin=helm_bin, chart_repository=chart_repository)
