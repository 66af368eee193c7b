"""Implementation of the check, in and out pipeline verbs.

Each verb bootstraps its own connection, so nothing is shared between
invocations. The version reported by every verb is the digest of what is
actually deployed at the time it runs.
"""

import logging

from . import inventory, release
from .config import ResourceConfig
from .connection import Connection, connect
from .digest import digest
from .manifest import Chart, Source, Version, VersionResponse

__all__ = [
    "check",
    "in_",
    "out",
]

_LOGGER = logging.getLogger(__name__)


async def current_version(conn: Connection) -> Version:
    """Return the version of the charts deployed through the connection."""
    charts = await inventory.list_charts(conn)
    return Version(digest=digest(charts))


async def check(
    source: Source,
    version: Version | None = None,
    config: ResourceConfig | None = None,
) -> list[Version]:
    """Return the current version.

    The last seen version is accepted but not used; the current version is
    always reported even when unchanged.
    """
    async with connect(source, config) as conn:
        return [await current_version(conn)]


async def in_(
    source: Source,
    version: Version | None = None,
    config: ResourceConfig | None = None,
) -> VersionResponse:
    """Return the current version, which may differ from the requested one."""
    async with connect(source, config) as conn:
        current = await current_version(conn)
    if version is not None and version.digest != current.digest:
        _LOGGER.info(
            "Requested version %s is no longer deployed, using %s",
            version.digest,
            current.digest,
        )
    return VersionResponse(version=current)


async def out(
    source: Source,
    charts: list[Chart],
    config: ResourceConfig | None = None,
) -> VersionResponse:
    """Upgrade each chart in order and return the resulting version.

    The first failure aborts the remaining upgrades. Charts already upgraded
    are left as they are.
    """
    async with connect(source, config) as conn:
        for chart in charts:
            await release.upgrade(conn, chart)
        return VersionResponse(version=await current_version(conn))
