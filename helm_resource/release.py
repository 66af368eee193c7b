"""Library for mutating helm releases through a connection.

Upgrades are idempotent installs: a release that does not exist yet is
installed, otherwise it is upgraded in place.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import logging
from pathlib import Path
from typing import Any

import aiofiles.tempfile
import yaml

from .connection import Connection
from .exceptions import SerializationFailure
from .manifest import Chart

__all__ = [
    "upgrade",
    "delete",
]

_LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def values_file(overrides: dict[str, Any]) -> AsyncGenerator[Path, None]:
    """Write chart value overrides to a temporary file removed on exit."""
    async with aiofiles.tempfile.NamedTemporaryFile(
        mode="w", prefix="helm-values-", suffix=".yaml"
    ) as temp_file:
        try:
            content = yaml.safe_dump(overrides, sort_keys=False)
        except yaml.YAMLError as err:
            raise SerializationFailure(
                f"Unable to serialize chart value overrides: {err}"
            ) from err
        await temp_file.write(content)
        await temp_file.flush()
        _LOGGER.info("Using values:\n%s", content)
        yield Path(temp_file.name)


def _upgrade_args(conn: Connection, chart: Chart, values: Path | None) -> list[str]:
    args = ["upgrade", "-i", "--namespace", conn.namespace]
    if chart.version:
        args.extend(["--version", chart.version])
    if values:
        args.extend(["--values", str(values)])
    args.extend([chart.release, f"{conn.config.chart_repository}/{chart.name}"])
    return args


async def upgrade(conn: Connection, chart: Chart) -> None:
    """Install or upgrade the chart as the named release."""
    if chart.overrides is None:
        await conn.helm(*_upgrade_args(conn, chart, None))
        return
    async with values_file(chart.overrides) as values:
        await conn.helm(*_upgrade_args(conn, chart, values))


async def delete(conn: Connection, release: str) -> None:
    """Delete the named release."""
    await conn.helm("delete", release)
