"""Library for bootstrapping a helm connection to a cluster.

A connection owns the generated kubeconfig and the optional certificate
authority file for the lifetime of one invocation:

```python
from helm_resource.manifest import Source

async with connect(source) as conn:
    await conn.helm("list")
```

Both files live in a temporary directory that is removed when the context
exits, including when bootstrap itself or the body raises.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
import logging
from pathlib import Path
import tempfile

import aiofiles

from . import command
from .config import ResourceConfig
from .exceptions import ConfigInvariantViolation
from .kube_config import KubeConfig
from .manifest import Source

__all__ = [
    "Connection",
    "connect",
]

_LOGGER = logging.getLogger(__name__)

KUBE_CONFIG_FILE = "kube-config.yaml"
CA_CERT_FILE = "ca.crt"


@dataclass
class Connection:
    """A usable handle to the cluster api and the helm client."""

    namespace: str
    server: str
    username: str
    password: str = field(repr=False)
    kube_config: Path
    ca_cert: Path | None = None
    config: ResourceConfig = field(default_factory=ResourceConfig)

    @property
    def env(self) -> dict[str, str]:
        """Environment override pointing helm at the generated kubeconfig."""
        return {command.KUBECONFIG_ENV: str(self.kube_config)}

    async def run(self, args: list[str]) -> str:
        """Run a command against this connection and return trimmed stdout."""
        return await command.run(command.Command(args, env=self.env))

    async def helm(self, *args: str) -> str:
        """Run a helm subcommand against this connection."""
        return await self.run([self.config.helm_bin, *args])


def _check_source(source: Source) -> None:
    """Assert the source has a way to trust the api server."""
    if source.ca_data is None and source.skip_tls_verify is not True:
        raise ConfigInvariantViolation(
            "Source must set ca_data or set skip_tls_verify to true"
        )


@asynccontextmanager
async def connect(
    source: Source, config: ResourceConfig | None = None
) -> AsyncGenerator[Connection, None]:
    """Bootstrap a connection for the source, cleaning up on exit."""
    _check_source(source)
    if config is None:
        config = ResourceConfig()

    with tempfile.TemporaryDirectory(prefix="helm-resource-") as tmp_dir:
        kube_config_path = Path(tmp_dir) / KUBE_CONFIG_FILE
        kube_config = KubeConfig(
            url=source.url,
            namespace=source.namespace,
            username=source.username,
            password=source.password,
            ca_data=source.ca_data,
            skip_tls_verify=bool(source.skip_tls_verify),
        )
        async with aiofiles.open(kube_config_path, mode="w") as config_file:
            await config_file.write(kube_config.render())

        ca_cert_path: Path | None = None
        if source.ca_data is not None:
            ca_cert_path = Path(tmp_dir) / CA_CERT_FILE
            async with aiofiles.open(ca_cert_path, mode="w") as ca_file:
                await ca_file.write(source.ca_data)

        conn = Connection(
            namespace=source.namespace,
            server=source.url,
            username=source.username,
            password=source.password,
            kube_config=kube_config_path,
            ca_cert=ca_cert_path,
            config=config,
        )
        _LOGGER.debug("Bootstrapping helm for %s in %s", source.url, source.namespace)
        await conn.helm("init", "--client-only")
        await conn.helm("repo", "update")
        yield conn
