"""Library for issuing shell commands using asyncio and returning the result.

Output of every command is mirrored to the diagnostics log since stdout of
the resource itself is reserved for the protocol response.
"""

import asyncio
import logging
import os
import shlex
import subprocess
from dataclasses import dataclass

from .exceptions import CommandException

_LOGGER = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"


# No public API
__all__: list[str] = []


@dataclass
class Command:
    """An instance of a command to run."""

    cmd: list[str]
    """Array of command line arguments."""

    env: dict[str, str] | None = None
    """Environment variables added on top of the current process environment."""

    @property
    def string(self) -> str:
        """Render the command as a single shell string."""
        return " ".join([shlex.quote(arg) for arg in self.cmd])

    def __str__(self) -> str:
        """Render as a debug string."""
        return self.string

    async def run(self) -> str:
        """Run the command, returning trimmed stdout."""
        _LOGGER.info("Running `%s`.", self)
        env = {
            **os.environ,
            **(self.env if self.env else {}),
        }
        proc = await asyncio.create_subprocess_shell(
            self.string,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
        )
        out, err = await proc.communicate()
        stdout = out.decode("utf-8", errors="replace")
        stderr = err.decode("utf-8", errors="replace")
        if stdout:
            _LOGGER.info("%s", stdout.rstrip("\n"))
        if stderr:
            _LOGGER.info("%s", stderr.rstrip("\n"))
        if proc.returncode:
            _LOGGER.debug(
                "Command '%s' failed with return code %s", self, proc.returncode
            )
            raise CommandException(self.string)
        return stdout.strip()


async def run(cmd: Command) -> str:
    """Run the specified command and return stdout."""
    return await cmd.run()
