"""Tests for command library."""

import logging

import pytest

from helm_resource.command import Command, run
from helm_resource.exceptions import CommandException


async def test_command() -> None:
    """Test stdout of a command is trimmed."""
    result = await run(Command(["echo", "Hello"]))
    assert result == "Hello"


async def test_command_args_quoted() -> None:
    """Test arguments are passed through the shell unchanged."""
    result = await run(Command(["echo", "a  b; echo c"]))
    assert result == "a  b; echo c"


async def test_command_env() -> None:
    """Test environment overrides are visible to the command."""
    cmd = Command(["sh", "-c", 'echo "$KUBECONFIG"'], env={"KUBECONFIG": "/tmp/kc"})
    assert await run(cmd) == "/tmp/kc"


async def test_output_mirrored(caplog: pytest.LogCaptureFixture) -> None:
    """Test stdout and stderr are both written to the diagnostics log."""
    caplog.set_level(logging.INFO)
    await run(Command(["sh", "-c", "echo to-stdout; echo to-stderr >&2"]))
    assert "Running `sh -c 'echo to-stdout; echo to-stderr >&2'`." in caplog.text
    assert "to-stdout" in caplog.text
    assert "to-stderr" in caplog.text


async def test_failed_command(caplog: pytest.LogCaptureFixture) -> None:
    """Test a failing command."""
    caplog.set_level(logging.INFO)
    with pytest.raises(CommandException, match="Command `sh -c") as exc_info:
        await run(Command(["sh", "-c", "echo broken >&2; exit 3"]))
    assert exc_info.value.command == "sh -c 'echo broken >&2; exit 3'"
    assert "broken" in caplog.text
