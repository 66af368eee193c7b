"""Test fixtures for helm-resource.

The helm binary is replaced with a shell script that records its arguments,
and the cluster api is replaced with a mock transport that serves
deployments for every release the fake helm has upgraded.
"""

from collections.abc import Generator
import json
from pathlib import Path
import tempfile
from typing import Any

import httpx
import pytest

from helm_resource import inventory
from helm_resource.config import ResourceConfig
from helm_resource.manifest import Source

FAKE_HELM = """#!/bin/sh
test -f "$KUBECONFIG" || { echo "KUBECONFIG not found" >&2; exit 2; }
echo "$*" >> "$HELM_LOG"
prev=""
for arg in "$@"; do
  if [ "$prev" = "--values" ]; then
    cp "$arg" "$HELM_LOG.values"
  fi
  if [ -n "$HELM_FAIL" ] && [ "$arg" = "$HELM_FAIL" ]; then
    echo "Error: $arg failed" >&2
    exit 1
  fi
  prev="$arg"
done
echo "helm $1 done"
"""

NAMESPACE = "ns"


def deployment(
    release: str,
    chart: str,
    namespace: str = NAMESPACE,
    heritage: str = "Tiller",
) -> dict[str, Any]:
    """Return a deployment object as labeled by helm."""
    return {
        "metadata": {
            "name": f"{release}-deployment",
            "namespace": namespace,
            "labels": {
                "heritage": heritage,
                "release": release,
                "chart": chart,
            },
        }
    }


class HelmLog:
    """Reads the invocations recorded by the fake helm binary."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def commands(self) -> list[str]:
        if not self.path.exists():
            return []
        return self.path.read_text().splitlines()

    @property
    def values(self) -> str | None:
        values_path = Path(f"{self.path}.values")
        if not values_path.exists():
            return None
        return values_path.read_text()

    def releases(self) -> dict[str, str]:
        """Return the chart label of each release, in install order."""
        releases: dict[str, str] = {}
        for line in self.commands:
            args = line.split()
            if args[0] == "upgrade":
                version = "latest"
                if "--version" in args:
                    version = args[args.index("--version") + 1]
                name = args[-1].split("/", 1)[1]
                releases[args[-2]] = f"{name}-{version}"
            elif args[0] == "delete":
                releases.pop(args[1], None)
        return releases


class FakeCluster:
    """A cluster api serving deployments for the releases helm installed."""

    def __init__(self, helm_log: HelmLog) -> None:
        self.helm_log = helm_log
        self.items: list[Any] = []
        self.requests: list[httpx.Request] = []
        self.response: httpx.Response | None = None

    def deployments(self) -> dict[str, Any]:
        items = list(self.items)
        for release, chart in self.helm_log.releases().items():
            items.append(deployment(release, chart))
        return {"kind": "DeploymentList", "items": items}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.response is not None:
            return self.response
        return httpx.Response(200, content=json.dumps(self.deployments()).encode())


@pytest.fixture(autouse=True, name="temp_dir")
def temp_dir_fixture(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Redirect temporary files so tests can observe their cleanup."""
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(temp_dir))
    yield temp_dir


@pytest.fixture(name="helm_log")
def helm_log_fixture(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> HelmLog:
    """Fixture for the record of helm invocations."""
    path = tmp_path / "helm.log"
    monkeypatch.setenv("HELM_LOG", str(path))
    monkeypatch.delenv("HELM_FAIL", raising=False)
    return HelmLog(path)


@pytest.fixture(name="helm_bin")
def helm_bin_fixture(tmp_path: Path, helm_log: HelmLog) -> Path:
    """Fixture for the fake helm binary."""
    path = tmp_path / "bin" / "helm"
    path.parent.mkdir()
    path.write_text(FAKE_HELM)
    path.chmod(0o755)
    return path


@pytest.fixture(name="config")
def config_fixture(helm_bin: Path) -> ResourceConfig:
    return ResourceConfig(helm_bin=str(helm_bin))


@pytest.fixture(name="source")
def source_fixture() -> Source:
    return Source(
        url="https://cluster.example",
        username="u",
        password="p",
        namespace=NAMESPACE,
        skip_tls_verify=True,
    )


@pytest.fixture(name="cluster")
def cluster_fixture(helm_log: HelmLog, monkeypatch: pytest.MonkeyPatch) -> FakeCluster:
    """Fixture that serves the cluster api from a mock transport."""
    cluster = FakeCluster(helm_log)
    transport = httpx.MockTransport(lambda request: cluster.handler(request))
    monkeypatch.setattr(inventory, "_transport", transport)
    return cluster
