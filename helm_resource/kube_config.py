"""Generates the client config file that points helm at the cluster."""

import base64
from typing import Any

import yaml

__all__ = [
    "KubeConfig",
]

CONTEXT_NAME = "helm-resource"


class KubeConfig:
    """A kubeconfig with a single cluster, user and context."""

    def __init__(
        self,
        url: str,
        namespace: str,
        username: str,
        password: str,
        ca_data: str | None = None,
        skip_tls_verify: bool = False,
    ) -> None:
        """Initialize KubeConfig."""
        self._url = url
        self._namespace = namespace
        self._username = username
        self._password = password
        self._ca_data = ca_data
        self._skip_tls_verify = skip_tls_verify

    @property
    def ca_data(self) -> str:
        """Base64 of the certificate authority, or empty when there is none."""
        if not self._ca_data:
            return ""
        return base64.b64encode(self._ca_data.strip().encode("utf-8")).decode("ascii")

    @property
    def config(self) -> dict[str, Any]:
        """Return the kubeconfig object."""
        cluster: dict[str, Any] = {
            "server": self._url,
            "insecure-skip-tls-verify": self._skip_tls_verify,
        }
        if ca_data := self.ca_data:
            cluster["certificate-authority-data"] = ca_data
        return {
            "apiVersion": "v1",
            "kind": "Config",
            "clusters": [{"name": CONTEXT_NAME, "cluster": cluster}],
            "users": [
                {
                    "name": CONTEXT_NAME,
                    "user": {
                        "username": self._username,
                        "password": self._password,
                    },
                }
            ],
            "contexts": [
                {
                    "name": CONTEXT_NAME,
                    "context": {
                        "cluster": CONTEXT_NAME,
                        "user": CONTEXT_NAME,
                        "namespace": self._namespace,
                    },
                }
            ],
            "current-context": CONTEXT_NAME,
            "preferences": {},
        }

    def render(self) -> str:
        """Render the kubeconfig as yaml."""
        return yaml.dump(self.config, sort_keys=False)
