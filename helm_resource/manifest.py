"""Representation of resource requests, responses and deployed charts.

Requests arrive as a single JSON object from the pipeline and are decoded into
these objects. A `Chart` is also what the cluster inventory is reconstructed
into, so the same type flows from `out` params through to the digest.
"""

from dataclasses import dataclass, field
from typing import Any

from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig
from mashumaro.exceptions import MissingField, InvalidFieldValue

from .exceptions import InputException

__all__ = [
    "Source",
    "Chart",
    "Version",
    "CheckRequest",
    "InRequest",
    "OutRequest",
    "VersionResponse",
]


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all request and response objects."""

    @classmethod
    def parse_doc(cls, doc: Any) -> Any:
        """Parse an object from a decoded JSON document."""
        if not isinstance(doc, dict):
            raise InputException(f"Invalid {cls.__name__}, expected an object: {doc}")
        try:
            return cls.from_dict(doc)
        except (MissingField, InvalidFieldValue) as err:
            raise InputException(f"Invalid {cls.__name__}: {err}") from err

    class Config(BaseConfig):
        omit_none = True


@dataclass
class Source(BaseManifest):
    """Connection details for the cluster api, from the pipeline source block."""

    url: str
    """Base url of the cluster api server."""

    username: str
    """Basic auth username."""

    password: str = field(repr=False)
    """Basic auth password."""

    namespace: str
    """The namespace releases are read from and installed into."""

    skip_tls_verify: bool | None = None
    """Disable peer verification, only honored when set explicitly to true."""

    ca_data: str | None = None
    """PEM encoded certificate authority for the api server."""


@dataclass
class Chart(BaseManifest):
    """A chart deployed, or to be deployed, as a named release."""

    release: str
    """The release name, which is the key for upgrade and delete."""

    name: str
    """The name of the chart in the chart repository."""

    version: str | None = None
    """The chart version, unpinned when not set."""

    overrides: dict[str, Any] | None = None
    """Values passed to the chart on upgrade."""


@dataclass
class Version(BaseManifest):
    """An opaque marker for the deployed state of a namespace."""

    digest: str


@dataclass
class CheckRequest(BaseManifest):
    """Request payload for the check verb."""

    source: Source
    version: Version | None = None


@dataclass
class InRequest(BaseManifest):
    """Request payload for the in verb."""

    source: Source
    version: Version | None = None


@dataclass
class OutRequest(BaseManifest):
    """Request payload for the out verb."""

    source: Source
    params: list[Chart] = field(default_factory=list)


@dataclass
class VersionResponse(BaseManifest):
    """Response payload for the in and out verbs."""

    version: Version
    metadata: dict[str, Any] = field(default_factory=dict)
