"""Library for reconstructing deployed helm releases from the cluster api.

Helm labels the deployments it creates with the release name, the chart
name joined with its version, and a heritage marker. The inventory is rebuilt
from those labels on every read. Items that don't look like a helm managed
deployment in the configured namespace are skipped rather than failing the
whole read, since the api may return arbitrary objects.
"""

import logging
import ssl
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from .connection import Connection
from .exceptions import NetworkOrApiFailure, UrlConstructionFailure
from .manifest import Chart

__all__ = [
    "deployments_url",
    "split_chart_label",
    "parse_inventory",
    "list_charts",
]

_LOGGER = logging.getLogger(__name__)

DEPLOYMENTS_API = "apis/extensions/v1beta1/namespaces"
DEPLOYMENTS = "deployments"

# Transport used for the cluster api, the httpx default when not set
_transport: httpx.AsyncBaseTransport | None = None


def deployments_url(server: str, namespace: str) -> str:
    """Return the deployments api endpoint for the namespace."""
    try:
        parts = urlsplit(server)
        parts.port  # raises ValueError for a port that is not a number
    except ValueError as err:
        raise UrlConstructionFailure(f"Invalid cluster url '{server}': {err}") from err
    if not parts.scheme or not parts.netloc:
        raise UrlConstructionFailure(
            f"Cluster url '{server}' can't be used as a base for api paths"
        )
    segments = [segment for segment in parts.path.split("/") if segment]
    segments.extend(DEPLOYMENTS_API.split("/"))
    segments.append(quote(namespace, safe=""))
    segments.append(DEPLOYMENTS)
    return urlunsplit(
        (parts.scheme, parts.netloc, "/" + "/".join(segments), parts.query, "")
    )


def split_chart_label(label: str) -> tuple[str, str] | None:
    """Split a `chart` label into a chart name and version.

    The version follows the last hyphen, so names may contain hyphens
    themselves e.g. `my-chart-name-2.0.0`.
    """
    name, sep, version = label.rpartition("-")
    if not sep:
        return None
    return name, version


def _str_value(doc: dict[str, Any], key: str) -> str | None:
    if isinstance(value := doc.get(key), str):
        return value
    return None


def _parse_item(item: Any, namespace: str, heritage: str) -> Chart | None:
    """Return the chart for a single deployment, or None if it's not one of ours."""
    if not isinstance(item, dict):
        return None
    if not isinstance(metadata := item.get("metadata"), dict):
        return None
    if _str_value(metadata, "namespace") != namespace:
        return None
    if not isinstance(labels := metadata.get("labels"), dict):
        return None
    if _str_value(labels, "heritage") != heritage:
        return None
    if (release := _str_value(labels, "release")) is None:
        return None
    if (chart_label := _str_value(labels, "chart")) is None:
        return None
    if (split := split_chart_label(chart_label)) is None:
        _LOGGER.debug("Skipping release %s with chart label %s", release, chart_label)
        return None
    name, version = split
    return Chart(release=release, name=name, version=version)


def parse_inventory(
    doc: dict[str, Any], namespace: str, heritage: str = "Tiller"
) -> list[Chart]:
    """Reconstruct the charts from a deployment list response."""
    if not isinstance(items := doc.get("items"), list):
        return []
    charts = []
    for item in items:
        if (chart := _parse_item(item, namespace, heritage)) is not None:
            charts.append(chart)
    return charts


def _ssl_verify(conn: Connection) -> ssl.SSLContext | bool:
    """Trust only the connection ca when present, otherwise verify nothing."""
    if conn.ca_cert is None:
        return False
    return ssl.create_default_context(cafile=str(conn.ca_cert))


def _client(conn: Connection) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        auth=httpx.BasicAuth(conn.username, conn.password),
        verify=_ssl_verify(conn),
        timeout=None,
        transport=_transport,
    )


async def _get_json(conn: Connection, url: str) -> dict[str, Any]:
    """Issue an authenticated GET and return the response object."""
    _LOGGER.debug("Fetching %s", url)
    try:
        async with _client(conn) as client:
            response = await client.get(url)
            response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL, ssl.SSLError, OSError) as err:
        raise NetworkOrApiFailure(f"Request to {url} failed: {err}") from err
    try:
        doc = response.json()
    except ValueError as err:
        raise NetworkOrApiFailure(f"Response from {url} is not json: {err}") from err
    if not isinstance(doc, dict):
        raise NetworkOrApiFailure(f"Response from {url} is not a json object")
    return doc


async def list_charts(conn: Connection) -> list[Chart]:
    """Return the charts currently deployed in the connection namespace."""
    url = deployments_url(conn.server, conn.namespace)
    doc = await _get_json(conn, url)
    charts = parse_inventory(doc, conn.namespace, conn.config.heritage)
    _LOGGER.debug("Found %d releases in %s", len(charts), conn.namespace)
    return charts
