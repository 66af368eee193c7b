"""Fold a chart inventory into a single change marker.

The digest is a cheap heuristic for detecting a change in deployed state and
is not a stable identity: fields are concatenated without separators and the
inventory is not sorted, so distinct inventories can collide and a reordering
of the same charts produces a different value. Downstream pipelines compare
these values, so the fold must stay exactly as it is.
"""

from collections.abc import Iterable
import hashlib

from .manifest import Chart

__all__ = [
    "digest",
]


def digest(charts: Iterable[Chart]) -> str:
    """Return the hex digest of the release, name and version of each chart."""
    hasher = hashlib.md5(usedforsecurity=False)
    for chart in charts:
        hasher.update(chart.release.encode("utf-8"))
        hasher.update(chart.name.encode("utf-8"))
        if chart.version is not None:
            hasher.update(chart.version.encode("utf-8"))
    return hasher.hexdigest()
