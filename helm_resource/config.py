"""Configuration objects for helm-resource."""

from dataclasses import dataclass


@dataclass
class ResourceConfig:
    """Configuration for talking to the chart tool and the cluster."""

    helm_bin: str = "helm"
    """Path or name of the chart management binary."""

    chart_repository: str = "stable"
    """Repository prefix used when resolving a chart name for upgrade."""

    heritage: str = "Tiller"
    """Provenance label value that marks a deployment as managed by helm."""
