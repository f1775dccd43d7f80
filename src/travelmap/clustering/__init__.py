"""Proximity clustering, distance metrics and candidate indexes."""

from .metrics import available_metrics, get_metric
from .proximity import (
    ClusterExpanded,
    EntitySelected,
    ProximityClusterer,
    SelectionResult,
    cluster,
    recompute,
    select_cluster,
)

__all__ = [
    "ClusterExpanded",
    "EntitySelected",
    "ProximityClusterer",
    "SelectionResult",
    "available_metrics",
    "cluster",
    "get_metric",
    "recompute",
    "select_cluster",
]
