"""Proximity clustering of located travelers for map display.

The package groups travelers that sit close to each other on a map into
clusters, produces marker summaries a renderer can draw and resolves marker
clicks into either a single selected traveler or an expanded member list.
"""

from .clustering.proximity import (
    ClusterExpanded,
    EntitySelected,
    ProximityClusterer,
    SelectionResult,
    cluster,
    recompute,
    select_cluster,
)
from .model.base import Cluster, EntityStatus, LocatedEntity

__all__ = [
    "Cluster",
    "ClusterExpanded",
    "EntitySelected",
    "EntityStatus",
    "LocatedEntity",
    "ProximityClusterer",
    "SelectionResult",
    "cluster",
    "recompute",
    "select_cluster",
]
