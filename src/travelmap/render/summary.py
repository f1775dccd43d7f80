"""Cluster summaries consumed by a map renderer.

A singleton is drawn as a pin coloured by the traveler's status; a group is
drawn as a badge carrying the member count.  Summaries are plain data and
serialize to JSON via :meth:`ClusterSummary.to_dict`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from travelmap.clustering.proximity import ClusterExpanded, EntitySelected, SelectionResult
from travelmap.model.base import Cluster, EntityStatus, LocatedEntity

_STATUS_COLORS: dict[EntityStatus, str] = {
    EntityStatus.AVAILABLE: "green",
    EntityStatus.BUSY: "amber",
    EntityStatus.OFFLINE: "gray",
}


def marker_color(status: EntityStatus) -> str:
    """Return the marker colour for ``status``."""

    return _STATUS_COLORS[status]


def display_name(entity: LocatedEntity) -> str:
    name = entity.attrs.get("name")
    return str(name) if name else entity.id


@dataclass(slots=True, frozen=True)
class ClusterSummary:
    index: int
    lat: float
    lng: float
    count: int
    kind: Literal["singleton", "group"]
    label: str
    member_ids: tuple[str, ...]
    status: EntityStatus | None = None
    marker_color: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "lat": self.lat,
            "lng": self.lng,
            "count": self.count,
            "kind": self.kind,
            "label": self.label,
            "member_ids": list(self.member_ids),
            "status": self.status.value if self.status is not None else None,
            "marker_color": self.marker_color,
        }


def summarize_cluster(index: int, cluster: Cluster) -> ClusterSummary:
    lat, lng = cluster.representative_position
    if cluster.is_singleton:
        only = cluster.members[0]
        return ClusterSummary(
            index=index,
            lat=lat,
            lng=lng,
            count=1,
            kind="singleton",
            label=display_name(only),
            member_ids=(only.id,),
            status=only.status,
            marker_color=marker_color(only.status),
        )
    return ClusterSummary(
        index=index,
        lat=lat,
        lng=lng,
        count=cluster.count,
        kind="group",
        label=f"{cluster.count} Travelers Nearby",
        member_ids=tuple(cluster.member_ids()),
    )


def summarize_clusters(clusters: Sequence[Cluster]) -> list[ClusterSummary]:
    """Return one summary per cluster, indexed in creation order."""

    return [summarize_cluster(i, c) for i, c in enumerate(clusters)]


def entity_to_dict(entity: LocatedEntity) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": entity.id,
        "position": list(entity.position),
        "status": entity.status.value,
    }
    for key, value in entity.attrs.items():
        data[key] = list(value) if isinstance(value, (tuple, set, frozenset)) else value
    return data


def selection_to_dict(result: SelectionResult) -> dict[str, Any]:
    """Return a JSON-ready description of a marker click."""

    if isinstance(result, EntitySelected):
        return {"kind": result.kind, "entity": entity_to_dict(result.entity)}
    if isinstance(result, ClusterExpanded):
        return {
            "kind": result.kind,
            "count": result.cluster.count,
            "members": [entity_to_dict(m) for m in result.members],
        }
    raise TypeError(f"unsupported selection result: {type(result).__name__}")
