"""Greedy proximity clustering of located entities.

Entities are processed in input order.  Each one joins the *first* existing
cluster (in creation order) whose anchor lies strictly closer than ``radius``;
otherwise it starts a new cluster anchored at its own position.  Anchors are
never recomputed as centroids, so a chain of entities each within ``radius``
of the anchor can spread a cluster whose marker no longer sits at the visual
center of its members.  This is not a hierarchical or density based clustering
algorithm: the linear scan costs O(n·k) for ``n`` entities and ``k`` clusters
and suits the tens of travelers a map view shows at once.  ``index="grid"``
swaps the scan for :class:`~travelmap.clustering.grid.GridIndex` without
changing the resulting partition.

Every call starts from scratch.  Nothing is cached between calls, so callers
that need stable output across re-renders should only re-run clustering when
the entity set or the radius changes.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Union

from travelmap.model.base import Cluster, LocatedEntity, Position
from travelmap.utils.errors import InvalidArgumentError
from travelmap.utils.logging import get_logger

from .grid import GridIndex
from .metrics import DistanceFunc, get_metric

if TYPE_CHECKING:  # pragma: no cover
    from travelmap.config import ConfigModel

log = get_logger(__name__)

IndexStrategy = Literal["linear", "grid"]


# ---------------------------------------------------------------------------
# Selection results
# ---------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class EntitySelected:
    """A singleton marker was clicked: its only member is selected."""

    entity: LocatedEntity
    kind: Literal["selected"] = "selected"


@dataclass(slots=True, frozen=True)
class ClusterExpanded:
    """A group marker was clicked: the caller should list its members."""

    cluster: Cluster
    kind: Literal["expanded"] = "expanded"

    @property
    def members(self) -> tuple[LocatedEntity, ...]:
        return self.cluster.members


SelectionResult = Union[EntitySelected, ClusterExpanded]


def select_cluster(cluster: Cluster) -> SelectionResult:
    """Resolve a click on ``cluster`` into a selection result.

    No entity is selected for multi-member clusters; selection state stays
    with the caller.
    """

    if cluster.count == 1:
        return EntitySelected(cluster.members[0])
    return ClusterExpanded(cluster)


# ---------------------------------------------------------------------------
# Clustering
# ---------------------------------------------------------------------------


def validate_radius(radius: object) -> float:
    """Return ``radius`` as a float or raise :class:`InvalidArgumentError`."""

    if isinstance(radius, bool):
        raise InvalidArgumentError(f"radius must be a positive number, got {radius!r}")
    try:
        value = float(radius)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"radius must be a positive number, got {radius!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(f"radius must be a positive number, got {radius!r}")
    return value


class _Accumulator:
    """Mutable cluster under construction; frozen into :class:`Cluster` at the end."""

    __slots__ = ("anchor", "members")

    def __init__(self, entity: LocatedEntity) -> None:
        self.anchor: Position = entity.position
        self.members: list[LocatedEntity] = [entity]

    def freeze(self) -> Cluster:
        return Cluster(representative_position=self.anchor, members=tuple(self.members))


def _scan_linear(
    entities: Sequence[LocatedEntity], radius: float, distance: DistanceFunc
) -> list[_Accumulator]:
    clusters: list[_Accumulator] = []
    for entity in entities:
        for acc in clusters:
            if distance(entity.position, acc.anchor) < radius:
                acc.members.append(entity)
                break
        else:
            clusters.append(_Accumulator(entity))
    return clusters


def _scan_grid(entities: Sequence[LocatedEntity], radius: float) -> list[_Accumulator]:
    clusters: list[_Accumulator] = []
    index = GridIndex(radius)
    for entity in entities:
        hit = index.first_within(entity.position)
        if hit is None:
            index.add(entity.position)
            clusters.append(_Accumulator(entity))
        else:
            clusters[hit].members.append(entity)
    return clusters


class ProximityClusterer:
    """Configured greedy clusterer.

    Parameters
    ----------
    radius:
        Default radius used when :meth:`cluster` is called without one.
    metric:
        Name of a registered distance metric (``"euclidean"`` or
        ``"haversine"``).
    index:
        ``"linear"`` scans clusters in creation order; ``"grid"`` looks up
        candidates in a grid of radius-sized cells.  Both produce the same
        partition.  The grid requires the Euclidean metric.
    require_finite:
        Reject entities with NaN or infinite coordinates up front.

    The instance keeps configuration only and may be shared between threads.
    """

    def __init__(
        self,
        radius: float = 0.001,
        *,
        metric: str = "euclidean",
        index: IndexStrategy = "linear",
        require_finite: bool = True,
    ) -> None:
        self.radius = validate_radius(radius)
        self.metric = metric.lower()
        self._distance = get_metric(self.metric)
        if index not in ("linear", "grid"):
            raise InvalidArgumentError(f"unknown index strategy {index!r}")
        if index == "grid" and self.metric != "euclidean":
            raise InvalidArgumentError("the grid index only supports the euclidean metric")
        self.index: IndexStrategy = index
        self.require_finite = require_finite

    @classmethod
    def from_config(cls, cfg: "ConfigModel") -> "ProximityClusterer":
        opts = cfg.clustering
        return cls(
            opts.radius,
            metric=opts.metric,
            index=opts.index,
            require_finite=opts.require_finite,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(radius={self.radius!r}, metric={self.metric!r}, "
            f"index={self.index!r}, require_finite={self.require_finite!r})"
        )

    def cluster(
        self, entities: Iterable[LocatedEntity], radius: float | None = None
    ) -> list[Cluster]:
        """Partition ``entities`` into clusters in creation order.

        Raises
        ------
        InvalidArgumentError
            If ``radius`` is not a positive finite number.
        NonFiniteCoordinateError
            If ``require_finite`` is set and an entity has a NaN/inf position.
        """

        r = self.radius if radius is None else validate_radius(radius)
        items = list(entities)
        if self.require_finite:
            for entity in items:
                entity.require_finite()
        if not items:
            return []

        if self.index == "grid":
            accumulators = _scan_grid(items, r)
        else:
            accumulators = _scan_linear(items, r, self._distance)

        result = [acc.freeze() for acc in accumulators]
        log.debug(
            "clustered %d entities into %d clusters (radius=%g, metric=%s, index=%s)",
            len(items),
            len(result),
            r,
            self.metric,
            self.index,
        )
        return result

    recompute = cluster

    def select(self, cluster: Cluster) -> SelectionResult:
        return select_cluster(cluster)


def cluster(entities: Iterable[LocatedEntity], radius: float) -> list[Cluster]:
    """Cluster ``entities`` with the Euclidean metric and a linear scan."""

    return ProximityClusterer(validate_radius(radius)).cluster(entities)


def recompute(entities: Iterable[LocatedEntity], radius: float) -> list[Cluster]:
    """Discard any previous assignment and cluster ``entities`` again.

    Identical to :func:`cluster`; kept as a separate name for call sites that
    re-run clustering on zoom or refresh.
    """

    return cluster(entities, radius)


__all__ = [
    "IndexStrategy",
    "EntitySelected",
    "ClusterExpanded",
    "SelectionResult",
    "select_cluster",
    "validate_radius",
    "ProximityClusterer",
    "cluster",
    "recompute",
]
