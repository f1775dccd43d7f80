"""Distance metrics used to compare entity positions with cluster anchors.

``euclidean`` works on raw coordinate values and is what the map view has
always used; it is only meaningful for small radii far from the ±180°
longitude seam.  ``haversine`` treats positions as ``(lat, lng)`` degrees and
returns great-circle metres, so radii must then be given in metres as well.
"""

from __future__ import annotations

import math
from typing import Callable

from travelmap.model.base import Position
from travelmap.utils.errors import InvalidArgumentError

DistanceFunc = Callable[[Position, Position], float]

EARTH_RADIUS_M: float = 6_371_008.8


def euclidean(a: Position, b: Position) -> float:
    """Return the straight-line distance between ``a`` and ``b``."""

    return math.hypot(a[0] - b[0], a[1] - b[1])


def haversine(a: Position, b: Position) -> float:
    """Return the great-circle distance in metres between two lat/lng pairs."""

    lat1, lng1 = math.radians(a[0]), math.radians(a[1])
    lat2, lng2 = math.radians(b[0]), math.radians(b[1])
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


_METRICS: dict[str, DistanceFunc] = {
    "euclidean": euclidean,
    "haversine": haversine,
}


def register_metric(name: str, func: DistanceFunc) -> None:
    """Register ``func`` under ``name`` (case-insensitive)."""

    _METRICS[name.lower()] = func


def get_metric(name: str) -> DistanceFunc:
    """Return the metric registered under ``name``.

    Raises
    ------
    InvalidArgumentError
        If no metric with that name exists.
    """

    try:
        return _METRICS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_METRICS))
        raise InvalidArgumentError(f"unknown distance metric {name!r} (known: {known})") from None


def available_metrics() -> list[str]:
    return sorted(_METRICS)


__all__ = [
    "DistanceFunc",
    "EARTH_RADIUS_M",
    "euclidean",
    "haversine",
    "register_metric",
    "get_metric",
    "available_metrics",
]
