"""Core data model shared by the clusterer, filters and renderers.

Entities are owned by the caller (typically a map view) and are treated as
immutable values.  Positions are 2-tuples of floats and are unit-agnostic: a
``(lat, lng)`` pair in degrees or a projected ``(x, y)`` pair both work, the
chosen distance metric decides how they are interpreted.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from travelmap.utils.errors import InvalidArgumentError, NonFiniteCoordinateError

Position = tuple[float, float]


class EntityStatus(Enum):
    """Availability shown next to a traveler marker."""

    AVAILABLE = "available"
    BUSY = "busy"
    OFFLINE = "offline"

    @classmethod
    def parse(cls, value: "EntityStatus | str | None") -> "EntityStatus":
        """Return the status named by ``value`` (case-insensitive).

        ``None`` and the empty string map to :attr:`AVAILABLE`.
        """

        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.AVAILABLE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"unknown status: {value!r}") from None


@dataclass(slots=True, frozen=True)
class LocatedEntity:
    """A traveler (or anything else) placed at a position on the map.

    ``attrs`` holds optional profile data such as ``name``, ``nationality``,
    ``languages`` and ``interests``.  It is used by filters and renderers and
    never by the clustering itself.
    """

    id: str
    position: Position
    status: EntityStatus = EntityStatus.AVAILABLE
    attrs: Mapping[str, object] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise InvalidArgumentError("entity id must be a non-empty string")
        if not isinstance(self.position, (tuple, list)) or len(self.position) != 2:
            raise InvalidArgumentError(
                f"entity {self.id!r} position must have two coordinates"
            )
        try:
            position = (float(self.position[0]), float(self.position[1]))
        except (TypeError, ValueError):
            raise InvalidArgumentError(
                f"entity {self.id!r} position must be numeric: {self.position!r}"
            ) from None
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "status", EntityStatus.parse(self.status))
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))

    @property
    def lat(self) -> float:
        return self.position[0]

    @property
    def lng(self) -> float:
        return self.position[1]

    @property
    def is_finite(self) -> bool:
        """Return ``True`` when both coordinates are finite numbers."""

        return math.isfinite(self.position[0]) and math.isfinite(self.position[1])

    def require_finite(self) -> None:
        """Raise :class:`NonFiniteCoordinateError` for NaN or infinite positions."""

        if not self.is_finite:
            raise NonFiniteCoordinateError(
                f"entity {self.id!r} has a non-finite position {self.position!r}"
            )


@dataclass(slots=True, frozen=True)
class Cluster:
    """Entities sharing one map anchor.

    ``representative_position`` is the position of the first member and is
    never moved towards a centroid.  ``members`` keeps processing order.
    """

    representative_position: Position
    members: tuple[LocatedEntity, ...]

    def __post_init__(self) -> None:
        if not self.members:
            raise InvalidArgumentError("a cluster needs at least one member")
        object.__setattr__(self, "members", tuple(self.members))

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def is_singleton(self) -> bool:
        return len(self.members) == 1

    @property
    def anchor(self) -> LocatedEntity:
        """Return the member whose position anchors the cluster."""

        return self.members[0]

    def member_ids(self) -> list[str]:
        return [m.id for m in self.members]


__all__ = ["Position", "EntityStatus", "LocatedEntity", "Cluster"]
