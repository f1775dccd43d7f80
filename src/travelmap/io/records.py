"""Conversion of loosely shaped input records into :class:`LocatedEntity`.

Accepted position layouts, checked in order:

* ``{"location": {"lat": .., "lng": ..}}`` as sent by the traveler API
* ``{"position": [a, b]}``
* top-level ``lat``/``lng`` keys

Every other key except ``id`` and ``status`` is kept as a profile attribute.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from travelmap.model.base import LocatedEntity
from travelmap.utils.errors import EntityFormatError, InvalidArgumentError

_RESERVED = frozenset({"id", "status", "location", "position", "lat", "lng"})


def _position(record: Mapping[str, Any], where: str) -> tuple[Any, Any]:
    location = record.get("location")
    if isinstance(location, Mapping):
        if "lat" in location and "lng" in location:
            return location["lat"], location["lng"]
        raise EntityFormatError(f"{where}: location needs 'lat' and 'lng'")
    position = record.get("position")
    if position is not None:
        if isinstance(position, (list, tuple)) and len(position) == 2:
            return position[0], position[1]
        raise EntityFormatError(f"{where}: position must be a pair of numbers")
    if "lat" in record and "lng" in record:
        return record["lat"], record["lng"]
    raise EntityFormatError(f"{where}: missing location")


def entity_from_record(record: Mapping[str, Any], *, where: str = "record") -> LocatedEntity:
    """Build a :class:`LocatedEntity` from ``record``.

    Raises
    ------
    EntityFormatError
        If the record lacks an id or a usable position.
    """

    if not isinstance(record, Mapping):
        raise EntityFormatError(f"{where}: expected an object, got {type(record).__name__}")
    raw_id = record.get("id")
    if raw_id is None or str(raw_id).strip() == "":
        raise EntityFormatError(f"{where}: missing 'id'")
    a, b = _position(record, where)
    attrs = {k: v for k, v in record.items() if k not in _RESERVED}
    try:
        return LocatedEntity(
            id=str(raw_id),
            position=(a, b),
            status=record.get("status"),  # type: ignore[arg-type]
            attrs=attrs,
        )
    except InvalidArgumentError as exc:
        raise EntityFormatError(f"{where}: {exc}") from exc


__all__ = ["entity_from_record"]
