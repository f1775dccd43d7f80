"""JSON entity reader.

The file holds either a list of traveler objects or an object with a
``"travelers"`` list.  ``FileNotFoundError`` and other I/O errors propagate to
the caller; malformed content raises :class:`EntityFormatError`.
"""

from __future__ import annotations

import json
import os

from travelmap.model.base import LocatedEntity
from travelmap.utils.errors import EntityFormatError

from ..records import entity_from_record

PathLikeStr = os.PathLike[str]


def read_json_entities(
    path: str | PathLikeStr,
    *,
    encoding: str = "utf-8-sig",
) -> list[LocatedEntity]:
    """Read entities from a JSON file."""

    with open(path, "r", encoding=encoding) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise EntityFormatError(f"{path}: invalid JSON ({exc.msg})") from exc

    if isinstance(data, dict):
        data = data.get("travelers")
    if not isinstance(data, list):
        raise EntityFormatError(f"{path}: expected a list of travelers")
    return [entity_from_record(rec, where=f"{path}[{i}]") for i, rec in enumerate(data)]


__all__ = ["read_json_entities"]
