"""CSV entity reader.

Required columns: ``id``, ``lat``, ``lng``.  ``status`` and any other column
are optional; ``languages`` and ``interests`` cells hold ``;``-separated
values.  Empty cells are dropped from the profile attributes.
"""

from __future__ import annotations

import csv
import os
from typing import Any

from travelmap.model.base import LocatedEntity
from travelmap.utils.errors import EntityFormatError

from ..records import entity_from_record

PathLikeStr = os.PathLike[str]

LIST_COLUMNS = frozenset({"languages", "interests"})
REQUIRED_COLUMNS = ("id", "lat", "lng")


def _row_to_record(row: dict[str, str | None]) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for key, value in row.items():
        if key is None or value is None:
            continue
        value = value.strip()
        if not value:
            continue
        if key in LIST_COLUMNS:
            record[key] = [part.strip() for part in value.split(";") if part.strip()]
        else:
            record[key] = value
    return record


def read_csv_entities(
    path: str | PathLikeStr,
    *,
    encoding: str = "utf-8-sig",
) -> list[LocatedEntity]:
    """Read entities from a CSV file with a header row."""

    with open(path, "r", encoding=encoding, newline="") as f:
        reader = csv.DictReader(f)
        header = reader.fieldnames or []
        missing = [c for c in REQUIRED_COLUMNS if c not in header]
        if missing:
            raise EntityFormatError(f"{path}: missing columns {', '.join(missing)}")
        # line 1 is the header
        return [
            entity_from_record(_row_to_record(row), where=f"{path}:{lineno}")
            for lineno, row in enumerate(reader, start=2)
        ]


__all__ = ["read_csv_entities"]
