"""Grid-bucket candidate index for the greedy proximity scan.

Anchors are quantized into square cells whose side equals the clustering
radius.  Any anchor closer than ``radius`` to a point lies in the point's cell
or one of its eight neighbours, so only those cells need to be checked.  The
lowest creation index among the matching anchors is returned, which keeps the
first-match-wins rule of the linear scan intact.  Only valid for the Euclidean
metric on raw coordinates.
"""

from __future__ import annotations

import math
from collections import defaultdict

from travelmap.model.base import Position

from .metrics import euclidean

Cell = tuple[int, int]


class GridIndex:
    """Map of grid cells to the cluster indices anchored inside them.

    Anchors whose cell cannot be computed (NaN, or coordinates so large
    relative to the radius that the cell number overflows) are kept on a
    side list that every lookup scans.  A lookup whose own cell cannot be
    computed scans all anchors.
    """

    __slots__ = ("radius", "_cells", "_anchors", "_loose")

    def __init__(self, radius: float) -> None:
        self.radius = radius
        self._cells: defaultdict[Cell, list[int]] = defaultdict(list)
        self._anchors: list[Position] = []
        self._loose: list[int] = []

    def __len__(self) -> int:
        return len(self._anchors)

    def cell_of(self, position: Position) -> Cell | None:
        """Return the cell containing ``position`` or ``None`` if it has none."""

        try:
            return (
                math.floor(position[0] / self.radius),
                math.floor(position[1] / self.radius),
            )
        except (OverflowError, ValueError):
            return None

    def add(self, position: Position) -> int:
        """Record a new anchor and return its creation index."""

        index = len(self._anchors)
        self._anchors.append(position)
        cell = self.cell_of(position)
        if cell is None:
            self._loose.append(index)
        else:
            self._cells[cell].append(index)
        return index

    def _first_in(self, position: Position, indices: list[int], best: int | None) -> int | None:
        # indices are in creation order
        for index in indices:
            if best is not None and index >= best:
                break
            if euclidean(position, self._anchors[index]) < self.radius:
                return index
        return best

    def first_within(self, position: Position) -> int | None:
        """Return the earliest anchor strictly closer than ``radius``, if any."""

        cell = self.cell_of(position)
        if cell is None:
            return self._first_in(position, list(range(len(self._anchors))), None)

        cx, cy = cell
        best: int | None = None
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                bucket = self._cells.get((cx + dx, cy + dy))
                if bucket:
                    best = self._first_in(position, bucket, best)
        if self._loose:
            best = self._first_in(position, self._loose, best)
        return best


__all__ = ["GridIndex"]
