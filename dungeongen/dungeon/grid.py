"""Dense grid storage for cell types and corridor classifications.

Both containers are column-major (``cells[x][y]``), consistent with the rest of
the dungeon package. Direct access is bounds-checked and raises
:class:`OutOfBoundsError`; callers that tolerate stray coordinates (the
corridor carver) test :meth:`Grid.in_bounds` first.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import OutOfBoundsError
from .tiles import CELL_TYPES, DIAGONAL, EMPTY, ORTHOGONAL, PATH_CLASSES

Coord2D = Tuple[int, int]


class Grid:
    __slots__ = ("width", "height", "cells")

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells: List[List[str]] = [[EMPTY for _ in range(height)] for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> str:
        self._check(x, y)
        return self.cells[x][y]

    def set(self, x: int, y: int, cell: str) -> None:
        self._check(x, y)
        if cell not in CELL_TYPES:
            raise ValueError(f"unknown cell type {cell!r}")
        self.cells[x][y] = cell

    def fill_rect(self, x: int, y: int, w: int, h: int, cell: str) -> None:
        for ix in range(x, x + w):
            for iy in range(y, y + h):
                self.set(ix, iy, cell)

    def iter_cells(self, cell: str) -> Iterator[Coord2D]:
        """Yield coordinates holding ``cell`` in x-major scan order."""
        for x in range(self.width):
            column = self.cells[x]
            for y in range(self.height):
                if column[y] == cell:
                    yield x, y

    def count(self, cell: str) -> int:
        return sum(column.count(cell) for column in self.cells)

    def neighbours(self, x: int, y: int, diagonal: bool = False) -> Iterator[Coord2D]:
        offsets = ORTHOGONAL + DIAGONAL if diagonal else ORTHOGONAL
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def has_neighbour(self, x: int, y: int, cell: str, diagonal: bool = False) -> bool:
        return any(self.cells[nx][ny] == cell for nx, ny in self.neighbours(x, y, diagonal))

    def to_rows(self) -> List[str]:
        """Row strings, ``rows[y][x]`` (y grows downward in the serialized form)."""
        return ["".join(self.cells[x][y] for x in range(self.width)) for y in range(self.height)]

    def copy(self) -> "Grid":
        clone = Grid(self.width, self.height)
        clone.cells = [list(column) for column in self.cells]
        return clone

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self.cells == other.cells

    @classmethod
    def from_rows(cls, rows: List[str]) -> "Grid":
        """Build a grid from row strings of tile characters (used by tests and tooling)."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError("ragged rows")
            for x, ch in enumerate(row):
                grid.set(x, y, ch)
        return grid


class PathClassMap:
    """Per-cell corridor classification addressed directly by coordinate."""

    __slots__ = ("width", "height", "classes")

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.classes: List[List[Optional[str]]] = [[None for _ in range(height)] for _ in range(width)]

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> Optional[str]:
        self._check(x, y)
        return self.classes[x][y]

    def set(self, x: int, y: int, path_class: str) -> None:
        self._check(x, y)
        if path_class not in PATH_CLASSES:
            raise ValueError(f"unknown path class {path_class!r}")
        self.classes[x][y] = path_class

    def cells_with(self, path_class: str) -> List[Coord2D]:
        return [
            (x, y) for x in range(self.width) for y in range(self.height) if self.classes[x][y] == path_class
        ]

    def counts(self) -> Dict[str, int]:
        counter = Counter(c for column in self.classes for c in column if c is not None)
        return {cls: counter.get(cls, 0) for cls in PATH_CLASSES}

    def to_dict(self) -> Dict[str, List[List[int]]]:
        return {cls: [[x, y] for x, y in self.cells_with(cls)] for cls in PATH_CLASSES}

    def __eq__(self, other) -> bool:
        if not isinstance(other, PathClassMap):
            return NotImplemented
        return self.classes == other.classes


__all__ = ["Coord2D", "Grid", "PathClassMap"]
