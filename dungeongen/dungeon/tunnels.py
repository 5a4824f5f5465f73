import random
from typing import List, Tuple

from .grid import Coord2D, Grid
from .tiles import PATH_FLOOR, ROOM_FLOOR

Segment = Tuple[Coord2D, Coord2D]


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def _manhattan(a: Coord2D, b: Coord2D) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class CorridorCarver:
    """Carve planned edges into PATH_FLOOR corridors.

    Strategy:
      * Very distant endpoints (Manhattan > 3 * max_straight_length) are split
        once through a jittered midpoint.
      * Axis-aligned segments longer than max_straight_length are cut into
        max_straight_length chunks, so no carved straight line is longer.
      * Short segments bend into an L unless ``straight_corridors`` is on and
        the bend draw fails.
      * Long diagonal segments always become an L whose legs are re-split.
    Every straight line carved is appended to ``segments``.
    """

    def __init__(
        self,
        grid: Grid,
        rng: random.Random,
        corridor_width: int = 2,
        max_straight_length: int = 3,
        bend_probability: float = 0.8,
        straight_corridors: bool = True,
    ):
        self.grid = grid
        self.rng = rng
        self.corridor_width = corridor_width
        self.max_straight_length = max_straight_length
        self.bend_probability = bend_probability
        self.straight_corridors = straight_corridors
        self.segments: List[Segment] = []

    @classmethod
    def from_config(cls, grid: Grid, config, rng: random.Random) -> "CorridorCarver":
        return cls(
            grid,
            rng,
            corridor_width=config.corridor_width,
            max_straight_length=config.max_straight_length,
            bend_probability=config.bend_probability,
            straight_corridors=config.straight_corridors,
        )

    def carve_edge(self, a: Coord2D, b: Coord2D) -> None:
        grid = self.grid
        if not (grid.in_bounds(*a) and grid.in_bounds(*b)):
            return
        if _manhattan(a, b) > self.max_straight_length * 3:
            mid = (
                (a[0] + b[0]) // 2 + self.rng.randint(-2, 2),
                (a[1] + b[1]) // 2 + self.rng.randint(-2, 2),
            )
            mid = (
                max(1, min(grid.width - 2, mid[0])),
                max(1, min(grid.height - 2, mid[1])),
            )
            self.carve_simple_path(a, mid)
            self.carve_simple_path(mid, b)
            return
        self.carve_simple_path(a, b)

    def carve_simple_path(self, start: Coord2D, end: Coord2D) -> None:
        grid = self.grid
        if not (grid.in_bounds(*start) and grid.in_bounds(*end)):
            return
        limit = self.max_straight_length
        # peel max-length chunks off long straight segments
        while start != end and (start[0] == end[0] or start[1] == end[1]) and _manhattan(start, end) > limit:
            if start[0] == end[0]:
                chunk_end = (start[0], start[1] + _sign(end[1] - start[1]) * limit)
            else:
                chunk_end = (start[0] + _sign(end[0] - start[0]) * limit, start[1])
            self.carve_line(start, chunk_end)
            start = chunk_end
        if start == end:
            return
        aligned = start[0] == end[0] or start[1] == end[1]
        if aligned or _manhattan(start, end) <= limit:
            if self.straight_corridors and aligned and self.rng.random() > self.bend_probability:
                self.carve_line(start, end)
            else:
                corner = self._corner(start, end)
                self.carve_line(start, corner)
                self.carve_line(corner, end)
            return
        corner = self._corner(start, end)
        self.carve_simple_path(start, corner)
        self.carve_simple_path(corner, end)

    def _corner(self, start: Coord2D, end: Coord2D) -> Coord2D:
        if self.rng.randint(0, 1) == 0:
            return (end[0], start[1])
        return (start[0], end[1])

    def carve_line(self, start: Coord2D, end: Coord2D) -> None:
        """Carve a straight (axis-aligned) line including both endpoints."""
        step = (_sign(end[0] - start[0]), _sign(end[1] - start[1]))
        self.segments.append((start, end))
        x, y = start
        while (x, y) != end:
            self.carve_cell(x, y, step)
            x += step[0]
            y += step[1]
        self.carve_cell(end[0], end[1], step)

    def carve_cell(self, x: int, y: int, direction: Tuple[int, int]) -> None:
        """Mark one corridor cell (plus its side cells for width 2); rooms and out-of-bounds cells are left alone."""
        self._floor(x, y)
        if self.corridor_width < 2:
            return
        if direction[0] != 0:
            self._floor(x, y + 1)
            self._floor(x, y - 1)
        else:
            self._floor(x + 1, y)
            self._floor(x - 1, y)

    def _floor(self, x: int, y: int) -> None:
        grid = self.grid
        if not grid.in_bounds(x, y):
            return
        if grid.cells[x][y] != ROOM_FLOOR:
            grid.cells[x][y] = PATH_FLOOR


__all__ = ["CorridorCarver", "Segment"]
