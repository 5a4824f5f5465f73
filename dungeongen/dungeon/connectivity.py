"""Room connectivity planning and the post-carve reachability check.

Edges are ``(i, j)`` pairs of room indices; the corridor carver resolves them
to room centers. The tree is the greedy nearest-unvisited chain, not a
textbook MST: it always extends from the most recently attached room.
"""
from __future__ import annotations

import random
from collections import deque
from typing import List, NamedTuple, Sequence, Set, Tuple

from .errors import DisconnectedRoomError
from .grid import Coord2D, Grid
from .tiles import EMPTY, ORTHOGONAL

Edge = Tuple[int, int]


class ConnectionPlan(NamedTuple):
    tree: List[Edge]
    extras: List[Edge]

    @property
    def edges(self) -> List[Edge]:
        return self.tree + self.extras


def _dist2(a: Coord2D, b: Coord2D) -> int:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def greedy_spanning_edges(centers: Sequence[Coord2D]) -> List[Edge]:
    """Chain every center to its nearest unconnected neighbour, starting at index 0."""
    if len(centers) < 2:
        return []
    remaining = list(range(1, len(centers)))
    current = 0
    edges: List[Edge] = []
    while remaining:
        nearest = min(remaining, key=lambda j: _dist2(centers[current], centers[j]))
        edges.append((current, nearest))
        remaining.remove(nearest)
        current = nearest
    return edges


def extra_edges(count: int, connectivity: float, rng: random.Random) -> List[Edge]:
    # one draw per unordered pair regardless of probability
    extras: List[Edge] = []
    for i in range(count):
        for j in range(i + 1, count):
            if rng.random() < connectivity:
                extras.append((i, j))
    return extras


def plan_connections(centers: Sequence[Coord2D], connectivity: float, rng: random.Random) -> ConnectionPlan:
    if len(centers) < 2:
        return ConnectionPlan([], [])
    return ConnectionPlan(greedy_spanning_edges(centers), extra_edges(len(centers), connectivity, rng))


def flood_reachable(grid: Grid, start: Coord2D) -> Set[Coord2D]:
    """4-connected flood fill over every non-empty cell from ``start``."""
    if not grid.in_bounds(*start) or grid.get(*start) == EMPTY:
        return set()
    cells = grid.cells
    seen = {start}
    queue = deque([start])
    while queue:
        cx, cy = queue.popleft()
        for dx, dy in ORTHOGONAL:
            nx, ny = cx + dx, cy + dy
            if (nx, ny) in seen or not grid.in_bounds(nx, ny):
                continue
            if cells[nx][ny] != EMPTY:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


def verify_connectivity(grid: Grid, centers: Sequence[Coord2D]) -> None:
    """Raise DisconnectedRoomError when any room center is unreachable from the first."""
    if len(centers) < 2:
        return
    reached = flood_reachable(grid, centers[0])
    missing = [i for i, c in enumerate(centers) if c not in reached]
    if missing:
        raise DisconnectedRoomError(missing)


__all__ = [
    "Edge",
    "ConnectionPlan",
    "greedy_spanning_edges",
    "extra_edges",
    "plan_connections",
    "flood_reachable",
    "verify_connectivity",
]
