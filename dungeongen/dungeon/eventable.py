"""Eventable corridor selection.

Two exclusive strategies, chosen by the type of ``config.eventable``:

* RandomEventable: shuffle the isolated cells and promote the first N.
* RunDetectionEventable: find straight corridor runs of bounded length that
  do not touch a room, promote them, and fence each with a not-eventable cell
  on either side.
"""
from __future__ import annotations

import random
from typing import List, NamedTuple, Optional, Sequence, Set, Tuple

from .config import EventableMode, RandomEventable, RunDetectionEventable
from .grid import Coord2D, Grid, PathClassMap
from .randomness import shuffled
from .tiles import EVENTABLE, NOT_EVENTABLE, PATH_FLOOR, ROOM_FLOOR


class EventableRun(NamedTuple):
    start: Coord2D
    end: Coord2D
    horizontal: bool

    @property
    def length(self) -> int:
        return abs(self.end[0] - self.start[0]) + abs(self.end[1] - self.start[1]) + 1


class EventableOutcome(NamedTuple):
    eventable: List[Coord2D]
    not_eventable: List[Coord2D]
    runs: List[EventableRun]


def random_target_count(isolated_count: int, mode: RandomEventable) -> int:
    if mode.count == -1:
        return isolated_count
    if mode.count == 0:
        # round() ties to even
        return int(round(isolated_count * mode.ratio))
    return min(mode.count, isolated_count)


def select_random(classes: PathClassMap, isolated: Sequence[Coord2D], mode: RandomEventable, rng: random.Random) -> EventableOutcome:
    target = random_target_count(len(isolated), mode)
    if not isolated or target <= 0:
        return EventableOutcome([], [], [])
    chosen = shuffled(isolated, rng)[:target]
    for x, y in chosen:
        classes.set(x, y, EVENTABLE)
    return EventableOutcome(chosen, [], [])


def _touches_room(grid: Grid, cells: Sequence[Coord2D]) -> bool:
    return any(grid.has_neighbour(x, y, ROOM_FLOOR) for x, y in cells)


def _window(run: List[Coord2D], before: Coord2D, after: Coord2D, mode: RunDetectionEventable):
    """Return (core, buffers) for a maximal run, or None when the run is rejected."""
    length = len(run)
    if mode.min_length <= length <= mode.max_length:
        return run, (before, after)
    if length > mode.max_length:
        size = min(mode.max_length, length - 2)
        if size < mode.min_length:
            return None
        offset = (length - size) // 2
        return run[offset:offset + size], (run[offset - 1], run[offset + size])
    return None


def _scan_line(grid: Grid, line: List[Coord2D], step: Coord2D, claimed: Set[Coord2D]):
    """Yield (run, before, after) for each maximal unclaimed PATH_FLOOR run along ``line``."""
    cells = grid.cells
    i, n = 0, len(line)
    while i < n:
        x, y = line[i]
        if cells[x][y] != PATH_FLOOR or (x, y) in claimed:
            i += 1
            continue
        start = i
        while i < n and cells[line[i][0]][line[i][1]] == PATH_FLOOR and line[i] not in claimed:
            i += 1
        run = line[start:i]
        # neighbours just outside the run (may lie off the grid)
        sx, sy = run[0]
        ex, ey = run[-1]
        yield run, (sx - step[0], sy - step[1]), (ex + step[0], ey + step[1])


def detect_runs(grid: Grid, classes: PathClassMap, mode: RunDetectionEventable) -> EventableOutcome:
    """Row pass first, then column pass over cells no row run claimed."""
    claimed: Set[Coord2D] = set()
    buffers: List[Coord2D] = []
    runs: List[EventableRun] = []
    lines: List[Tuple[bool, List[Coord2D]]] = []
    lines.extend((True, [(x, y) for x in range(grid.width)]) for y in range(grid.height))
    lines.extend((False, [(x, y) for y in range(grid.height)]) for x in range(grid.width))
    for horizontal, line in lines:
        step = (1, 0) if horizontal else (0, 1)
        for run, before, after in _scan_line(grid, line, step, claimed):
            window = _window(run, before, after, mode)
            if window is None:
                continue
            core, fence = window
            if not mode.ignore_room_adjacency and _touches_room(grid, core):
                continue
            claimed.update(core)
            buffers.extend(fence)
            runs.append(EventableRun(core[0], core[-1], horizontal))
    eventable: List[Coord2D] = []
    for x in range(grid.width):
        for y in range(grid.height):
            if (x, y) in claimed:
                classes.set(x, y, EVENTABLE)
                eventable.append((x, y))
    not_eventable: List[Coord2D] = []
    for x, y in buffers:
        if (x, y) in claimed or not grid.in_bounds(x, y) or grid.cells[x][y] != PATH_FLOOR:
            continue
        if classes.get(x, y) != NOT_EVENTABLE:
            classes.set(x, y, NOT_EVENTABLE)
            not_eventable.append((x, y))
    return EventableOutcome(eventable, not_eventable, runs)


def apply_eventable(
    grid: Grid,
    classes: PathClassMap,
    isolated: Sequence[Coord2D],
    mode: EventableMode,
    rng: Optional[random.Random] = None,
) -> EventableOutcome:
    """Run exactly one eventable strategy according to the type of ``mode``."""
    if isinstance(mode, RandomEventable):
        if rng is None:
            raise ValueError("random eventable selection needs an rng")
        return select_random(classes, isolated, mode, rng)
    if isinstance(mode, RunDetectionEventable):
        return detect_runs(grid, classes, mode)
    raise TypeError(f"unknown eventable mode {mode!r}")


__all__ = [
    "EventableRun",
    "EventableOutcome",
    "random_target_count",
    "select_random",
    "detect_runs",
    "apply_eventable",
]
