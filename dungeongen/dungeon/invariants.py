"""Structural invariant checks over a generated dungeon.

Used by the diagnostics script and the invariant tests. ``analyze`` never
raises; it returns lists of offending items keyed by check name so callers
can report every problem at once.
"""
from __future__ import annotations

from typing import Any, Dict, List

from .config import RandomEventable
from .connectivity import flood_reachable
from .tiles import CELL_TYPES, EVENTABLE, PATH_FLOOR, ROOM_ADJACENT, ROOM_FLOOR


def _segment_steps(segment) -> int:
    (ax, ay), (bx, by) = segment
    return abs(ax - bx) + abs(ay - by)


def analyze(dungeon) -> Dict[str, List[Any]]:
    grid = dungeon.grid
    cfg = dungeon.config
    rooms = dungeon.rooms
    classes = dungeon.path_classes
    res: Dict[str, List[Any]] = {
        'invalid_cells': [],
        'room_overlaps': [],
        'room_cell_mismatch': [],
        'unreachable_rooms': [],
        'long_segments': [],
        'unclassified_paths': [],
        'classified_non_paths': [],
        'adjacent_eventable': [],
        'misclassified_adjacent': [],
    }
    room_cells = set()
    for i, r in enumerate(rooms):
        room_cells.update(r.cells())
        for j in range(i + 1, len(rooms)):
            if r.intersects(rooms[j]):
                res['room_overlaps'].append((i, j))
    for x in range(grid.width):
        for y in range(grid.height):
            cell = grid.cells[x][y]
            if cell not in CELL_TYPES:
                res['invalid_cells'].append((x, y))
            if (cell == ROOM_FLOOR) != ((x, y) in room_cells):
                res['room_cell_mismatch'].append((x, y))
            cls = classes.get(x, y)
            if cell == PATH_FLOOR and cls is None:
                res['unclassified_paths'].append((x, y))
            if cell != PATH_FLOOR and cls is not None:
                res['classified_non_paths'].append((x, y))
            # random sampling only ever promotes isolated cells
            if (
                isinstance(cfg.eventable, RandomEventable)
                and cls == EVENTABLE
                and grid.has_neighbour(x, y, ROOM_FLOOR, diagonal=cfg.use_8_direction)
            ):
                res['adjacent_eventable'].append((x, y))
            if cls == ROOM_ADJACENT and not grid.has_neighbour(x, y, ROOM_FLOOR, diagonal=cfg.use_8_direction):
                res['misclassified_adjacent'].append((x, y))
    if len(rooms) >= 2:
        reached = flood_reachable(grid, rooms[0].center)
        res['unreachable_rooms'] = [i for i, r in enumerate(rooms) if r.center not in reached]
    res['long_segments'] = [s for s in dungeon.segments if _segment_steps(s) > cfg.max_straight_length]
    return res


def issue_counts(res: Dict[str, List[Any]]) -> Dict[str, int]:
    return {k: len(v) for k, v in res.items()}
