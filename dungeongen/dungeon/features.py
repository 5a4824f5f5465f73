"""Start/goal designation and per-room gameplay tags."""
from __future__ import annotations

import math
from typing import List, NamedTuple, Optional, Sequence

from .rooms import Room

START = "start"
GOAL = "goal"
PLAIN = "room"


class StartGoal(NamedTuple):
    start: int
    goal: int
    distance: float


def select_start_goal(rooms: Sequence[Room], min_room_distance: float) -> Optional[StartGoal]:
    """Pick the two rooms whose centers are farthest apart.

    Every unordered pair is compared; the first pair reaching the maximum
    wins ties. Returns None when fewer than two rooms exist or the best
    distance falls below ``min_room_distance``.
    """
    best: Optional[StartGoal] = None
    for i in range(len(rooms)):
        ax, ay = rooms[i].center
        for j in range(i + 1, len(rooms)):
            bx, by = rooms[j].center
            d = math.hypot(ax - bx, ay - by)
            if best is None or d > best.distance:
                best = StartGoal(i, j, d)
    if best is None or best.distance < min_room_distance:
        return None
    return best


def room_tags(rooms: Sequence[Room], start_goal: Optional[StartGoal]) -> List[str]:
    tags = [PLAIN] * len(rooms)
    if start_goal is not None:
        tags[start_goal.start] = START
        tags[start_goal.goal] = GOAL
    return tags


__all__ = ["StartGoal", "select_start_goal", "room_tags", "START", "GOAL", "PLAIN"]
