"""Binary space partition of the dungeon bounds into leaf regions."""

from __future__ import annotations

import random
from typing import List, NamedTuple, Optional

MAX_SPLIT_DEPTH = 8


class Region(NamedTuple):
    x: int
    y: int
    w: int
    h: int

    @property
    def area(self) -> int:
        return self.w * self.h


def split_area(
    region: Region,
    rng: random.Random,
    min_room_size: int,
    max_room_size: int,
    depth: int = 0,
    leaves: Optional[List[Region]] = None,
) -> List[Region]:
    """Recursively split ``region`` and return the leaves in depth-first order.

    A region becomes a leaf once ``depth`` exceeds MAX_SPLIT_DEPTH or either
    side is shorter than twice the maximum room size. Otherwise it is cut
    across its longer side (ties cut horizontally, along y) at a position
    drawn from ``[min_room_size, side - min_room_size]``.
    """
    if leaves is None:
        leaves = []
    if depth > MAX_SPLIT_DEPTH or region.w < max_room_size * 2 or region.h < max_room_size * 2:
        leaves.append(region)
        return leaves
    if region.w > region.h:
        cut = rng.randint(min_room_size, region.w - min_room_size)
        a = Region(region.x, region.y, cut, region.h)
        b = Region(region.x + cut, region.y, region.w - cut, region.h)
    else:
        cut = rng.randint(min_room_size, region.h - min_room_size)
        a = Region(region.x, region.y, region.w, cut)
        b = Region(region.x, region.y + cut, region.w, region.h - cut)
    split_area(a, rng, min_room_size, max_room_size, depth + 1, leaves)
    split_area(b, rng, min_room_size, max_room_size, depth + 1, leaves)
    return leaves


def partition(width: int, height: int, rng: random.Random, min_room_size: int, max_room_size: int) -> List[Region]:
    return split_area(Region(0, 0, width, height), rng, min_room_size, max_room_size)


__all__ = ["MAX_SPLIT_DEPTH", "Region", "split_area", "partition"]
