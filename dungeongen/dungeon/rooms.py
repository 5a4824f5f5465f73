import random
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .bsp import Region
from .grid import Grid
from .randomness import shuffled
from .tiles import ROOM_FLOOR

MIN_CARVED_SIZE = 3


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    w: int
    h: int

    def cells(self):
        for ix in range(self.x, self.x + self.w):
            for iy in range(self.y, self.y + self.h):
                yield ix, iy

    @property
    def center(self) -> Tuple[int, int]:
        return (self.x + self.w // 2, self.y + self.h // 2)

    def intersects(self, other: "Room") -> bool:
        return (
            self.x < other.x + other.w
            and other.x < self.x + self.w
            and self.y < other.y + other.h
            and other.y < self.y + self.h
        )

    def to_dict(self) -> Dict[str, object]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h, "center": list(self.center)}


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def carve_rooms(grid: Grid, leaves: Sequence[Region], config, rng: random.Random):
    """Carve rooms into a shuffled subset of BSP leaves.

    Returns (rooms, stats) where stats counts leaves skipped by the density
    draw and leaves too small to host a room.
    """
    rooms: List[Room] = []
    stats = {"leaves_skipped_density": 0, "leaves_skipped_small": 0}
    cap = config.target_room_count
    for leaf in shuffled(leaves, rng):
        if cap > 0 and len(rooms) >= cap:
            break
        if rng.random() > config.density:
            stats["leaves_skipped_density"] += 1
            continue
        if leaf.w - 2 < MIN_CARVED_SIZE or leaf.h - 2 < MIN_CARVED_SIZE:
            stats["leaves_skipped_small"] += 1
            continue
        rw = _clamp(rng.randint(config.min_room_size, config.max_room_size), MIN_CARVED_SIZE, leaf.w - 2)
        rh = _clamp(rng.randint(config.min_room_size, config.max_room_size), MIN_CARVED_SIZE, leaf.h - 2)
        # 1-cell margin inside the leaf on every side
        rx = leaf.x + rng.randint(1, leaf.w - rw - 1)
        ry = leaf.y + rng.randint(1, leaf.h - rh - 1)
        room = Room(rx, ry, rw, rh)
        grid.fill_rect(room.x, room.y, room.w, room.h, ROOM_FLOOR)
        rooms.append(room)
    return rooms, stats


__all__ = ["Room", "carve_rooms", "MIN_CARVED_SIZE"]
