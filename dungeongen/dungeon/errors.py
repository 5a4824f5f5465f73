"""Exception taxonomy for dungeon generation.

InvalidConfigurationError is raised before any stage runs. OutOfBoundsError
guards direct grid access (corridor carving drops out-of-range writes instead
of raising). DisconnectedRoomError signals a broken connectivity planner and is
never expected in a healthy build.
"""

from __future__ import annotations

from typing import Iterable, List


class DungeonError(Exception):
    """Base class for generation errors."""


class InvalidConfigurationError(DungeonError, ValueError):
    def __init__(self, details: Iterable[str]):
        self.details: List[str] = list(details)
        super().__init__("invalid dungeon configuration: " + "; ".join(self.details))


class OutOfBoundsError(DungeonError, IndexError):
    def __init__(self, x: int, y: int, width: int, height: int):
        self.x, self.y = x, y
        super().__init__(f"({x},{y}) outside {width}x{height} grid")


class DisconnectedRoomError(DungeonError, RuntimeError):
    def __init__(self, room_indices: Iterable[int]):
        self.room_indices: List[int] = list(room_indices)
        super().__init__(f"rooms unreachable after corridor carving: {self.room_indices}")


__all__ = [
    "DungeonError",
    "InvalidConfigurationError",
    "OutOfBoundsError",
    "DisconnectedRoomError",
]
