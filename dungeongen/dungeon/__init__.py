"""Public dungeon package interface.

Import surface for the generation pipeline, its configuration types, tile
constants and error taxonomy.
"""

from .config import GenerationConfig, RandomEventable, RunDetectionEventable, apply_env_overrides  # noqa: F401
from .errors import (  # noqa: F401
    DisconnectedRoomError,
    DungeonError,
    InvalidConfigurationError,
    OutOfBoundsError,
)
from .features import StartGoal  # noqa: F401
from .grid import Grid, PathClassMap  # noqa: F401
from .pipeline import Dungeon  # noqa: F401
from .randomness import coerce_seed  # noqa: F401
from .rooms import Room  # noqa: F401
from .tiles import (  # noqa: F401
    EMPTY,
    EVENTABLE,
    ISOLATED,
    NOT_EVENTABLE,
    PATH_FLOOR,
    ROOM_ADJACENT,
    ROOM_FLOOR,
    UNCLASSIFIED,
    render_ascii,
)

__all__ = [
    "Dungeon",
    "GenerationConfig",
    "RandomEventable",
    "RunDetectionEventable",
    "apply_env_overrides",
    "coerce_seed",
    "Grid",
    "PathClassMap",
    "Room",
    "StartGoal",
    "render_ascii",
    "DungeonError",
    "InvalidConfigurationError",
    "OutOfBoundsError",
    "DisconnectedRoomError",
    "EMPTY",
    "ROOM_FLOOR",
    "PATH_FLOOR",
    "ROOM_ADJACENT",
    "ISOLATED",
    "EVENTABLE",
    "NOT_EVENTABLE",
    "UNCLASSIFIED",
]
