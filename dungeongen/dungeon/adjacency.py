from typing import List

from .grid import Coord2D, Grid, PathClassMap
from .tiles import ISOLATED, PATH_FLOOR, ROOM_ADJACENT, ROOM_FLOOR, UNCLASSIFIED


def classify_adjacency(grid: Grid, classes: PathClassMap, use_8_direction: bool = True, enabled: bool = True) -> List[Coord2D]:
    """Tag every corridor cell room-adjacent or isolated; return the isolated cells in scan order.

    With ``enabled`` False every corridor cell is left ``unclassified`` and no
    isolated cells are reported.
    """
    isolated: List[Coord2D] = []
    for x, y in grid.iter_cells(PATH_FLOOR):
        if not enabled:
            classes.set(x, y, UNCLASSIFIED)
        elif grid.has_neighbour(x, y, ROOM_FLOOR, diagonal=use_8_direction):
            classes.set(x, y, ROOM_ADJACENT)
        else:
            classes.set(x, y, ISOLATED)
            isolated.append((x, y))
    return isolated


__all__ = ["classify_adjacency"]
