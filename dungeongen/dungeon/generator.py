"""Core structural generation phases: grid init, BSP partitioning, room carving, connection planning & corridor carving."""
from __future__ import annotations
import random
from typing import Callable, Dict, List, NamedTuple, Optional

from .bsp import Region, partition
from .config import GenerationConfig
from .connectivity import ConnectionPlan, plan_connections, verify_connectivity
from .grid import Grid
from .rooms import Room, carve_rooms
from .tunnels import CorridorCarver, Segment

PhaseRunner = Callable[..., object]


class StructuralOutputs(NamedTuple):
    grid: Grid
    leaves: List[Region]
    rooms: List[Room]
    plan: ConnectionPlan
    segments: List[Segment]
    room_stats: Dict[str, int]


def _direct(label, fn, *a, **k):
    return fn(*a, **k)


class Generator:
    """Runs the structural stages in their fixed RNG draw order.

    The caller owns ``rng``; every draw goes through it so a seeded stream
    reproduces the layout exactly.
    """

    def __init__(self, config: GenerationConfig, rng: random.Random):
        self.config = config
        self.rng = rng

    def init_grid(self) -> Grid:
        return Grid(self.config.width, self.config.height)

    def bsp_partition(self) -> List[Region]:
        c = self.config
        return partition(c.width, c.height, self.rng, c.min_room_size, c.max_room_size)

    def place_rooms(self, grid: Grid, leaves: List[Region]):
        return carve_rooms(grid, leaves, self.config, self.rng)

    def build_room_graph(self, rooms: List[Room]) -> ConnectionPlan:
        return plan_connections([r.center for r in rooms], self.config.connectivity, self.rng)

    def carve_corridors(self, grid: Grid, rooms: List[Room], plan: ConnectionPlan) -> List[Segment]:
        carver = CorridorCarver.from_config(grid, self.config, self.rng)
        centers = [r.center for r in rooms]
        for a, b in plan.edges:
            carver.carve_edge(centers[a], centers[b])
        return carver.segments

    def run(self, phase: Optional[PhaseRunner] = None) -> StructuralOutputs:
        phase = phase or _direct
        grid = self.init_grid()
        leaves = phase('partition', self.bsp_partition)
        rooms, room_stats = phase('carve_rooms', self.place_rooms, grid, leaves)
        plan = phase('plan_connections', self.build_room_graph, rooms)
        segments = phase('carve_corridors', self.carve_corridors, grid, rooms, plan)
        phase('verify_connectivity', verify_connectivity, grid, [r.center for r in rooms])
        return StructuralOutputs(grid, leaves, rooms, plan, segments, room_stats)
