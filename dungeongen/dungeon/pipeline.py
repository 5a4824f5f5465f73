"""Pipeline orchestration for dungeon generation.

Provides the public Dungeon class: one instance is one generation run. The
configuration is validated before any stage runs, then every stage executes
once, in order, over a fresh grid and a single RNG stream.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import os
import random
import time

from ..logging_utils import get_logger
from .adjacency import classify_adjacency
from .config import GenerationConfig, apply_env_overrides
from .eventable import apply_eventable
from .features import StartGoal, room_tags, select_start_goal
from .generator import Generator
from .grid import PathClassMap
from .metrics import init_metrics
from .randomness import coerce_seed, make_rng
from .tiles import EMPTY, PATH_FLOOR, ROOM_FLOOR

log = get_logger("dungeon")

_FALSY = {'0', 'false', 'no', ''}


@dataclass(eq=False)
class Dungeon:
    config: Optional[GenerationConfig] = None
    seed: Optional[int] = None
    enable_metrics: bool = True
    rng: Optional[random.Random] = field(default=None, repr=False)

    def __post_init__(self):
        # No explicit config: defaults layered with DUNGEON_* environment overrides
        if self.config is None:
            self.config = apply_env_overrides(GenerationConfig())
        self.config.validate()
        if 'DUNGEON_ENABLE_GENERATION_METRICS' in os.environ:
            val = os.environ.get('DUNGEON_ENABLE_GENERATION_METRICS', '').lower()
            self.enable_metrics = val not in _FALSY
        # Flask app config overrides (highest precedence)
        from flask import current_app, has_app_context
        if has_app_context() and 'DUNGEON_ENABLE_GENERATION_METRICS' in current_app.config:
            self.enable_metrics = bool(current_app.config['DUNGEON_ENABLE_GENERATION_METRICS'])
        self.seed = coerce_seed(self.config.seed if self.seed is None else self.seed)
        if self.rng is None:
            self.rng, self.seed = make_rng(self.seed)
        self.metrics: Dict[str, Any] = init_metrics() if self.enable_metrics else {}
        self._run_pipeline()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def edges(self) -> List[tuple]:
        return self.tree_edges + self.extra_edges

    def _run_pipeline(self):
        """Execute ordered generation phases with lightweight per-phase timing.

        Adds `phase_ms` mapping phase name -> duration (ms) when metrics are
        enabled.
        """
        if self.enable_metrics:
            start = time.perf_counter()
            phase_times = {}
            def _phase(label, fn, *a, **k):
                ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
                phase_times[label] = int((pe-ps)*1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)
        cfg = self.config
        # Structural generation
        outputs = Generator(cfg, self.rng).run(_phase)
        self.grid = outputs.grid
        self.rooms = outputs.rooms
        self.leaves = outputs.leaves
        self.tree_edges = outputs.plan.tree
        self.extra_edges = outputs.plan.extras
        self.segments = outputs.segments
        # Start/goal designation
        self.start_goal: Optional[StartGoal] = _phase(
            'select_start_goal', select_start_goal, self.rooms, cfg.min_room_distance
        )
        if self.start_goal is None:
            log.warn(event="no_start_goal", seed=self.seed, rooms=len(self.rooms), min_distance=cfg.min_room_distance)
        self.room_tags = room_tags(self.rooms, self.start_goal)
        # Corridor classification: adjacency must finish before eventable selection
        self.path_classes = PathClassMap(cfg.width, cfg.height)
        isolated = _phase(
            'classify_adjacency', classify_adjacency, self.grid, self.path_classes,
            cfg.use_8_direction, cfg.classify_room_adjacency,
        )
        outcome = _phase('eventable', apply_eventable, self.grid, self.path_classes, isolated, cfg.eventable, self.rng)
        self.eventable_runs = outcome.runs

        if self.enable_metrics:
            m = self.metrics
            m['leaves'] = len(self.leaves)
            m['rooms'] = len(self.rooms)
            m.update(outputs.room_stats)
            m['tree_edges'] = len(self.tree_edges)
            m['extra_edges'] = len(self.extra_edges)
            m['segments'] = len(self.segments)
            m['tiles_empty'] = self.grid.count(EMPTY)
            m['tiles_room'] = self.grid.count(ROOM_FLOOR)
            m['tiles_path'] = self.grid.count(PATH_FLOOR)
            for cls, n in self.path_classes.counts().items():
                m[f'path_{cls}'] = n
            m['eventable_runs'] = len(outcome.runs)
            m['start_goal_found'] = self.start_goal is not None
            m['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            m['phase_ms'] = phase_times
        log.info(
            event="dungeon_generated",
            seed=self.seed,
            size=f"{cfg.width}x{cfg.height}",
            rooms=len(self.rooms),
            edges=len(self.tree_edges) + len(self.extra_edges),
            eventable=len(outcome.eventable),
            mode=cfg.eventable.mode,
            runtime_ms=self.metrics.get('runtime_ms'),
        )

    def to_dict(self) -> Dict[str, Any]:
        sg = self.start_goal
        return {
            'seed': self.seed,
            'width': self.width,
            'height': self.height,
            'config': self.config.to_dict(),
            'grid': self.grid.to_rows(),
            'rooms': [dict(r.to_dict(), tag=tag) for r, tag in zip(self.rooms, self.room_tags)],
            'edges': {
                'tree': [list(e) for e in self.tree_edges],
                'extra': [list(e) for e in self.extra_edges],
            },
            'start_goal': None if sg is None else {
                'start': sg.start, 'goal': sg.goal, 'distance': round(sg.distance, 3),
            },
            'path_classes': self.path_classes.to_dict(),
            'metrics': dict(self.metrics),
        }
