"""Dungeon generation invariant tests.

Structural integrity over a handful of seeds in both eventable modes, using
the same ``analyze`` helper the diagnostics script reports from.

Invariants covered:
1. Every cell is a known cell type and room cells match the room list.
2. Rooms never overlap and every room is reachable from the first.
3. No carved corridor segment exceeds max_straight_length.
4. Exactly the corridor cells carry a class; room-adjacent cells really touch a room.
5. Random sampling never promotes a room-adjacent cell.
"""

from __future__ import annotations

import pytest

from dungeongen.dungeon import Dungeon, GenerationConfig, RandomEventable, RunDetectionEventable
from dungeongen.dungeon.invariants import analyze, issue_counts

SEEDS = [1, 42, 1337, 292372]


def gen(seed: int, **overrides) -> Dungeon:
    return Dungeon(GenerationConfig(seed=seed, **overrides))


@pytest.mark.parametrize("seed", SEEDS)
def test_random_mode_invariants(seed):
    d = gen(seed)
    counts = issue_counts(analyze(d))
    assert all(v == 0 for v in counts.values()), f"seed {seed}: {counts}"


@pytest.mark.parametrize("seed", SEEDS)
def test_run_mode_invariants(seed):
    d = gen(seed, eventable=RunDetectionEventable())
    counts = issue_counts(analyze(d))
    assert all(v == 0 for v in counts.values()), f"seed {seed}: {counts}"


@pytest.mark.parametrize("seed", SEEDS[:2])
def test_narrow_orthogonal_variant(seed):
    d = gen(seed, corridor_width=1, use_8_direction=False, max_straight_length=5, straight_corridors=False)
    counts = issue_counts(analyze(d))
    assert all(v == 0 for v in counts.values()), f"seed {seed}: {counts}"


def test_detected_runs_stay_within_bounds_and_away_from_rooms():
    mode = RunDetectionEventable(min_length=3, max_length=5)
    for seed in SEEDS:
        d = gen(seed, eventable=mode)
        for run in d.eventable_runs:
            assert mode.min_length <= run.length <= mode.max_length
            (sx, sy), (ex, ey) = run.start, run.end
            for x in range(sx, ex + 1):
                for y in range(sy, ey + 1):
                    assert not d.grid.has_neighbour(x, y, "R"), f"seed {seed}: run cell {(x, y)} touches a room"


def test_random_mode_respects_count_cap():
    for seed in SEEDS:
        d = gen(seed, eventable=RandomEventable(count=4))
        counts = d.path_classes.counts()
        assert counts["eventable"] == min(4, counts["eventable"] + counts["isolated"])
