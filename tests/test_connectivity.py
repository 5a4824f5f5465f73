import random

import pytest

from dungeongen.dungeon import DisconnectedRoomError, Grid
from dungeongen.dungeon.connectivity import (
    extra_edges,
    flood_reachable,
    greedy_spanning_edges,
    plan_connections,
    verify_connectivity,
)


def test_greedy_chain_follows_nearest_unvisited():
    centers = [(0, 0), (10, 0), (1, 0), (5, 0)]
    assert greedy_spanning_edges(centers) == [(0, 2), (2, 3), (3, 1)]


def test_greedy_chain_is_not_a_textbook_mst():
    # An MST would join 0-2 (length 4); the chain extends from the last attached room instead
    centers = [(0, 0), (3, 0), (-4, 0)]
    assert greedy_spanning_edges(centers) == [(0, 1), (1, 2)]


def test_greedy_chain_ties_pick_first_in_order():
    assert greedy_spanning_edges([(0, 0), (1, 0), (-1, 0)]) == [(0, 1), (1, 2)]


def test_tree_touches_every_room_once():
    rng = random.Random(4)
    centers = [(rng.randint(0, 60), rng.randint(0, 60)) for _ in range(12)]
    edges = greedy_spanning_edges(centers)
    assert len(edges) == len(centers) - 1
    attached = {0} | {b for _, b in edges}
    assert attached == set(range(len(centers)))


def test_no_edges_for_fewer_than_two_rooms():
    rng = random.Random(1)
    state = rng.getstate()
    assert greedy_spanning_edges([(3, 3)]) == []
    plan = plan_connections([(3, 3)], 1.0, rng)
    assert plan.tree == [] and plan.extras == []
    assert rng.getstate() == state


def test_extra_edges_bounds():
    assert extra_edges(5, 0.0, random.Random(1)) == []
    full = extra_edges(5, 1.0, random.Random(1))
    assert len(full) == 10
    assert all(i < j for i, j in full)


def test_extra_edges_draw_once_per_pair():
    rng = random.Random(9)
    extra_edges(4, 0.0, rng)
    ref = random.Random(9)
    for _ in range(6):
        ref.random()
    assert rng.random() == ref.random()


def test_plan_edges_lists_tree_then_extras():
    plan = plan_connections([(0, 0), (5, 5), (9, 0)], 1.0, random.Random(2))
    assert plan.edges[: len(plan.tree)] == plan.tree
    assert len(plan.extras) == 3


def test_flood_and_verify():
    grid = Grid.from_rows([
        "RREEE",
        "RPPPR",
        "EEEER",
        "RREEE",
    ])
    reached = flood_reachable(grid, (0, 0))
    assert (4, 2) in reached
    assert (0, 3) not in reached
    assert flood_reachable(grid, (2, 2)) == set()
    verify_connectivity(grid, [(0, 0), (4, 1)])
    with pytest.raises(DisconnectedRoomError) as exc:
        verify_connectivity(grid, [(0, 0), (4, 1), (1, 3)])
    assert exc.value.room_indices == [2]
