import random

from dungeongen.dungeon.bsp import MAX_SPLIT_DEPTH, Region, partition, split_area


def _cells(region):
    return {(x, y) for x in range(region.x, region.x + region.w) for y in range(region.y, region.y + region.h)}


def test_leaves_tile_area_without_overlap():
    leaves = partition(64, 64, random.Random(3), 4, 12)
    seen = set()
    for leaf in leaves:
        cells = _cells(leaf)
        assert not (seen & cells), f"overlapping leaf {leaf}"
        seen |= cells
    assert seen == _cells(Region(0, 0, 64, 64))


def test_small_region_is_a_single_leaf():
    r = Region(2, 3, 15, 40)
    assert split_area(r, random.Random(1), 4, 8) == [r]


def test_leaf_sides_never_below_min_room_size():
    for seed in range(10):
        for leaf in partition(80, 50, random.Random(seed), 5, 10):
            assert leaf.w >= 5 and leaf.h >= 5


def test_depth_cap_bounds_leaf_count():
    # Huge area with tiny rooms would otherwise split for a very long time
    leaves = split_area(Region(0, 0, 4096, 4096), random.Random(7), 3, 3)
    assert 1 < len(leaves) <= 2 ** (MAX_SPLIT_DEPTH + 1)


def test_split_positions_come_from_rng():
    a = partition(64, 64, random.Random(11), 4, 12)
    b = partition(64, 64, random.Random(11), 4, 12)
    assert a == b
    assert all(isinstance(leaf, Region) for leaf in a)
