from dungeongen.dungeon import ISOLATED, ROOM_ADJACENT, UNCLASSIFIED, Grid, PathClassMap
from dungeongen.dungeon.adjacency import classify_adjacency
from tests.dungeon_test_utils import classified

DIAGONAL_ONLY = [
    "RRE",
    "RRE",
    "EEP",
]


def test_orthogonal_room_neighbour():
    grid, classes, isolated = classified([
        "RRREEEE",
        "RRRPPPP",
        "RRREEEE",
    ])
    assert classes.get(3, 1) == ROOM_ADJACENT
    assert [classes.get(x, 1) for x in (4, 5, 6)] == [ISOLATED] * 3
    assert isolated == [(4, 1), (5, 1), (6, 1)]


def test_diagonal_neighbour_depends_on_mode():
    _, classes8, isolated8 = classified(DIAGONAL_ONLY, use_8_direction=True)
    assert classes8.get(2, 2) == ROOM_ADJACENT
    assert isolated8 == []
    _, classes4, isolated4 = classified(DIAGONAL_ONLY, use_8_direction=False)
    assert classes4.get(2, 2) == ISOLATED
    assert isolated4 == [(2, 2)]


def test_every_corridor_cell_gets_exactly_one_class():
    grid, classes, _ = classified([
        "EPPPE",
        "ERRPE",
        "EPEPP",
    ])
    for x in range(grid.width):
        for y in range(grid.height):
            if grid.get(x, y) == "P":
                assert classes.get(x, y) in (ROOM_ADJACENT, ISOLATED)
            else:
                assert classes.get(x, y) is None


def test_disabled_pass_leaves_cells_unclassified():
    grid = Grid.from_rows(["RPP", "EEP"])
    classes = PathClassMap(grid.width, grid.height)
    assert classify_adjacency(grid, classes, enabled=False) == []
    assert classes.cells_with(UNCLASSIFIED) == [(1, 0), (2, 0), (2, 1)]
