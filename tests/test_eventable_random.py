import random

import pytest

from dungeongen.dungeon import EVENTABLE, ISOLATED, RandomEventable
from dungeongen.dungeon.eventable import apply_eventable, random_target_count, select_random
from tests.dungeon_test_utils import classified

CORRIDOR = ["PPPPPPPP", "EEEEEEEE"]


@pytest.mark.parametrize(
    "count,ratio,isolated,expected",
    [
        (-1, 0.3, 7, 7),
        (0, 0.5, 5, 2),  # round(2.5) -> 2
        (0, 0.3, 10, 3),
        (3, 0.3, 10, 3),
        (10, 0.3, 4, 4),
        (0, 0.0, 9, 0),
    ],
)
def test_target_count(count, ratio, isolated, expected):
    assert random_target_count(isolated, RandomEventable(count=count, ratio=ratio)) == expected


def test_selected_cells_are_a_subset_of_isolated():
    grid, classes, isolated = classified(CORRIDOR)
    outcome = select_random(classes, isolated, RandomEventable(count=3), random.Random(11))
    assert len(outcome.eventable) == 3
    assert len(set(outcome.eventable)) == 3
    assert set(outcome.eventable) <= set(isolated)
    assert sorted(classes.cells_with(EVENTABLE)) == sorted(outcome.eventable)
    assert len(classes.cells_with(ISOLATED)) == len(isolated) - 3
    assert outcome.not_eventable == [] and outcome.runs == []


def test_all_isolated_cells_convert_with_minus_one():
    _, classes, isolated = classified(CORRIDOR)
    select_random(classes, isolated, RandomEventable(count=-1), random.Random(2))
    assert classes.cells_with(ISOLATED) == []
    assert len(classes.cells_with(EVENTABLE)) == 8


def test_same_seed_same_selection():
    picks = []
    for _ in range(2):
        _, classes, isolated = classified(CORRIDOR)
        picks.append(select_random(classes, isolated, RandomEventable(count=4), random.Random(77)).eventable)
    assert picks[0] == picks[1]


def test_no_draws_when_nothing_to_select():
    rng = random.Random(5)
    state = rng.getstate()
    _, classes, _ = classified(CORRIDOR)
    assert select_random(classes, [], RandomEventable(count=3), rng).eventable == []
    _, classes, isolated = classified(CORRIDOR)
    assert select_random(classes, isolated, RandomEventable(count=0, ratio=0.0), rng).eventable == []
    assert rng.getstate() == state


def test_random_mode_requires_rng_and_known_modes():
    grid, classes, isolated = classified(CORRIDOR)
    with pytest.raises(ValueError):
        apply_eventable(grid, classes, isolated, RandomEventable())
    with pytest.raises(TypeError):
        apply_eventable(grid, classes, isolated, object(), random.Random(1))
