from dungeongen.dungeon import Dungeon
from dungeongen.dungeon.metrics import init_metrics
from tests.dungeon_test_utils import small_config

PHASES = [
    "partition",
    "carve_rooms",
    "plan_connections",
    "carve_corridors",
    "verify_connectivity",
    "select_start_goal",
    "classify_adjacency",
    "eventable",
]


def test_metrics_keys_and_counts():
    d = Dungeon(small_config(seed=12345))
    m = d.metrics
    for k in init_metrics():
        assert k in m
    assert m["rooms"] == len(d.rooms)
    assert m["leaves"] == len(d.leaves)
    assert m["tree_edges"] == len(d.tree_edges) and m["extra_edges"] == len(d.extra_edges)
    assert m["tiles_empty"] + m["tiles_room"] + m["tiles_path"] == 40 * 40
    assert m["leaves_skipped_density"] + m["leaves_skipped_small"] <= m["leaves"]
    assert sum(v for k, v in m.items() if k.startswith("path_")) == m["tiles_path"]
    assert m["start_goal_found"] is (d.start_goal is not None)
    assert isinstance(m["runtime_ms"], int)


def test_phase_timings_recorded():
    d = Dungeon(small_config(seed=1))
    assert list(d.metrics["phase_ms"]) == PHASES
    assert all(v >= 0 for v in d.metrics["phase_ms"].values())


def test_metrics_disabled_by_flag():
    d = Dungeon(small_config(seed=1), enable_metrics=False)
    assert d.metrics == {}
    assert d.to_dict()["metrics"] == {}


def test_metrics_disabled_by_environment(monkeypatch):
    monkeypatch.setenv("DUNGEON_ENABLE_GENERATION_METRICS", "0")
    assert Dungeon(small_config(seed=1)).metrics == {}


def test_app_config_takes_precedence(app, monkeypatch):
    monkeypatch.setenv("DUNGEON_ENABLE_GENERATION_METRICS", "0")
    app.config["DUNGEON_ENABLE_GENERATION_METRICS"] = True
    with app.app_context():
        d = Dungeon(small_config(seed=1))
    assert "runtime_ms" in d.metrics


def test_metrics_do_not_change_layout():
    cfg = small_config(seed=99)
    assert Dungeon(cfg).grid == Dungeon(cfg, enable_metrics=False).grid
