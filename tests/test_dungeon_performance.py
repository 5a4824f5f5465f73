import time
import pytest
from dungeongen.dungeon import Dungeon, GenerationConfig, RunDetectionEventable

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
# Adjust thresholds if CI hardware differs significantly.

@pytest.mark.performance
@pytest.mark.parametrize("eventable", [None, RunDetectionEventable()])
def test_dungeon_generation_medium_seeds(eventable):
    seeds = [10101, 20202, 30303]
    max_seconds_per = 1.5  # generous threshold; tune as needed
    timings = []
    for s in seeds:
        cfg = GenerationConfig(width=96, height=96, seed=s)
        if eventable is not None:
            cfg.eventable = eventable
        start = time.perf_counter()
        d = Dungeon(cfg)
        elapsed = time.perf_counter() - start
        timings.append(elapsed)
        assert d.grid is not None
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
    avg = sum(timings)/len(timings)
    assert avg < max_seconds_per * 0.85, f"Average generation {avg:.3f}s too high"
