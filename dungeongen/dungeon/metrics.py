from typing import Dict

from .tiles import PATH_CLASSES


def init_metrics() -> Dict[str, int | float | bool]:
    metrics: Dict[str, int | float | bool] = {
        'leaves': 0,
        'rooms': 0,
        'leaves_skipped_density': 0,
        'leaves_skipped_small': 0,
        'tree_edges': 0,
        'extra_edges': 0,
        'segments': 0,
        'tiles_empty': 0,
        'tiles_room': 0,
        'tiles_path': 0,
        'eventable_runs': 0,
        'start_goal_found': False,
        'runtime_ms': 0.0,
    }
    for cls in PATH_CLASSES:
        metrics[f'path_{cls}'] = 0
    return metrics
