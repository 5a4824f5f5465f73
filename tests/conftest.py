import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dungeongen import create_app  # noqa: E402
from dungeongen.dungeon.config import ENV_MAP  # noqa: E402
from dungeongen.routes.dungeon_api import clear_dungeon_cache  # noqa: E402

_DUNGEON_ENV = list(ENV_MAP) + [
    "DUNGEON_EVENTABLE_MODE",
    "DUNGEON_DISABLE_CACHE",
    "DUNGEON_ENABLE_GENERATION_METRICS",
]


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation timing guard (deselect with -m 'not performance')")


@pytest.fixture(autouse=True)
def _clean_dungeon_env(monkeypatch):
    """Tests see library defaults regardless of the developer's shell or .env."""
    for key in _DUNGEON_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def app():
    clear_dungeon_cache()
    app = create_app({"TESTING": True})
    yield app
    clear_dungeon_cache()


@pytest.fixture()
def client(app):
    return app.test_client()
