"""
project: dungeongen
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

JSON endpoints over the generation pipeline: full generation from a posted
configuration, the effective defaults, seed coercion, and a cached map lookup
by seed and size.
"""

import os
import threading
from dataclasses import replace
from typing import Optional, Tuple

from flask import Blueprint, current_app, has_app_context, jsonify, request

from dungeongen.dungeon import Dungeon, GenerationConfig, apply_env_overrides, coerce_seed, render_ascii
from dungeongen.dungeon.errors import InvalidConfigurationError
from dungeongen.dungeon.randomness import make_rng
from dungeongen.logging_utils import get_logger

log = get_logger("dungeon_api")

# Simple in-process cache (seed,size)->Dungeon instance. Thread-safe with a lock because the dev server is threaded.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # small LRU-ish manual cap


def _cache_disabled() -> bool:
    if os.environ.get("DUNGEON_DISABLE_CACHE") == "1":
        return True
    return has_app_context() and bool(current_app.config.get("DUNGEON_DISABLE_CACHE"))


def base_config() -> GenerationConfig:
    """Defaults, then DUNGEON_* environment overrides, then the app's DUNGEON_DEFAULTS mapping."""
    cfg = apply_env_overrides(GenerationConfig())
    if has_app_context():
        overrides = current_app.config.get("DUNGEON_DEFAULTS") or {}
        if overrides:
            cfg = GenerationConfig.from_mapping(overrides, base=cfg)
    return cfg


def get_cached_dungeon(seed: int, size: Tuple[int, int], base: Optional[GenerationConfig] = None) -> Dungeon:
    base = base or base_config()
    config = replace(base, width=size[0], height=size[1], seed=seed).validate()
    if _cache_disabled():
        return Dungeon(config=config)
    key = (seed, size)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = Dungeon(config=config)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def clear_dungeon_cache() -> None:
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigurationError([f"{name} must be an integer (got {raw!r})"]) from None


bp_dungeon = Blueprint("dungeon", __name__)


@bp_dungeon.route("/api/dungeon/generate", methods=["POST"])
def generate():
    """Generate a dungeon from a (partial) JSON configuration.

    Body: any GenerationConfig fields, e.g. {"width": 40, "seed": 7,
    "eventable": {"mode": "runs", "min_length": 3}}. Missing fields use the
    app defaults. ``?format=ascii`` adds an ``ascii`` rendering.
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(["request body must be a JSON object"])
    config = GenerationConfig.from_mapping(data, base=base_config()).validate()
    dungeon = Dungeon(config=config)
    payload = dungeon.to_dict()
    if request.args.get("format") == "ascii":
        payload["ascii"] = render_ascii(dungeon)
    return jsonify(payload)


@bp_dungeon.route("/api/dungeon/defaults")
def defaults():
    return jsonify(base_config().to_dict())


@bp_dungeon.route("/api/dungeon/seed", methods=["POST"])
def seed():
    """Normalise a seed.

    Body JSON: { "seed": <int|str|null> }. Integers and digit strings are
    bounded, other strings hashed, null/blank replaced by a random seed.
    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    try:
        value = coerce_seed(data.get("seed"))
    except TypeError as exc:
        raise InvalidConfigurationError([str(exc)]) from None
    if value is None:
        _rng, value = make_rng(None)
    return jsonify({"seed": value})


@bp_dungeon.route("/api/dungeon/map")
def dungeon_map():
    """Return the (cached) dungeon for ?seed=&width=&height=."""
    base = base_config()
    try:
        value = coerce_seed(request.args.get("seed"))
    except TypeError as exc:  # pragma: no cover - query args are always strings
        raise InvalidConfigurationError([str(exc)]) from None
    if value is None:
        _rng, value = make_rng(None)
    size = (_int_arg("width", base.width), _int_arg("height", base.height))
    dungeon = get_cached_dungeon(value, size, base=base)
    log.debug(event="dungeon_map", seed=value, size=f"{size[0]}x{size[1]}")
    return jsonify(dungeon.to_dict())
