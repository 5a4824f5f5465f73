from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import InvalidConfigurationError
from .randomness import coerce_seed


@dataclass(frozen=True)
class RandomEventable:
    """Mode A: sample isolated corridor cells.

    count: -1 converts every isolated cell, 0 uses ``ratio``, N caps at N.
    """

    count: int = 5
    ratio: float = 0.3

    mode = "random"


@dataclass(frozen=True)
class RunDetectionEventable:
    """Mode B: straight corridor runs away from rooms become eventable."""

    min_length: int = 3
    max_length: int = 5
    ignore_room_adjacency: bool = False

    mode = "runs"


EventableMode = Union[RandomEventable, RunDetectionEventable]

_EVENTABLE_MODES = {
    RandomEventable.mode: RandomEventable,
    RunDetectionEventable.mode: RunDetectionEventable,
}


@dataclass
class GenerationConfig:
    width: int = 64
    height: int = 64
    min_room_size: int = 4
    max_room_size: int = 12
    density: float = 0.5
    target_room_count: int = 30
    connectivity: float = 0.25
    straight_corridors: bool = True
    corridor_width: int = 2
    max_straight_length: int = 3
    bend_probability: float = 0.8
    use_8_direction: bool = True
    classify_room_adjacency: bool = True
    eventable: EventableMode = field(default_factory=RandomEventable)
    min_room_distance: float = 10.0
    seed: Optional[int] = None

    def validate(self) -> "GenerationConfig":
        """Raise InvalidConfigurationError listing every problem found; return self when sane."""
        problems: List[str] = []
        if self.width <= 0 or self.height <= 0:
            problems.append(f"grid size must be positive (got {self.width}x{self.height})")
        if self.min_room_size < 3:
            problems.append("min_room_size must be at least 3")
        if self.min_room_size > self.max_room_size:
            problems.append(
                f"min_room_size ({self.min_room_size}) exceeds max_room_size ({self.max_room_size})"
            )
        for name in ("density", "connectivity", "bend_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                problems.append(f"{name} must be within [0, 1] (got {value})")
        if self.corridor_width not in (1, 2):
            problems.append(f"corridor_width must be 1 or 2 (got {self.corridor_width})")
        if self.max_straight_length < 1:
            problems.append("max_straight_length must be at least 1")
        if self.min_room_distance < 0:
            problems.append("min_room_distance must not be negative")
        ev = self.eventable
        if isinstance(ev, RandomEventable):
            if ev.count < -1:
                problems.append("eventable.count must be -1, 0 or positive")
            if not 0.0 <= ev.ratio <= 1.0:
                problems.append(f"eventable.ratio must be within [0, 1] (got {ev.ratio})")
        elif isinstance(ev, RunDetectionEventable):
            if ev.min_length < 1:
                problems.append("eventable.min_length must be at least 1")
            if ev.min_length > ev.max_length:
                problems.append("eventable.min_length exceeds eventable.max_length")
        else:
            problems.append(f"unknown eventable mode {ev!r}")
        if problems:
            raise InvalidConfigurationError(problems)
        return self

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["eventable"] = {"mode": self.eventable.mode, **asdict(self.eventable)}
        return data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["GenerationConfig"] = None) -> "GenerationConfig":
        """Build a config from a JSON-style mapping layered over ``base`` (defaults when omitted).

        Unknown keys and badly typed values are reported together as an
        InvalidConfigurationError. The result is not validated; call validate().
        """
        base = base or cls()
        known = {f.name: f for f in fields(cls)}
        problems: List[str] = []
        updates: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                problems.append(f"unknown option {key!r}")
                continue
            if key == "eventable":
                try:
                    updates[key] = _eventable_from_mapping(value, base.eventable)
                except (TypeError, ValueError) as exc:
                    problems.append(str(exc))
                continue
            if key == "seed":
                try:
                    updates[key] = coerce_seed(value)
                except TypeError as exc:
                    problems.append(str(exc))
                continue
            try:
                updates[key] = _coerce(value, type(getattr(base, key)), key)
            except (TypeError, ValueError) as exc:
                problems.append(str(exc))
        if problems:
            raise InvalidConfigurationError(problems)
        return replace(base, **updates)


def _coerce(value: Any, kind: type, name: str) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() not in {"0", "false", "no", "off", ""}
        if isinstance(value, int):
            return bool(value)
        raise TypeError(f"{name} must be a boolean")
    if kind is int:
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise TypeError(f"{name} must be an integer")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise TypeError(f"{name} must be an integer") from None
    if kind is float:
        if isinstance(value, bool):
            raise TypeError(f"{name} must be a number")
        try:
            return float(value)
        except (TypeError, ValueError):
            raise TypeError(f"{name} must be a number") from None
    return value


def _eventable_from_mapping(value: Any, current: EventableMode) -> EventableMode:
    if isinstance(value, (RandomEventable, RunDetectionEventable)):
        return value
    if not isinstance(value, Mapping):
        raise TypeError("eventable must be an object with a 'mode' key")
    payload = dict(value)
    mode = payload.pop("mode", current.mode)
    kind = _EVENTABLE_MODES.get(mode)
    if kind is None:
        raise ValueError(f"unknown eventable mode {mode!r} (expected 'random' or 'runs')")
    base = current if isinstance(current, kind) else kind()
    known = {f.name for f in fields(kind)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ValueError(f"unknown eventable option(s) for mode {mode!r}: {', '.join(unknown)}")
    coerced = {k: _coerce(v, type(getattr(base, k)), f"eventable.{k}") for k, v in payload.items()}
    return replace(base, **coerced)


# Environment variable -> config attribute (tests and deployments set env vars rather than passing params)
ENV_MAP = {
    "DUNGEON_WIDTH": "width",
    "DUNGEON_HEIGHT": "height",
    "DUNGEON_MIN_ROOM_SIZE": "min_room_size",
    "DUNGEON_MAX_ROOM_SIZE": "max_room_size",
    "DUNGEON_DENSITY": "density",
    "DUNGEON_TARGET_ROOM_COUNT": "target_room_count",
    "DUNGEON_CONNECTIVITY": "connectivity",
    "DUNGEON_STRAIGHT_CORRIDORS": "straight_corridors",
    "DUNGEON_CORRIDOR_WIDTH": "corridor_width",
    "DUNGEON_MAX_STRAIGHT_LENGTH": "max_straight_length",
    "DUNGEON_BEND_PROBABILITY": "bend_probability",
    "DUNGEON_USE_8_DIRECTION": "use_8_direction",
    "DUNGEON_CLASSIFY_ROOM_ADJACENCY": "classify_room_adjacency",
    "DUNGEON_MIN_ROOM_DISTANCE": "min_room_distance",
    "DUNGEON_SEED": "seed",
}


def apply_env_overrides(config: GenerationConfig, environ: Optional[Mapping[str, str]] = None) -> GenerationConfig:
    """Return a copy of ``config`` with any ``DUNGEON_*`` environment overrides applied."""
    environ = os.environ if environ is None else environ
    overrides = {attr: environ[key] for key, attr in ENV_MAP.items() if key in environ}
    if "DUNGEON_EVENTABLE_MODE" in environ:
        overrides["eventable"] = {"mode": environ["DUNGEON_EVENTABLE_MODE"].strip().lower()}
    if not overrides:
        return replace(config)
    return GenerationConfig.from_mapping(overrides, base=config)


__all__ = [
    "GenerationConfig",
    "RandomEventable",
    "RunDetectionEventable",
    "EventableMode",
    "apply_env_overrides",
    "ENV_MAP",
]
