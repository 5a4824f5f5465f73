"""Seed handling and the shared random stream.

Every stochastic decision in a run draws from one ``random.Random`` created
here and passed explicitly through the stages; nothing touches the module
level ``random`` state, so callers (and tests) can inject their own stream.
"""

from __future__ import annotations

import hashlib
import random
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

MAX_SEED = 9223372036854775807  # signed 64-bit ceiling, keeps seeds JSON/SQL friendly
_ENTROPY = random.SystemRandom()


def coerce_seed(value) -> Optional[int]:
    """Convert a user supplied seed (int or str) into a bounded int.

    ``None`` and blank strings mean "use system entropy" and return None.
    Digit strings are parsed; any other string is hashed deterministically.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError("seed must be an integer or string")
    if isinstance(value, int):
        return value % MAX_SEED
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise TypeError("seed must be an integer or string")


def make_rng(seed: Optional[int]) -> Tuple[random.Random, int]:
    """Return ``(rng, effective_seed)``; a None seed is drawn from system entropy."""
    if seed is None:
        seed = _ENTROPY.randint(1, 2**31 - 1)
    return random.Random(seed), seed


def shuffled(items: Sequence[T], rng: random.Random) -> List[T]:
    """Fisher-Yates shuffle into a new list, swapping forward (``j`` drawn from ``[i, n-1]``)."""
    out = list(items)
    n = len(out)
    for i in range(n):
        j = rng.randint(i, n - 1)
        out[i], out[j] = out[j], out[i]
    return out


__all__ = ["MAX_SEED", "coerce_seed", "make_rng", "shuffled"]
