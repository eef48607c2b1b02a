"""Seeds shared between foldhash hashers, and per-hasher seed generation."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

from .mixing import (
    ARBITRARY1,
    ARBITRARY2,
    ARBITRARY5,
    ARBITRARY6,
    ARBITRARY7,
    ARBITRARY8,
    ARBITRARY9,
    ARBITRARY10,
    ARBITRARY11,
    MASK64,
    folded_multiply,
)

__all__ = ["SharedSeed", "gen_per_hasher_seed"]

_SEED_COUNT = 6

# Zero words are a weak point for the multiply-mix, so a few bits of every
# shared seed are always forced on.
_FORCED_ONES = (1 << 63) | (1 << 31) | 1


@dataclass(frozen=True)
class SharedSeed:
    """A seed of six 64-bit words meant to be shared by many hashers."""

    seeds: Tuple[int, ...]

    _global_random: ClassVar[Optional["SharedSeed"]] = None
    _global_lock: ClassVar[threading.Lock] = threading.Lock()

    def __post_init__(self) -> None:
        words = tuple(int(word) & MASK64 for word in self.seeds)
        if len(words) != _SEED_COUNT:
            raise ValueError(f"a shared seed holds {_SEED_COUNT} words, got {len(words)}")
        object.__setattr__(self, "seeds", words)

    @classmethod
    def global_random(cls) -> "SharedSeed":
        """Return the process-wide randomly initialised seed, creating it once."""
        seed = cls._global_random
        if seed is not None:
            return seed
        # Generate outside the critical section; the first writer wins.
        candidate = cls.from_u64(_generate_global_entropy())
        with cls._global_lock:
            if SharedSeed._global_random is None:
                SharedSeed._global_random = candidate
            return SharedSeed._global_random

    @classmethod
    def global_fixed(cls) -> "SharedSeed":
        """Return the fixed seed used by deterministic hasher states."""
        return _FIXED_GLOBAL_SEED

    @classmethod
    def from_u64(cls, seed: int) -> "SharedSeed":
        """Derive a full shared seed from a single 64-bit value.

        This is comparatively expensive, so reuse the result where possible.
        """

        def mix3(x: int) -> int:
            for _ in range(3):
                x = folded_multiply(x, ARBITRARY5)
            return x

        words = []
        current = seed & MASK64
        for _ in range(_SEED_COUNT):
            current = mix3(current)
            words.append(current)
        return cls(tuple(word | _FORCED_ONES for word in words))


_FIXED_GLOBAL_SEED = SharedSeed(
    (ARBITRARY6, ARBITRARY7, ARBITRARY8, ARBITRARY9, ARBITRARY10, ARBITRARY11)
)


def _generate_global_entropy() -> int:
    """Gather weak entropy from object addresses and the clock."""

    def mix(seed: int, x: int) -> int:
        return folded_multiply(seed ^ (x & MASK64), ARBITRARY5)

    seed = 0
    seed = mix(seed, id(object()))
    seed = mix(seed, id(_generate_global_entropy))
    seed = mix(seed, id(SharedSeed._global_lock))

    nanos = time.time_ns()
    seed = mix(seed, nanos % 1_000_000_000)
    seed = mix(seed, nanos // 1_000_000_000)

    seed = mix(seed, id(bytearray(1)))
    return seed


_per_thread = threading.local()


def gen_per_hasher_seed() -> int:
    """Return a fresh 64-bit per-hasher seed, different with high probability each call."""
    per_hasher_seed = (id(object()) ^ threading.get_ident()) & MASK64

    nondeterminism = getattr(_per_thread, "state", 0)
    per_hasher_seed = folded_multiply(per_hasher_seed, ARBITRARY1 ^ nondeterminism)
    _per_thread.state = per_hasher_seed

    return folded_multiply(per_hasher_seed, ARBITRARY2)