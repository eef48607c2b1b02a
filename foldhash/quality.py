"""The foldhash variant optimised for statistical quality.

It wraps the fast hasher and adds a final mixing step to the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from . import fast
from .mixing import ARBITRARY0, ARBITRARY4, MASK64, folded_multiply
from .seed import SharedSeed

__all__ = ["FoldHasher", "RandomState", "SeedableRandomState", "FixedState"]


class FoldHasher:
    """An incremental foldhash hasher optimised for quality."""

    __slots__ = ("_inner",)

    def __init__(self, inner: fast.FoldHasher) -> None:
        self._inner = inner

    @classmethod
    def with_seed(cls, per_hasher_seed: int, shared_seed: SharedSeed) -> "FoldHasher":
        """Create a hasher from a per-hasher seed and a shared seed."""
        return cls(fast.FoldHasher.with_seed(per_hasher_seed, shared_seed))

    def write(self, data: Any) -> None:
        """Absorb a bytes-like object."""
        self._inner.write(data)

    def write_u8(self, i: int) -> None:
        """Absorb an unsigned 8-bit integer."""
        self._inner.write_u8(i)

    def write_u16(self, i: int) -> None:
        """Absorb an unsigned 16-bit integer."""
        self._inner.write_u16(i)

    def write_u32(self, i: int) -> None:
        """Absorb an unsigned 32-bit integer."""
        self._inner.write_u32(i)

    def write_u64(self, i: int) -> None:
        """Absorb an unsigned 64-bit integer."""
        self._inner.write_u64(i)

    def write_u128(self, i: int) -> None:
        """Absorb an unsigned 128-bit integer."""
        self._inner.write_u128(i)

    def write_usize(self, i: int) -> None:
        """Absorb a machine-size integer, always treated as 64 bits wide."""
        self._inner.write_usize(i)

    def finish(self) -> int:
        """Return the 64-bit hash of everything absorbed so far."""
        return folded_multiply(self._inner.finish(), ARBITRARY0)

    def copy(self) -> "FoldHasher":
        """Return an independent hasher with the same state."""
        return type(self)(self._inner.copy())


def _hash_with(hasher: FoldHasher, data: Any) -> int:
    fast._write_value(hasher, data)
    return hasher.finish()


@dataclass(frozen=True)
class RandomState:
    """Builds quality hashers that are randomly seeded."""

    inner: fast.RandomState = field(default_factory=fast.RandomState)

    def build_hasher(self) -> FoldHasher:
        """Create a fresh hasher."""
        return FoldHasher(self.inner.build_hasher())

    def hash_one(self, data: Any) -> int:
        """Hash a single value with a fresh hasher."""
        return _hash_with(self.build_hasher(), data)


@dataclass(frozen=True)
class SeedableRandomState:
    """Builds quality hashers from a per-hasher seed and an explicit shared seed."""

    inner: fast.SeedableRandomState = field(default_factory=fast.SeedableRandomState.random)

    @classmethod
    def random(cls) -> "SeedableRandomState":
        """A randomly seeded state, like RandomState."""
        return cls(fast.SeedableRandomState.random())

    @classmethod
    def fixed(cls) -> "SeedableRandomState":
        """A fixed state, like FixedState."""
        return cls(fast.SeedableRandomState.fixed())

    @classmethod
    def with_seed(cls, per_hasher_seed: int, shared_seed: SharedSeed) -> "SeedableRandomState":
        """A state with the given seeds, mixed for independence from the hash."""
        mixed = folded_multiply(per_hasher_seed & MASK64, ARBITRARY4)
        return cls(fast.SeedableRandomState.with_seed(mixed, shared_seed))

    def build_hasher(self) -> FoldHasher:
        """Create a fresh hasher."""
        return FoldHasher(self.inner.build_hasher())

    def hash_one(self, data: Any) -> int:
        """Hash a single value with a fresh hasher."""
        return _hash_with(self.build_hasher(), data)


@dataclass(frozen=True)
class FixedState:
    """Builds quality hashers with a fixed seed."""

    inner: fast.FixedState = field(default_factory=fast.FixedState)

    @classmethod
    def with_seed(cls, per_hasher_seed: int) -> "FixedState":
        """A fixed state for the given seed; with_seed(0) equals the default."""
        mixed = folded_multiply(per_hasher_seed & MASK64, ARBITRARY4)
        return cls(fast.FixedState.with_seed(mixed))

    def build_hasher(self) -> FoldHasher:
        """Create a fresh hasher."""
        return FoldHasher(self.inner.build_hasher())

    def hash_one(self, data: Any) -> int:
        """Hash a single value with a fresh hasher."""
        return _hash_with(self.build_hasher(), data)