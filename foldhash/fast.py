"""The foldhash variant optimised for speed.

Hashers absorb integers into a 128-bit sponge and byte strings through the
short and long byte-hashing routines. All reads are little-endian, so hash
values are identical on every platform.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from .mixing import (
    ARBITRARY3,
    MASK64,
    folded_multiply,
    hash_bytes_long,
    hash_bytes_short,
    rotate_right,
)
from .seed import SharedSeed, gen_per_hasher_seed

__all__ = ["FoldHasher", "RandomState", "SeedableRandomState", "FixedState"]

_MASK128 = (1 << 128) - 1
_SPONGE_BITS = 128
_SHORT_LIMIT = 16


def _check_unsigned(value: int, bits: int) -> int:
    if not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{value} does not fit in an unsigned {bits}-bit integer")
    return value


class FoldHasher:
    """An incremental foldhash hasher optimised for speed."""

    __slots__ = ("_accumulator", "_sponge", "_sponge_len", "_seeds")

    def __init__(self, per_hasher_seed: int, shared_seed: SharedSeed) -> None:
        self._accumulator = per_hasher_seed & MASK64
        self._sponge = 0
        self._sponge_len = 0
        self._seeds: Sequence[int] = shared_seed.seeds

    @classmethod
    def with_seed(cls, per_hasher_seed: int, shared_seed: SharedSeed) -> "FoldHasher":
        """Create a hasher from a per-hasher seed and a shared seed."""
        return cls(per_hasher_seed, shared_seed)

    def _fold_sponge(self) -> int:
        lo = self._sponge & MASK64
        hi = self._sponge >> 64
        return folded_multiply(lo ^ self._accumulator, hi ^ self._seeds[0])

    def _write_num(self, value: int, bits: int) -> None:
        if self._sponge_len + bits > _SPONGE_BITS:
            self._accumulator = self._fold_sponge()
            self._sponge = value
            self._sponge_len = bits
        else:
            self._sponge |= value << self._sponge_len
            self._sponge_len += bits

    def write(self, data: Any) -> None:
        """Absorb a bytes-like object."""
        if isinstance(data, int):
            raise TypeError("write() takes a bytes-like object, not an integer")
        raw = bytes(memoryview(data))
        length = len(raw)
        # A length-dependent rotation defeats trivial length-extension
        # attacks made possible by the overlapping reads below.
        self._accumulator = rotate_right(self._accumulator, length)
        if length <= _SHORT_LIMIT:
            self._accumulator = hash_bytes_short(raw, self._accumulator, self._seeds)
        else:
            self._accumulator = hash_bytes_long(raw, self._accumulator, self._seeds)

    def write_u8(self, i: int) -> None:
        """Absorb an unsigned 8-bit integer."""
        self._write_num(_check_unsigned(i, 8), 8)

    def write_u16(self, i: int) -> None:
        """Absorb an unsigned 16-bit integer."""
        self._write_num(_check_unsigned(i, 16), 16)

    def write_u32(self, i: int) -> None:
        """Absorb an unsigned 32-bit integer."""
        self._write_num(_check_unsigned(i, 32), 32)

    def write_u64(self, i: int) -> None:
        """Absorb an unsigned 64-bit integer."""
        self._write_num(_check_unsigned(i, 64), 64)

    def write_u128(self, i: int) -> None:
        """Absorb an unsigned 128-bit integer directly into the accumulator."""
        value = _check_unsigned(i, 128)
        lo = value & MASK64
        hi = value >> 64
        self._accumulator = folded_multiply(lo ^ self._accumulator, hi ^ self._seeds[0])

    def write_usize(self, i: int) -> None:
        """Absorb a machine-size integer, always treated as 64 bits wide."""
        self._write_num(_check_unsigned(i, 64), 64)

    def finish(self) -> int:
        """Return the 64-bit hash of everything absorbed so far."""
        if self._sponge_len > 0:
            return self._fold_sponge()
        return self._accumulator

    def copy(self) -> "FoldHasher":
        """Return an independent hasher with the same state."""
        clone = type(self).__new__(type(self))
        clone._accumulator = self._accumulator
        clone._sponge = self._sponge
        clone._sponge_len = self._sponge_len
        clone._seeds = self._seeds
        return clone


def _write_value(hasher: Any, value: Any) -> None:
    """Feed a Python value into ``hasher`` in a structured, prefix-free way.

    Booleans are one byte; integers are 64-bit (negative ones in two's
    complement) or 128-bit when larger; strings are their UTF-8 bytes followed
    by a 0xFF terminator; bytes-like objects are prefixed with their length;
    tuples hash their items in order.
    """
    if isinstance(value, bool):
        hasher.write_u8(int(value))
    elif isinstance(value, int):
        if -(1 << 63) <= value < (1 << 64):
            hasher.write_u64(value & MASK64)
        elif -(1 << 127) <= value < (1 << 128):
            hasher.write_u128(value & _MASK128)
        else:
            raise ValueError(f"{value} does not fit in 128 bits")
    elif isinstance(value, str):
        hasher.write(value.encode("utf-8"))
        hasher.write_u8(0xFF)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        hasher.write_usize(len(raw))
        hasher.write(raw)
    elif isinstance(value, tuple):
        for item in value:
            _write_value(hasher, item)
    else:
        raise TypeError(f"cannot hash value of type {type(value).__name__}")


@dataclass(frozen=True)
class RandomState:
    """Builds hashers with a random per-hasher seed and the global random shared seed."""

    per_hasher_seed: int = field(default_factory=gen_per_hasher_seed)

    def build_hasher(self) -> FoldHasher:
        """Create a fresh hasher."""
        return FoldHasher.with_seed(self.per_hasher_seed, SharedSeed.global_random())

    def hash_one(self, data: Any) -> int:
        """Hash a single value with a fresh hasher."""
        hasher = self.build_hasher()
        _write_value(hasher, data)
        return hasher.finish()


@dataclass(frozen=True)
class SeedableRandomState:
    """Builds hashers from a per-hasher seed and an explicit shared seed."""

    per_hasher_seed: int = field(default_factory=gen_per_hasher_seed)
    shared_seed: SharedSeed = field(default_factory=SharedSeed.global_random)

    @classmethod
    def random(cls) -> "SeedableRandomState":
        """A randomly seeded state, like RandomState."""
        return cls(gen_per_hasher_seed(), SharedSeed.global_random())

    @classmethod
    def fixed(cls) -> "SeedableRandomState":
        """A fixed state, like FixedState."""
        return cls(ARBITRARY3, SharedSeed.global_fixed())

    @classmethod
    def with_seed(cls, per_hasher_seed: int, shared_seed: SharedSeed) -> "SeedableRandomState":
        """A state with the given seeds; with_seed(0, global_fixed()) equals fixed()."""
        return cls((per_hasher_seed & MASK64) ^ ARBITRARY3, shared_seed)

    def build_hasher(self) -> FoldHasher:
        """Create a fresh hasher."""
        return FoldHasher.with_seed(self.per_hasher_seed, self.shared_seed)

    def hash_one(self, data: Any) -> int:
        """Hash a single value with a fresh hasher."""
        hasher = self.build_hasher()
        _write_value(hasher, data)
        return hasher.finish()


@dataclass(frozen=True)
class FixedState:
    """Builds hashers with a fixed seed; deterministic, and so open to HashDoS."""

    per_hasher_seed: int = ARBITRARY3

    @classmethod
    def with_seed(cls, per_hasher_seed: int) -> "FixedState":
        """A fixed state for the given seed; with_seed(0) equals the default."""
        return cls((per_hasher_seed & MASK64) ^ ARBITRARY3)

    def build_hasher(self) -> FoldHasher:
        """Create a fresh hasher."""
        return FoldHasher.with_seed(self.per_hasher_seed, SharedSeed.global_fixed())

    def hash_one(self, data: Any) -> int:
        """Hash a single value with a fresh hasher."""
        hasher = self.build_hasher()
        _write_value(hasher, data)
        return hasher.finish()