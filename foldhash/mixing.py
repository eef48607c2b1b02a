"""Core mixing primitives of foldhash: folded multiplication and byte hashing.

All arithmetic is on unsigned 64-bit words, and multi-byte reads are
little-endian, so the results are identical on every platform.
"""

from __future__ import annotations

import struct
from typing import Sequence

__all__ = [
    "ARBITRARY0",
    "ARBITRARY1",
    "ARBITRARY2",
    "ARBITRARY3",
    "ARBITRARY4",
    "ARBITRARY5",
    "ARBITRARY6",
    "ARBITRARY7",
    "ARBITRARY8",
    "ARBITRARY9",
    "ARBITRARY10",
    "ARBITRARY11",
    "MASK64",
    "folded_multiply",
    "rotate_right",
    "hash_bytes_short",
    "hash_bytes_long",
]

# Arbitrary constants with high entropy: hexadecimal digits of pi.
ARBITRARY0 = 0x243F6A8885A308D3
ARBITRARY1 = 0x13198A2E03707344
ARBITRARY2 = 0xA4093822299F31D0
ARBITRARY3 = 0x082EFA98EC4E6C89
ARBITRARY4 = 0x452821E638D01377
ARBITRARY5 = 0xBE5466CF34E90C6C
ARBITRARY6 = 0xC0AC29B7C97C50DD
ARBITRARY7 = 0x3F84D5B5B5470917
ARBITRARY8 = 0x9216D5D98979FB1B
ARBITRARY9 = 0xD1310BA698DFB5AC
ARBITRARY10 = 0x2FFD72DBD01ADFB7
ARBITRARY11 = 0xB8E1AFED6A267E96

MASK64 = (1 << 64) - 1

_SHORT_LIMIT = 16
_U64 = struct.Struct("<Q")
_U32 = struct.Struct("<I")


def folded_multiply(x: int, y: int) -> int:
    """Multiply two 64-bit words to 128 bits and XOR the two halves together."""
    full = (x & MASK64) * (y & MASK64)
    return (full ^ (full >> 64)) & MASK64


def rotate_right(x: int, r: int) -> int:
    """Rotate the 64-bit word ``x`` right by ``r`` bits (taken modulo 64)."""
    x &= MASK64
    r %= 64
    if r == 0:
        return x
    return ((x >> r) | (x << (64 - r))) & MASK64


def hash_bytes_short(data: bytes, accumulator: int, seeds: Sequence[int]) -> int:
    """Hash at most 16 bytes into a 64-bit word.

    Raises ValueError if ``data`` is longer than 16 bytes.
    """
    view = bytes(data)
    length = len(view)
    if length > _SHORT_LIMIT:
        raise ValueError(f"short hash takes at most {_SHORT_LIMIT} bytes, got {length}")

    s0 = accumulator & MASK64
    s1 = seeds[1] & MASK64
    if length >= 8:
        s0 ^= _U64.unpack_from(view, 0)[0]
        s1 ^= _U64.unpack_from(view, length - 8)[0]
    elif length >= 4:
        s0 ^= _U32.unpack_from(view, 0)[0]
        s1 ^= _U32.unpack_from(view, length - 4)[0]
    elif length > 0:
        lo = view[0]
        mid = view[length // 2]
        hi = view[length - 1]
        s0 ^= lo
        s1 ^= (hi << 8) | mid
    return folded_multiply(s0, s1)


def hash_bytes_long(data: bytes, accumulator: int, seeds: Sequence[int]) -> int:
    """Hash more than 16 bytes into a 64-bit word.

    Raises ValueError if ``data`` is 16 bytes or shorter.
    """
    total = len(data)
    if total <= _SHORT_LIMIT:
        raise ValueError(f"long hash needs more than {_SHORT_LIMIT} bytes, got {total}")

    def load(offset: int) -> int:
        return _U64.unpack_from(data, offset)[0]

    seed0 = seeds[0] & MASK64
    s0 = accumulator & MASK64
    s1 = (s0 + seeds[1]) & MASK64
    pos = 0
    remaining = total

    if remaining > 128:
        s2 = (s0 + seeds[2]) & MASK64
        s3 = (s0 + seeds[3]) & MASK64

        if remaining > 256:
            s4 = (s0 + seeds[4]) & MASK64
            s5 = (s0 + seeds[5]) & MASK64
            while True:
                s0 = folded_multiply(load(pos) ^ s0, load(pos + 48) ^ seed0)
                s1 = folded_multiply(load(pos + 8) ^ s1, load(pos + 56) ^ seed0)
                s2 = folded_multiply(load(pos + 16) ^ s2, load(pos + 64) ^ seed0)
                s3 = folded_multiply(load(pos + 24) ^ s3, load(pos + 72) ^ seed0)
                s4 = folded_multiply(load(pos + 32) ^ s4, load(pos + 80) ^ seed0)
                s5 = folded_multiply(load(pos + 40) ^ s5, load(pos + 88) ^ seed0)
                pos += 96
                remaining -= 96
                if remaining <= 256:
                    break
            s0 ^= s4
            s1 ^= s5

        while True:
            s0 = folded_multiply(load(pos) ^ s0, load(pos + 32) ^ seed0)
            s1 = folded_multiply(load(pos + 8) ^ s1, load(pos + 40) ^ seed0)
            s2 = folded_multiply(load(pos + 16) ^ s2, load(pos + 48) ^ seed0)
            s3 = folded_multiply(load(pos + 24) ^ s3, load(pos + 56) ^ seed0)
            pos += 64
            remaining -= 64
            if remaining <= 128:
                break
        s0 ^= s2
        s1 ^= s3

    end = pos + remaining
    s0 = folded_multiply(load(pos) ^ s0, load(end - 16) ^ seed0)
    s1 = folded_multiply(load(pos + 8) ^ s1, load(end - 8) ^ seed0)
    if remaining >= 32:
        s0 = folded_multiply(load(pos + 16) ^ s0, load(end - 32) ^ seed0)
        s1 = folded_multiply(load(pos + 24) ^ s1, load(end - 24) ^ seed0)
        if remaining >= 64:
            s0 = folded_multiply(load(pos + 32) ^ s0, load(end - 48) ^ seed0)
            s1 = folded_multiply(load(pos + 40) ^ s1, load(end - 40) ^ seed0)
            if remaining >= 96:
                s0 = folded_multiply(load(pos + 48) ^ s0, load(end - 64) ^ seed0)
                s1 = folded_multiply(load(pos + 56) ^ s1, load(end - 56) ^ seed0)
    return s0 ^ s1