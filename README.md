# foldhash

A fast, non-cryptographic, minimally DoS-resistant 64-bit hash for
computational uses such as hash tables, bloom filters and count sketches.
All reads are little-endian and all arithmetic is on 64-bit words, so the
output is the same on every platform for the same seeds and input.

Do **not** use it for anything security-related, and do not rely on its
values staying the same across versions of this package.

## Modules

- `foldhash.fast`: the variant tuned for speed; good enough for hash tables.
- `foldhash.quality`: wraps the fast hasher and adds a final mixing step
  for better statistical properties, suited to algorithms such as
  HyperLogLog or MinHash.
- `foldhash.seed`: `SharedSeed` and `gen_per_hasher_seed()`.
- `foldhash.mixing`: the primitives `folded_multiply`, `rotate_right`,
  `hash_bytes_short` (at most 16 bytes) and `hash_bytes_long` (more than
  16 bytes); each byte routine raises `ValueError` outside its length range.

`fast` and `quality` provide the same API: `FoldHasher`, `RandomState`,
`SeedableRandomState` and `FixedState`.

## Usage

```python
from foldhash import fast, quality

# Randomly seeded per process and per state.
state = quality.RandomState()
h = state.hash_one(b"hello world")

# Deterministic hashing.
fixed = fast.FixedState.with_seed(42)
hasher = fixed.build_hasher()
hasher.write(bytes([1, 2, 3, 4, 5, 6, 7, 8]))
hasher.write_u32(0xDEADBEEF)
print(hex(hasher.finish()))
```

`FixedState.with_seed(0)` hashes exactly like the default `FixedState()`,
in both `fast` and `quality`.

### Seeding

Hashing uses a 64-bit per-hasher seed and a `SharedSeed` of six 64-bit
words that many hashers may share:

```python
from foldhash import fast
from foldhash.seed import SharedSeed

shared = SharedSeed.from_u64(1234)
state = fast.SeedableRandomState.with_seed(7, shared)
value = state.hash_one(b"some key")
```

- `RandomState` draws a fresh per-hasher seed with `gen_per_hasher_seed()`
  and uses `SharedSeed.global_random()`, generated once per process.
- `FixedState` uses a fixed per-hasher seed and `SharedSeed.global_fixed()`.
- `SeedableRandomState` is random by default (`SeedableRandomState.random()`),
  fixed with `SeedableRandomState.fixed()`, or seeded explicitly with
  `SeedableRandomState.with_seed(per_hasher_seed, shared_seed)`.

A `SharedSeed` built directly must hold exactly six words, otherwise
`ValueError` is raised.

### Writing to a hasher

`FoldHasher` accepts bytes-like objects via `write` and unsigned integers
via `write_u8`, `write_u16`, `write_u32`, `write_u64`, `write_u128` and
`write_usize` (hashed as 64 bits). An integer outside the range of its
width raises `ValueError`, a non-integer raises `TypeError`, and passing an
integer to `write` raises `TypeError`. Small integers are packed into a
128-bit buffer before they are mixed in.

Call `finish()` for the 64-bit result; it does not change the hasher, which
can keep receiving data afterwards. `copy()` returns an independent
snapshot of its state.

### `hash_one`

Every state's `hash_one(value)` builds a fresh hasher, feeds the value in and
returns `finish()`. It accepts:

- `bool`: one byte;
- `int`: 64 bits (negative values in two's complement), or 128 bits when
  larger; values beyond 128 bits raise `ValueError`;
- `str`: its UTF-8 bytes followed by a `0xFF` byte;
- `bytes`, `bytearray`, `memoryview`: the length, then the bytes;
- `tuple`: each item in order, by these same rules.

Any other type raises `TypeError`.

## What this package does not do

It computes hash values only. It does not plug into Python's `dict` or
`set`, which always use the built-in `hash()`; to use foldhash for a table,
compute `hash_one(key)` yourself and index with it.