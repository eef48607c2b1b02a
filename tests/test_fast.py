import pytest
from hypothesis import given
from hypothesis import strategies as st

from foldhash import fast
from foldhash.seed import SharedSeed

FAST_8BYTES = 0x85D95F091BE3C8E2
FAST_64BYTES = 0x85474E541D9E2894
FAST_U16 = 0x3C8B22E4E3BEDE35
FAST_U32 = 0xCF0C50C143A12649
FAST_U64 = 0xA670C933B9CAF9F5
FAST_U128 = 0x5B40AB6BC76B8140
FAST_USIZE = 0x8E903A49D5321973
FAST_MULTI_NUM = 0xF8C5C3905DEC5709
FAST_3BYTES = 0xEB3E16995F12EAD5
FAST_300BYTES = 0xB18EBF59EB3D200D

MASK64 = (1 << 64) - 1


def _hasher():
    return fast.FixedState.with_seed(42).build_hasher()


def test_write_8_bytes():
    h = _hasher()
    h.write(bytes([1, 2, 3, 4, 5, 6, 7, 8]))
    assert h.finish() == FAST_8BYTES


def test_write_64_bytes():
    h = _hasher()
    h.write(bytes([0xAB] * 64))
    assert h.finish() == FAST_64BYTES


def test_write_u64():
    h = _hasher()
    h.write_u64(0x0123456789ABCDEF)
    assert h.finish() == FAST_U64


def test_write_u32():
    h = _hasher()
    h.write_u32(0xDEADBEEF)
    assert h.finish() == FAST_U32


def test_write_3_bytes():
    h = _hasher()
    h.write(bytes([0xFF, 0x00, 0xAA]))
    assert h.finish() == FAST_3BYTES


def test_write_u16():
    h = _hasher()
    h.write_u16(0xABCD)
    assert h.finish() == FAST_U16


def test_write_u128():
    h = _hasher()
    h.write_u128(0x0123456789ABCDEF_FEDCBA9876543210)
    assert h.finish() == FAST_U128


def test_write_usize():
    h = _hasher()
    h.write_usize(0x12345678)
    assert h.finish() == FAST_USIZE


def test_write_multiple_nums():
    h = _hasher()
    h.write_u32(0x11111111)
    h.write_u32(0x22222222)
    h.write_u32(0x33333333)
    h.write_u32(0x44444444)
    h.write_u64(0x5555555555555555)
    assert h.finish() == FAST_MULTI_NUM


def test_write_300_bytes():
    h = _hasher()
    h.write(bytes([0x42] * 300))
    assert h.finish() == FAST_300BYTES


def test_write_accepts_bytearray_and_memoryview():
    a = _hasher()
    a.write(bytearray([1, 2, 3, 4, 5, 6, 7, 8]))
    b = _hasher()
    b.write(memoryview(bytes([1, 2, 3, 4, 5, 6, 7, 8])))
    assert a.finish() == FAST_8BYTES
    assert b.finish() == FAST_8BYTES


def test_fixed_with_seed_zero_matches_default():
    assert fast.FixedState.with_seed(0) == fast.FixedState()
    assert fast.FixedState.with_seed(0).hash_one(b"abc") == fast.FixedState().hash_one(b"abc")


def test_seedable_with_seed_zero_matches_fixed():
    seedable = fast.SeedableRandomState.with_seed(0, SharedSeed.global_fixed())
    assert seedable == fast.SeedableRandomState.fixed()
    assert seedable.hash_one("hello") == fast.FixedState().hash_one("hello")


def test_seedable_with_fixed_seed_matches_fixed_state():
    seedable = fast.SeedableRandomState.with_seed(42, SharedSeed.global_fixed())
    h = seedable.build_hasher()
    h.write(bytes([1, 2, 3, 4, 5, 6, 7, 8]))
    assert h.finish() == FAST_8BYTES


def test_hasher_with_seed_uses_raw_seed():
    state = fast.FixedState.with_seed(42)
    h = fast.FoldHasher.with_seed(state.per_hasher_seed, SharedSeed.global_fixed())
    h.write_u32(0xDEADBEEF)
    assert h.finish() == FAST_U32


def test_empty_hasher_finishes_with_seed():
    assert fast.FoldHasher.with_seed(1234, SharedSeed.global_fixed()).finish() == 1234


def test_copy_is_independent():
    h = _hasher()
    h.write_u16(0xABCD)
    clone = h.copy()
    clone.write_u8(7)
    assert h.finish() == FAST_U16
    assert clone.finish() != FAST_U16


def test_random_state_is_consistent_per_instance():
    state = fast.RandomState()
    assert state.hash_one("key") == state.hash_one("key")
    a = state.build_hasher()
    b = state.build_hasher()
    a.write(b"x" * 40)
    b.write(b"x" * 40)
    assert a.finish() == b.finish()


def test_random_states_differ():
    first = fast.RandomState()
    second = fast.RandomState()
    value = first.hash_one(12345)
    assert first.hash_one(12345) == value
    assert 0 <= value <= MASK64
    h = first.build_hasher()
    h.write_u64(12345)
    assert h.finish() == value
    assert second.hash_one(12345) != value


def test_hash_one_str_layout():
    state = fast.FixedState.with_seed(7)
    h = state.build_hasher()
    h.write(b"hi")
    h.write_u8(0xFF)
    assert state.hash_one("hi") == h.finish()


def test_hash_one_bytes_layout():
    state = fast.FixedState.with_seed(7)
    h = state.build_hasher()
    h.write_usize(3)
    h.write(b"abc")
    assert state.hash_one(b"abc") == h.finish()


def test_hash_one_int_and_tuple():
    state = fast.FixedState.with_seed(42)
    assert state.hash_one(0x0123456789ABCDEF) == FAST_U64
    h = state.build_hasher()
    h.write_u64(1)
    h.write_u8(1)
    assert state.hash_one((1, True)) == h.finish()


def test_hash_one_negative_int_is_twos_complement():
    state = fast.FixedState()
    assert state.hash_one(-1) == state.hash_one(0xFFFFFFFFFFFFFFFF)


def test_hash_one_large_int_uses_u128():
    state = fast.FixedState.with_seed(42)
    assert state.hash_one(0x0123456789ABCDEF_FEDCBA9876543210) == FAST_U128


def test_hash_one_rejects_unsupported_values():
    state = fast.FixedState()
    with pytest.raises(TypeError):
        state.hash_one(1.5)
    with pytest.raises(ValueError):
        state.hash_one(1 << 128)


@pytest.mark.parametrize(
    "method, value",
    [
        ("write_u8", 256),
        ("write_u16", 1 << 16),
        ("write_u32", -1),
        ("write_u64", 1 << 64),
        ("write_u128", 1 << 128),
        ("write_usize", -5),
    ],
)
def test_write_out_of_range(method, value):
    h = _hasher()
    with pytest.raises(ValueError):
        getattr(h, method)(value)
    # A rejected write leaves the hasher untouched.
    h.write_u16(0xABCD)
    assert h.finish() == FAST_U16


def test_write_rejects_str_and_int():
    h = _hasher()
    with pytest.raises(TypeError):
        h.write("text")
    with pytest.raises(TypeError):
        h.write(5)


@given(st.binary(max_size=400), st.binary(max_size=400))
def test_copy_continues_identically(prefix, suffix):
    h = _hasher()
    h.write(prefix)
    clone = h.copy()
    h.write(suffix)
    clone.write(suffix)
    assert h.finish() == clone.finish()
    assert 0 <= h.finish() < (1 << 64)


@given(st.binary(max_size=400))
def test_fixed_hash_is_deterministic(data):
    state = fast.FixedState.with_seed(9)
    h = state.build_hasher()
    h.write_usize(len(data))
    h.write(data)
    assert state.hash_one(data) == h.finish()
    assert fast.FixedState.with_seed(9).hash_one(data) == h.finish()