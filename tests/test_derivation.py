import numpy as np
import pytest

from seedbed.capability import KeyCapability
from seedbed.derivation import (
    STREAM_INCREMENT,
    advance_offset,
    base_state,
    derive_bit_generator,
    derive_generator,
    derive_state,
)
from seedbed.exceptions import CapabilityError, KeyProjectionError
from seedbed.keys import UNIT_KEY, CoordinateKey, IntegerKey, UnitKey
from seedbed.seed import Seed
from tests.helpers import ValueKey


def _raw(rng: np.random.Generator, n: int) -> list[int]:
    return [int(v) for v in rng.bit_generator.random_raw(n)]


def test_stream_increment_is_odd():
    assert STREAM_INCREMENT % 2 == 1
    assert STREAM_INCREMENT < 2**128


def test_base_state_xors_seed_and_constant():
    capability = KeyCapability(IntegerKey, "thing", constant=0b1100)
    assert base_state(Seed(0b1010), capability) == 0b0110


def test_advance_offset_shifts_projection(raw_capability):
    offset = advance_offset(IntegerKey(5), raw_capability)
    assert offset == 5 * raw_capability.slots_per_key


def test_derived_state_layout(seed):
    state = derive_state(seed, UNIT_KEY, KeyCapability(UnitKey, "global", constant=7))
    assert state["bit_generator"] == "PCG64"
    assert state["state"]["inc"] == STREAM_INCREMENT
    # The unit key never advances the generator.
    assert state["state"]["state"] == seed.value ^ 7


def test_determinism(seed, value_1):
    key = ValueKey(7)
    assert derive_state(seed, key, value_1) == derive_state(seed, key, value_1)
    assert _raw(derive_generator(seed, key, value_1), 32) == _raw(
        derive_generator(seed, key, value_1), 32
    )


def test_generators_are_fresh(seed, value_1):
    key = ValueKey(7)
    first = derive_generator(seed, key, value_1)
    second = derive_generator(seed, key, value_1)
    assert first is not second
    first.random(10)
    assert second.bit_generator.state == derive_state(seed, key, value_1)


def test_type_separation(seed, value_1, value_2):
    key = ValueKey(7)
    a = _raw(derive_generator(seed, key, value_1), 8)
    b = _raw(derive_generator(seed, key, value_2), 8)
    assert a != b
    assert not set(a) & set(b)


def test_seed_separation(value_1):
    key = ValueKey(7)
    a = derive_generator(Seed.from_text("one"), key, value_1).random(4)
    b = derive_generator(Seed.from_text("two"), key, value_1).random(4)
    assert not np.array_equal(a, b)


def test_zero_and_one_keys_differ():
    capability = KeyCapability(ValueKey, "value", constant=1)
    seed = Seed.from_text("test")
    assert (
        derive_generator(seed, ValueKey(0), capability).random()
        != derive_generator(seed, ValueKey(1), capability).random()
    )


@pytest.mark.parametrize(
    "raw_seed, index",
    [
        (0, 0),
        (0x6A09_E667_F3BC_C908_B2FB_1366_EA95_7D3E, 2**32 + 17),
        (0xBB67_AE85_84CA_A73B_3C6E_F372_FE94_F82B, 0x3C6E_F372_FE94_F82B),
        (2**128 - 1, 2**64 - 2),
    ],
)
def test_key_windows_do_not_overlap(raw_seed, index):
    seed = Seed(raw_seed)
    capability = KeyCapability(ValueKey, "value", constant=1)

    a = set(_raw(derive_generator(seed, ValueKey(index), capability), 256))
    b = set(_raw(derive_generator(seed, ValueKey(index + 1), capability), 256))

    assert len(a) == len(b) == 256
    assert not a & b


def test_adjacent_key_windows_are_contiguous(raw_capability):
    seed = Seed.from_text("contiguous")
    slots = raw_capability.slots_per_key
    window = min(slots, 256)

    # Key 42 starts exactly where key 41's slots run out.
    after_41 = derive_generator(seed, IntegerKey(41), raw_capability)
    after_41.bit_generator.advance(slots)
    head_of_42 = _raw(derive_generator(seed, IntegerKey(42), raw_capability), window)
    assert head_of_42 == _raw(after_41, window)

    tail_of_41 = derive_generator(seed, IntegerKey(41), raw_capability)
    tail_of_41.bit_generator.advance(slots - window)
    assert not set(_raw(tail_of_41, window)) & set(head_of_42)


def test_exponent_zero_overlaps():
    capability = KeyCapability(ValueKey, "values", constant=0, advance_exponent=0)
    seed = Seed(0)

    a = _raw(derive_generator(seed, ValueKey(0), capability), 2)
    b = _raw(derive_generator(seed, ValueKey(1), capability), 2)

    # A single slot per key: key 1 starts at key 0's second output.
    assert a[1] == b[0]


def test_unit_key_consistency(seed):
    capability = KeyCapability(UnitKey, "global", constant=635184615)
    assert derive_generator(seed, UNIT_KEY, capability).random() == derive_generator(
        seed, UnitKey(), capability
    ).random()


def test_derivation_matches_manual_jump_ahead(seed):
    capability = KeyCapability(IntegerKey, "thing", constant=3, advance_exponent=64)
    expected = np.random.PCG64(0)
    expected.state = {
        "bit_generator": "PCG64",
        "state": {"state": seed.value ^ 3, "inc": STREAM_INCREMENT},
        "has_uint32": 0,
        "uinteger": 0,
    }
    expected.advance((2**64 - 1) << 64)
    assert derive_state(seed, IntegerKey(2**64 - 1), capability) == expected.state


def test_max_offset_stays_in_state_space(seed):
    capability = KeyCapability(IntegerKey, "thing", constant=3, advance_exponent=64)
    low = derive_state(seed, IntegerKey(0), capability)
    high = derive_state(seed, IntegerKey(2**64 - 1), capability)
    assert low != high
    assert 0 <= high["state"]["state"] < 2**128


def test_wrong_key_type(seed, value_1):
    with pytest.raises(CapabilityError):
        derive_generator(seed, IntegerKey(7), value_1)
    with pytest.raises(CapabilityError):
        derive_generator(seed, CoordinateKey(0, 7), value_1)


def test_bad_projection(seed, value_1):
    with pytest.raises(KeyProjectionError):
        derive_generator(seed, ValueKey(-7), value_1)
