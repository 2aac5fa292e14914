import numpy as np
import pandas as pd
import pytest
from scipy import stats

from seedbed import samplers
from seedbed.capability import KeyCapability
from seedbed.derivation import derive_generator
from seedbed.exceptions import GenerationError, KeyProjectionError
from seedbed.generation import KeyedStream, generate
from seedbed.keys import UNIT_KEY, CoordinateKey, IntegerKey, UnitKey
from tests.helpers import ValueKey


def draw_several(n):
    def sample(rng):
        return tuple(rng.random(n))

    return sample


def test_same_key_and_same_type_returns_same_values(seed, value_1):
    key = ValueKey(7)
    assert generate(seed, key, value_1) == generate(seed, key, value_1)


def test_same_key_and_different_type_returns_different_values(seed, value_1, value_2):
    key = ValueKey(7)
    assert generate(seed, key, value_1) != generate(seed, key, value_2)

    several = draw_several(4)
    assert generate(seed, key, value_1, several) != generate(seed, key, value_2, several)


def test_unit_key_returns_consistent_values(seed):
    capability = KeyCapability(UnitKey, "global", constant=635184615, sampler=samplers.uniform())
    assert generate(seed, UNIT_KEY, capability) == generate(seed, UNIT_KEY, capability)


def test_explicit_sampler_overrides_default(seed, value_1):
    key = ValueKey(3)
    raw = generate(seed, key, value_1, samplers.raw_bits())
    assert raw == int(derive_generator(seed, key, value_1).bit_generator.random_raw())


def test_missing_sampler(seed):
    capability = KeyCapability(ValueKey, "nothing", constant=5)
    with pytest.raises(GenerationError):
        generate(seed, ValueKey(1), capability)


def test_one_shot_is_first_retained_draw(seed, value_1):
    key = ValueKey(9)
    rng = derive_generator(seed, key, value_1)
    first, second = rng.random(), rng.random()
    assert generate(seed, key, value_1) == first
    assert first != second


@pytest.fixture
def stream(seed):
    capability = KeyCapability(IntegerKey, "height", constant=0xBEEF, sampler=samplers.uniform())
    return KeyedStream(seed, capability)


def test_stream_generate_matches_function(seed, stream):
    key = IntegerKey(12)
    assert stream.generate(key) == generate(seed, key, stream.capability)
    assert stream.get_generator(key).random() == stream.generate(key)


def test_stream_generate_many(stream):
    keys = [IntegerKey(i) for i in range(10)]
    values = stream.generate_many(keys)
    assert values == [stream.generate(key) for key in keys]
    assert len(set(values)) == 10


def test_stream_without_sampler(seed):
    stream = KeyedStream(seed, KeyCapability(IntegerKey, "bare", constant=17))
    assert isinstance(stream.get_generator(IntegerKey(0)), np.random.Generator)
    with pytest.raises(GenerationError):
        stream.generate(IntegerKey(0))
    with pytest.raises(GenerationError):
        stream.generate_many([IntegerKey(0)])


def test_generate_for_index(stream):
    index = pd.Index([5, 3, 100, 7])
    values = stream.generate_for_index(index)
    assert values.index.equals(index)
    for label, value in values.items():
        assert value == stream.generate(IntegerKey(label))


def test_generate_for_index_is_independent_of_neighbours(stream):
    full = stream.generate_for_index(pd.Index(range(50)))
    subset = stream.generate_for_index(pd.Index([10, 20, 30]))
    pd.testing.assert_series_equal(full.loc[[10, 20, 30]], subset)


def test_generate_for_index_key_factory(stream):
    index = pd.Index(["a", "bb", "ccc"])
    values = stream.generate_for_index(index, key_factory=lambda label: IntegerKey(len(label)))
    assert values["bb"] == stream.generate(IntegerKey(2))


def test_generate_for_float_index_is_rejected(stream):
    with pytest.raises(KeyProjectionError):
        stream.generate_for_index(pd.Index([1.0, 1.5]))


def test_generate_for_coordinate_index(seed):
    capability = KeyCapability(CoordinateKey, "tile", constant=0xF00D, sampler=samplers.uniform())
    stream = KeyedStream(seed, capability)
    x = np.array([-2, -1, 0], dtype=np.int32)
    y = np.array([-1, 4], dtype=np.int64)
    index = pd.MultiIndex.from_product([x, y])

    values = stream.generate_for_index(index, key_factory=lambda label: CoordinateKey(*label))

    assert values.index.equals(index)
    assert values[(-1, -1)] == stream.generate(CoordinateKey(-1, -1))
    assert values.nunique() == len(index)


def test_generate_for_empty_index(stream):
    values = stream.generate_for_index(pd.Index([], dtype=int))
    assert values.empty


def test_get_draw(stream):
    index = pd.Index(range(10_000))
    draws = stream.get_draw(index)
    assert draws.dtype == float
    assert ((draws >= 0) & (draws < 1)).all()
    assert np.isclose(draws.mean(), 0.5, atol=0.02)

    empty = stream.get_draw(pd.Index([], dtype=int))
    assert empty.empty
    assert empty.dtype == float


def test_get_draw_ignores_stream_sampler(seed):
    stream = KeyedStream(
        seed, KeyCapability(IntegerKey, "bits", constant=19), sampler=samplers.raw_bits()
    )
    draws = stream.get_draw(pd.Index(range(5)))
    assert ((draws >= 0) & (draws < 1)).all()


def test_sample_from_distribution(stream):
    index = pd.Index(range(10_000))
    samples = stream.sample_from_distribution(index, distribution=stats.norm(loc=10, scale=2))
    assert samples.index.equals(index)
    assert np.isclose(samples.mean(), 10, atol=0.1)
    assert np.isclose(samples.std(), 2, rtol=0.05)

    draws = stream.get_draw(index)
    pd.testing.assert_series_equal(samples, pd.Series(stats.norm(10, 2).ppf(draws), index=index))


def test_sample_from_distribution_with_ppf(stream):
    index = pd.Index(range(100))
    samples = stream.sample_from_distribution(index, ppf=lambda draws, scale: draws * scale, scale=3)
    pd.testing.assert_series_equal(samples, stream.get_draw(index) * 3)


def test_sample_from_distribution_argument_checks(stream):
    index = pd.Index(range(3))
    with pytest.raises(ValueError):
        stream.sample_from_distribution(index)
    with pytest.raises(ValueError):
        stream.sample_from_distribution(index, distribution=stats.norm(), ppf=stats.norm().ppf)


def test_stream_repr(stream):
    assert repr(stream).startswith("KeyedStream(seed=Seed(0x")
