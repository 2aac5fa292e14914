"""
========
Samplers
========

Stock sampling functions. A sampler takes a derived
:class:`numpy.random.Generator` and returns a value. ``seedbed`` itself has
no opinion on how a type is sampled, so these are conveniences for the
common cases and any ``Callable[[Generator], T]`` works just as well.

"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import numpy.typing as npt
from scipy import stats

from seedbed.exceptions import SamplerError
from seedbed.types import Sampler


def uniform() -> Sampler[float]:
    """Samples a float uniformly from ``[0, 1)``."""

    def sample(rng: np.random.Generator) -> float:
        return float(rng.random())

    return sample


def raw_bits() -> Sampler[int]:
    """Samples one raw 64-bit output of the underlying bit generator."""

    def sample(rng: np.random.Generator) -> int:
        return int(rng.bit_generator.random_raw())

    return sample


def integers(low: int, high: int) -> Sampler[int]:
    """Samples an integer uniformly from ``[low, high)``."""
    if high <= low:
        raise SamplerError(f"integers() needs low < high. Got low={low}, high={high}.")

    def sample(rng: np.random.Generator) -> int:
        return int(rng.integers(low, high))

    return sample


def normal(loc: float = 0.0, scale: float = 1.0) -> Sampler[float]:
    """Samples a normally distributed float."""
    if scale < 0:
        raise SamplerError(f"normal() needs a non-negative scale. Got {scale}.")

    def sample(rng: np.random.Generator) -> float:
        return float(rng.normal(loc, scale))

    return sample


def choice(
    choices: Sequence[Any] | npt.NDArray[Any],
    p: Sequence[float] | npt.NDArray[np.floating[Any]] | None = None,
) -> Sampler[Any]:
    """Picks one of ``choices``, optionally weighted.

    Parameters
    ----------
    choices
        The options to choose from.
    p
        Relative weights for each choice. They are normalized to sum to one,
        so ``[10, 10, 10]`` and ``[1, 1, 1]`` are equivalent.

    Raises
    ------
    SamplerError
        If there are no choices, the weights do not line up with the
        choices, or the weights are negative or sum to zero.
    """
    options = list(choices)
    if not options:
        raise SamplerError("choice() needs at least one option.")

    if p is None:
        weights = np.full(len(options), 1.0 / len(options))
    else:
        weights = np.asarray(p, dtype=float)
        if weights.shape != (len(options),):
            raise SamplerError(
                f"choice() got {len(options)} options but weights of shape {weights.shape}."
            )
        if np.any(weights < 0) or weights.sum() <= 0:
            raise SamplerError(f"choice() weights must be non-negative with a positive sum. Got {p}.")
        weights = weights / weights.sum()
    bins = np.cumsum(weights)

    def sample(rng: np.random.Generator) -> Any:
        draw = rng.random()
        # Float error can leave the last bin just below 1.
        index = min(int(np.searchsorted(bins, draw, side="right")), len(options) - 1)
        return options[index]

    return sample


def from_distribution(distribution: stats.rv_continuous | Any) -> Sampler[float]:
    """Samples a frozen ``scipy.stats`` distribution by inverse transform.

    Parameters
    ----------
    distribution
        Anything with a ``ppf`` method, typically a frozen scipy.stats
        distribution such as ``stats.norm(loc=170, scale=10)``.
    """
    if not callable(getattr(distribution, "ppf", None)):
        raise SamplerError(f"{distribution!r} has no ppf method to sample with.")

    def sample(rng: np.random.Generator) -> float:
        return float(distribution.ppf(rng.random()))

    return sample
