"""
================
Value Generation
================

The call surface that pairs a derived generator with a sampler.

Values come in two shapes:

- **One-shot.** :func:`generate` derives a fresh generator and draws
  exactly one value from it. This is the usual path for simple values.
- **Retained.** :func:`~seedbed.derivation.derive_generator` hands the
  generator itself to the caller, who draws several successive values. Use
  it when one key and type should yield a richer structured value without
  re-deriving state for each field.

:class:`KeyedStream` binds a seed and a capability once and offers both
shapes, along with vectorized helpers that return :class:`pandas.Series`
aligned to an index of entity labels.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

import numpy as np
import pandas as pd
from scipy import stats

from seedbed import samplers
from seedbed.capability import KeyCapability
from seedbed.derivation import derive_generator
from seedbed.exceptions import GenerationError
from seedbed.keys import PrngKey
from seedbed.seed import Seed
from seedbed.types import Sampler

K = TypeVar("K", bound=PrngKey)
T = TypeVar("T")


def _resolve_sampler(
    capability: KeyCapability[Any, T], sampler: Sampler[T] | None
) -> Sampler[T]:
    if sampler is not None:
        return sampler
    if capability.sampler is not None:
        return capability.sampler
    raise GenerationError(
        f"No sampler was provided and {capability!r} does not declare a default one."
    )


def generate(
    seed: Seed,
    key: K,
    capability: KeyCapability[K, T],
    sampler: Sampler[T] | None = None,
) -> T:
    """Generates one value for a ``(seed, key, capability)`` triple.

    Parameters
    ----------
    seed
        The session seed.
    key
        The entity being generated.
    capability
        The binding between the key type and the value type.
    sampler
        Turns the derived generator into a value. Defaults to the
        capability's own sampler.

    Returns
    -------
        The sampled value. Calling again with the same arguments returns an
        equal value.

    Raises
    ------
    GenerationError
        If neither ``sampler`` nor ``capability.sampler`` is available.
    """
    sample = _resolve_sampler(capability, sampler)
    return sample(derive_generator(seed, key, capability))


class KeyedStream(Generic[K, T]):
    """Values of one type, for any number of keys, under one seed.

    Parameters
    ----------
    seed
        The session seed.
    capability
        The binding between the key type and the value type.
    sampler
        The sampler used by :meth:`generate` and friends. Defaults to the
        capability's own sampler, and may be left unset entirely when only
        the generator and draw helpers are used.
    """

    def __init__(
        self,
        seed: Seed,
        capability: KeyCapability[K, T],
        sampler: Sampler[T] | None = None,
    ):
        self.seed = seed
        """The session seed."""
        self.capability = capability
        """The key/value binding every derivation in this stream uses."""
        self.sampler = sampler if sampler is not None else capability.sampler
        """The sampler for this stream's value type, if there is one."""

    def get_generator(self, key: K) -> np.random.Generator:
        """Derives the generator for ``key`` to draw several values from."""
        return derive_generator(self.seed, key, self.capability)

    def generate(self, key: K) -> T:
        """Generates the single value for ``key``."""
        return generate(self.seed, key, self.capability, self.sampler)

    def generate_many(self, keys: Iterable[K]) -> list[T]:
        """Generates one value for each key, in order."""
        sample = _resolve_sampler(self.capability, self.sampler)
        return [sample(self.get_generator(key)) for key in keys]

    def generate_for_index(
        self,
        index: pd.Index[Any],
        key_factory: Callable[[Any], K] | None = None,
        sampler: Sampler[Any] | None = None,
    ) -> pd.Series[Any]:
        """Generates a value for every label of a pandas index.

        Parameters
        ----------
        index
            The entity labels. Each one is turned into a key, and the result
            is indexed by them.
        key_factory
            Builds a key from a label. Defaults to the capability's key type,
            so an integer index and :class:`~seedbed.keys.IntegerKey` work
            together directly.
        sampler
            Overrides the stream's sampler for this call.

        Returns
        -------
            A series of generated values indexed by ``index``.
        """
        if index.empty:
            return pd.Series(index=index, dtype=object)

        make_key = key_factory if key_factory is not None else self.capability.key_type
        sample = _resolve_sampler(self.capability, sampler or self.sampler)
        values = [sample(self.get_generator(make_key(label))) for label in index]
        return pd.Series(values, index=index)

    def get_draw(
        self, index: pd.Index[Any], key_factory: Callable[[Any], K] | None = None
    ) -> pd.Series[float]:
        """Gets one number uniformly drawn from ``[0, 1)`` for every label of ``index``.

        The draw for a label depends only on the seed, the capability and
        the label's key, never on which other labels are in the index.
        """
        if index.empty:
            return pd.Series(index=index, dtype=float)
        return self.generate_for_index(index, key_factory, samplers.uniform()).astype(float)

    def sample_from_distribution(
        self,
        index: pd.Index[Any],
        distribution: stats.rv_continuous | None = None,
        ppf: Callable[..., Any] | None = None,
        key_factory: Callable[[Any], K] | None = None,
        **distribution_kwargs: Any,
    ) -> pd.Series[Any]:
        """Given a distribution, returns an indexed set of samples from it.

        Parameters
        ----------
        index
            The entity labels to sample for.
        distribution
            A scipy.stats distribution object.
        ppf
            A function that takes a series of draws and returns a series of
            samples.
        key_factory
            Builds a key from a label. Defaults to the capability's key type.
        distribution_kwargs
            Additional keyword arguments to pass to the distribution's ppf.

        Returns
        -------
            An indexed set of samples from the provided distribution.
        """
        if ppf is None:
            if distribution is None:
                raise ValueError("Either distribution or ppf must be provided")
            ppf = distribution.ppf
        else:
            if distribution is not None:
                raise ValueError("Only one of distribution or ppf can be provided")

        draws = self.get_draw(index, key_factory)
        return pd.Series(ppf(draws, **distribution_kwargs), index=index)

    def __repr__(self) -> str:
        return f"KeyedStream(seed={self.seed!r}, capability={self.capability!r})"
