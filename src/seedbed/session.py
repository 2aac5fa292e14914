"""
===================
Generation Sessions
===================

A :class:`GenerationSession` owns the seed for one generation session and
hands out generators, streams and values derived from it.

Sessions are usually built from configuration:

.. code-block:: python

    config = build_configuration({"randomness": {"seed_text": "my world"}})
    session = GenerationSession.from_configuration(config)
    elevation = session.generate(CoordinateKey(3, -4), ELEVATION)

When neither ``randomness.random_seed`` nor ``randomness.seed_text`` is
configured the session draws a fresh random seed and logs its raw value, so
the output can be regenerated later by configuring that value.

"""

from __future__ import annotations

from typing import Any, TypeVar

import numpy as np
from layered_config_tree import ConfigurationError, LayeredConfigTree

from seedbed.capability import KeyCapability
from seedbed.derivation import derive_generator
from seedbed.generation import KeyedStream, generate
from seedbed.keys import PrngKey
from seedbed.logging import configure_logging, get_logger
from seedbed.seed import Seed
from seedbed.types import Sampler

K = TypeVar("K", bound=PrngKey)
T = TypeVar("T")


class GenerationSession:
    """Access point for deterministic generation from a single seed."""

    def __init__(self, seed: Seed, name: str = "seedbed"):
        self._seed = seed
        self._name = name
        self.logger = get_logger(name)

    @classmethod
    def from_configuration(
        cls, configuration: LayeredConfigTree, configure_logging_sinks: bool = False
    ) -> GenerationSession:
        """Builds a session from the ``randomness`` and ``session`` configuration.

        Parameters
        ----------
        configuration
            A configuration built by :func:`~seedbed.configuration.build_configuration`.
        configure_logging_sinks
            Whether to add a terminal logging sink using the ``logging``
            configuration, if one has not been added already.

        Raises
        ------
        ConfigurationError
            If both ``randomness.random_seed`` and ``randomness.seed_text``
            are set.
        SeedError
            If ``randomness.random_seed`` is not a 128-bit unsigned integer.
        """
        if configure_logging_sinks:
            configure_logging(
                verbosity=configuration.logging.verbosity,
                long_format=configuration.logging.long_format,
            )
        name = configuration.session.name
        logger = get_logger(name)
        random_seed = configuration.randomness.random_seed
        seed_text = configuration.randomness.seed_text

        if random_seed is not None and seed_text is not None:
            raise ConfigurationError(
                "Only one of randomness.random_seed and randomness.seed_text "
                "may be configured.",
                value_name="random_seed",
            )

        if random_seed is not None:
            seed = Seed.from_int(random_seed)
            logger.info(f"Using configured seed {int(seed)}.")
        elif seed_text is not None:
            seed = Seed.from_text(seed_text)
            logger.info(f"Using seed {int(seed)} derived from text {seed_text!r}.")
        else:
            seed = Seed.random()
            logger.warning(
                f"No seed configured. Drew random seed {int(seed)}; set "
                f"randomness.random_seed to this value to reproduce this session."
            )
        return cls(seed, name=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def seed(self) -> Seed:
        return self._seed

    def get_stream(
        self, capability: KeyCapability[K, T], sampler: Sampler[T] | None = None
    ) -> KeyedStream[K, T]:
        """Provides a stream of values of one type for any number of keys.

        Parameters
        ----------
        capability
            The binding between the key type and the value type.
        sampler
            The sampler for the stream's values. Defaults to the
            capability's own sampler.
        """
        self.logger.debug(f"Creating stream for {capability!r}.")
        return KeyedStream(self._seed, capability, sampler)

    def get_generator(self, key: K, capability: KeyCapability[K, Any]) -> np.random.Generator:
        """Derives the generator for ``key`` under ``capability``."""
        return derive_generator(self._seed, key, capability)

    def generate(
        self,
        key: K,
        capability: KeyCapability[K, T],
        sampler: Sampler[T] | None = None,
    ) -> T:
        """Generates the single value for ``key`` under ``capability``."""
        return generate(self._seed, key, capability, sampler)

    def __repr__(self) -> str:
        return f"GenerationSession(name={self._name!r}, seed={self._seed!r})"
