"""
=================
Stream Derivation
=================

This module turns a ``(seed, key, capability)`` triple into a freshly seeded
and positioned numpy generator. It is the core of ``seedbed``. Everything
else either produces the inputs or consumes the generator.

The two axes of variation move the generator in orthogonal ways.

- The value type picks the *stream*. The seed is XOR'ed with the
  capability's constant, so each ``(key type, value type)`` pair starts from
  its own unrelated 128-bit state.
- The key picks the *position* within that stream. The key's 64-bit
  projection is shifted left by the capability's advance exponent and the
  generator jumps ahead by that many steps. Key ``k`` therefore starts exactly
  where key ``k - 1``'s ``2 ** advance_exponent`` slots end.

Jumping ahead with :meth:`numpy.random.PCG64.advance` costs O(log n) in the
size of the jump, so large keys are cheap. The cost grows with the bit length
of the projection, not its magnitude.

The underlying bit generator is PCG64, a 128-bit LCG with an XSL-RR output
function. An LCG always needs an increment as well as a state. Every derived
generator uses the same fixed odd increment, :data:`STREAM_INCREMENT`, and
the state carries all of the variation.

All functions here are pure. The returned generator belongs to the caller
and nothing is cached or shared between calls.

"""

from __future__ import annotations

from typing import Any

import numpy as np

from seedbed.capability import KeyCapability
from seedbed.exceptions import CapabilityError
from seedbed.keys import PrngKey, project
from seedbed.seed import Seed
from seedbed.types import GeneratorState

STREAM_INCREMENT = 0x5851F42D4C957F2D14057B7EF767814F
"""The PCG reference default increment for 128-bit LCGs. It must stay odd."""


def base_state(seed: Seed, capability: KeyCapability[Any, Any]) -> int:
    """The 128-bit generator state for ``(seed, value type)``, before any key is applied."""
    return seed.value ^ capability.constant


def advance_offset(key: PrngKey, capability: KeyCapability[Any, Any]) -> int:
    """The number of steps the generator is advanced for ``key``."""
    return project(key) << capability.advance_exponent


def derive_bit_generator(
    seed: Seed, key: PrngKey, capability: KeyCapability[Any, Any]
) -> np.random.PCG64:
    """Derives the bit generator for a ``(seed, key, capability)`` triple.

    Parameters
    ----------
    seed
        The session seed.
    key
        The entity being generated. Must be an instance of
        ``capability.key_type``.
    capability
        The binding between the key type and the value type being generated.

    Returns
    -------
        A PCG64 bit generator whose state is the seed XOR'ed with the
        capability constant, advanced by the key projection shifted by the
        capability's advance exponent.

    Raises
    ------
    CapabilityError
        If ``key`` is not an instance of the capability's key type.
    KeyProjectionError
        If the key's projection is not a 64-bit unsigned integer.
    """
    if not isinstance(key, capability.key_type):
        raise CapabilityError(
            f"{capability!r} cannot derive a generator for key {key!r} "
            f"of type {type(key).__name__}."
        )
    offset = advance_offset(key, capability)

    # The entropy passed here is irrelevant, the state is replaced right away.
    bit_generator = np.random.PCG64(0)
    bit_generator.state = {
        "bit_generator": "PCG64",
        "state": {"state": base_state(seed, capability), "inc": STREAM_INCREMENT},
        "has_uint32": 0,
        "uinteger": 0,
    }
    bit_generator.advance(offset)
    return bit_generator


def derive_generator(
    seed: Seed, key: PrngKey, capability: KeyCapability[Any, Any]
) -> np.random.Generator:
    """Derives a ready-to-sample generator for a ``(seed, key, capability)`` triple.

    This is the *retained* calling shape: draw as many successive values from
    the returned generator as the value being built needs.
    """
    return np.random.Generator(derive_bit_generator(seed, key, capability))


def derive_state(
    seed: Seed, key: PrngKey, capability: KeyCapability[Any, Any]
) -> GeneratorState:
    """The bit generator state for a ``(seed, key, capability)`` triple.

    Two derivations that return equal states produce identical streams.
    """
    return derive_bit_generator(seed, key, capability).state
