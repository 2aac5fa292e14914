"""
====
Keys
====

A key identifies *which entity* is being generated: a tile coordinate, an
index into a list of planets, a character id. Whatever its shape, a key is
reduced to a single canonical 64-bit projection by its ``key()`` method, and
that projection is the only thing derivation ever looks at.

Two keys with the same projection share generation state. Whether that is
intended is up to the code that defines the key type.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

from seedbed.exceptions import KeyProjectionError
from seedbed.types import MAX_KEY

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_LOW_32_BITS = 0xFFFF_FFFF


@runtime_checkable
class PrngKey(Protocol):
    """Anything that can be projected onto a stable 64-bit unsigned integer."""

    def key(self) -> int:
        ...


class UnitKey:
    """The key for global values that do not depend on any entity.

    Its projection is always zero, so derivation applies only the
    type-specific constant and never advances the generator.
    Use the :data:`UNIT_KEY` instance rather than building new ones.
    """

    __slots__ = ()

    def key(self) -> int:
        return 0

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UnitKey)

    def __hash__(self) -> int:
        return hash(UnitKey)

    def __repr__(self) -> str:
        return "UNIT_KEY"


UNIT_KEY = UnitKey()


@dataclass(frozen=True)
class IntegerKey:
    """A key that is its own projection, e.g. an index or an entity id."""

    index: int

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, (int, np.integer)):
            raise KeyProjectionError(
                f"IntegerKey index must be an integer. Got {self.index!r}."
            )
        if not 0 <= self.index < MAX_KEY:
            raise KeyProjectionError(
                f"IntegerKey index must be in the range [0, 2**64). Got {self.index}."
            )
        object.__setattr__(self, "index", int(self.index))

    def key(self) -> int:
        return self.index


@dataclass(frozen=True)
class CoordinateKey:
    """A key for a point on a signed 32-bit grid.

    ``x`` fills the high 32 bits of the projection and ``y`` the low 32 bits,
    both in two's complement, so every grid point has its own projection.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        for name, value in (("x", self.x), ("y", self.y)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise KeyProjectionError(
                    f"CoordinateKey.{name} must be an integer. Got {value!r}."
                )
            if not _INT32_MIN <= value <= _INT32_MAX:
                raise KeyProjectionError(
                    f"CoordinateKey.{name} must fit in a signed 32-bit integer. Got {value}."
                )
            # numpy integers would wrap or overflow when packed.
            object.__setattr__(self, name, int(value))

    def key(self) -> int:
        return ((self.x & _LOW_32_BITS) << 32) | (self.y & _LOW_32_BITS)


def project(key: PrngKey) -> int:
    """Returns the validated 64-bit projection of ``key``.

    Raises
    ------
    KeyProjectionError
        If the key has no ``key`` method or its projection is not an
        integer in ``[0, 2**64)``.
    """
    if not isinstance(key, PrngKey):
        raise KeyProjectionError(f"{key!r} does not define a key() projection.")
    projection = key.key()
    if isinstance(projection, bool) or not isinstance(projection, (int, np.integer)):
        raise KeyProjectionError(
            f"Key projections must be integers. {key!r} projected to {projection!r}."
        )
    if not 0 <= projection < MAX_KEY:
        raise KeyProjectionError(
            f"Key projections must be in the range [0, 2**64). "
            f"{key!r} projected to {projection}."
        )
    return int(projection)
