"""
=====
Seeds
=====

A :class:`Seed` is the root of every derivation in a generation session. It
wraps a single unsigned 128-bit integer and nothing else. That integer is the
only value that needs to be persisted to regenerate content later. It
round-trips exactly through :meth:`Seed.from_int` and ``int(seed)``.

Seeds are created once per session, either from fresh entropy or by hashing
a piece of text::

    >>> Seed.from_text("value test") == Seed.from_text("value test")
    True
    >>> int(Seed.from_int(12345))
    12345

"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

import numpy as np

from seedbed.exceptions import SeedError
from seedbed.types import MAX_SEED

SEED_TEXT_PREFIX = b"seedbed/seed-from-text\x00"
"""Domain-separation bytes placed before the encoded text."""

SEED_TEXT_SUFFIX = b"\x00\xffseedbed"
"""Domain-separation bytes placed after the encoded text."""

_SEED_BYTES = 16


@dataclass(frozen=True)
class Seed:
    """An opaque 128-bit seed shared read-only by all derivations in a session."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, np.integer)):
            raise SeedError(f"Seed values must be integers. Got {self.value!r}.")
        if not 0 <= int(self.value) < MAX_SEED:
            raise SeedError(
                f"Seed values must be in the range [0, 2**128). Got {self.value}."
            )
        # numpy integers are normalized so equality and hashing follow the raw int.
        object.__setattr__(self, "value", int(self.value))

    @classmethod
    def from_int(cls, value: int) -> Seed:
        """Builds a seed from a raw 128-bit unsigned integer."""
        return cls(value)

    @classmethod
    def from_text(cls, text: str) -> Seed:
        """Deterministically hashes a string into a seed.

        The UTF-8 bytes of ``text`` are wrapped in fixed prefix and suffix
        byte strings before hashing, so that the empty string, whitespace
        variants and prefixes of one another all land on unrelated seeds.

        Parameters
        ----------
        text
            Any string, including the empty string.

        Returns
        -------
            The seed made from the first 128 bits of the SHA-256 digest,
            read as a little-endian integer.
        """
        digest = hashlib.sha256(
            SEED_TEXT_PREFIX + text.encode("utf8") + SEED_TEXT_SUFFIX
        ).digest()
        return cls(int.from_bytes(digest[:_SEED_BYTES], "little"))

    @classmethod
    def random(cls) -> Seed:
        """Draws a seed from fresh operating system entropy."""
        # SeedSequence pools exactly 128 bits of entropy when none is supplied.
        entropy = np.random.SeedSequence().entropy
        return cls(int(entropy) % MAX_SEED)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Seed({self.value:#034x})"
