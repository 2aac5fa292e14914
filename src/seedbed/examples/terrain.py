"""
================
Procedural Tiles
================

A small procedural terrain built with ``seedbed``.

Every grid cell is addressed by a :class:`~seedbed.keys.CoordinateKey`.
:class:`Elevation` and :class:`Biome` are drawn one-shot, each from its own
stream. :class:`Settlement` is drawn with the retained shape: one generator
feeds all of its fields. :class:`SeaLevel` is a global value keyed by
:data:`~seedbed.keys.UNIT_KEY`. :class:`Tile` combines all of them, and a
tile is submerged when its elevation falls below the shared sea level.
Building a tile field by field gives the same result as generating each
part on its own.

"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from seedbed import samplers
from seedbed.capability import capability_for, key_for
from seedbed.derivation import derive_generator
from seedbed.generation import generate
from seedbed.keys import UNIT_KEY, CoordinateKey, UnitKey
from seedbed.seed import Seed

BIOMES = ("ocean", "plains", "forest", "desert", "tundra")
SETTLEMENT_NAMES = ("Ashford", "Brackenwick", "Coldmere", "Dunholt", "Eastwater")


@key_for(UnitKey, constant=0x2F0E_61C4_9B3D_A85E_7711_04F2_C63B_D9A1)
@dataclass(frozen=True)
class SeaLevel:
    """World-wide sea level, the same for every tile."""

    meters: float

    @classmethod
    def generate(cls, seed: Seed) -> SeaLevel:
        rng = derive_generator(seed, UNIT_KEY, capability_for(cls, UnitKey))
        return cls(meters=float(rng.uniform(-50.0, 50.0)))


@key_for(
    CoordinateKey,
    constant=0x9A41_3C07_E2D5_186B_4F90_AB3E_5C72_D01F,
    sampler=samplers.normal(loc=200.0, scale=350.0),
)
class Elevation(float):
    """Height of a tile in meters."""

    @classmethod
    def generate(cls, seed: Seed, key: CoordinateKey) -> Elevation:
        return cls(generate(seed, key, capability_for(cls, CoordinateKey)))


@key_for(
    CoordinateKey,
    constant=0x13D8_7E5A_0C6F_B249_E385_2A17_9F4C_6D08,
    sampler=samplers.choice(BIOMES, p=[0.4, 0.25, 0.2, 0.1, 0.05]),
)
class Biome(str):
    """The dominant biome of a tile."""

    @classmethod
    def generate(cls, seed: Seed, key: CoordinateKey) -> Biome:
        return cls(generate(seed, key, capability_for(cls, CoordinateKey)))


@key_for(CoordinateKey, constant=0xC7B2_95E0_3A4D_1F86_0B6E_D93C_27A5_48F1)
@dataclass(frozen=True)
class Settlement:
    """An optional settlement. All fields come from one retained generator."""

    name: str | None
    population: int

    @classmethod
    def generate(cls, seed: Seed, key: CoordinateKey) -> Settlement:
        rng = derive_generator(seed, key, capability_for(cls, CoordinateKey))
        if rng.random() >= 0.3:
            return cls(name=None, population=0)
        name = SETTLEMENT_NAMES[int(rng.integers(len(SETTLEMENT_NAMES)))]
        population = int(np.ceil(rng.lognormal(mean=6.0, sigma=1.0)))
        return cls(name=name, population=population)


@dataclass(frozen=True)
class Tile:
    elevation: Elevation
    biome: Biome
    settlement: Settlement
    sea_level: SeaLevel

    @property
    def is_submerged(self) -> bool:
        """Whether the tile lies below the world's sea level."""
        return self.elevation < self.sea_level.meters

    @classmethod
    def generate(
        cls, seed: Seed, key: CoordinateKey, sea_level: SeaLevel | None = None
    ) -> Tile:
        return cls(
            elevation=Elevation.generate(seed, key),
            biome=Biome.generate(seed, key),
            settlement=Settlement.generate(seed, key),
            sea_level=sea_level if sea_level is not None else SeaLevel.generate(seed),
        )


def generate_region(
    seed: Seed, x_range: range, y_range: range
) -> dict[tuple[int, int], Tile]:
    """Generates every tile in a rectangular region."""
    sea_level = SeaLevel.generate(seed)
    return {
        (x, y): Tile.generate(seed, CoordinateKey(x, y), sea_level)
        for x in x_range
        for y in y_range
    }
