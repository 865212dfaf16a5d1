"""Planets and what a scan reveals about them."""

from __future__ import annotations

import random
from dataclasses import dataclass

from .resources import Resource

_RESOURCE_DENSITY = 6.25
_SOLID_PROBABILITY = 0.4


@dataclass(frozen=True)
class Planet:
    position: tuple
    temperature: int
    solid: bool

    @classmethod
    def random(cls, coord: tuple, rng: random.Random) -> Planet:
        return cls(
            position=tuple(coord),
            temperature=rng.randrange(1 << 16),
            solid=rng.random() < _SOLID_PROBABILITY,
        )

    def resource_density(self, resource: Resource) -> float:
        """Density of a resource: solid planets hold ores, gaseous ones gases."""
        if self.solid and resource.mineable(255):
            return _RESOURCE_DENSITY
        if not self.solid and resource.suckable(255):
            return _RESOURCE_DENSITY
        return 0.0


@dataclass(frozen=True)
class PlanetInfo:
    """What a scanner can tell about a planet."""

    position: tuple
    temperature: int
    solid: bool

    @classmethod
    def scan(cls, rank: int, planet: Planet) -> PlanetInfo:
        return cls(planet.position, planet.temperature, planet.solid)

    def to_json(self) -> dict:
        return {
            "position": list(self.position),
            "temperature": self.temperature,
            "solid": self.solid,
        }