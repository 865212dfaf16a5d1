"""Results of scanning the space around a point."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .planet import Planet, PlanetInfo
from .space import get_distance
from .station import Station, StationInfo


@dataclass
class ScanResult:
    """Planets and stations detected by a scanner."""

    planets: list = field(default_factory=list)
    stations: list = field(default_factory=list)

    def add(self, rank: int, obj) -> None:
        """Record what a scanner of the given rank sees of a space object."""
        if isinstance(obj, Station):
            self.stations.append(StationInfo.scan(rank, obj))
        elif isinstance(obj, Planet):
            self.planets.append(PlanetInfo.scan(rank, obj))
        else:
            raise TypeError(f"cannot scan object of type {type(obj).__name__}")

    def closest_planet(self, pos: tuple) -> Optional[PlanetInfo]:
        """The scanned planet nearest to ``pos``, or None if none was found."""
        if not self.planets:
            return None
        return min(self.planets, key=lambda info: get_distance(pos, info.position))

    def to_json(self) -> dict:
        return {
            "planets": [info.to_json() for info in self.planets],
            "stations": [info.to_json() for info in self.stations],
        }