"""The galaxy: sectors discovered so far and the objects they hold."""

from __future__ import annotations

import itertools
import logging
import random
from typing import Optional

from .planet import Planet
from .scan import ScanResult
from .space import (
    PLANETS_PER_SECTOR,
    STATION_FPLANET_DIST,
    compute_sector,
    get_distance,
    is_in_sector,
    random_coord_near,
    sectors_around,
)
from .station import Station

log = logging.getLogger(__name__)

_MAX_STATION_RETRIES = 10000


def _within(coord: tuple, sector: tuple) -> bool:
    return all(lo <= value <= hi for value, (lo, hi) in zip(coord, sector))


class Galaxy:
    """Space objects indexed by coordinates, generated sector by sector."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.objects: dict = {}
        self.discovered: list = []

    def generate_sector(self, coord: tuple) -> int:
        """Generate the sector holding ``coord``; return its index in ``discovered``."""
        sector = compute_sector(*coord)
        log.debug("Generating sector %s", sector)
        index = len(self.discovered)
        self.discovered.append(sector)
        for _ in range(PLANETS_PER_SECTOR):
            position = tuple(self.rng.randrange(lo, hi) for lo, hi in sector)
            try:
                self.insert(position, Planet.random(position, self.rng))
            except ValueError:
                continue
        return index

    def is_discovered(self, coord: tuple) -> bool:
        return any(_within(coord, sector) for sector in self.discovered)

    def get(self, coord: tuple):
        return self.objects.get(tuple(coord))

    def insert(self, coord: tuple, obj) -> None:
        """Place an object; raise ValueError if the place is taken."""
        coord = tuple(coord)
        if coord in self.objects:
            raise ValueError(f"coordinates {coord} are already occupied")
        self.objects[coord] = obj

    def objects_in_sector(self, sector: tuple) -> list:
        """Objects inside the sector, bounds included, ordered by coordinates."""
        return [obj for coord, obj in sorted(self.objects.items()) if _within(coord, sector)]

    def _planets_in(self, sector: tuple) -> list:
        return [obj for obj in self.objects_in_sector(sector) if isinstance(obj, Planet)]

    def _random_coord(self) -> tuple:
        return tuple(self.rng.randrange(1 << 32) for _ in range(3))

    def init_new_station(self) -> tuple:
        """Create a station in a fresh sector, next to a planet; return (id, coord)."""
        rng = self.rng
        seccoord = self._random_coord()
        while self.is_discovered(seccoord):
            seccoord = self._random_coord()
        station_id = rng.randrange(1 << 16)
        sector = self.discovered[self.generate_sector(seccoord)]

        planets = self._planets_in(sector)
        if not planets:
            raise RuntimeError("generated sector holds no planet")
        anchor = planets[0]

        for retry in itertools.count(1):
            coord = random_coord_near(anchor.position, STATION_FPLANET_DIST, rng)
            while not is_in_sector(coord, sector) or coord in self.objects:
                coord = random_coord_near(anchor.position, STATION_FPLANET_DIST, rng)
            mindist = min(
                get_distance(planet.position, coord) for planet in self._planets_in(sector)
            )
            if abs(mindist - STATION_FPLANET_DIST) < 1.0:
                break
            log.warning("%s %s %s", retry, mindist, STATION_FPLANET_DIST)
            if retry > _MAX_STATION_RETRIES:
                raise RuntimeError("Too many retries")

        self.insert(coord, Station(station_id, coord))
        return station_id, coord

    def get_station(self, coord: tuple) -> Optional[Station]:
        obj = self.get(coord)
        return obj if isinstance(obj, Station) else None

    def get_planet(self, coord: tuple) -> Optional[Planet]:
        obj = self.get(coord)
        return obj if isinstance(obj, Planet) else None

    def scan_sector(self, rank: int, center: tuple) -> ScanResult:
        """Scan the sectors around ``center`` with a scanner of the given rank."""
        if rank < 1:
            raise ValueError(f"scanner rank must be at least 1, got {rank}")
        results = ScanResult()
        for sector in sectors_around(center, float(rank - 1)):
            for obj in self.objects_in_sector(sector):
                results.add(rank, obj)
        return results