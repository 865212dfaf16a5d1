"""Coordinates, sectors and geometry of the galaxy."""

from __future__ import annotations

import itertools
import math
import random

SPACE_UNIT_MAX = 2**32 - 1
SECTOR_SIZE = (5000, 5000, 5000)
PLANETS_PER_SECTOR = 3
STATION_FPLANET_DIST = 500.0

Coord = tuple  # (x, y, z) of non-negative 32-bit units
Sector = tuple  # ((start_x, end_x), (start_y, end_y), (start_z, end_z))


def _to_unit(value: float) -> int:
    """Convert a float to a space unit, saturating at the bounds."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= SPACE_UNIT_MAX:
        return SPACE_UNIT_MAX
    return int(value)


def get_delta(a: Coord, b: Coord) -> tuple:
    return tuple(float(bv) - float(av) for av, bv in zip(a, b))


def get_distance(a: Coord, b: Coord) -> float:
    dx, dy, dz = get_delta(a, b)
    return math.sqrt(dx**2 + dy**2 + dz**2)


def get_direction(a: Coord, b: Coord) -> tuple:
    distance = get_distance(a, b)
    return tuple(d / distance for d in get_delta(a, b))


def compute_sector(x: int, y: int, z: int) -> Sector:
    """The sector containing the given point."""
    bounds = []
    for value, size in zip((x, y, z), SECTOR_SIZE):
        start = value - value % size
        bounds.append((start, min(start + size, SPACE_UNIT_MAX)))
    return tuple(bounds)


def translation(start: Coord, direction: tuple, dist: float) -> Coord:
    return tuple(_to_unit(float(s) + dist * d) for s, d in zip(start, direction))


def is_in_sector(coord: Coord, sector: Sector) -> bool:
    return all(lo <= value < hi for value, (lo, hi) in zip(coord, sector))


def sectors_around(center: Coord, radius: float) -> list:
    """Every sector within ``radius`` sectors of the one holding ``center``."""
    axes = []
    for (start, _), size in zip(compute_sector(*center), SECTOR_SIZE):
        first = _to_unit(float(start) - radius * size)
        count = _to_unit(1.0 + 2.0 * radius * size)
        axes.append([(first + n * size, first + (n + 1) * size) for n in range(count)])
    return list(itertools.product(*axes))


def random_coord_near(obj: Coord, dist: float, rng: random.Random) -> Coord:
    """A random point on the sphere of radius ``dist`` around ``obj``."""
    theta = rng.uniform(0.0, 2.0 * math.pi)
    phi = rng.uniform(0.0, math.pi)
    x = float(obj[0]) + dist * math.sin(phi) * math.cos(theta)
    y = float(obj[1]) + dist * math.sin(phi) * math.sin(theta)
    z = float(obj[2]) + dist * math.cos(phi)
    return (_to_unit(x), _to_unit(y), _to_unit(z))