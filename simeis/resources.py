"""Resources found in space and the extraction of them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import timedelta


class Resource(enum.Enum):
    """A tradable resource; ordering follows declaration order."""

    STONE = "Stone"
    IRON = "Iron"
    COPPER = "Copper"
    GOLD = "Gold"
    HELIUM = "Helium"
    OZONE = "Ozone"
    FREON = "Freon"
    OXYGEN = "Oxygen"
    FUEL = "Fuel"
    HULL_PLATE = "HullPlate"

    @classmethod
    def parse(cls, name: str) -> Resource:
        """Look a resource up by name, ignoring ASCII case."""
        lowered = name.lower()
        for resource in cls:
            if resource.value.lower() == lowered:
                return resource
        raise ValueError(f"unknown resource: {name!r}")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return _ORDER[self] < _ORDER[other]

    def scored(self) -> bool:
        return self not in (Resource.FUEL, Resource.HULL_PLATE)

    def base_price(self) -> float:
        return _BASE_PRICE[self]

    def volume(self) -> float:
        return _VOLUME[self]

    def extraction_difficulty(self) -> float:
        try:
            return _DIFFICULTY[self]
        except KeyError:
            raise ValueError(
                f"{self.value} is crafted and has no extraction difficulty"
            ) from None

    def min_rank(self) -> int:
        return _MIN_RANK[self]

    def mineable(self, rank: int) -> bool:
        return self in _MINEABLE and rank > self.min_rank()

    def suckable(self, rank: int) -> bool:
        return self in _SUCKABLE and rank > self.min_rank()


_ORDER = {resource: index for index, resource in enumerate(Resource)}

_BASE_PRICE = {
    Resource.STONE: 4.0,
    Resource.HELIUM: 4.0,
    Resource.IRON: 16.0,
    Resource.OZONE: 16.0,
    Resource.COPPER: 46.0,
    Resource.FREON: 46.0,
    Resource.GOLD: 80.0,
    Resource.OXYGEN: 80.0,
    Resource.FUEL: 1.9,
    Resource.HULL_PLATE: 0.75,
}

_VOLUME = {
    Resource.STONE: 0.75,
    Resource.HELIUM: 0.75,
    Resource.IRON: 2.5,
    Resource.OZONE: 2.5,
    Resource.COPPER: 3.0,
    Resource.FREON: 3.0,
    Resource.GOLD: 0.25,
    Resource.OXYGEN: 0.25,
    Resource.FUEL: 2.0,
    Resource.HULL_PLATE: 0.05,
}

_DIFFICULTY = {
    Resource.STONE: 0.25,
    Resource.HELIUM: 0.25,
    Resource.IRON: 0.7,
    Resource.OZONE: 0.7,
    Resource.COPPER: 1.9,
    Resource.FREON: 1.9,
    Resource.GOLD: 2.95,
    Resource.OXYGEN: 2.95,
}

_MIN_RANK = {
    Resource.STONE: 0,
    Resource.HELIUM: 0,
    Resource.IRON: 2,
    Resource.OZONE: 2,
    Resource.COPPER: 5,
    Resource.FREON: 5,
    Resource.GOLD: 9,
    Resource.OXYGEN: 9,
    Resource.FUEL: 0,
    Resource.HULL_PLATE: 0,
}

_MINEABLE = frozenset({Resource.STONE, Resource.IRON, Resource.COPPER, Resource.GOLD})
_SUCKABLE = frozenset({Resource.HELIUM, Resource.OZONE, Resource.FREON, Resource.OXYGEN})


@dataclass
class ExtractionInfo:
    """Extraction rate per second of every resource a ship is extracting."""

    rates: dict = field(default_factory=dict)

    @classmethod
    def create(cls, ship, planet) -> ExtractionInfo:
        """Sum the rates of every module of the ship on the given planet."""
        rates: dict = {}
        for _, module in sorted(ship.modules.items()):
            for resource, rate in module.can_extract(ship.crew, planet):
                rates[resource] = rates.get(resource, 0.0) + rate
        return cls(rates)

    def __len__(self) -> int:
        return len(self.rates)

    def update_cargo(self, cargo, tdelta: float) -> bool:
        """Add what was extracted during ``tdelta``; return whether the cargo is full."""
        for resource, rate in sorted(self.rates.items()):
            cargo.add_resource(resource, rate * tdelta)
        return cargo.is_full()

    def time_before_cargo_full(self, cargocap: float) -> timedelta:
        vol_per_sec = sum(
            resource.volume() * rate for resource, rate in sorted(self.rates.items())
        )
        return timedelta(seconds=cargocap / vol_per_sec)

    def to_json(self) -> dict:
        return {resource.value: rate for resource, rate in sorted(self.rates.items())}