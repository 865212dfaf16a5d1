"""Ship modules that extract resources from planets."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from .crew import CrewMemberType
from .resources import Resource

MOD_UPG_POWF_DIV = 75.0
EXTRACTION_RATE_RANK_POWF = 0.45
EXRATE_DIFF_FACT = 2.5
EXRATE_FACT = 0.6


class ShipModuleType(enum.Enum):
    MINER = "Miner"
    GAS_SUCKER = "GasSucker"

    @classmethod
    def parse(cls, name: str) -> ShipModuleType:
        """Look a module type up by name, ignoring ASCII case."""
        lowered = name.lower()
        for modtype in cls:
            if modtype.value.lower() == lowered:
                return modtype
        raise ValueError(f"unknown module type: {name!r}")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ShipModuleType):
            return NotImplemented
        members = list(ShipModuleType)
        return members.index(self) < members.index(other)

    def new_module(self) -> ShipModule:
        return ShipModule(modtype=self)

    def price_buy(self) -> float:
        return 4500.0


@dataclass
class ShipModule:
    modtype: ShipModuleType
    operator: Optional[int] = None
    rank: int = 1
    totalcost: float = 0.0

    def price_next_rank(self) -> float:
        exponent = (MOD_UPG_POWF_DIV - 1.0 + self.rank) / MOD_UPG_POWF_DIV
        return self.modtype.price_buy() ** exponent

    def need(self, ctype: CrewMemberType) -> bool:
        """Whether a crew member of this type can operate the module."""
        return ctype is CrewMemberType.OPERATOR and self.operator is None

    def can_extract(self, crew, planet) -> list:
        """Pairs of (resource, rate per second) this module yields on a planet."""
        if self.operator is None:
            return []
        operator = crew[self.operator]
        if self.modtype is ShipModuleType.MINER:
            allowed = Resource.mineable
        else:
            allowed = Resource.suckable
        result = []
        for resource in Resource:
            density = planet.resource_density(resource)
            if density > 0.0 and allowed(resource, operator.rank):
                result.append(
                    (resource, self.extraction_rate(resource, operator.rank, density))
                )
        return result

    def extraction_rate(self, resource: Resource, oprank: int, density: float) -> float:
        if oprank < resource.min_rank():
            raise ValueError(
                f"operator rank {oprank} is below the minimum for {resource.value}"
            )
        rank = float(oprank - resource.min_rank()) * float(self.rank)
        difficulty = resource.extraction_difficulty() ** EXRATE_DIFF_FACT
        return density * (rank / difficulty) ** EXRATE_FACT

    def to_json(self) -> dict:
        return {
            "operator": self.operator,
            "modtype": self.modtype.value,
            "rank": self.rank,
            "totalcost": self.totalcost,
        }