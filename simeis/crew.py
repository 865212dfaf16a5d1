"""Crew members, their wages and ranks."""

from __future__ import annotations

import enum
from dataclasses import dataclass

WAGE_INC_RANK_POWF = 0.85
RANK_PRICE_WAGE_MULT = 1900.0


class CrewMemberType(enum.Enum):
    PILOT = "Pilot"
    OPERATOR = "Operator"
    TRADER = "Trader"
    SOLDIER = "Soldier"

    @classmethod
    def parse(cls, name: str) -> CrewMemberType:
        """Look a crew type up by name, ignoring ASCII case."""
        lowered = name.lower()
        for member_type in cls:
            if member_type.value.lower() == lowered:
                return member_type
        raise ValueError(f"unknown crew member type: {name!r}")


_BASE_WAGE = {
    CrewMemberType.PILOT: 5.5,
    CrewMemberType.OPERATOR: 0.9,
    CrewMemberType.TRADER: 2.6,
    CrewMemberType.SOLDIER: 1.5,
}


@dataclass
class CrewMember:
    member_type: CrewMemberType
    rank: int = 1

    def wage(self) -> float:
        """Money paid to this member each second."""
        return _BASE_WAGE[self.member_type] * float(self.rank) ** WAGE_INC_RANK_POWF

    def price_next_rank(self) -> float:
        return self.wage() * RANK_PRICE_WAGE_MULT

    def to_json(self) -> dict:
        return {"member_type": self.member_type.value, "rank": self.rank}


class Crew(dict):
    """Crew members indexed by their identifier."""

    def sum_wages(self) -> float:
        return sum(member.wage() for member in self.values())

    def to_json(self) -> dict:
        return {str(cid): member.to_json() for cid, member in sorted(self.items())}