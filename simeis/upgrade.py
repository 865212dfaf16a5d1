"""Upgrades a shipyard can install on a ship."""

from __future__ import annotations

import enum

from .ship import CARGO_CAP_PRICE, HULL_DECAY_CAP_PRICE, REACTOR_POWER_PRICE, SHIELD_PRICE

CARGO_EXP_ADD_CAP = 100.0
REACTOR_UPG_ADD = 1
HULL_UPG_ADD = 100.0
SHIELD_UPG_ADD = 1

REACTOR_OPT_DEC_FUELCONS = 5.0 / 100.0
REACTOR_OPT_PRICE = 1000.0


class ShipUpgrade(enum.Enum):
    CARGO_EXPANSION = "CargoExpansion"
    REACTOR_UPGRADE = "ReactorUpgrade"
    HULL_UPGRADE = "HullUpgrade"
    SHIELD = "Shield"

    @classmethod
    def parse(cls, name: str) -> ShipUpgrade:
        """Look an upgrade up by name, ignoring ASCII case."""
        lowered = name.lower()
        for upgrade in cls:
            if upgrade.value.lower() == lowered:
                return upgrade
        raise ValueError(f"unknown ship upgrade: {name!r}")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ShipUpgrade):
            return NotImplemented
        members = list(ShipUpgrade)
        return members.index(self) < members.index(other)

    def price(self) -> float:
        if self is ShipUpgrade.CARGO_EXPANSION:
            return CARGO_EXP_ADD_CAP * CARGO_CAP_PRICE
        if self is ShipUpgrade.REACTOR_UPGRADE:
            return float(REACTOR_UPG_ADD) * REACTOR_POWER_PRICE
        if self is ShipUpgrade.HULL_UPGRADE:
            return HULL_UPG_ADD * HULL_DECAY_CAP_PRICE
        return float(SHIELD_UPG_ADD) * SHIELD_PRICE

    def install(self, ship) -> None:
        """Apply the upgrade to the ship and refresh its performance."""
        if self is ShipUpgrade.CARGO_EXPANSION:
            ship.cargo.capacity += CARGO_EXP_ADD_CAP
        elif self is ShipUpgrade.REACTOR_UPGRADE:
            ship.reactor_power += REACTOR_UPG_ADD
        elif self is ShipUpgrade.HULL_UPGRADE:
            ship.hull_decay_capacity += HULL_UPG_ADD
        else:
            ship.shield_power += SHIELD_UPG_ADD
        ship.update_perf_stats()

    def description(self) -> str:
        if self is ShipUpgrade.CARGO_EXPANSION:
            return f"Adds {CARGO_EXP_ADD_CAP:g} of cargo capacity"
        if self is ShipUpgrade.REACTOR_UPGRADE:
            return (
                f"Increase the reactor power by {REACTOR_UPG_ADD}, "
                "improves the ship's speed"
            )
        if self is ShipUpgrade.HULL_UPGRADE:
            return f"Increase the hull decay capacity by {HULL_UPG_ADD:g}"
        return "Reduce the damage and usure of the hull"