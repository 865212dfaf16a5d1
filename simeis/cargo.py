"""Cargo holds of ships and stations."""

from __future__ import annotations

from dataclasses import dataclass, field

from .resources import Resource


@dataclass
class ShipCargo:
    """A volume-limited store of resources."""

    capacity: float
    usage: float = 0.0
    resources: dict = field(default_factory=dict)

    def slowing_ratio(self) -> float:
        """How much a loaded cargo slows the ship; currently always nothing."""
        return 0.0

    def add_resource(self, res: Resource, amnt: float) -> float:
        """Store up to ``amnt`` units; return how many units were stored."""
        added = res.volume() * amnt
        if self.usage == self.capacity:
            return 0.0
        if self.usage + added > self.capacity:
            overflow = (self.usage + added) - self.capacity
            amnt -= overflow / res.volume()
            self.usage = self.capacity
        else:
            self.usage += added
        self.resources[res] = self.resources.get(res, 0.0) + amnt
        return amnt

    def is_full(self) -> bool:
        return self.usage == self.capacity

    def unload(self, resource: Resource, amnt: float) -> float:
        """Take out up to ``amnt`` units; return how many units were taken."""
        if resource not in self.resources:
            return 0.0
        got = self.resources[resource]
        taken = min(got, amnt)
        self.resources[resource] = got - taken
        self.usage = max(self.usage - resource.volume() * taken, 0.0)
        self.usage = round(self.usage * 1000.0) / 1000.0
        return taken

    def space_for(self, resource: Resource) -> float:
        """How many units of the resource still fit."""
        return (self.capacity - self.usage) / resource.volume()

    def to_json(self) -> dict:
        return {
            "capacity": self.capacity,
            "usage": self.usage,
            "resources": {r.value: a for r, a in sorted(self.resources.items())},
        }