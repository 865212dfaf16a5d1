"""Travel planning and in-flight state of ships."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import ErrorKind, GameError
from .space import get_delta, get_direction, get_distance


def _div(num: float, den: float) -> float:
    """Divide, yielding an infinity or NaN instead of raising on a zero divisor."""
    if den:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num)


@dataclass
class TravelCost:
    """What a trip will cost a ship."""

    direction: tuple
    distance: float
    duration: float
    fuel_consumption: float
    hull_usage: float

    def have_enough(self, ship) -> bool:
        """Whether the ship has the fuel and the hull left for this trip."""
        return (
            ship.fuel_tank >= self.fuel_consumption
            and (ship.hull_decay_capacity - ship.hull_decay) >= self.hull_usage
        )

    def to_json(self) -> dict:
        return {
            "direction": list(self.direction),
            "distance": self.distance,
            "duration": self.duration,
            "fuel_consumption": self.fuel_consumption,
            "hull_usage": self.hull_usage,
        }


@dataclass
class Travel:
    """A trip towards a destination."""

    destination: tuple

    def compute_costs(self, ship) -> TravelCost:
        """Cost of taking ``ship`` from its position to the destination."""
        if ship.pilot is None:
            raise GameError(ErrorKind.NO_PILOT_ASSIGNED)
        distance = get_distance(ship.position, self.destination)
        if distance == 0.0:
            raise GameError(ErrorKind.NULL_DISTANCE)
        direction = get_direction(ship.position, self.destination)
        duration = _div(distance, ship.stats.speed)
        return TravelCost(
            direction=direction,
            distance=distance,
            duration=duration,
            fuel_consumption=ship.stats.fuel_consumption * duration,
            hull_usage=ship.stats.hull_usage_rate * distance,
        )


@dataclass
class FlightData:
    """Progress of a ship along its trip."""

    start: tuple
    destination: tuple
    delta: tuple
    direction: tuple
    dist_done: float
    dist_tot: float

    @classmethod
    def from_travel(cls, start: tuple, cost: TravelCost, travel: Travel) -> FlightData:
        return cls(
            start=tuple(start),
            destination=tuple(travel.destination),
            delta=get_delta(start, travel.destination),
            direction=cost.direction,
            dist_done=0.0,
            dist_tot=cost.distance,
        )

    def to_json(self) -> dict:
        return {
            "start": list(self.start),
            "destination": list(self.destination),
            "delta": list(self.delta),
            "direction": list(self.direction),
            "dist_done": self.dist_done,
            "dist_tot": self.dist_tot,
        }