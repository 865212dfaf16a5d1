"""Ships: their specifications, performance, travel and extraction."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import asdict, dataclass, field
from typing import Optional, Union

from .cargo import ShipCargo
from .crew import Crew, CrewMemberType
from .errors import ErrorKind, GameError
from .navigation import FlightData, Travel, TravelCost
from .resources import ExtractionInfo, Resource
from .space import translation

log = logging.getLogger(__name__)

PILOT_FUEL_SHARE = 5
HULL_USAGE_BASE = 5.0 / 100.0

FUEL_TANK_CAP_PRICE = 30.0
CARGO_CAP_PRICE = 20.0
HULL_DECAY_CAP_PRICE = 9.0
REACTOR_POWER_PRICE = 4000.0
SHIELD_PRICE = 2500.0

REACTOR_SPEED_PER_POWER = 50.0


@dataclass
class ShipStats:
    """Performance of a ship, derived from its specs and crew."""

    speed: float = 0.0
    fuel_consumption: float = 0.0
    hull_usage_rate: float = 0.0


def _new_id() -> int:
    return random.getrandbits(64)


@dataclass
class Ship:
    """A ship; its ``state`` is None when idle, a FlightData in flight,
    or an ExtractionInfo while extracting."""

    id: int = 0
    reactor_power: int = 0
    fuel_tank_capacity: float = 0.0
    hull_decay_capacity: float = 0.0
    modules: dict = field(default_factory=dict)
    shield_power: int = 0
    position: tuple = (0, 0, 0)
    crew: Crew = field(default_factory=Crew)
    cargo: ShipCargo = field(default_factory=lambda: ShipCargo(0.0))
    fuel_tank: float = 0.0
    hull_decay: float = 0.0
    pilot: Optional[int] = None
    state: Union[None, FlightData, ExtractionInfo] = None
    stats: ShipStats = field(default_factory=ShipStats)

    @classmethod
    def init_shipyard(cls, position: tuple) -> list:
        """The light, medium and heavy ships a new station sells."""
        return [
            cls(
                id=_new_id(),
                position=tuple(position),
                reactor_power=1,
                fuel_tank_capacity=1000.0,
                cargo=ShipCargo(200.0),
                hull_decay_capacity=3000.0,
                shield_power=0,
            ),
            cls(
                id=_new_id(),
                position=tuple(position),
                reactor_power=3,
                fuel_tank_capacity=2000.0,
                cargo=ShipCargo(400.0),
                hull_decay_capacity=6000.0,
                shield_power=1,
            ),
            cls(
                id=_new_id(),
                position=tuple(position),
                reactor_power=10,
                fuel_tank_capacity=4000.0,
                cargo=ShipCargo(1200.0),
                hull_decay_capacity=20000.0,
                shield_power=3,
            ),
        ]

    @classmethod
    def random(cls, position: tuple) -> Ship:
        """A ship with random specifications."""
        return cls(
            id=_new_id(),
            position=tuple(position),
            reactor_power=random.randrange(1, 10),
            fuel_tank_capacity=float(random.randrange(1, 10000)),
            cargo=ShipCargo(random.uniform(10.0, 1000.0)),
            hull_decay_capacity=float(random.randrange(1000, 50000)),
        )

    def market_data(self) -> dict:
        """Public data of this ship, as shown in a shipyard."""
        return {
            "id": self.id,
            "price": self.compute_price(),
            "modules": self._modules_json(),
            "reactor_power": self.reactor_power,
            "cargo_capacity": self.cargo.capacity,
            "fuel_tank_capacity": self.fuel_tank_capacity,
            "hull_decay_capacity": self.hull_decay_capacity,
        }

    def compute_price(self) -> float:
        price = 0.0
        price += float(self.reactor_power) * REACTOR_POWER_PRICE
        price += self.fuel_tank_capacity * FUEL_TANK_CAP_PRICE
        price += self.cargo.capacity * CARGO_CAP_PRICE
        price += self.hull_decay_capacity * HULL_DECAY_CAP_PRICE
        price += sum(module.totalcost for module in self.modules.values())
        return price

    def update_perf_stats(self) -> None:
        """Recompute speed and consumption from the specs and the crew aboard."""
        stats = ShipStats()
        stats.hull_usage_rate = HULL_USAGE_BASE / (
            1.0 + math.log(1.0 + float(self.shield_power), 3.5)
        )
        stats.fuel_consumption = float(self.reactor_power)
        if self.pilot is not None:
            pilot = self.crew[self.pilot]
            assert pilot.member_type is CrewMemberType.PILOT
            totshare = float(PILOT_FUEL_SHARE * 10)
            stats.fuel_consumption *= (totshare - float(pilot.rank)) / totshare
            stats.speed = (
                float(self.reactor_power) * REACTOR_SPEED_PER_POWER * float(pilot.rank)
            )
        stats.speed *= 1.0 - self.cargo.slowing_ratio()
        self.stats = stats

    def _require_idle(self) -> None:
        if self.state is not None:
            raise GameError(ErrorKind.SHIP_NOT_IDLE)

    def compute_travel_costs(self, destination: tuple) -> TravelCost:
        self._require_idle()
        return Travel(tuple(destination)).compute_costs(self)

    def set_travel(self, destination: tuple) -> TravelCost:
        """Start flying towards ``destination``."""
        self._require_idle()
        travel = Travel(tuple(destination))
        cost = travel.compute_costs(self)
        if not cost.have_enough(self):
            raise GameError(ErrorKind.CANNOT_PERFORM_TRAVEL)
        log.debug("Starting flight on ship %s", self.id)
        self.state = FlightData.from_travel(self.position, cost, travel)
        return cost

    def update_flight(self, tdelta: float) -> bool:
        """Advance the flight by ``tdelta`` seconds; return whether it ended."""
        data = self.state
        if not isinstance(data, FlightData):
            raise ValueError(f"ship {self.id} is not in flight")

        finished = False
        dist_delta = self.stats.speed * tdelta
        data.dist_done += dist_delta
        if data.dist_done > data.dist_tot:
            finished = True
            doverflow = data.dist_done - data.dist_tot
            data.dist_done -= doverflow
            dist_delta -= doverflow
            tdelta -= doverflow / self.stats.speed

        self.position = translation(data.start, data.direction, data.dist_done)

        self.fuel_tank -= self.stats.fuel_consumption * tdelta
        if self.fuel_tank <= 0.0:
            self.fuel_tank = 0.0
            log.debug("Ship %s has an empty fuel tank", self.id)
            return True

        self.hull_decay += self.stats.hull_usage_rate * dist_delta
        if self.hull_decay >= self.hull_decay_capacity:
            log.debug("Ship %s worn out all its hull", self.id)
            return True

        return finished

    def stop_navigation(self) -> tuple:
        """Stop wherever the ship is; return its position."""
        log.debug("Stopping flight on ship %s", self.id)
        self.state = None
        return self.position

    def start_extraction(self, galaxy) -> ExtractionInfo:
        """Start extracting from the planet the ship is on."""
        self._require_idle()
        planet = galaxy.get_planet(self.position)
        if planet is None:
            raise GameError(ErrorKind.CANNOT_EXTRACT_WITHOUT_PLANET)
        log.debug(
            "Ship %s started extraction on planet %s", self.id, planet.position
        )
        extraction = ExtractionInfo.create(self, planet)
        if extraction.rates:
            self.state = ExtractionInfo(dict(extraction.rates))
        log.debug("Extraction of resources: %s", extraction)
        return extraction

    def stop_extraction(self) -> None:
        if not isinstance(self.state, ExtractionInfo):
            raise GameError(ErrorKind.SHIP_NOT_EXTRACTING)
        log.debug("Ship %s stopped extraction", self.id)
        self.state = None

    def update_extract(self, tdelta: float) -> bool:
        """Extract for ``tdelta`` seconds; return whether the cargo is full."""
        if not isinstance(self.state, ExtractionInfo):
            raise ValueError(f"ship {self.id} is not extracting")
        return self.state.update_cargo(self.cargo, tdelta)

    def unload_cargo(self, resource: Resource, amnt: float, station) -> float:
        """Move up to ``amnt`` units into the station cargo; return the amount moved."""
        unloaded = self.cargo.unload(resource, amnt)
        if unloaded == 0.0:
            return 0.0
        added = station.cargo.add_resource(resource, unloaded)
        if added < unloaded:
            self.cargo.add_resource(resource, unloaded - added)
            return added
        return unloaded

    def _modules_json(self) -> dict:
        return {str(mid): module.to_json() for mid, module in sorted(self.modules.items())}

    def _state_json(self):
        if isinstance(self.state, FlightData):
            return {"InFlight": self.state.to_json()}
        if isinstance(self.state, ExtractionInfo):
            return {"Extracting": self.state.to_json()}
        return "Idle"

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "reactor_power": self.reactor_power,
            "fuel_tank_capacity": self.fuel_tank_capacity,
            "hull_decay_capacity": self.hull_decay_capacity,
            "modules": self._modules_json(),
            "shield_power": self.shield_power,
            "position": list(self.position),
            "crew": self.crew.to_json(),
            "cargo": self.cargo.to_json(),
            "fuel_tank": self.fuel_tank,
            "hull_decay": self.hull_decay,
            "pilot": self.pilot,
            "state": self._state_json(),
            "stats": asdict(self.stats),
        }