"""Player-owned stations: crew, cargo, shipyard and trading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .cargo import ShipCargo
from .crew import Crew, CrewMemberType
from .errors import ErrorKind, GameError
from .market import MarketTx
from .resources import Resource
from .ship import Ship

CARGO_BASE_PRICE = 2.0
# Every CARGO_PRICE_INCDIV units bought multiplies the unit price by the base
CARGO_PRICE_INCDIV = 1000.0
STATION_INIT_CARGO = 1000.0


@dataclass(frozen=True)
class StationInfo:
    """What a scanner can tell about a station."""

    id: int
    position: tuple

    @classmethod
    def scan(cls, rank: int, station: Station) -> StationInfo:
        return cls(station.id, tuple(station.position))

    def to_json(self) -> dict:
        return {"id": self.id, "position": list(self.position)}


@dataclass
class Station:
    """A station with its crew, cargo and the ships its shipyard sells."""

    id: int
    position: tuple
    idle_crew: Crew = field(default_factory=Crew)
    crew: Crew = field(default_factory=Crew)
    shipyard: Optional[list] = None
    cargo: ShipCargo = field(default_factory=lambda: ShipCargo(STATION_INIT_CARGO))
    trader: Optional[int] = None

    def __post_init__(self) -> None:
        self.position = tuple(self.position)
        if self.shipyard is None:
            self.shipyard = Ship.init_shipyard(self.position)

    def scan(self, galaxy):
        """Scan the sector around the station."""
        return galaxy.scan_sector(1, self.position)

    def cargo_price(self) -> float:
        """Price of one more unit of cargo capacity."""
        return CARGO_BASE_PRICE ** (
            (self.cargo.capacity - STATION_INIT_CARGO) / CARGO_PRICE_INCDIV
        )

    def buy_cargo(self, player, amnt: int) -> ShipCargo:
        """Expand the station cargo by ``amnt`` units, paid by the player."""
        if amnt < 0:
            raise ValueError(f"amount must not be negative, got {amnt}")
        cost = float(amnt) * self.cargo_price()
        if cost > player.money:
            raise GameError(ErrorKind.NOT_ENOUGH_MONEY, player.money, cost)
        player.money -= cost
        self.cargo.capacity += float(amnt)
        return self.cargo

    def assign_trader(self, crew_id: int) -> None:
        """Make an idle crew member the trader of this station."""
        member = self.idle_crew.pop(crew_id, None)
        if member is None:
            raise GameError(ErrorKind.CREW_MEMBER_NOT_IDLE, crew_id)
        self.crew[crew_id] = member
        self.trader = crew_id

    def _idle_member(self, crew_id: int):
        member = self.idle_crew.get(crew_id)
        if member is None:
            raise GameError(ErrorKind.CREW_MEMBER_NOT_IDLE, crew_id)
        return member

    def onboard_pilot(self, crew_id: int, ship: Ship) -> None:
        """Send an idle pilot aboard a ship that has none."""
        member = self._idle_member(crew_id)
        if member.member_type is not CrewMemberType.PILOT:
            raise GameError(ErrorKind.WRONG_CREW_TYPE, CrewMemberType.PILOT)
        if ship.pilot is not None:
            raise GameError(ErrorKind.CREW_NOT_NEEDED)
        ship.pilot = crew_id
        ship.crew[crew_id] = self.idle_crew.pop(crew_id)
        ship.update_perf_stats()

    def onboard_operator(self, crew_id: int, ship: Ship, modid: int) -> None:
        """Send an idle operator aboard a ship to run one of its modules."""
        member = self._idle_member(crew_id)
        if member.member_type is not CrewMemberType.OPERATOR:
            raise GameError(ErrorKind.WRONG_CREW_TYPE, CrewMemberType.PILOT)
        module = ship.modules.get(modid)
        if module is None:
            raise GameError(ErrorKind.NO_SUCH_MODULE, modid)
        if not module.need(member.member_type):
            raise GameError(ErrorKind.CREW_NOT_NEEDED)
        module.operator = crew_id
        ship.crew[crew_id] = self.idle_crew.pop(crew_id)

    def _trader(self):
        if self.trader is None:
            raise GameError(ErrorKind.NO_TRADER_ASSIGNED)
        return self.crew[self.trader]

    def buy_resource(self, resource: Resource, amnt: float, player, market) -> MarketTx:
        """Buy as much of ``amnt`` as the station cargo can hold."""
        trader = self._trader()
        amnt = min(amnt, self.cargo.space_for(resource))
        if amnt == 0.0:
            raise GameError(ErrorKind.BUY_NOTHING)
        tx = market.buy(trader, resource, amnt)
        player.money -= tx.removed_money
        player.score -= tx.removed_money
        bought, quantity = tx.added_cargo
        self.cargo.add_resource(bought, quantity)
        return tx

    def sell_resource(self, resource: Resource, amnt: float, player, market) -> MarketTx:
        """Sell up to ``amnt`` units held in the station cargo."""
        trader = self._trader()
        stock = self.cargo.resources.get(resource)
        if stock is None:
            raise GameError(ErrorKind.SELL_NOTHING)
        amnt = min(amnt, stock)
        if amnt <= 0.0:
            raise GameError(ErrorKind.SELL_NOTHING)
        tx = market.sell(trader, resource, amnt)
        player.money += tx.added_money
        player.score += tx.added_money
        sold, quantity = tx.removed_cargo
        self.cargo.unload(sold, quantity)
        return tx

    def refuel_ship(self, ship: Ship) -> float:
        """Fill the ship tank from the station fuel; return the fuel added."""
        qty = self.cargo.resources.get(Resource.FUEL)
        if not qty:
            raise GameError(ErrorKind.NO_FUEL_IN_CARGO)
        needed = ship.fuel_tank_capacity - ship.fuel_tank
        unloaded = self.cargo.unload(Resource.FUEL, min(needed, qty))
        ship.fuel_tank += unloaded
        return unloaded

    def repair_ship(self, ship: Ship) -> float:
        """Repair the hull with station hull plates; return the plates used."""
        qty = self.cargo.resources.get(Resource.HULL_PLATE)
        if not qty:
            raise GameError(ErrorKind.NO_HULL_PLATE_IN_CARGO)
        amnt = min(ship.hull_decay, qty)
        if amnt == 0.0:
            return 0.0
        unloaded = self.cargo.unload(Resource.HULL_PLATE, amnt)
        ship.hull_decay -= unloaded
        return unloaded

    def ship_upgrade_price(self, upgrade) -> float:
        return upgrade.price()