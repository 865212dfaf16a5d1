"""Game state of a single player: money, stations and ships."""

from __future__ import annotations

import hashlib
import secrets
import time
from datetime import timedelta

from .errors import ErrorKind, GameError
from .ship import Ship
from .syslog import SyslogEvent

INIT_MONEY = 72000.0
PLAYER_ID_MAX = 65535
PLAYER_KEY_SIZE = 128
LOW_FUNDS_SECONDS = 60.0


def _player_id(name: str) -> int:
    digest = hashlib.blake2b(name.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big") % PLAYER_ID_MAX


class Player:
    """A player, with its owned stations and ships."""

    def __init__(self, station: tuple, name: str, testing: bool = False) -> None:
        station_id, coord = station
        self.created = time.monotonic()
        self.id = _player_id(name)
        self.key = secrets.token_bytes(PLAYER_KEY_SIZE)
        self.score = 0.0
        self.lost = False
        self.name = name
        self.money = INIT_MONEY
        if testing and name.startswith("test-rich"):
            self.money *= 10000.0
        self.costs = 0.0
        self.stations: dict = {station_id: tuple(coord)}
        self.ships: dict = {}

    def update_wages(self, galaxy) -> None:
        """Recompute the wages paid each second to every crew member."""
        costs = 0.0
        for coord in self.stations.values():
            station = galaxy.get_station(coord)
            if station is None:
                raise LookupError(f"no station at {coord}")
            costs += station.crew.sum_wages()
            costs += station.idle_crew.sum_wages()
        costs += sum(ship.crew.sum_wages() for ship in self.ships.values())
        self.costs = costs

    def update_money(self, syslog, tdelta: float) -> None:
        """Pay the wages for ``tdelta`` seconds, warning and losing as money runs out."""
        threshold = self.costs * LOW_FUNDS_SECONDS
        before = self.money < threshold
        self.money -= self.costs * tdelta
        after = self.money < threshold
        if after and not before:
            left = max(self.money / self.costs, 0.0) if self.costs else 0.0
            syslog.record(
                self.id, SyslogEvent("LowFunds", time_left=timedelta(seconds=left))
            )
        if self.money < 0.0 and not self.lost:
            self.lost = True
            syslog.record(self.id, SyslogEvent("GameLost"))

    def buy_ship(self, station, ship_id: int) -> int:
        """Buy a ship from the station shipyard, which restocks with a random ship."""
        found = None
        for index, ship in enumerate(station.shipyard):
            if ship.id == ship_id:
                found = (index, ship.compute_price())
        if found is None:
            raise GameError(ErrorKind.SHIP_NOT_FOUND, ship_id)
        index, price = found
        if price > self.money:
            raise GameError(ErrorKind.NOT_ENOUGH_MONEY, self.money, price)

        ship = station.shipyard.pop(index)
        ship.update_perf_stats()
        ship.fuel_tank = ship.fuel_tank_capacity
        self.money -= price
        self.ships[ship_id] = ship
        station.shipyard.append(Ship.random(station.position))
        return ship.id

    def _ship(self, ship_id: int) -> Ship:
        ship = self.ships.get(ship_id)
        if ship is None:
            raise GameError(ErrorKind.SHIP_NOT_FOUND, ship_id)
        return ship

    def _charge(self, price: float) -> None:
        if price > self.money:
            raise GameError(ErrorKind.NOT_ENOUGH_MONEY, self.money, price)
        self.money -= price

    def buy_ship_module(self, station_id: int, ship_id: int, modtype) -> int:
        """Buy a module for a ship docked at one of the player's stations."""
        station_coord = self.stations.get(station_id)
        if station_coord is None:
            raise GameError(ErrorKind.NO_SUCH_STATION, station_id)
        ship = self._ship(ship_id)
        if tuple(station_coord) != tuple(ship.position):
            raise GameError(ErrorKind.SHIP_NOT_IN_STATION)
        self._charge(modtype.price_buy())
        module_id = len(ship.modules) + 1
        ship.modules[module_id] = modtype.new_module()
        return module_id

    def buy_ship_upgrade(self, station, ship_id: int, upgrade) -> float:
        """Install an upgrade on a ship; return its price."""
        ship = self._ship(ship_id)
        price = station.ship_upgrade_price(upgrade)
        self._charge(price)
        upgrade.install(ship)
        return price

    def buy_ship_module_upgrade(self, station, ship_id: int, mod_id: int) -> tuple:
        """Raise the rank of a ship module; return (price, new rank)."""
        ship = self._ship(ship_id)
        if tuple(ship.position) != tuple(station.position):
            raise GameError(ErrorKind.SHIP_NOT_IN_STATION)
        module = ship.modules.get(mod_id)
        if module is None:
            raise GameError(ErrorKind.NO_SUCH_MODULE, mod_id)
        price = module.price_next_rank()
        self._charge(price)
        module.rank += 1
        return price, module.rank

    def upgrade_crew_rank(self, station, ship_id: int, crew_id: int) -> tuple:
        """Raise the rank of a crew member aboard a ship; return (price, new rank)."""
        ship = self._ship(ship_id)
        if tuple(ship.position) != tuple(station.position):
            raise GameError(ErrorKind.SHIP_NOT_IN_STATION)
        member = ship.crew.get(crew_id)
        if member is None:
            raise GameError(ErrorKind.CREW_MEMBER_NOT_FOUND, crew_id)
        price = member.price_next_rank()
        self._charge(price)
        member.rank += 1
        ship.update_perf_stats()
        return price, member.rank

    def upgrade_station_trader(self, station) -> tuple:
        """Raise the rank of the station trader; return (price, new rank)."""
        if station.trader is None:
            raise GameError(ErrorKind.NO_TRADER_ASSIGNED)
        member = station.crew[station.trader]
        price = member.price_next_rank()
        self._charge(price)
        member.rank += 1
        return price, member.rank