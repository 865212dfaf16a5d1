"""The running game: players, galaxy, market and the periodic update loop."""

from __future__ import annotations

import asyncio
import base64
import enum
import logging
import random
import time
from typing import Optional

from .errors import ErrorKind, GameError
from .galaxy import Galaxy
from .market import MARKET_CHANGE_SEC, Market
from .navigation import FlightData
from .player import Player
from .resources import ExtractionInfo
from .syslog import Syslog, SyslogEvent

log = logging.getLogger(__name__)

ITER_PERIOD = 0.02
SIGNAL_QUEUE_SIZE = 5


class GameSignal(enum.Enum):
    STOP = "Stop"
    TICK = "Tick"


class Game:
    """The whole game state.

    Outside of testing, ``run`` updates the game every ``ITER_PERIOD``
    seconds; in testing it updates only when sent a TICK signal.
    """

    def __init__(self, testing: bool = False) -> None:
        self.testing = testing
        self.players: dict = {}
        self.player_index: dict = {}
        self.galaxy = Galaxy()
        self.market = Market()
        self.syslog = Syslog()
        self.tstart = time.time()
        self._signals: asyncio.Queue = asyncio.Queue(maxsize=SIGNAL_QUEUE_SIZE)
        self._task: Optional[asyncio.Task] = None
        self._market_last_tick = time.monotonic()

    async def run(self) -> None:
        """Update the game until a STOP signal arrives."""
        self._task = asyncio.current_task()
        log.debug("Started game loop")
        rng = random.Random()
        self._market_last_tick = time.monotonic()
        while True:
            if self.testing:
                signal = await self._signals.get()
            else:
                try:
                    signal = self._signals.get_nowait()
                except asyncio.QueueEmpty:
                    signal = GameSignal.TICK
            if signal is GameSignal.STOP:
                break
            started = time.monotonic()
            self.tick(rng)
            if not self.testing:
                took = time.monotonic() - started
                await asyncio.sleep(max(ITER_PERIOD - took, 0.0))
        log.info("Exiting game loop")

    def tick(self, rng: random.Random) -> None:
        """Advance every player, ship and the market by one period."""
        elapsed = time.monotonic() - self._market_last_tick
        market_change_proba = min(elapsed / MARKET_CHANGE_SEC, 1.0)

        for player_id, player in list(self.players.items()):
            player.update_money(self.syslog, ITER_PERIOD)
            dead = []
            for ship_id, ship in list(player.ships.items()):
                if isinstance(ship.state, FlightData):
                    if ship.update_flight(ITER_PERIOD):
                        ship.state = None
                        if ship.hull_decay >= ship.hull_decay_capacity:
                            dead.append(ship_id)
                        else:
                            self.syslog.record(
                                player_id,
                                SyslogEvent("ShipFlightFinished", ship_id=ship_id),
                            )
                elif isinstance(ship.state, ExtractionInfo):
                    if ship.update_extract(ITER_PERIOD):
                        ship.state = None
                        self.syslog.record(
                            player_id, SyslogEvent("ExtractionStopped", ship_id=ship_id)
                        )
            for ship_id in dead:
                self.syslog.record(
                    player_id, SyslogEvent("ShipDestroyed", ship_id=ship_id)
                )
                del player.ships[ship_id]

        if rng.random() < market_change_proba:
            if not self.testing:
                self.market.update_prices(rng)
            self._market_last_tick = time.monotonic()

        self.syslog.update()

    async def send_signal(self, signal: GameSignal) -> None:
        await self._signals.put(signal)

    async def stop(self) -> None:
        """Ask the game loop to exit and wait for it."""
        log.info("Asking game loop to exit")
        await self.send_signal(GameSignal.STOP)
        task = self._task
        if task is not None and task is not asyncio.current_task():
            await task
        log.info("Game stopped")

    def new_player(self, name: str) -> tuple:
        """Create a player with a fresh station; return (id, base64 key)."""
        station = self.galaxy.init_new_station()
        player = Player(station, name, self.testing)
        self.player_index[player.key] = player.id
        self.players[player.id] = player
        self.syslog.event(player.id, SyslogEvent("GameStarted"))
        return player.id, base64.b64encode(player.key).decode("ascii")

    def player_by_key(self, key: bytes) -> Player:
        """The player owning ``key``."""
        player_id = self.player_index.get(bytes(key))
        if player_id is None:
            raise GameError(ErrorKind.NO_PLAYER_WITH_KEY)
        return self.players[player_id]