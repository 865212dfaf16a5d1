"""Per-player event logs, kept in small bounded queues."""

from __future__ import annotations

import copy
import logging
import time
from collections import deque
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)

SYSLOG_FIFO_MAX_SIZE = 10

_UNIT_KINDS = frozenset({"Placeholder", "GameStarted", "GameLost"})
_SHIP_KINDS = frozenset({"ShipDestroyed", "ShipFlightFinished", "ExtractionStopped"})
_UNLOADED_NOTHING = "UnloadedNothing"
_LOW_FUNDS = "LowFunds"
_KINDS = _UNIT_KINDS | _SHIP_KINDS | {_UNLOADED_NOTHING, _LOW_FUNDS}


class Fifo:
    """A bounded queue; pushing into a full queue drops the oldest item."""

    def __init__(self, maxlen: int = SYSLOG_FIFO_MAX_SIZE) -> None:
        self._items: deque = deque(maxlen=maxlen)

    def push(self, data: Any) -> None:
        self._items.append(data)

    def pop(self) -> Optional[Any]:
        """Remove and return the oldest item, or None if empty."""
        return self._items.popleft() if self._items else None

    def remove_all(self) -> list:
        """Remove every item, oldest first."""
        items = list(self._items)
        self._items.clear()
        return items

    def __len__(self) -> int:
        return len(self._items)


@dataclass(frozen=True)
class SyslogEvent:
    """Something that happened to a player.

    ``kind`` is one of Placeholder, GameStarted, GameLost, ShipDestroyed,
    ShipFlightFinished, ExtractionStopped (with ``ship_id``), UnloadedNothing
    (with both cargos) or LowFunds (with ``time_left``).
    """

    kind: str = "Placeholder"
    ship_id: Optional[int] = None
    station_cargo: Any = None
    ship_cargo: Any = None
    time_left: Optional[timedelta] = None

    def __post_init__(self) -> None:
        if self.kind not in _KINDS:
            raise ValueError(f"unknown syslog event: {self.kind!r}")
        if self.kind in _SHIP_KINDS and self.ship_id is None:
            raise ValueError(f"{self.kind} needs a ship id")
        if self.kind == _UNLOADED_NOTHING:
            if self.station_cargo is None or self.ship_cargo is None:
                raise ValueError(f"{self.kind} needs both cargos")
            object.__setattr__(self, "station_cargo", copy.deepcopy(self.station_cargo))
            object.__setattr__(self, "ship_cargo", copy.deepcopy(self.ship_cargo))
        if self.kind == _LOW_FUNDS and self.time_left is None:
            raise ValueError(f"{self.kind} needs the time left")

    def to_json(self):
        if self.kind in _UNIT_KINDS:
            return self.kind
        if self.kind in _SHIP_KINDS:
            return {self.kind: self.ship_id}
        if self.kind == _UNLOADED_NOTHING:
            return {
                self.kind: {
                    "station_cargo": self.station_cargo.to_json(),
                    "ship_cargo": self.ship_cargo.to_json(),
                }
            }
        left = self.time_left
        return {
            self.kind: {
                "secs": left.days * 86400 + left.seconds,
                "nanos": left.microseconds * 1000,
            }
        }


class Syslog:
    """Collects events and files them in a queue per player.

    ``event`` queues an event until the next ``update``; ``record`` files it
    at once. Timestamps are seconds since the log was created.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._tstart = clock()
        self._pending: deque = deque()
        self._fifos: dict = {}

    def _elapsed(self) -> float:
        return self._clock() - self._tstart

    def _file(self, player_id: int, timestamp: float, event: SyslogEvent) -> None:
        log.debug("Player %s got event %s", player_id, event)
        self._fifos.setdefault(player_id, Fifo()).push((timestamp, event))

    def event(self, player_id: int, event: SyslogEvent) -> None:
        """Queue an event, to be filed on the next update."""
        self._pending.append((player_id, self._elapsed(), event))

    def record(self, player_id: int, event: SyslogEvent) -> None:
        """File an event immediately."""
        self._file(player_id, self._elapsed(), event)

    def update(self) -> None:
        """File every queued event."""
        while self._pending:
            self._file(*self._pending.popleft())

    def take(self, player_id: int) -> list:
        """Remove and return the (timestamp, event) pairs filed for a player."""
        fifo = self._fifos.get(player_id)
        return fifo.remove_all() if fifo is not None else []