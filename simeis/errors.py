"""Errors raised by game actions, with their player-facing messages."""

from __future__ import annotations

import enum
import math
import string
from decimal import Decimal


class ErrorKind(enum.Enum):
    """Every kind of error a game action can report."""

    NO_PLAYER_KEY = "NoPlayerKey"
    PLAYER_NOT_FOUND = "PlayerNotFound"
    PLAYER_ALREADY_EXISTS = "PlayerAlreadyExists"
    NO_PLAYER_WITH_KEY = "NoPlayerWithKey"
    SHIP_NOT_FOUND = "ShipNotFound"
    NOT_ENOUGH_MONEY = "NotEnoughMoney"
    INVALID_ARGUMENT = "InvalidArgument"
    SHIP_NOT_EXTRACTING = "ShipNotExtracting"
    SHIP_NOT_IDLE = "ShipNotIdle"
    CREW_MEMBER_NOT_IDLE = "CrewMemberNotIdle"
    CREW_NOT_NEEDED = "CrewNotNeeded"
    CANNOT_PERFORM_TRAVEL = "CannotPerformTravel"
    NULL_DISTANCE = "NullDistance"
    NO_SUCH_STATION = "NoSuchStation"
    NO_SUCH_MODULE = "NoSuchModule"
    CANNOT_EXTRACT_WITHOUT_PLANET = "CannotExtractWithoutPlanet"
    SHIP_NOT_IN_STATION = "ShipNotInStation"
    WRONG_CREW_TYPE = "WrongCrewType"
    CARGO_FULL = "CargoFull"
    NO_TRADER_ASSIGNED = "NoTraderAssigned"
    NO_PILOT_ASSIGNED = "NoPilotAssigned"
    BUY_NOTHING = "BuyNothing"
    SELL_NOTHING = "SellNothing"
    NO_FUEL_IN_CARGO = "NoFuelInCargo"
    NO_HULL_PLATE_IN_CARGO = "NoHullPlateInCargo"
    CREW_MEMBER_NOT_FOUND = "CrewMemberNotFound"
    PLAYER_LOST = "PlayerLost"
    GAME_SIGNAL_SEND = "GameSignalSend"


_TEMPLATES = {
    ErrorKind.NO_PLAYER_KEY: "No player key provided with the request",
    ErrorKind.PLAYER_NOT_FOUND: "No player was found with this ID: {0}",
    ErrorKind.PLAYER_ALREADY_EXISTS: "Player {1} already exists under the id {0}",
    ErrorKind.NO_PLAYER_WITH_KEY: "No player with this key exists in this game",
    ErrorKind.SHIP_NOT_FOUND: "Ship of id {0} not found",
    ErrorKind.NOT_ENOUGH_MONEY: "Not enough money, need {1}, got {0}",
    ErrorKind.INVALID_ARGUMENT: "Argument {0} has an invalid value",
    ErrorKind.CREW_MEMBER_NOT_IDLE: "Crew member {0} is already occupied",
    ErrorKind.CREW_NOT_NEEDED: "This crew member is not needed aboard this ship",
    ErrorKind.CANNOT_PERFORM_TRAVEL: (
        "This travel cannot be done with the current state of the ship"
    ),
    ErrorKind.NULL_DISTANCE: "You already are on this coordinates",
    ErrorKind.NO_SUCH_STATION: "You don't own any station of id {0}",
    ErrorKind.NO_SUCH_MODULE: "Ship module of id {0} doesn't exist",
    ErrorKind.CANNOT_EXTRACT_WITHOUT_PLANET: (
        "Cannot extract resources, this ship is not on a planet"
    ),
    ErrorKind.SHIP_NOT_IN_STATION: "This ship is not docked on station",
    ErrorKind.WRONG_CREW_TYPE: "This module requires a crew member of type {0}",
    ErrorKind.CARGO_FULL: "The cargo is full",
    ErrorKind.SHIP_NOT_IDLE: "The ship is already occupied with a task",
    ErrorKind.SHIP_NOT_EXTRACTING: "This ship is not extracting",
    ErrorKind.NO_TRADER_ASSIGNED: "This station doesn't have a trader assigned",
    ErrorKind.BUY_NOTHING: (
        "Either you attempted to BUY 0 units, or you don't have enough space "
        "in cargo to hold the resources"
    ),
    ErrorKind.SELL_NOTHING: (
        "Either you attempted to SELL 0 units, or you don't have any unit of "
        "this resource in your cargo"
    ),
    ErrorKind.NO_FUEL_IN_CARGO: "You don't have any fuel in the station cargo",
    ErrorKind.NO_HULL_PLATE_IN_CARGO: (
        "You don't have any hull plate in the station cargo"
    ),
    ErrorKind.CREW_MEMBER_NOT_FOUND: "Crew member of id {0} not found",
    ErrorKind.PLAYER_LOST: "This player lost the game and cannot play anymore",
    ErrorKind.NO_PILOT_ASSIGNED: "No pilot is assigned on this ship",
    ErrorKind.GAME_SIGNAL_SEND: "Error while sending a game signal to state",
}


def _arity(kind: ErrorKind) -> int:
    indices = [
        int(field)
        for _, field, _, _ in string.Formatter().parse(_TEMPLATES[kind])
        if field is not None
    ]
    return max(indices) + 1 if indices else 0


def _float_display(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _float_debug(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        text = f"{mantissa}e{int(exponent)}"
    return text


def _display(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, float):
        return _float_display(value)
    return str(value)


def _debug(value: object) -> str:
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
    if isinstance(value, float):
        return _float_debug(value)
    return _display(value)


class GameError(Exception):
    """An action on the game state that could not be performed."""

    def __init__(self, kind: ErrorKind, *args: object) -> None:
        expected = _arity(kind)
        if len(args) != expected:
            raise TypeError(
                f"{kind.value} takes {expected} argument(s), got {len(args)}"
            )
        self.kind = kind
        self.details = args
        super().__init__(self.message())

    def message(self) -> str:
        """The human-readable explanation of this error."""
        return _TEMPLATES[self.kind].format(*(_display(a) for a in self.details))

    def type_repr(self) -> str:
        """The error kind with its arguments, e.g. ``ShipNotFound(3)``."""
        if not self.details:
            return self.kind.value
        inner = ", ".join(_debug(a) for a in self.details)
        return f"{self.kind.value}({inner})"