"""HTTP endpoints for players, ships and the market."""

from __future__ import annotations

import base64
import binascii
import copy
import functools
import re
import time
from typing import Any, Optional

from aiohttp import web

from .errors import ErrorKind, GameError
from .game import Game, GameSignal
from .market import fee_rate
from .resources import Resource
from .syslog import SyslogEvent

GAME_KEY = web.AppKey("game", Game)

PLAYER_KEY_SIZE = 128
_MAX_RANK = 255

_UINT_RE = re.compile(r"\+?[0-9]+")


def jsonmerge(a: Any, b: Any) -> Any:
    """Merge ``b`` into ``a``: objects are merged key by key, anything else is
    replaced. Returns the merged value (``a`` itself when both are objects)."""
    if isinstance(a, dict) and isinstance(b, dict):
        for key, value in b.items():
            a[key] = jsonmerge(a.get(key), value)
        return a
    return copy.deepcopy(b)


def build_response(result: Any) -> web.Response:
    """The JSON response for a result, or for the GameError that replaced it."""
    if isinstance(result, GameError):
        body = {"error": result.message(), "type": result.type_repr()}
    else:
        body = jsonmerge(result, {"error": "ok"})
    return web.json_response(body)


def get_player_key(query_string: str) -> Optional[bytes]:
    """Extract and decode the ``key`` parameter of a raw query string."""
    for part in query_string.split("&"):
        if not part.startswith("key="):
            continue
        pieces = part.split("=")
        if len(pieces) < 2:
            return None
        try:
            decoded = _unquote(pieces[1])
            raw = base64.b64decode(decoded.encode("ascii"), validate=True)
        except (UnicodeError, ValueError, binascii.Error):
            return None
        if len(raw) > PLAYER_KEY_SIZE:
            return None
        return raw.ljust(PLAYER_KEY_SIZE, b"\0")
    return None


def _unquote(text: str) -> str:
    from urllib.parse import unquote

    return unquote(text, encoding="utf-8", errors="strict")


def _game(request: web.Request) -> Game:
    return request.app[GAME_KEY]


def authenticated_player(request: web.Request):
    """The player whose key comes with the request; raise GameError otherwise."""
    key = get_player_key(request.rel_url.raw_query_string)
    if key is None:
        raise GameError(ErrorKind.NO_PLAYER_KEY)
    player = _game(request).player_by_key(key)
    if player.lost:
        raise GameError(ErrorKind.PLAYER_LOST)
    return player


def player_station(request: web.Request, player, station_id: int):
    """The station of the given id owned by the player."""
    coord = player.stations.get(station_id)
    if coord is None:
        raise GameError(ErrorKind.NO_SUCH_STATION, station_id)
    station = _game(request).galaxy.get_station(coord)
    if station is None:
        raise LookupError(f"no station at {coord}")
    return station


def _uint(request: web.Request, name: str, bits: int) -> int:
    text = request.match_info[name]
    if not _UINT_RE.fullmatch(text):
        raise web.HTTPNotFound()
    value = int(text)
    if value >= 1 << bits:
        raise web.HTTPNotFound()
    return value


def _float(request: web.Request, name: str) -> float:
    text = request.match_info[name]
    if not text or "_" in text or text != text.strip():
        raise web.HTTPNotFound()
    try:
        return float(text)
    except ValueError:
        raise web.HTTPNotFound() from None


def _resource(name: str) -> Resource:
    try:
        return Resource.parse(name)
    except ValueError:
        raise GameError(ErrorKind.INVALID_ARGUMENT, "resource") from None


def _ship(player, ship_id: int):
    ship = player.ships.get(ship_id)
    if ship is None:
        raise GameError(ErrorKind.SHIP_NOT_FOUND, ship_id)
    return ship


def _endpoint(handler):
    @functools.wraps(handler)
    async def wrapper(request: web.Request) -> web.Response:
        try:
            result = await handler(request)
        except GameError as err:
            return build_response(err)
        return build_response(result)

    return wrapper


@_endpoint
async def ping(request: web.Request):
    return {"ping": "pong"}


@_endpoint
async def get_syslogs(request: web.Request):
    game = _game(request)
    player = authenticated_player(request)
    events = [
        {"timestamp": game.tstart + stamp, "type": event.kind, "event": event.to_json()}
        for stamp, event in game.syslog.take(player.id)
    ]
    return {"nb": len(events), "events": events}


@_endpoint
async def new_player(request: web.Request):
    game = _game(request)
    name = request.match_info["name"]
    for pid, player in sorted(game.players.items()):
        if player.name == name:
            raise GameError(ErrorKind.PLAYER_ALREADY_EXISTS, pid, name)
    pid, key = game.new_player(name)
    return {"playerId": pid, "key": key}


def _stations_json(player) -> dict:
    return {str(sid): list(coord) for sid, coord in sorted(player.stations.items())}


@_endpoint
async def get_player(request: web.Request):
    player_id = _uint(request, "id", 16)
    key = get_player_key(request.rel_url.raw_query_string)
    if key is None:
        raise GameError(ErrorKind.NO_PLAYER_KEY)
    player = _game(request).players.get(player_id)
    if player is None:
        raise GameError(ErrorKind.PLAYER_NOT_FOUND, player_id)
    data = {"id": player_id, "name": player.name, "stations": _stations_json(player)}
    if player.key == key:
        data["money"] = player.money
        data["ships"] = [ship.to_json() for _, ship in sorted(player.ships.items())]
        data["costs"] = player.costs
    return data


@_endpoint
async def gamestats(request: web.Request):
    game = _game(request)
    now = time.monotonic()
    data = {}
    for pid, player in sorted(game.players.items()):
        potential = 0.0
        for coord in player.stations.values():
            station = game.galaxy.get_station(coord)
            if station is None:
                raise LookupError(f"no station at {coord}")
            potential += sum(
                resource.base_price() * amount
                for resource, amount in station.cargo.resources.items()
            )
        data[str(pid)] = {
            "name": player.name,
            "score": player.score,
            "potential": potential,
            "age": int(now - player.created),
            "lost": player.lost,
            "money": player.money,
            "stations": _stations_json(player),
        }
    return data


@_endpoint
async def resources_info(request: web.Request):
    data = {}
    for resource in Resource:
        info = {"base-price": resource.base_price(), "volume": resource.volume()}
        if resource.mineable(_MAX_RANK) or resource.suckable(_MAX_RANK):
            info["difficulty"] = resource.extraction_difficulty()
            info["min-rank"] = resource.min_rank()
        data[resource.value] = info
    return data


@_endpoint
async def get_ship_status(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player = authenticated_player(request)
    return _ship(player, ship_id).to_json()


def _destination(request: web.Request) -> tuple:
    return tuple(_uint(request, axis, 32) for axis in ("x", "y", "z"))


@_endpoint
async def compute_travel_costs(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    destination = _destination(request)
    player = authenticated_player(request)
    return _ship(player, ship_id).compute_travel_costs(destination).to_json()


@_endpoint
async def ask_navigate(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    destination = _destination(request)
    player = authenticated_player(request)
    return _ship(player, ship_id).set_travel(destination).to_json()


@_endpoint
async def stop_navigation(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player = authenticated_player(request)
    position = _ship(player, ship_id).stop_navigation()
    return {"position": list(position)}


@_endpoint
async def start_extraction(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player = authenticated_player(request)
    ship = _ship(player, ship_id)
    return ship.start_extraction(_game(request).galaxy).to_json()


@_endpoint
async def stop_extraction(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player = authenticated_player(request)
    _ship(player, ship_id).stop_extraction()
    return None


@_endpoint
async def unload_ship_cargo(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    amount = _float(request, "amount")
    resource = _resource(request.match_info["resource"])
    game = _game(request)
    player = authenticated_player(request)
    ship = _ship(player, ship_id)
    coord = next(
        (c for _, c in sorted(player.stations.items()) if tuple(c) == tuple(ship.position)),
        None,
    )
    if coord is None:
        raise GameError(ErrorKind.SHIP_NOT_IN_STATION)
    station = game.galaxy.get_station(coord)
    if station is None:
        raise LookupError(f"no station at {coord}")
    unloaded = ship.unload_cargo(resource, amount, station)
    if unloaded == 0.0:
        game.syslog.event(
            player.id,
            SyslogEvent(
                "UnloadedNothing", station_cargo=station.cargo, ship_cargo=ship.cargo
            ),
        )
    return {"unloaded": unloaded}


@_endpoint
async def get_market_prices(request: web.Request):
    return _game(request).market.to_json()


def _trade_args(request: web.Request) -> tuple:
    station_id = _uint(request, "station_id", 16)
    amount = _float(request, "amount")
    resource = _resource(request.match_info["resource"])
    player = authenticated_player(request)
    station = player_station(request, player, station_id)
    return player, station, resource, amount


@_endpoint
async def buy_resource(request: web.Request):
    player, station, resource, amount = _trade_args(request)
    tx = station.buy_resource(resource, amount, player, _game(request).market)
    return tx.to_json()


@_endpoint
async def sell_resource(request: web.Request):
    player, station, resource, amount = _trade_args(request)
    tx = station.sell_resource(resource, amount, player, _game(request).market)
    return tx.to_json()


@_endpoint
async def get_fee_rate(request: web.Request):
    station_id = _uint(request, "station_id", 16)
    player = authenticated_player(request)
    station = player_station(request, player, station_id)
    if station.trader is None:
        raise GameError(ErrorKind.NO_TRADER_ASSIGNED)
    trader = station.crew[station.trader]
    return {"fee_rate": fee_rate(trader.rank)}


@_endpoint
async def tick_server(request: web.Request):
    try:
        await _game(request).send_signal(GameSignal.TICK)
    except RuntimeError:
        raise GameError(ErrorKind.GAME_SIGNAL_SEND) from None
    return {}


def setup_routes(app: web.Application, testing: bool = False) -> None:
    """Register the player, ship and market endpoints on ``app``."""
    routes = [
        ("/ping", ping),
        ("/gamestats", gamestats),
        ("/resources", resources_info),
        ("/syslogs", get_syslogs),
        ("/ship/{ship_id}/travelcost/{x}/{y}/{z}", compute_travel_costs),
        ("/ship/{ship_id}", get_ship_status),
        ("/ship/{ship_id}/navigate/{x}/{y}/{z}", ask_navigate),
        ("/ship/{ship_id}/navigation/stop", stop_navigation),
        ("/ship/{ship_id}/extraction/start", start_extraction),
        ("/ship/{ship_id}/extraction/stop", stop_extraction),
        ("/ship/{ship_id}/unload/{resource}/{amount}", unload_ship_cargo),
        ("/market/{station_id}/fee_rate", get_fee_rate),
        ("/market/prices", get_market_prices),
        ("/market/{station_id}/buy/{resource}/{amount}", buy_resource),
        ("/market/{station_id}/sell/{resource}/{amount}", sell_resource),
        ("/player/new/{name}", new_player),
        ("/player/{id}", get_player),
    ]
    if testing:
        routes.insert(0, ("/tick", tick_server))
    for path, handler in routes:
        app.router.add_get(path, handler)