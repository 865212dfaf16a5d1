"""HTTP endpoints for stations: crew, shipyard, shop, cargo and repairs."""

from __future__ import annotations

import random

from aiohttp import web

from .api import _endpoint, _game, _ship, _uint, authenticated_player, player_station
from .crew import CrewMember, CrewMemberType
from .errors import ErrorKind, GameError
from .module import ShipModuleType
from .upgrade import ShipUpgrade


def _station_args(request: web.Request):
    station_id = _uint(request, "station_id", 16)
    player = authenticated_player(request)
    station = player_station(request, player, station_id)
    return player, station


def _docked_ship(player, station, ship_id: int):
    ship = _ship(player, ship_id)
    if tuple(ship.position) != tuple(station.position):
        raise GameError(ErrorKind.SHIP_NOT_IN_STATION)
    return ship


@_endpoint
async def get_station_status(request: web.Request):
    _, station = _station_args(request)
    return {
        "id": station.id,
        "position": list(station.position),
        "crew": station.crew.to_json(),
        "cargo": station.cargo.to_json(),
        "idle_crew": station.idle_crew.to_json(),
        "trader": station.trader,
    }


@_endpoint
async def list_shipyard_ships(request: web.Request):
    _, station = _station_args(request)
    return {"ships": [ship.market_data() for ship in station.shipyard]}


@_endpoint
async def shipyard_buy_ship(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player, station = _station_args(request)
    return {"shipId": player.buy_ship(station, ship_id)}


@_endpoint
async def shipyard_list_upgrades(request: web.Request):
    _, station = _station_args(request)
    return {
        upgrade.value: {
            "price": station.ship_upgrade_price(upgrade),
            "description": upgrade.description(),
        }
        for upgrade in sorted(ShipUpgrade)
    }


@_endpoint
async def shipyard_buy_upgrade(request: web.Request):
    station_id = _uint(request, "station_id", 16)
    ship_id = _uint(request, "ship_id", 64)
    try:
        upgrade = ShipUpgrade.parse(request.match_info["upgrade_type"])
    except ValueError:
        raise GameError(ErrorKind.INVALID_ARGUMENT, "upgrade type") from None
    player = authenticated_player(request)
    station = player_station(request, player, station_id)
    return {"cost": player.buy_ship_upgrade(station, ship_id, upgrade)}


@_endpoint
async def hire_crew(request: web.Request):
    station_id = _uint(request, "station_id", 16)
    try:
        crewtype = CrewMemberType.parse(request.match_info["crewtype"])
    except ValueError:
        raise GameError(ErrorKind.INVALID_ARGUMENT, "crewtype") from None
    player = authenticated_player(request)
    station = player_station(request, player, station_id)
    crew_id = random.getrandbits(32)
    member = CrewMember(member_type=crewtype, rank=1)
    player.update_wages(_game(request).galaxy)
    station.idle_crew[crew_id] = member
    return {"id": crew_id}


@_endpoint
async def get_crew_upgrades(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player, station = _station_args(request)
    ship = _docked_ship(player, station, ship_id)
    return {
        str(crew_id): {
            "member-type": member.member_type.value,
            "rank": member.rank + 1,
            "price": member.price_next_rank(),
        }
        for crew_id, member in sorted(ship.crew.items())
    }


@_endpoint
async def buy_crew_upgrade(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    crew_id = _uint(request, "crew_id", 32)
    player, station = _station_args(request)
    price, rank = player.upgrade_crew_rank(station, ship_id, crew_id)
    player.update_wages(_game(request).galaxy)
    return {"new-rank": rank, "cost": price}


@_endpoint
async def upgrade_station_trader(request: web.Request):
    player, station = _station_args(request)
    price, rank = player.upgrade_station_trader(station)
    player.update_wages(_game(request).galaxy)
    return {"new-rank": rank, "cost": price}


@_endpoint
async def assign_trader(request: web.Request):
    crew_id = _uint(request, "crewid", 32)
    _, station = _station_args(request)
    station.assign_trader(crew_id)
    return {}


@_endpoint
async def assign_pilot(request: web.Request):
    crew_id = _uint(request, "crewid", 32)
    ship_id = _uint(request, "shipid", 64)
    player, station = _station_args(request)
    station.onboard_pilot(crew_id, _ship(player, ship_id))
    return {}


@_endpoint
async def assign_operator(request: web.Request):
    crew_id = _uint(request, "crewid", 32)
    ship_id = _uint(request, "shipid", 64)
    mod_id = _uint(request, "modid", 16)
    player, station = _station_args(request)
    station.onboard_operator(crew_id, _ship(player, ship_id), mod_id)
    return {}


@_endpoint
async def scan(request: web.Request):
    _, station = _station_args(request)
    return station.scan(_game(request).galaxy).to_json()


@_endpoint
async def get_prices_ship_module(request: web.Request):
    _station_args(request)
    return {modtype.value: modtype.price_buy() for modtype in ShipModuleType}


@_endpoint
async def buy_ship_module(request: web.Request):
    station_id = _uint(request, "station_id", 16)
    ship_id = _uint(request, "ship_id", 64)
    try:
        modtype = ShipModuleType.parse(request.match_info["modtype"])
    except ValueError:
        raise GameError(ErrorKind.INVALID_ARGUMENT, "modtype") from None
    player = authenticated_player(request)
    return {"id": player.buy_ship_module(station_id, ship_id, modtype)}


@_endpoint
async def get_ship_module_upgrade_prices(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player, station = _station_args(request)
    ship = _docked_ship(player, station, ship_id)
    return {
        str(mod_id): {
            "module-type": module.modtype.value,
            "price": module.price_next_rank(),
        }
        for mod_id, module in sorted(ship.modules.items())
    }


@_endpoint
async def buy_ship_module_upgrade(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    mod_id = _uint(request, "modid", 16)
    player, station = _station_args(request)
    price, rank = player.buy_ship_module_upgrade(station, ship_id, mod_id)
    return {"new-rank": rank, "cost": price}


@_endpoint
async def buy_station_cargo(request: web.Request):
    amount = _uint(request, "amount", 64)
    player, station = _station_args(request)
    return station.buy_cargo(player, amount).to_json()


@_endpoint
async def get_station_upgrades(request: web.Request):
    _, station = _station_args(request)
    trader_price = None
    if station.trader is not None:
        trader_price = station.crew[station.trader].price_next_rank()
    return {"cargo-expansion": station.cargo_price(), "trader-upgrade": trader_price}


@_endpoint
async def refuel_ship(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player, station = _station_args(request)
    return {"added-fuel": station.refuel_ship(_ship(player, ship_id))}


@_endpoint
async def repair_ship(request: web.Request):
    ship_id = _uint(request, "ship_id", 64)
    player, station = _station_args(request)
    return {"added-hull": station.repair_ship(_ship(player, ship_id))}


def setup_routes(app: web.Application) -> None:
    """Register the station endpoints on ``app``."""
    prefix = "/station/{station_id}"
    routes = [
        ("/crew/hire/{crewtype}", hire_crew),
        ("/crew/upgrade/ship/{ship_id}", get_crew_upgrades),
        ("/crew/upgrade/ship/{ship_id}/{crew_id}", buy_crew_upgrade),
        ("/crew/upgrade/trader", upgrade_station_trader),
        ("/crew/assign/{crewid}/{shipid}/pilot", assign_pilot),
        ("/crew/assign/{crewid}/{shipid}/{modid}", assign_operator),
        ("/crew/assign/{crewid}/trading", assign_trader),
        ("/scan", scan),
        ("/shipyard/buy/{ship_id}", shipyard_buy_ship),
        ("/shipyard/list", list_shipyard_ships),
        ("/shipyard/upgrade/{ship_id}/{upgrade_type}", shipyard_buy_upgrade),
        ("/shipyard/upgrade", shipyard_list_upgrades),
        ("/shop/modules/{ship_id}/buy/{modtype}", buy_ship_module),
        ("/shop/modules/{ship_id}/upgrade", get_ship_module_upgrade_prices),
        ("/shop/modules/{ship_id}/upgrade/{modid}", buy_ship_module_upgrade),
        ("/shop/modules", get_prices_ship_module),
        ("/upgrades", get_station_upgrades),
        ("/shop/cargo/buy/{amount}", buy_station_cargo),
        ("/refuel/{ship_id}", refuel_ship),
        ("/repair/{ship_id}", repair_ship),
        ("", get_station_status),
    ]
    for path, handler in routes:
        app.router.add_get(prefix + path, handler)