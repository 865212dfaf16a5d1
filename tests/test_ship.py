from types import SimpleNamespace

import pytest

from simeis.cargo import ShipCargo
from simeis.crew import CrewMember, CrewMemberType
from simeis.errors import ErrorKind, GameError
from simeis.module import ShipModule, ShipModuleType
from simeis.navigation import FlightData
from simeis.planet import Planet
from simeis.resources import ExtractionInfo, Resource
from simeis.ship import HULL_USAGE_BASE, Ship


def _ship(rank=1, pilot=True):
    ship = Ship(
        id=7,
        reactor_power=1,
        fuel_tank_capacity=1000.0,
        hull_decay_capacity=3000.0,
        cargo=ShipCargo(200.0),
    )
    if pilot:
        ship.crew[0] = CrewMember(CrewMemberType.PILOT, rank)
        ship.pilot = 0
    ship.update_perf_stats()
    ship.fuel_tank = ship.fuel_tank_capacity
    return ship


class _Galaxy:
    def __init__(self, planet=None):
        self.planet = planet

    def get_planet(self, coord):
        if self.planet is not None and self.planet.position == tuple(coord):
            return self.planet
        return None


def test_init_shipyard_specs():
    light, medium, heavy = Ship.init_shipyard((1, 2, 3))
    assert [s.reactor_power for s in (light, medium, heavy)] == [1, 3, 10]
    assert [s.fuel_tank_capacity for s in (light, medium, heavy)] == [1000.0, 2000.0, 4000.0]
    assert [s.cargo.capacity for s in (light, medium, heavy)] == [200.0, 400.0, 1200.0]
    assert all(s.position == (1, 2, 3) for s in (light, medium, heavy))
    assert light.compute_price() < medium.compute_price() < heavy.compute_price()


def test_random_ship_ranges():
    for _ in range(50):
        ship = Ship.random((0, 0, 0))
        assert 1 <= ship.reactor_power < 10
        assert 1.0 <= ship.fuel_tank_capacity < 10000.0
        assert 10.0 <= ship.cargo.capacity <= 1000.0
        assert 1000.0 <= ship.hull_decay_capacity < 50000.0
        assert 0 <= ship.id < 2**64


def test_price_includes_module_cost():
    ship = _ship()
    before = ship.compute_price()
    ship.modules[1] = ShipModule(ShipModuleType.MINER, totalcost=4500.0)
    assert ship.compute_price() - before == pytest.approx(4500.0)


def test_perf_stats_without_pilot():
    ship = _ship(pilot=False)
    assert ship.stats.speed == 0.0
    assert ship.stats.fuel_consumption == float(ship.reactor_power)
    assert ship.stats.hull_usage_rate == pytest.approx(HULL_USAGE_BASE)


def test_pilot_rank_improves_speed_and_consumption():
    low = _ship(rank=1)
    high = _ship(rank=2)
    assert high.stats.speed == pytest.approx(2 * low.stats.speed)
    assert high.stats.fuel_consumption < low.stats.fuel_consumption
    assert low.stats.fuel_consumption < float(low.reactor_power)


def test_shield_reduces_hull_usage():
    ship = _ship()
    before = ship.stats.hull_usage_rate
    ship.shield_power = 2
    ship.update_perf_stats()
    assert ship.stats.hull_usage_rate < before


def test_set_travel_and_not_idle():
    ship = _ship()
    cost = ship.set_travel((100, 0, 0))
    assert isinstance(ship.state, FlightData)
    assert cost.distance == pytest.approx(100.0)
    with pytest.raises(GameError) as exc:
        ship.set_travel((200, 0, 0))
    assert exc.value.kind is ErrorKind.SHIP_NOT_IDLE
    with pytest.raises(GameError) as exc:
        ship.compute_travel_costs((200, 0, 0))
    assert exc.value.kind is ErrorKind.SHIP_NOT_IDLE


def test_set_travel_without_fuel():
    ship = _ship()
    ship.fuel_tank = 0.0
    with pytest.raises(GameError) as exc:
        ship.set_travel((100, 0, 0))
    assert exc.value.kind is ErrorKind.CANNOT_PERFORM_TRAVEL
    assert ship.state is None


def test_update_flight_partial_then_finished():
    ship = _ship()
    ship.set_travel((100, 0, 0))
    assert ship.update_flight(1.0) is False
    assert ship.position == (50, 0, 0)
    assert ship.update_flight(4.0) is True
    assert ship.position == (100, 0, 0)
    assert ship.fuel_tank < ship.fuel_tank_capacity
    assert ship.hull_decay > 0.0


def test_update_flight_runs_out_of_fuel():
    ship = _ship()
    ship.set_travel((100, 0, 0))
    ship.fuel_tank = 0.001
    assert ship.update_flight(1.0) is True
    assert ship.fuel_tank == 0.0


def test_update_flight_wears_out_hull():
    ship = _ship()
    ship.set_travel((100, 0, 0))
    ship.hull_decay = ship.hull_decay_capacity - 1e-9
    assert ship.update_flight(1.0) is True
    assert ship.hull_decay >= ship.hull_decay_capacity


def test_update_flight_when_idle_raises():
    with pytest.raises(ValueError):
        _ship().update_flight(1.0)


def test_stop_navigation():
    ship = _ship()
    ship.set_travel((100, 0, 0))
    ship.update_flight(1.0)
    assert ship.stop_navigation() == (50, 0, 0)
    assert ship.state is None


def test_start_extraction_without_planet():
    ship = _ship()
    with pytest.raises(GameError) as exc:
        ship.start_extraction(_Galaxy())
    assert exc.value.kind is ErrorKind.CANNOT_EXTRACT_WITHOUT_PLANET


def test_extraction_cycle():
    ship = _ship()
    ship.crew[5] = CrewMember(CrewMemberType.OPERATOR, 1)
    module = ShipModule(ShipModuleType.MINER, operator=5)
    ship.modules[1] = module
    galaxy = _Galaxy(Planet((0, 0, 0), 10, True))
    info = ship.start_extraction(galaxy)
    assert Resource.STONE in info.rates
    assert isinstance(ship.state, ExtractionInfo)
    with pytest.raises(GameError) as exc:
        ship.start_extraction(galaxy)
    assert exc.value.kind is ErrorKind.SHIP_NOT_IDLE
    assert ship.update_extract(1.0) is False
    assert ship.cargo.resources[Resource.STONE] > 0.0
    assert ship.update_extract(1e9) is True
    ship.stop_extraction()
    assert ship.state is None


def test_extraction_without_operator_stays_idle():
    ship = _ship()
    ship.modules[1] = ShipModule(ShipModuleType.MINER)
    info = ship.start_extraction(_Galaxy(Planet((0, 0, 0), 10, True)))
    assert info.rates == {}
    assert ship.state is None


def test_stop_extraction_when_not_extracting():
    with pytest.raises(GameError) as exc:
        _ship().stop_extraction()
    assert exc.value.kind is ErrorKind.SHIP_NOT_EXTRACTING


def test_unload_cargo_moves_resources():
    ship = _ship()
    ship.cargo.add_resource(Resource.IRON, 10.0)
    station = SimpleNamespace(cargo=ShipCargo(1000.0))
    assert ship.unload_cargo(Resource.IRON, 4.0, station) == 4.0
    assert station.cargo.resources[Resource.IRON] == 4.0
    assert ship.cargo.resources[Resource.IRON] == 6.0


def test_unload_cargo_overflow_returns_rest_to_ship():
    ship = _ship()
    ship.cargo.add_resource(Resource.STONE, 10.0)
    station = SimpleNamespace(cargo=ShipCargo(4 * Resource.STONE.volume()))
    assert ship.unload_cargo(Resource.STONE, 10.0, station) == pytest.approx(4.0)
    assert ship.cargo.resources[Resource.STONE] == pytest.approx(6.0)


def test_unload_nothing():
    ship = _ship()
    station = SimpleNamespace(cargo=ShipCargo(100.0))
    assert ship.unload_cargo(Resource.GOLD, 5.0, station) == 0.0
    assert station.cargo.resources == {}


def test_json_states():
    ship = _ship()
    assert ship.to_json()["state"] == "Idle"
    ship.set_travel((100, 0, 0))
    data = ship.to_json()
    assert "InFlight" in data["state"]
    assert data["pilot"] == 0
    assert data["crew"]["0"]["member_type"] == "Pilot"


def test_market_data_keys():
    ship = _ship()
    data = ship.market_data()
    assert data["price"] == ship.compute_price()
    assert data["cargo_capacity"] == ship.cargo.capacity
    assert set(data) == {
        "id",
        "price",
        "modules",
        "reactor_power",
        "cargo_capacity",
        "fuel_tank_capacity",
        "hull_decay_capacity",
    }