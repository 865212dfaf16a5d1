import pytest

from simeis.crew import CrewMember, CrewMemberType
from simeis.errors import ErrorKind, GameError
from simeis.galaxy import Galaxy
from simeis.module import ShipModuleType
from simeis.player import INIT_MONEY, Player
from simeis.station import Station
from simeis.syslog import Syslog
from simeis.upgrade import CARGO_EXP_ADD_CAP, ShipUpgrade

POS = (0, 0, 0)


@pytest.fixture
def station():
    return Station(7, POS)


@pytest.fixture
def player():
    return Player((7, POS), "alice", False)


def bought_ship(player, station):
    ship_id = station.shipyard[0].id
    player.buy_ship(station, ship_id)
    return player.ships[ship_id]


def test_new_player_defaults(player):
    assert player.money == INIT_MONEY
    assert len(player.key) == 128
    assert 0 <= player.id < 65535
    assert player.stations == {7: POS}
    assert player.ships == {}
    assert player.lost is False


def test_player_id_depends_on_name_only():
    a = Player((1, POS), "bob", False)
    b = Player((2, (5, 5, 5)), "bob", False)
    assert a.id == b.id
    assert a.key != b.key


def test_rich_player_only_when_testing():
    assert Player((1, POS), "test-rich-1", True).money == INIT_MONEY * 10000.0
    assert Player((1, POS), "test-rich-1", False).money == INIT_MONEY
    assert Player((1, POS), "test-poor", True).money == INIT_MONEY


def test_buy_ship(player, station):
    target = station.shipyard[0]
    price = target.compute_price()
    returned = player.buy_ship(station, target.id)
    assert returned == target.id
    ship = player.ships[target.id]
    assert player.money == INIT_MONEY - price
    assert ship.fuel_tank == ship.fuel_tank_capacity
    assert len(station.shipyard) == 3
    assert all(s.id != target.id for s in station.shipyard)


def test_buy_unknown_ship(player, station):
    with pytest.raises(GameError) as err:
        player.buy_ship(station, 12345)
    assert err.value.kind is ErrorKind.SHIP_NOT_FOUND


def test_buy_ship_without_money(player, station):
    player.money = 0.0
    ids = [s.id for s in station.shipyard]
    with pytest.raises(GameError) as err:
        player.buy_ship(station, ids[0])
    assert err.value.kind is ErrorKind.NOT_ENOUGH_MONEY
    assert [s.id for s in station.shipyard] == ids
    assert player.ships == {}


def test_buy_ship_module(player, station):
    ship = bought_ship(player, station)
    money = player.money
    ship_id = ship.id
    assert player.buy_ship_module(7, ship_id, ShipModuleType.MINER) == 1
    assert player.buy_ship_module(7, ship_id, ShipModuleType.GAS_SUCKER) == 2
    assert player.money == money - 2 * ShipModuleType.MINER.price_buy()
    assert ship.modules[2].modtype is ShipModuleType.GAS_SUCKER


def test_buy_ship_module_errors(player, station):
    ship = bought_ship(player, station)
    with pytest.raises(GameError) as err:
        player.buy_ship_module(99, ship.id, ShipModuleType.MINER)
    assert err.value.kind is ErrorKind.NO_SUCH_STATION
    with pytest.raises(GameError) as err:
        player.buy_ship_module(7, 1, ShipModuleType.MINER)
    assert err.value.kind is ErrorKind.SHIP_NOT_FOUND
    ship.position = (1, 2, 3)
    with pytest.raises(GameError) as err:
        player.buy_ship_module(7, ship.id, ShipModuleType.MINER)
    assert err.value.kind is ErrorKind.SHIP_NOT_IN_STATION
    player.money = 0.0
    ship.position = POS
    with pytest.raises(GameError) as err:
        player.buy_ship_module(7, ship.id, ShipModuleType.MINER)
    assert err.value.kind is ErrorKind.NOT_ENOUGH_MONEY


def test_buy_ship_upgrade(player, station):
    ship = bought_ship(player, station)
    capacity = ship.cargo.capacity
    money = player.money
    cost = player.buy_ship_upgrade(station, ship.id, ShipUpgrade.CARGO_EXPANSION)
    assert cost == ShipUpgrade.CARGO_EXPANSION.price()
    assert ship.cargo.capacity == capacity + CARGO_EXP_ADD_CAP
    assert player.money == money - cost


def test_buy_ship_module_upgrade(player, station):
    ship = bought_ship(player, station)
    mod_id = player.buy_ship_module(7, ship.id, ShipModuleType.MINER)
    expected = ship.modules[mod_id].price_next_rank()
    price, rank = player.buy_ship_module_upgrade(station, ship.id, mod_id)
    assert price == expected
    assert rank == 2
    with pytest.raises(GameError) as err:
        player.buy_ship_module_upgrade(station, ship.id, 42)
    assert err.value.kind is ErrorKind.NO_SUCH_MODULE


def test_upgrade_crew_rank(player, station):
    ship = bought_ship(player, station)
    ship.crew[3] = CrewMember(CrewMemberType.PILOT)
    ship.pilot = 3
    ship.update_perf_stats()
    speed = ship.stats.speed
    expected = ship.crew[3].price_next_rank()
    price, rank = player.upgrade_crew_rank(station, ship.id, 3)
    assert (price, rank) == (expected, 2)
    assert ship.stats.speed == pytest.approx(2 * speed)
    with pytest.raises(GameError) as err:
        player.upgrade_crew_rank(station, ship.id, 4)
    assert err.value.kind is ErrorKind.CREW_MEMBER_NOT_FOUND


def test_upgrade_station_trader(player, station):
    with pytest.raises(GameError) as err:
        player.upgrade_station_trader(station)
    assert err.value.kind is ErrorKind.NO_TRADER_ASSIGNED
    station.idle_crew[9] = CrewMember(CrewMemberType.TRADER)
    station.assign_trader(9)
    expected = station.crew[9].price_next_rank()
    assert player.upgrade_station_trader(station) == (expected, 2)
    assert station.crew[9].rank == 2


def test_update_wages(player, station):
    galaxy = Galaxy()
    galaxy.insert(POS, station)
    station.idle_crew[1] = CrewMember(CrewMemberType.SOLDIER)
    station.crew[2] = CrewMember(CrewMemberType.TRADER, 3)
    ship = bought_ship(player, station)
    ship.crew[5] = CrewMember(CrewMemberType.PILOT)
    player.update_wages(galaxy)
    expected = (
        station.idle_crew[1].wage() + station.crew[2].wage() + ship.crew[5].wage()
    )
    assert player.costs == pytest.approx(expected)


def test_update_money_low_funds_then_lost(player):
    syslog = Syslog()
    player.costs = 1.0
    player.money = 61.0
    player.update_money(syslog, 2.0)
    assert player.money == 59.0
    events = [ev.kind for _, ev in syslog.take(player.id)]
    assert events == ["LowFunds"]
    player.update_money(syslog, 100.0)
    assert player.lost is True
    assert [ev.kind for _, ev in syslog.take(player.id)] == ["GameLost"]
    player.update_money(syslog, 1.0)
    assert syslog.take(player.id) == []