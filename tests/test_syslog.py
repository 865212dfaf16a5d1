from datetime import timedelta

import pytest

from simeis.cargo import ShipCargo
from simeis.resources import Resource
from simeis.syslog import SYSLOG_FIFO_MAX_SIZE, Fifo, Syslog, SyslogEvent

USIZE_MAX = 2**64 - 1


def test_syslog_fifo():
    fifo = Fifo()

    fifo.push(0)
    assert fifo.remove_all() == [0]

    ntest = SYSLOG_FIFO_MAX_SIZE + 5
    for n in range(ntest):
        fifo.push(n)
        assert len(fifo) == min(n + 1, SYSLOG_FIFO_MAX_SIZE), f"iter {n}"

    for n in range(ntest):
        got = fifo.pop()
        assert len(fifo) == max(SYSLOG_FIFO_MAX_SIZE - (n + 1), 0), f"iter {n}"
        if n < SYSLOG_FIFO_MAX_SIZE:
            assert got == (ntest + n) - SYSLOG_FIFO_MAX_SIZE, f"iter {n}"
        else:
            assert got is None, f"iter {n}"

    for n in range(2 * ntest):
        fifo.push(n)
        assert len(fifo) == min(n + 1, SYSLOG_FIFO_MAX_SIZE), f"iter {n}"

    fifo.push(USIZE_MAX)
    everything = fifo.remove_all()
    assert len(everything) == SYSLOG_FIFO_MAX_SIZE
    assert everything[0] == ((2 * ntest) + 1) - SYSLOG_FIFO_MAX_SIZE
    assert everything[-1] == USIZE_MAX


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_event_is_filed_on_update():
    clock = FakeClock()
    syslog = Syslog(clock=clock)
    clock.now = 102.5
    syslog.event(7, SyslogEvent("GameStarted"))
    assert syslog.take(7) == []
    clock.now = 110.0
    syslog.update()
    assert syslog.take(7) == [(2.5, SyslogEvent("GameStarted"))]
    assert syslog.take(7) == []


def test_record_is_filed_immediately():
    clock = FakeClock()
    syslog = Syslog(clock=clock)
    clock.now = 101.0
    syslog.record(3, SyslogEvent("GameLost"))
    assert syslog.take(3) == [(1.0, SyslogEvent("GameLost"))]


def test_events_are_per_player_and_ordered():
    syslog = Syslog(clock=FakeClock())
    syslog.event(1, SyslogEvent("ShipDestroyed", ship_id=5))
    syslog.event(2, SyslogEvent("GameStarted"))
    syslog.event(1, SyslogEvent("ExtractionStopped", ship_id=6))
    syslog.update()
    assert [ev for _, ev in syslog.take(1)] == [
        SyslogEvent("ShipDestroyed", ship_id=5),
        SyslogEvent("ExtractionStopped", ship_id=6),
    ]
    assert [ev for _, ev in syslog.take(2)] == [SyslogEvent("GameStarted")]
    assert syslog.take(99) == []


def test_player_log_keeps_latest_events():
    syslog = Syslog(clock=FakeClock())
    for ship_id in range(SYSLOG_FIFO_MAX_SIZE + 5):
        syslog.record(1, SyslogEvent("ShipFlightFinished", ship_id=ship_id))
    events = [ev.ship_id for _, ev in syslog.take(1)]
    assert events == list(range(5, SYSLOG_FIFO_MAX_SIZE + 5))


def test_event_json():
    assert SyslogEvent().to_json() == "Placeholder"
    assert SyslogEvent("GameStarted").to_json() == "GameStarted"
    assert SyslogEvent("ShipDestroyed", ship_id=5).to_json() == {"ShipDestroyed": 5}
    low = SyslogEvent("LowFunds", time_left=timedelta(seconds=1.5))
    assert low.to_json() == {"LowFunds": {"secs": 1, "nanos": 500000000}}


def test_unloaded_nothing_keeps_snapshot():
    station_cargo = ShipCargo(10.0)
    ship_cargo = ShipCargo(5.0)
    event = SyslogEvent(
        "UnloadedNothing", station_cargo=station_cargo, ship_cargo=ship_cargo
    )
    ship_cargo.add_resource(Resource.STONE, 1.0)
    data = event.to_json()["UnloadedNothing"]
    assert data["station_cargo"] == ShipCargo(10.0).to_json()
    assert data["ship_cargo"] == ShipCargo(5.0).to_json()


def test_invalid_events_are_rejected():
    with pytest.raises(ValueError):
        SyslogEvent("Exploded")
    with pytest.raises(ValueError):
        SyslogEvent("ShipDestroyed")
    with pytest.raises(ValueError):
        SyslogEvent("LowFunds")
    with pytest.raises(ValueError):
        SyslogEvent("UnloadedNothing", ship_cargo=ShipCargo(1.0))