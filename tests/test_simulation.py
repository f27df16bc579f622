import random

import pytest

from smartroad.car import Lane
from smartroad.simulation import (
    AUTO_SPAWN_DURATION,
    SPAWN_COOLDOWN,
    Simulation,
    Stats,
    compute_stats,
    format_duration,
)
from smartroad.spawn import SpawnKey


def test_format_duration_seconds():
    assert format_duration(1.5) == "1.50s"


def test_format_duration_milliseconds():
    assert format_duration(0.25) == "250.00ms"


def test_format_duration_zero():
    assert format_duration(0.0) == "0.00ns"


@pytest.mark.parametrize("seconds", [0.0000125, 0.003, 2.0, 7e-9])
def test_format_duration_has_two_decimals(seconds):
    text = format_duration(seconds)
    number = text.rstrip("sµmn")
    assert number.split(".")[1].isdigit()
    assert len(number.split(".")[1]) == 2


def test_format_duration_negative_raises():
    with pytest.raises(ValueError):
        format_duration(-1.0)


def test_compute_stats_uses_only_timed_vehicles():
    stats = compute_stats(3, {0: 0.0, 1: 5.0}, {0: 2.0, 1: 5.5, 2: 9.0})
    assert stats.total_spawned == 3
    assert stats.max_time == pytest.approx(2.0)
    assert stats.min_time is not None
    assert stats.min_time < stats.max_time


def test_compute_stats_without_finishers():
    stats = compute_stats(4, {0: 1.0}, {})
    assert stats == Stats(total_spawned=4, max_time=0.0, min_time=None)


def test_spawn_respects_cooldown():
    sim = Simulation(rng=random.Random(3))
    assert sim.spawn_from_key(SpawnKey.UP, SPAWN_COOLDOWN / 2) is None
    first = sim.spawn_from_key(SpawnKey.UP, SPAWN_COOLDOWN)
    assert first is not None and first.car_id == 0
    assert sim.spawn_from_key(SpawnKey.UP, SPAWN_COOLDOWN * 1.5) is None
    second = sim.spawn_from_key(SpawnKey.DOWN, SPAWN_COOLDOWN * 2)
    assert second is not None and second.car_id == 1
    assert sim.start_times == {0: SPAWN_COOLDOWN, 1: SPAWN_COOLDOWN * 2}
    assert len(sim.cars) == 2


def test_unknown_key_spawns_nothing():
    sim = Simulation(rng=random.Random(0))
    assert sim.spawn_from_key("space", 10.0) is None
    assert sim.next_id == 0
    assert sim.cars == []


def test_planes_ignore_cooldown_and_are_untimed():
    sim = Simulation(rng=random.Random(0))
    planes = [sim.spawn_plane(), sim.spawn_plane()]
    assert [p.car_id for p in planes] == [0, 1]
    assert all(p.lane is Lane.AIR for p in planes)
    assert sim.start_times == {}
    assert sim.next_id == 2


def test_plane_without_sprites_raises():
    sim = Simulation(plane_sprites=())
    with pytest.raises(ValueError):
        sim.spawn_plane()


def test_auto_spawn_interval_and_expiry():
    sim = Simulation(rng=random.Random(5))
    assert sim.auto_spawn_tick(1.0) is None
    sim.start_auto_spawn(0.0)
    assert sim.auto_spawn_tick(SPAWN_COOLDOWN) is None
    car = sim.auto_spawn_tick(SPAWN_COOLDOWN * 2)
    assert car is not None and car.car_id == 0
    assert sim.auto_spawn_active
    assert sim.auto_spawn_tick(AUTO_SPAWN_DURATION + 1.0) is None
    assert not sim.auto_spawn_active
    assert sim.next_id == 1


def test_step_runs_car_to_finish_and_records_time():
    sim = Simulation(rng=random.Random(2))
    car = sim.spawn_from_key(SpawnKey.LEFT, 1.0)
    assert car is not None
    now = 1.0
    for _ in range(5000):
        if not sim.cars:
            break
        now += 0.016
        sim.step(now)
    assert sim.cars == []
    assert set(sim.finish_times) == {0}
    stats = sim.stats()
    assert stats.total_spawned == 1
    assert stats.min_time == stats.max_time
    assert stats.max_time == pytest.approx(sim.finish_times[0] - 1.0)


def test_step_moves_cars_forward():
    sim = Simulation(rng=random.Random(4))
    car = sim.spawn_from_key(SpawnKey.DOWN, 1.0)
    before = car.position
    sim.step(1.1)
    assert sim.cars[0].position[1] > before[1]