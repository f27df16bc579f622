"""The traffic simulation loop state: spawning, stepping and timing statistics."""

from __future__ import annotations

import dataclasses
import random
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Sequence

from smartroad.car import Car
from smartroad.spawn import SpawnKey, spawn_car_from_key
from smartroad.spawn import spawn_plane as make_plane

SPAWN_COOLDOWN = 0.25
AUTO_SPAWN_INTERVAL = 2 * SPAWN_COOLDOWN
AUTO_SPAWN_DURATION = 60.0

_SPAWN_KEYS = (SpawnKey.LEFT, SpawnKey.RIGHT, SpawnKey.UP, SpawnKey.DOWN)

_NANOS_PER_SECOND = 1_000_000_000
_UNITS = (
    (1_000_000_000, "s"),
    (1_000_000, "ms"),
    (1_000, "µs"),
    (1, "ns"),
)


def format_duration(seconds: float) -> str:
    """Format a duration with two decimals in the largest unit that fits."""
    if seconds < 0:
        raise ValueError("a duration cannot be negative")
    nanos = round(seconds * _NANOS_PER_SECOND)
    for scale, suffix in _UNITS:
        if nanos >= scale or scale == 1:
            value = (Decimal(nanos) / Decimal(scale)).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
            return f"{value}{suffix}"
    raise AssertionError("unreachable")


@dataclass(frozen=True)
class Stats:
    """Summary of a run: vehicles spawned and the extremes of crossing times."""

    total_spawned: int
    max_time: float
    min_time: float | None


def compute_stats(
    total_spawned: int,
    start_times: Mapping[int, float],
    finish_times: Mapping[int, float],
) -> Stats:
    """Summarise crossing times of vehicles that both started and finished."""
    durations = [
        finish - start_times[car_id]
        for car_id, finish in finish_times.items()
        if car_id in start_times
    ]
    return Stats(
        total_spawned=total_spawned,
        max_time=max(durations, default=0.0),
        min_time=min(durations, default=None),
    )


@dataclass
class Simulation:
    """All vehicles on the road and the bookkeeping around them.

    Times are plain seconds from any monotonic clock, passed in by the caller.
    """

    car_sprites: Sequence[Any] = (None,)
    plane_sprites: Sequence[Any] = (None,)
    rng: random.Random = field(default_factory=random.Random)
    now: float = 0.0
    cars: list[Car] = field(default_factory=list, init=False)
    next_id: int = field(default=0, init=False)
    start_times: dict[int, float] = field(default_factory=dict, init=False)
    finish_times: dict[int, float] = field(default_factory=dict, init=False)
    auto_spawn_active: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.last_spawn_time = self.now
        self.auto_spawn_start = self.now

    def step(self, now: float) -> None:
        """Move every vehicle one tick, retire finished ones, run auto spawning."""
        snapshot = [dataclasses.replace(car) for car in self.cars]
        for car in self.cars:
            car.update_position(snapshot)
        for car in self.cars:
            if car.has_finished():
                self.finish_times.setdefault(car.car_id, now)
        self.cars = [car for car in self.cars if not car.has_finished()]
        self.auto_spawn_tick(now)

    def _add_car(self, key: SpawnKey | str, now: float) -> Car | None:
        car = spawn_car_from_key(key, self.car_sprites, self.next_id, self.rng)
        if car is None:
            return None
        self.start_times[self.next_id] = now
        self.cars.append(car)
        self.next_id += 1
        self.last_spawn_time = now
        return car

    def spawn_from_key(self, key: SpawnKey | str, now: float) -> Car | None:
        """Spawn a car for an arrow key unless the cooldown has not yet passed."""
        if now - self.last_spawn_time < SPAWN_COOLDOWN:
            return None
        return self._add_car(key, now)

    def spawn_plane(self) -> Car:
        """Launch a plane; planes ignore the cooldown and are not timed."""
        plane = make_plane(self.plane_sprites, self.next_id, self.rng)
        self.cars.append(plane)
        self.next_id += 1
        return plane

    def start_auto_spawn(self, now: float) -> None:
        """Start (or restart) a minute of automatic random spawning."""
        self.auto_spawn_active = True
        self.auto_spawn_start = now

    def auto_spawn_tick(self, now: float) -> Car | None:
        """Spawn a random car if auto spawning is on and the interval has passed."""
        if not self.auto_spawn_active:
            return None
        if now - self.auto_spawn_start >= AUTO_SPAWN_DURATION:
            self.auto_spawn_active = False
            return None
        if now - self.last_spawn_time < AUTO_SPAWN_INTERVAL:
            return None
        key = self.rng.choice(_SPAWN_KEYS)
        return self._add_car(key, now)

    def stats(self) -> Stats:
        """Statistics of the run so far."""
        return compute_stats(self.next_id, self.start_times, self.finish_times)