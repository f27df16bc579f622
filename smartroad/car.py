"""Vehicles driving through a four-way intersection and the rules that move them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

INTERSECTION_X = (600.0, 1000.0)
INTERSECTION_Y = (400.0, 800.0)
SAFE_DISTANCE = 60.0

AIR_SPEED = 10.5
INTERSECTION_SPEED = 8.0
ROAD_SPEED = 5.0

DEFAULT_CAR_SIZE = (80, 60)


class Lane(Enum):
    """The lane a vehicle travels in, which fixes the turn it takes."""

    STRAIGHT = "straight"
    RIGHT = "right"
    LEFT = "left"
    AIR = "air"


class Direction(Enum):
    """The direction a vehicle travels in."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


_DIRECTION_ANGLES = {
    Direction.SOUTH: 360.0,
    Direction.NORTH: 180.0,
    Direction.EAST: 270.0,
    Direction.WEST: 90.0,
}

_AIR_ANGLE = 310.0

_STRAIGHT_PAIRS = {
    frozenset({Direction.NORTH, Direction.SOUTH}),
    frozenset({Direction.EAST, Direction.WEST}),
}


@dataclass(frozen=True)
class Waypoint:
    """A point on a route; reaching it may turn the vehicle to a new angle."""

    x: float
    y: float
    angle: float | None = None


def _within(value: float, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    return low <= value <= high


@dataclass
class Car:
    """A vehicle following its waypoints while yielding to traffic."""

    lane: Lane
    position: tuple[float, float]
    waypoints: list[Waypoint]
    speed: float
    car_id: int
    direction: Direction
    sprite: Any = None
    size: tuple[int, int] | None = None
    angle: float | None = None
    is_waiting: bool = False

    def __post_init__(self) -> None:
        self.waypoints = list(self.waypoints)
        self.position = (float(self.position[0]), float(self.position[1]))
        if self.angle is None:
            if self.lane is Lane.AIR:
                self.angle = _AIR_ANGLE
            else:
                self.angle = _DIRECTION_ANGLES[self.direction]

    def in_intersection(self) -> bool:
        """Whether the vehicle is inside the intersection area (bounds inclusive)."""
        x, y = self.position
        return _within(x, INTERSECTION_X) and _within(y, INTERSECTION_Y)

    def is_car_in_front(self, others: Iterable[Car], safe_distance: float) -> bool:
        """Whether a vehicle in the same lane and direction is ahead within the distance."""
        x, y = self.position
        for other in others:
            if other.car_id == self.car_id:
                continue
            if other.direction is not self.direction or other.lane is not self.lane:
                continue
            dx = other.position[0] - x
            dy = other.position[1] - y
            if math.hypot(dx, dy) >= safe_distance:
                continue
            ahead = {
                Direction.NORTH: dy > 0.0,
                Direction.SOUTH: dy < 0.0,
                Direction.EAST: dx < 0.0,
                Direction.WEST: dx > 0.0,
            }[self.direction]
            if ahead:
                return True
        return False

    def conflicts_with(self, other: Car) -> bool:
        """Whether the two vehicles' paths may cross in the intersection."""
        if self.car_id == other.car_id:
            return False
        if self.direction is other.direction:
            return False
        if (
            self.lane is Lane.STRAIGHT
            and other.lane is Lane.STRAIGHT
            and frozenset({self.direction, other.direction}) in _STRAIGHT_PAIRS
        ):
            return False
        return True

    def has_finished(self) -> bool:
        """Whether the vehicle has reached its last waypoint."""
        return not self.waypoints

    def _stop(self) -> None:
        self.speed = 0.0
        self.is_waiting = True

    def _yields_to(self, others: list[Car], *, earlier_only: bool) -> bool:
        return any(
            other.car_id != self.car_id
            and other.in_intersection()
            and (not earlier_only or other.car_id < self.car_id)
            and self.conflicts_with(other)
            for other in others
        )

    def update_position(self, others: Iterable[Car]) -> None:
        """Advance one tick, given a snapshot of all vehicles on the road."""
        others = list(others)
        free_lane = self.lane in (Lane.RIGHT, Lane.AIR)

        if free_lane:
            self.is_waiting = False
        elif self.is_car_in_front(others, SAFE_DISTANCE):
            self._stop()
            return

        near = self.in_intersection()
        if self.lane is Lane.AIR:
            self.speed = AIR_SPEED
        elif near:
            self.speed = INTERSECTION_SPEED
        else:
            self.speed = ROAD_SPEED

        if near and not free_lane:
            if self._yields_to(others, earlier_only=True):
                self._stop()
                return
            self.is_waiting = False
        elif self.is_waiting:
            earlier_inside = any(
                other.car_id != self.car_id
                and other.in_intersection()
                and other.car_id < self.car_id
                for other in others
            )
            if earlier_inside or self.is_car_in_front(others, SAFE_DISTANCE):
                self.speed = 0.0
                return
            if self._yields_to(others, earlier_only=False):
                self._stop()
                return
            self.is_waiting = False

        if self.is_waiting or not self.waypoints:
            return

        target = self.waypoints[0]
        x, y = self.position
        dx = target.x - x
        dy = target.y - y
        dist = math.hypot(dx, dy)
        if dist < self.speed:
            self.position = (target.x, target.y)
            if target.angle is not None:
                self.angle = target.angle
            self.waypoints.pop(0)
        else:
            self.position = (
                x + dx / dist * self.speed,
                y + dy / dist * self.speed,
            )