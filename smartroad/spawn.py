"""Creation of vehicles on their fixed routes through the intersection."""

from __future__ import annotations

import random
from enum import Enum
from typing import Any, Sequence

from smartroad.car import Car, Direction, Lane, Waypoint

CAR_SPEED = 2.5
PLANE_SPEED = 4.0
PLANE_SIZE = (120, 80)
PLANE_START = (1620.0, 1000.0)
PLANE_ROUTE = (Waypoint(-20.0, 170.0),)


class SpawnKey(Enum):
    """The arrow key that asks for a vehicle from one side of the screen."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


_LANE_ORDER = (Lane.STRAIGHT, Lane.RIGHT, Lane.LEFT)

_KEY_DIRECTIONS = {
    SpawnKey.LEFT: Direction.EAST,
    SpawnKey.RIGHT: Direction.WEST,
    SpawnKey.UP: Direction.SOUTH,
    SpawnKey.DOWN: Direction.NORTH,
}

_ROUTES: dict[tuple[SpawnKey, Lane], tuple[tuple[float, float], tuple[Waypoint, ...]]] = {
    (SpawnKey.LEFT, Lane.STRAIGHT): ((1600.0, 510.0), (Waypoint(-20.0, 510.0),)),
    (SpawnKey.LEFT, Lane.LEFT): (
        (1603.0, 570.0),
        (Waypoint(773.0, 570.0, 180.0), Waypoint(773.0, 1240.0)),
    ),
    (SpawnKey.LEFT, Lane.RIGHT): (
        (1600.0, 450.0),
        (Waypoint(950.0, 450.0, 360.0), Waypoint(950.0, -40.0)),
    ),
    (SpawnKey.RIGHT, Lane.STRAIGHT): ((0.0, 690.0), (Waypoint(1620.0, 690.0),)),
    (SpawnKey.RIGHT, Lane.LEFT): (
        (0.0, 630.0),
        (Waypoint(830.0, 630.0, 360.0), Waypoint(830.0, -40.0)),
    ),
    (SpawnKey.RIGHT, Lane.RIGHT): (
        (0.0, 750.0),
        (Waypoint(650.0, 750.0, 180.0), Waypoint(650.0, 1240.0)),
    ),
    (SpawnKey.UP, Lane.STRAIGHT): ((890.0, 1200.0), (Waypoint(890.0, -20.0),)),
    (SpawnKey.UP, Lane.LEFT): (
        (830.0, 1200.0),
        (Waypoint(830.0, 570.0, 270.0), Waypoint(-40.0, 570.0)),
    ),
    (SpawnKey.UP, Lane.RIGHT): (
        (950.0, 1200.0),
        (Waypoint(950.0, 750.0, 90.0), Waypoint(1640.0, 750.0)),
    ),
    (SpawnKey.DOWN, Lane.STRAIGHT): ((710.0, 0.0), (Waypoint(710.0, 1220.0),)),
    (SpawnKey.DOWN, Lane.LEFT): (
        (773.0, 0.0),
        (Waypoint(773.0, 630.0, 90.0), Waypoint(1640.0, 630.0)),
    ),
    (SpawnKey.DOWN, Lane.RIGHT): (
        (650.0, 0.0),
        (Waypoint(650.0, 450.0, 270.0), Waypoint(-40.0, 450.0)),
    ),
}


def random_lane(rng: random.Random | None = None) -> Lane:
    """Pick a road lane (straight, right or left) at random."""
    rng = rng or random
    return _LANE_ORDER[rng.randint(0, len(_LANE_ORDER) - 1)]


def _pick_sprite(sprites: Sequence[Any], rng: Any) -> Any:
    if not sprites:
        raise ValueError("at least one sprite is needed to spawn a vehicle")
    return rng.choice(sprites)


def spawn_car_from_key(
    key: SpawnKey | str,
    sprites: Sequence[Any],
    car_id: int,
    rng: random.Random | None = None,
) -> Car | None:
    """Create a car entering from the side the key names, in a random lane.

    Returns None for a key that is not one of the four arrows.
    """
    try:
        key = SpawnKey(key)
    except ValueError:
        return None
    rng = rng or random
    lane = random_lane(rng)
    sprite = _pick_sprite(sprites, rng)
    position, route = _ROUTES[key, lane]
    return Car(
        lane=lane,
        position=position,
        waypoints=list(route),
        speed=CAR_SPEED,
        car_id=car_id,
        direction=_KEY_DIRECTIONS[key],
        sprite=sprite,
    )


def spawn_plane(
    sprites: Sequence[Any],
    car_id: int,
    rng: random.Random | None = None,
) -> Car:
    """Create a plane crossing the screen diagonally above the traffic."""
    rng = rng or random
    sprite = _pick_sprite(sprites, rng)
    return Car(
        lane=Lane.AIR,
        position=PLANE_START,
        waypoints=list(PLANE_ROUTE),
        speed=PLANE_SPEED,
        car_id=car_id,
        direction=Direction.EAST,
        sprite=sprite,
        size=PLANE_SIZE,
    )