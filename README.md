# smartroad

smartroad simulates a four-way intersection that has no traffic lights. Cars
enter from all four sides. Each side has three lanes: straight, right turn and
left turn. Near the centre the cars work out among themselves who goes first:

- A car in the straight or left-turn lane stops when another car in the same
  lane and direction is less than 60 px ahead of it.
- Inside the intersection, a car in the straight or left-turn lane waits while
  an earlier car on a conflicting route is also inside. Two straight cars
  travelling in opposite directions do not conflict.
- Cars in the right-turn lane never wait.

## Installation

```
pip install .
```

To install the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
smartroad
```

This opens a 1600×1200 window that shows the crossroads. The car, plane and
scenery images and the `Roboto.ttf` font are read from `assets/` by default.
Use `--asset-dir DIR` to read them from a different directory, and
`smartroad --help` to list the options.

Missing files do not stop the program. A missing image is drawn as a plain
grey block, and a missing font is replaced by pygame's default font.

### Controls

| Key        | Action                                                   |
|------------|----------------------------------------------------------|
| ↑          | Spawn a car coming from the bottom, heading up           |
| ↓          | Spawn a car coming from the top, heading down            |
| ←          | Spawn a car coming from the right, heading left          |
| →          | Spawn a car coming from the left, heading right          |
| R          | Spawn random cars every 0.5 s for 60 seconds             |
| P          | Send a plane across the sky (it ignores the traffic)     |
| Esc        | End the simulation and show statistics                   |

Each spawned car gets a random lane. Manual spawns have a cooldown of 0.25 s.
Planes have no cooldown, and their travel time is not recorded.

When the simulation ends, a statistics window stays open for five seconds. It
shows:

- the total number of vehicles spawned, planes included,
- the longest time a car took to finish its route,
- the shortest time a car took to finish its route.

If no car finished its route, no statistics window is shown. The command
prints an error and exits with status 1.

## Using the model directly

The modules `smartroad.car`, `smartroad.spawn` and `smartroad.simulation` do
not need a display. You pass in the time yourself, in seconds:

```python
from smartroad.simulation import Simulation
from smartroad.spawn import SpawnKey

sim = Simulation()
sim.spawn_from_key(SpawnKey.UP, now=1.0)
for frame in range(1, 600):
    sim.step(now=1.0 + frame / 60)
print(sim.stats())
```

What each module provides:

- `smartroad.car` has `Car`, `Lane`, `Direction` and `Waypoint`.
  `Car.update_position(others)` moves a car forward by one tick.
- `smartroad.spawn` has `spawn_car_from_key`, which builds a car on one of the
  fixed routes for a `SpawnKey`. It also has `spawn_plane` and `random_lane`.
- `smartroad.simulation` has `Simulation`, with `step`, `spawn_from_key`,
  `spawn_plane`, `start_auto_spawn`, `auto_spawn_tick` and `stats`. It also has
  `compute_stats`, the `Stats` record, and `format_duration`, which formats
  durations as, for example, `1.50s` or `250.00ms`.