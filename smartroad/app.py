"""The graphical front end: a window with the intersection and keyboard controls."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Sequence

import pygame

from smartroad.car import DEFAULT_CAR_SIZE, Car
from smartroad.simulation import Simulation, Stats, format_duration
from smartroad.spawn import PLANE_SIZE, SpawnKey

SCREEN_WIDTH = 1600
SCREEN_HEIGHT = 1200
LANE_WIDTH = 60
ROAD_WIDTH = LANE_WIDTH * 6

CENTER_TOP = 420
CENTER_BOTTOM = 750
CENTER_LEFT = 600
CENTER_RIGHT = 960

ROAD_COLOR = (23, 23, 23)
LINE_COLOR = (255, 255, 255)
STOP_COLOR = (255, 255, 0)
FALLBACK_COLOR = (128, 128, 128)

DASH_STEP = 60
FRAME_DELAY_MS = 16
STATS_DISPLAY_SECONDS = 5.0

CAR_SPRITES = ("Car.png", "Black_viper.png", "Police.png")
PLANE_SPRITES = ("Blemheim.png", "Hawker.png")
BACKGROUND_SPRITES = ("left1.png", "left2.png", "right1.png", "right2.png")
BACKGROUND_POSITIONS = ((0, 0), (0, 780), (980, 0), (980, 780))
BACKGROUND_SIZE = (620, 420)
FONT_FILE = "Roboto.ttf"

_ARROW_KEYS = {
    pygame.K_LEFT: SpawnKey.LEFT,
    pygame.K_RIGHT: SpawnKey.RIGHT,
    pygame.K_UP: SpawnKey.UP,
    pygame.K_DOWN: SpawnKey.DOWN,
}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the command line."""
    parser = argparse.ArgumentParser(
        prog="smartroad", description="Simulate traffic through a smart intersection."
    )
    parser.add_argument(
        "--asset-dir",
        default="assets",
        help="directory holding the images and the font (default: assets)",
    )
    return parser.parse_args(argv)


def load_sprites(
    asset_dir: str | Path, names: Sequence[str], fallback_size: tuple[int, int]
) -> list[pygame.Surface]:
    """Load images by name; a missing image becomes a plain block of the fallback size."""
    sprites = []
    for name in names:
        path = Path(asset_dir) / name
        try:
            sprites.append(pygame.image.load(str(path)))
        except (pygame.error, FileNotFoundError, OSError):
            block = pygame.Surface(fallback_size)
            block.fill(FALLBACK_COLOR)
            sprites.append(block)
    return sprites


def draw_roads(surface: pygame.Surface) -> None:
    """Paint the two crossing roads with lane markings and stop lines."""
    surface.fill((0, 0, 0))
    surface.fill(
        ROAD_COLOR, pygame.Rect((SCREEN_WIDTH - ROAD_WIDTH) // 2, 0, ROAD_WIDTH, SCREEN_HEIGHT)
    )
    surface.fill(
        ROAD_COLOR, pygame.Rect(0, (SCREEN_HEIGHT - ROAD_WIDTH) // 2, SCREEN_WIDTH, ROAD_WIDTH)
    )

    dividers = [i for i in range(1, 6) if i != 3]
    for y in range(0, SCREEN_HEIGHT, DASH_STEP):
        if CENTER_TOP <= y <= CENTER_BOTTOM:
            continue
        for i in dividers:
            x = (SCREEN_WIDTH - ROAD_WIDTH) // 2 + i * LANE_WIDTH
            surface.fill(LINE_COLOR, pygame.Rect(x, y, 2, 30))
    for x in range(0, SCREEN_WIDTH, DASH_STEP):
        if CENTER_LEFT <= x <= CENTER_RIGHT:
            continue
        for i in dividers:
            y = (SCREEN_HEIGHT - ROAD_WIDTH) // 2 + i * LANE_WIDTH
            surface.fill(LINE_COLOR, pygame.Rect(x, y, 30, 2))

    surface.fill(LINE_COLOR, pygame.Rect(SCREEN_WIDTH // 2 - 1, 0, 2, SCREEN_HEIGHT))
    surface.fill(LINE_COLOR, pygame.Rect(0, SCREEN_HEIGHT // 2 - 1, SCREEN_WIDTH, 2))

    box = ROAD_WIDTH // 2 + 183
    surface.fill(
        ROAD_COLOR,
        pygame.Rect(SCREEN_WIDTH // 2 - box // 2, SCREEN_HEIGHT // 2 - box // 2, box, box),
    )

    for rect in ((982, 420, 5, 179), (613, 602, 5, 177), (620, 414, 177, 5), (802, 782, 177, 5)):
        surface.fill(STOP_COLOR, pygame.Rect(rect))


def render_car(surface: pygame.Surface, car: Car) -> None:
    """Draw a vehicle centred on its position, scaled and turned to its angle."""
    width, height = car.size or DEFAULT_CAR_SIZE
    sprite = car.sprite
    if sprite is None:
        sprite = pygame.Surface((width, height))
        sprite.fill(FALLBACK_COLOR)
    scaled = pygame.transform.scale(sprite, (width, height))
    rotated = pygame.transform.rotate(scaled, -car.angle)
    target = pygame.Rect(
        int(car.position[0]) - width // 2, int(car.position[1]) - height // 2, width, height
    )
    surface.blit(rotated, rotated.get_rect(center=target.center))


def stats_lines(stats: Stats) -> list[str]:
    """The three lines of the end-of-run summary."""
    if stats.min_time is None:
        raise ValueError("no timed vehicle finished its route")
    return [
        f"Total Cars Spawned: {stats.total_spawned}",
        f"Max Time: {format_duration(stats.max_time)}",
        f"Min Time: {format_duration(stats.min_time)}",
    ]


def _convert(sprites: list[pygame.Surface]) -> list[pygame.Surface]:
    return [sprite.convert_alpha() for sprite in sprites]


def _show_stats(asset_dir: Path, stats: Stats) -> None:
    lines = stats_lines(stats)
    font_path = asset_dir / FONT_FILE
    font = pygame.font.Font(str(font_path) if font_path.is_file() else None, 32)
    window = pygame.display.set_mode((500, 250))
    pygame.display.set_caption("Simulation Stats")
    window.fill((0, 0, 0))
    for line, top in zip(lines, (60, 110, 160)):
        text = font.render(line, True, (255, 255, 255))
        window.blit(pygame.transform.smoothscale(text.convert_alpha(), (400, 40)), (50, top))
    pygame.display.flip()
    deadline = time.monotonic() + STATS_DISPLAY_SECONDS
    while time.monotonic() < deadline:
        pygame.event.pump()
        pygame.time.wait(50)


def run(asset_dir: str | Path = "assets") -> Stats:
    """Open the window, run the simulation until Escape, then show the summary."""
    asset_dir = Path(asset_dir)
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Smart Intersection")

        car_sprites = _convert(load_sprites(asset_dir, CAR_SPRITES, DEFAULT_CAR_SIZE))
        plane_sprites = _convert(load_sprites(asset_dir, PLANE_SPRITES, PLANE_SIZE))
        backgrounds = [
            pygame.transform.scale(sprite, BACKGROUND_SIZE)
            for sprite in _convert(load_sprites(asset_dir, BACKGROUND_SPRITES, BACKGROUND_SIZE))
        ]

        sim = Simulation(car_sprites, plane_sprites, now=time.monotonic())
        running = True
        while running:
            draw_roads(screen)
            for background, position in zip(backgrounds, BACKGROUND_POSITIONS):
                screen.blit(background, position)
            sim.step(time.monotonic())
            for car in sim.cars:
                render_car(screen, car)
            pygame.display.flip()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        sim.start_auto_spawn(time.monotonic())
                    elif event.key in _ARROW_KEYS:
                        sim.spawn_from_key(_ARROW_KEYS[event.key], time.monotonic())
                    elif event.key == pygame.K_p:
                        sim.spawn_plane()
            pygame.time.wait(FRAME_DELAY_MS)

        stats = sim.stats()
        _show_stats(asset_dir, stats)
        return stats
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point."""
    args = parse_args(argv)
    try:
        run(args.asset_dir)
    except (ValueError, pygame.error) as exc:
        print(f"smartroad: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())