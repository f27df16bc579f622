import pygame
import pytest

from smartroad.app import (
    BACKGROUND_SIZE,
    LINE_COLOR,
    ROAD_COLOR,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    STOP_COLOR,
    draw_roads,
    load_sprites,
    parse_args,
    render_car,
    stats_lines,
)
from smartroad.car import Car, Direction, Lane, Waypoint
from smartroad.simulation import Stats, format_duration


def test_parse_args_default_asset_dir():
    assert parse_args([]).asset_dir == "assets"


def test_parse_args_custom_asset_dir(tmp_path):
    assert parse_args(["--asset-dir", str(tmp_path)]).asset_dir == str(tmp_path)


def test_load_sprites_falls_back_for_missing_files(tmp_path):
    sprites = load_sprites(tmp_path, ["missing1.png", "missing2.png"], BACKGROUND_SIZE)
    assert len(sprites) == 2
    assert all(sprite.get_size() == BACKGROUND_SIZE for sprite in sprites)


def test_load_sprites_reads_existing_image(tmp_path):
    image = pygame.Surface((7, 5))
    image.fill((10, 200, 30))
    pygame.image.save(image, str(tmp_path / "block.bmp"))
    (sprite,) = load_sprites(tmp_path, ["block.bmp"], (99, 99))
    assert sprite.get_size() == (7, 5)
    assert tuple(sprite.get_at((3, 2)))[:3] == (10, 200, 30)


def _drawn_roads():
    surface = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
    draw_roads(surface)
    return surface


def test_draw_roads_paints_road_and_markings():
    surface = _drawn_roads()
    assert tuple(surface.get_at((700, 100)))[:3] == ROAD_COLOR
    assert tuple(surface.get_at((SCREEN_WIDTH // 2, 100)))[:3] == LINE_COLOR
    assert tuple(surface.get_at((983, 500)))[:3] == STOP_COLOR
    assert tuple(surface.get_at((100, 100)))[:3] != ROAD_COLOR


def test_draw_roads_clears_intersection_centre():
    surface = _drawn_roads()
    assert tuple(surface.get_at((SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2)))[:3] == ROAD_COLOR


def test_render_car_draws_sprite_at_position():
    surface = pygame.Surface((300, 300))
    surface.fill((0, 0, 0))
    sprite = pygame.Surface((10, 10))
    sprite.fill((200, 0, 0))
    car = Car(
        lane=Lane.STRAIGHT,
        position=(150.0, 120.0),
        waypoints=[Waypoint(150.0, 0.0)],
        speed=2.5,
        car_id=0,
        direction=Direction.SOUTH,
        sprite=sprite,
    )
    render_car(surface, car)
    assert tuple(surface.get_at((150, 120)))[:3] == (200, 0, 0)
    assert tuple(surface.get_at((5, 5)))[:3] == (0, 0, 0)


def test_stats_lines_text():
    stats = Stats(total_spawned=3, max_time=1.5, min_time=0.25)
    lines = stats_lines(stats)
    assert lines[0] == "Total Cars Spawned: 3"
    assert lines[1] == f"Max Time: {format_duration(1.5)}"
    assert lines[2] == f"Min Time: {format_duration(0.25)}"


def test_stats_lines_without_finishers_raises():
    with pytest.raises(ValueError):
        stats_lines(Stats(total_spawned=2, max_time=0.0, min_time=None))