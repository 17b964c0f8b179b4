import math

import pygame
import pytest

from cub3d.config import SceneConfig
from cub3d.framebuffer import BLOCK, HEIGHT, Framebuffer, Texture, pack_rgba
from cub3d.game import (
    DOOR_PATH,
    MOON_FRAME_PATHS,
    TEXTURE_FAILED,
    USAGE,
    Game,
    load_textures,
    main,
)
from cub3d.grid import parse_scene
from cub3d.player import ROTATE_SPEED, Key, initial_angle
from cub3d.scene import BAD_NAME, EMPTY_FILE, WRONG_MAP, CubError

SCENE_TEXT = (
    "NO n.png\n"
    "SO s.png\n"
    "WE w.png\n"
    "EA e.png\n"
    "F 10,20,30\n"
    "C 40,50,60\n"
    "\n"
    "11111\n"
    "10D01\n"
    "10N01\n"
    "10001\n"
    "11111\n"
)


def _texture(r, g, b):
    return Texture(4, 4, bytes([r, g, b, 255]) * 16)


def _game(width=32):
    scene = parse_scene(SCENE_TEXT, check_files=False)
    textures = {
        name: _texture(100, 100, 100)
        for name in ("north", "south", "west", "east", "door")
    }
    moon = [_texture(200, 200, 200)]
    return Game(scene, textures, moon, Framebuffer(width, HEIGHT))


def _save_png(path, color):
    path.parent.mkdir(parents=True, exist_ok=True)
    surface = pygame.Surface((4, 4), pygame.SRCALPHA)
    surface.fill(color)
    pygame.image.save(surface, str(path))


def test_load_textures_reads_every_image(tmp_path):
    colors = {
        "n.png": (255, 0, 0, 255),
        "s.png": (0, 255, 0, 255),
        "w.png": (0, 0, 255, 255),
        "e.png": (9, 8, 7, 255),
        DOOR_PATH: (1, 2, 3, 255),
    }
    for name, color in colors.items():
        _save_png(tmp_path / name, color)
    for frame in MOON_FRAME_PATHS:
        _save_png(tmp_path / frame, (5, 5, 5, 255))
    config = SceneConfig("n.png", "s.png", "w.png", "e.png", (0, 0, 0), (0, 0, 0))
    textures, moon = load_textures(config, tmp_path)
    assert textures["north"].pixel(0, 0) == colors["n.png"]
    assert textures["east"].pixel(3, 3) == colors["e.png"]
    assert textures["door"].pixel(1, 2) == colors[DOOR_PATH]
    assert len(moon) == len(MOON_FRAME_PATHS)
    assert all(frame.width == 4 and frame.height == 4 for frame in moon)


def test_load_textures_missing_file_raises(tmp_path):
    config = SceneConfig("n.png", "s.png", "w.png", "e.png", (0, 0, 0), (0, 0, 0))
    with pytest.raises(CubError) as info:
        load_textures(config, tmp_path)
    assert info.value.message == TEXTURE_FAILED


def test_game_places_player_at_cell_centre():
    game = _game()
    assert game.player.x == 2.5 * BLOCK
    assert game.player.y == 2.5 * BLOCK
    assert game.player.angle == initial_angle("N")


def test_game_requires_moon_frames():
    scene = parse_scene(SCENE_TEXT, check_files=False)
    with pytest.raises(ValueError):
        Game(scene, {}, [], Framebuffer(8, 8))


def test_render_frame_paints_ceiling_and_floor():
    game = _game()
    assert game.render_frame(set()) is False
    assert game.buffer.get_pixel(8, 8) == pack_rgba(40, 50, 60, 0xFF)
    assert game.buffer.get_pixel(8, HEIGHT - 1) == pack_rgba(10, 20, 30, 0xFF)
    assert game.moon_frame == 1


def test_render_frame_draws_wall_columns():
    game = _game()
    game.render_frame(set())
    middle = game.buffer.get_pixel(16, HEIGHT // 2)
    assert middle == pack_rgba(100, 100, 100, 255)


def test_render_frame_escape_requests_quit():
    game = _game(width=4)
    assert game.render_frame({Key.ESCAPE}) is True


def test_render_frame_walks_forward():
    game = _game(width=4)
    start_y = game.player.y
    game.render_frame({Key.W})
    assert game.player.y < start_y
    assert game.player.x == pytest.approx(2.5 * BLOCK)


def test_space_release_toggles_door():
    game = _game(width=4)
    assert game.handle_key_release(Key.SPACE) is True
    assert game.rows[1][2] == "O"
    assert game.handle_key_release(Key.SPACE) is True
    assert game.rows[1][2] == "D"


def test_other_key_release_does_nothing():
    game = _game(width=4)
    assert game.handle_key_release(Key.W) is False
    assert game.rows[1] == "10D01"


def test_door_toggle_leaves_scene_rows_alone():
    scene = parse_scene(SCENE_TEXT, check_files=False)
    textures = {n: _texture(1, 1, 1) for n in ("north", "south", "west", "east", "door")}
    game = Game(scene, textures, [_texture(1, 1, 1)], Framebuffer(4, HEIGHT))
    game.handle_key_release(Key.SPACE)
    assert scene.rows[1] == "10D01"


def test_handle_mouse_turns_player():
    game = _game(width=4)
    game.handle_mouse(10.0)
    assert game.player.angle == pytest.approx(initial_angle("N") + ROTATE_SPEED / 1.5)
    assert game.player.x_delta == 10.0
    game.handle_mouse(5.0)
    assert game.player.angle == pytest.approx(initial_angle("N"))
    assert 0 <= game.player.angle <= 2 * math.pi


def test_main_without_argument_reports_usage(capsys):
    assert main([]) == 1
    assert USAGE in capsys.readouterr().err


def test_main_rejects_empty_argument(capsys):
    assert main([""]) == 1
    assert USAGE in capsys.readouterr().err


def test_main_rejects_bad_extension(capsys):
    assert main(["scene.txt"]) == 1
    assert BAD_NAME in capsys.readouterr().err


def test_main_rejects_empty_file(tmp_path, capsys):
    path = tmp_path / "empty.cub"
    path.write_text("")
    assert main([str(path)]) == 1
    assert EMPTY_FILE in capsys.readouterr().err


def test_main_rejects_invalid_map(tmp_path, capsys):
    path = tmp_path / "bad.cub"
    path.write_text("NO n.png\n11111\n")
    assert main([str(path)]) == 1
    assert WRONG_MAP in capsys.readouterr().err