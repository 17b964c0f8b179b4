"""The playable game: texture loading, per-frame rendering and the window loop."""

from __future__ import annotations

import os
import sys
from array import array
from collections.abc import Container, Mapping, Sequence
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from cub3d.config import SceneConfig  # noqa: E402
from cub3d.framebuffer import (  # noqa: E402
    BLOCK,
    HEIGHT,
    MINIMAP_SCALE,
    WIDTH,
    Framebuffer,
    Texture,
    pack_rgba,
)
from cub3d.grid import Scene, parse_scene  # noqa: E402
from cub3d.player import Key, Player, initial_angle, toggle_door  # noqa: E402
from cub3d.raycast import FOV, RAY_STEP, draw_column  # noqa: E402
from cub3d.scene import (  # noqa: E402
    CubError,
    check_empty_read,
    check_file_name,
    read_map,
)

TITLE = "game"
USAGE = "./cub3d file_name.cup"
TEXTURE_FAILED = "failed to load textures"
MOON_FRAME_PATHS = tuple(
    f"texture/moon/moon_frame_{index:02d}.png" for index in range(4)
)
DOOR_PATH = "texture/door.png"
MOON_X = 500
MOON_Y = 0
MOON_FRAME_TICKS = 20
PLAYER_DOT_COLOR = 0xFF0000FF
FRAME_RATE = 60

_KEYMAP = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_ESCAPE: Key.ESCAPE,
}


def _load_png(path: Path) -> Texture:
    try:
        surface = pygame.image.load(str(path))
        width, height = surface.get_size()
        return Texture(width, height, pygame.image.tostring(surface, "RGBA"))
    except (pygame.error, OSError, ValueError) as exc:
        raise CubError(TEXTURE_FAILED) from exc


def load_textures(
    config: SceneConfig, base_dir: str | Path = "."
) -> tuple[dict[str, Texture], list[Texture]]:
    """Load the wall, door and moon textures; paths are taken relative to ``base_dir``.

    Returns the wall and door textures keyed by name, and the moon animation
    frames in order. Raises CubError if any image cannot be loaded.
    """
    base = Path(base_dir)
    walls = {
        "north": config.north,
        "south": config.south,
        "west": config.west,
        "east": config.east,
        "door": DOOR_PATH,
    }
    textures = {name: _load_png(base / path) for name, path in walls.items()}
    moon = [_load_png(base / path) for path in MOON_FRAME_PATHS]
    return textures, moon


class Game:
    """One running scene: the map, the player and the frame being drawn."""

    def __init__(
        self,
        scene: Scene,
        textures: Mapping[str, Texture],
        moon_frames: Sequence[Texture],
        buffer: Framebuffer | None = None,
    ) -> None:
        if not moon_frames:
            raise ValueError("at least one moon frame is required")
        self.rows = list(scene.rows)
        self.textures = dict(textures)
        self.moon_frames = list(moon_frames)
        self.moon_frame = 0
        self.buffer = buffer if buffer is not None else Framebuffer()
        self.ceiling = pack_rgba(*scene.config.ceiling, 0xFF)
        self.floor = pack_rgba(*scene.config.floor, 0xFF)
        self.player = Player(
            x=(scene.player_col + 0.5) * BLOCK,
            y=(scene.player_row + 0.5) * BLOCK,
            angle=initial_angle(scene.direction),
        )

    def render_frame(self, keys: Container[Key]) -> bool:
        """Apply held keys and draw one frame; return True if escape asks to quit."""
        buffer = self.buffer
        buffer.fill_half(0, self.ceiling)
        frame = self.moon_frames[
            (self.moon_frame // MOON_FRAME_TICKS) % len(self.moon_frames)
        ]
        self.moon_frame += 1
        buffer.draw_sprite(frame, MOON_X, MOON_Y)
        buffer.fill_half(HEIGHT // 2, self.floor)
        quit_requested = self.player.rotate(keys)
        self.player.move(self.rows, keys)
        ray_angle = self.player.angle - 3.141592653589793 / FOV
        for column in range(buffer.width):
            draw_column(
                buffer, self.rows, self.textures,
                self.player.x, self.player.y, ray_angle, column,
            )
            ray_angle += RAY_STEP
        buffer.draw_minimap(self.rows)
        buffer.draw_square(
            self.player.x / MINIMAP_SCALE,
            self.player.y / MINIMAP_SCALE,
            1,
            PLAYER_DOT_COLOR,
        )
        return quit_requested

    def handle_key_release(self, key: int) -> bool:
        """React to a released key: space opens or closes the door ahead."""
        if key == Key.SPACE:
            return toggle_door(self.rows, self.player)
        return False

    def handle_mouse(self, xpos: float) -> None:
        """Turn the player as the cursor moves horizontally."""
        self.player.mouse_turn(xpos)

    def _frame_bytes(self) -> bytes:
        data = array("I", self.buffer.pixels)
        if sys.byteorder == "little":
            data.byteswap()
        return data.tobytes()

    def run(self) -> None:
        """Open a window and play until it is closed or escape is pressed."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.buffer.width, self.buffer.height))
            pygame.display.set_caption(TITLE)
            clock = pygame.time.Clock()
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYUP and event.key == pygame.K_SPACE:
                        self.handle_key_release(Key.SPACE)
                    elif event.type == pygame.MOUSEMOTION:
                        self.handle_mouse(float(event.pos[0]))
                pressed = pygame.key.get_pressed()
                keys = {key for code, key in _KEYMAP.items() if pressed[code]}
                if self.render_frame(keys):
                    running = False
                image = pygame.image.frombuffer(
                    self._frame_bytes(),
                    (self.buffer.width, self.buffer.height),
                    "RGBA",
                )
                screen.fill((0, 0, 0))
                screen.blit(image, (0, 0))
                pygame.display.flip()
                clock.tick(FRAME_RATE)
        finally:
            pygame.quit()


def _report(message: str) -> None:
    print(f"Error\n{message}" if message else "Error", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named by the single argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1 or not args[0]:
        _report(USAGE)
        return 1
    path = args[0]
    try:
        check_file_name(path)
        check_empty_read(path)
        scene = parse_scene(read_map(path))
        textures, moon = load_textures(scene.config, Path.cwd())
    except CubError as exc:
        _report(exc.message)
        return 1
    Game(scene, textures, moon).run()
    return 0