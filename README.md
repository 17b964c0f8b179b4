# cub3d

A small first-person maze explorer drawn by a raycaster in a pygame window.
A level is described by a `.cub` scene file: four wall textures, floor and
ceiling colours, and a grid map.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cub3d path/to/level.cub
```

The command takes exactly one argument, the path to a scene file whose name
ends in `.cub`. If the argument is missing, or the file is unreadable, empty
or malformed, or a texture cannot be loaded, a message beginning with `Error`
is written to standard error and the command exits with status 1.

The window is 1280×720. Each frame shows the ceiling and floor colours, an
animated moon sprite, the textured walls and doors, and a minimap in the top
left corner with the player as a red dot.

### Controls

| Key          | Action                           |
|--------------|----------------------------------|
| W / S        | move forward / backward          |
| A / D        | strafe left / right              |
| Left / Right | turn                             |
| Mouse        | turn as the cursor moves sideways |
| Space        | open or close the door ahead     |
| Escape       | quit                             |

Walls and closed doors block movement; open doors can be walked through, and
rays pass through the middle third of an open door.

## Scene file format

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0

111111
100101
1D00N1
111111
```

- `NO`, `SO`, `WE`, `EA` each name a texture image and must appear exactly
  once; every texture file must exist. Blanks and tabs around a key and its
  value are ignored.
- `F` (floor) and `C` (ceiling) each give an `R,G,B` colour with exactly two
  commas and components from 0 to 255, and must appear exactly once.
- The map comes after the settings. It may use `0` (floor), `1` (wall), `D`
  (door), spaces and tabs, and exactly one player start: `N`, `S`, `E` or
  `W`, the direction the player faces at the start.
- The map must be closed: its outer edges may hold only walls or blanks, and
  the area reachable from the player must not reach past the edge of the map.
  Blank lines inside the map are not allowed; blank lines after it are
  ignored.

The game also loads a door texture from `texture/door.png` and moon animation
frames from `texture/moon/moon_frame_00.png` to `moon_frame_03.png`. These
and the texture paths in the scene are taken relative to the working
directory.

## Using the parser as a library

```python
from cub3d.grid import parse_scene
from cub3d.scene import CubError, read_map

try:
    scene = parse_scene(read_map("level.cub"), check_files=False)
except CubError as exc:
    print(exc)
else:
    print(scene.width, scene.height, scene.direction)
    print(scene.config.floor, scene.config.ceiling)
```

`parse_scene` returns a `Scene` with the settings (`config`, a `SceneConfig`),
the map `rows`, the padded `width` and `height`, and the player's `direction`,
`player_row` and `player_col`. With `check_files=True` (the default) it also
checks that each texture file can be opened. Any problem raises
`cub3d.scene.CubError`.

The other modules can be used on their own:

- `cub3d.framebuffer` — `Framebuffer`, an in-memory grid of `0xRRGGBBAA`
  colours, and `Texture`, decoded RGBA pixel data.
- `cub3d.raycast` — `cast_ray`, `wall_slice` and `draw_column` for casting
  rays over a map and painting textured wall columns into a `Framebuffer`.
- `cub3d.player` — `Player`, with `rotate`, `move` and `mouse_turn` driven by
  `Key` values, and `toggle_door`.
- `cub3d.game` — `load_textures`, and `Game`, whose `render_frame(keys)` draws
  one frame into its `Framebuffer` without opening a window; `Game.run()`
  opens the window and plays.

## What it does not do

There is no sound, no enemies or shooting, no saving of progress, and the
window size is fixed; the door and moon images are always read from the
`texture/` directory and cannot be set in the scene file.