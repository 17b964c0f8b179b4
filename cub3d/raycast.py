"""Grid ray casting and textured wall columns."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, replace

from cub3d.framebuffer import BLOCK, HEIGHT, WIDTH, Framebuffer, Texture, pack_rgba

FOV = 6.0
RAY_STEP = math.pi / (FOV / 2) / WIDTH
_BLOCKING = frozenset("1D")
_RAY_STOP = frozenset("1DO")
_MAX_LINE = 2**31 - 1


@dataclass(frozen=True)
class RayHit:
    """State of a ray after it has stopped on a cell."""

    map_x: int
    map_y: int
    side: int
    step_x: int
    step_y: int
    ray_dir_x: float
    ray_dir_y: float
    side_dist_x: float
    side_dist_y: float
    delta_dist_x: float
    delta_dist_y: float


@dataclass(frozen=True)
class WallSlice:
    """Screen extent and texture coordinate of one wall column."""

    distance: float
    line_height: int
    draw_start: int
    draw_end: int
    wall_x: float


def _cell(rows: list[str], x: int, y: int) -> str:
    if x < 0 or y < 0 or y >= len(rows):
        return ""
    row = rows[y]
    return row[x] if x < len(row) else ""


def _trunc_half(value: int) -> int:
    return -((-value) // 2) if value < 0 else value // 2


def touch(rows: list[str], x: float, y: float) -> bool:
    """True if the world point (x, y) lies in a wall, a closed door or outside."""
    cell = _cell(rows, int(x / BLOCK), int(y / BLOCK))
    return cell == "" or cell in _BLOCKING


def _advance(hit: RayHit, rows: list[str]) -> RayHit:
    map_x, map_y, side = hit.map_x, hit.map_y, hit.side
    side_x, side_y = hit.side_dist_x, hit.side_dist_y
    while True:
        if side_x < side_y:
            side_x += hit.delta_dist_x
            map_x += hit.step_x
            side = 0
        else:
            side_y += hit.delta_dist_y
            map_y += hit.step_y
            side = 1
        cell = _cell(rows, map_x, map_y)
        if cell == "" or cell in _RAY_STOP:
            break
    return replace(
        hit, map_x=map_x, map_y=map_y, side=side,
        side_dist_x=side_x, side_dist_y=side_y,
    )


def cast_ray(rows: list[str], px: float, py: float, angle: float) -> RayHit:
    """Step a ray from the world point (px, py) until it meets a stopping cell."""
    map_x = int(px) // BLOCK
    map_y = int(py) // BLOCK
    dir_x = math.cos(angle)
    dir_y = math.sin(angle)
    delta_x = 1e30 if dir_x == 0 else abs(1 / dir_x)
    delta_y = 1e30 if dir_y == 0 else abs(1 / dir_y)
    if dir_x < 0:
        step_x, side_x = -1, (px / BLOCK - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - px / BLOCK) * delta_x
    if dir_y < 0:
        step_y, side_y = -1, (py / BLOCK - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - py / BLOCK) * delta_y
    start = RayHit(
        map_x=map_x, map_y=map_y, side=0, step_x=step_x, step_y=step_y,
        ray_dir_x=dir_x, ray_dir_y=dir_y, side_dist_x=side_x,
        side_dist_y=side_y, delta_dist_x=delta_x, delta_dist_y=delta_y,
    )
    return _advance(start, rows)


def wall_slice(hit: RayHit, px: float, py: float) -> WallSlice:
    """Work out the projected height and hit position of the wall a ray met."""
    if hit.side == 0:
        distance = (
            hit.map_x - px / BLOCK + (1 - hit.step_x) // 2
        ) / hit.ray_dir_x
    else:
        distance = (
            hit.map_y - py / BLOCK + (1 - hit.step_y) // 2
        ) / hit.ray_dir_y
    if distance > 0:
        line_height = int(min(HEIGHT / distance, _MAX_LINE))
    else:
        line_height = _MAX_LINE
    draw_start = max(-(line_height // 2) + HEIGHT // 2, 0)
    draw_end = min(line_height // 2 + HEIGHT // 2, HEIGHT - 1)
    if hit.side == 0:
        wall_x = py / BLOCK + distance * hit.ray_dir_y
    else:
        wall_x = px / BLOCK + distance * hit.ray_dir_x
    wall_x -= math.floor(wall_x)
    return WallSlice(distance, line_height, draw_start, draw_end, wall_x)


def pick_texture(
    hit: RayHit, rows: list[str], textures: Mapping[str, Texture]
) -> Texture:
    """Choose the door or wall texture for the face a ray struck."""
    if _cell(rows, hit.map_x, hit.map_y) in ("D", "O"):
        return textures["door"]
    if hit.side == 0 and hit.ray_dir_x > 0:
        return textures["south"]
    if hit.side == 0 and hit.ray_dir_x < 0:
        return textures["north"]
    if hit.side == 1 and hit.ray_dir_y > 0:
        return textures["east"]
    return textures["west"]


def draw_column(
    buffer: Framebuffer,
    rows: list[str],
    textures: Mapping[str, Texture],
    px: float,
    py: float,
    angle: float,
    x: int,
) -> WallSlice | None:
    """Cast one ray and paint its textured wall column at screen column ``x``.

    Rays pass through the middle third of an open door. Returns the slice
    drawn, or None when the ray left the map.
    """
    height = len(rows)
    width = max((len(row) for row in rows), default=0)
    hit = cast_ray(rows, px, py, angle)
    while True:
        if not (0 <= hit.map_y < height and 0 <= hit.map_x < width):
            return None
        piece = wall_slice(hit, px, py)
        if _cell(rows, hit.map_x, hit.map_y) == "O" and 0.33 <= piece.wall_x <= 0.66:
            hit = _advance(hit, rows)
            continue
        break
    texture = pick_texture(hit, rows, textures)
    tex_w = texture.width
    tex_x = int(piece.wall_x * tex_w)
    if (hit.side == 0 and hit.ray_dir_x > 0) or (hit.side == 1 and hit.ray_dir_y < 0):
        tex_x = tex_w - tex_x - 1
    tex_x = max(0, min(tex_x, tex_w - 1))
    step = tex_w / max(piece.line_height, 1)
    tex_pos = (piece.draw_start - _trunc_half(HEIGHT - piece.line_height)) * step
    for y in range(piece.draw_start, piece.draw_end + 1):
        tex_y = int(tex_pos) & (tex_w - 1)
        tex_pos += step
        tex_y = max(0, min(tex_y, texture.height - 1))
        buffer.put_pixel(x, y, pack_rgba(*texture.pixel(tex_x, tex_y)))
    return piece