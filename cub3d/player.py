"""The player's position and heading, and how input changes them."""

from __future__ import annotations

import math
from collections.abc import Container
from dataclasses import dataclass
from enum import IntEnum

from cub3d.framebuffer import BLOCK
from cub3d.raycast import touch

SPEED = 3.0
ROTATE_SPEED = 0.05
COLLISION = 24.0
_TAU = 2 * math.pi
_DIRECTIONS = {"N": 270, "S": 90, "W": 180, "E": 0}


class Key(IntEnum):
    """Keys the game reacts to, with their keyboard codes."""

    SPACE = 32
    A = 65
    D = 68
    S = 83
    W = 87
    ESCAPE = 256
    RIGHT = 262
    LEFT = 263


def initial_angle(direction: str) -> float:
    """Return the heading in radians for a starting letter N, S, E or W."""
    try:
        return _DIRECTIONS[direction] * (math.pi / 180)
    except KeyError:
        raise ValueError(f"unknown direction {direction!r}") from None


def _wrap(angle: float) -> float:
    if angle < 0:
        return angle + _TAU
    if angle > _TAU:
        return angle - _TAU
    return angle


@dataclass
class Player:
    """A point in world units with a heading; ``x_delta`` is the last mouse x."""

    x: float
    y: float
    angle: float = 0.0
    x_delta: float = 0.0

    def rotate(self, keys: Container[Key]) -> bool:
        """Turn with the arrow keys; return True if escape asks to quit."""
        if Key.ESCAPE in keys:
            return True
        if Key.LEFT in keys:
            self.angle -= ROTATE_SPEED
        elif Key.RIGHT in keys:
            self.angle += ROTATE_SPEED
        self.angle = _wrap(self.angle)
        return False

    def _clear(self, rows: list[str], *offsets: tuple[float, float]) -> bool:
        return not any(touch(rows, self.x + dx, self.y + dy) for dx, dy in offsets)

    def move(self, rows: list[str], keys: Container[Key]) -> bool:
        """Walk or strafe one step unless a wall is close; return True if moved."""
        a = self.angle
        s1x = COLLISION * math.cos(a + math.pi / 12)
        s1y = COLLISION * math.sin(a + math.pi / 12)
        s2x = COLLISION * math.cos(a - math.pi / 12)
        s2y = COLLISION * math.sin(a - math.pi / 12)
        if Key.W in keys and self._clear(rows, (s1x, s1y), (s2x, s2y)):
            self.x += SPEED * math.cos(a)
            self.y += SPEED * math.sin(a)
        elif Key.S in keys and self._clear(rows, (-s1x, -s1y), (-s2x, -s2y)):
            self.x -= SPEED * math.cos(a)
            self.y -= SPEED * math.sin(a)
        elif Key.A in keys and self._clear(rows, (s1y, -s1x), (s2y, -s2x)):
            self.x += SPEED * math.sin(a)
            self.y -= SPEED * math.cos(a)
        elif Key.D in keys and self._clear(rows, (-s1y, s1x), (-s2y, s2x)):
            self.x -= SPEED * math.sin(a)
            self.y += SPEED * math.cos(a)
        else:
            return False
        return True

    def mouse_turn(self, xpos: float) -> None:
        """Turn a little towards the side the cursor moved to."""
        if xpos < self.x_delta:
            self.angle -= ROTATE_SPEED / 1.5
        elif xpos > self.x_delta:
            self.angle += ROTATE_SPEED / 1.5
        self.angle = _wrap(self.angle)
        self.x_delta = xpos


def toggle_door(rows: list[str], player: Player) -> bool:
    """Open or close the door just ahead of the player, editing ``rows``.

    Returns True if a door changed state.
    """
    reach = COLLISION * 1.5
    next_x = int(player.x + reach * math.cos(player.angle))
    next_y = int(player.y + reach * math.sin(player.angle))
    cx, cy = int(next_x / BLOCK), int(next_y / BLOCK)
    if not (0 <= cy < len(rows) and 0 <= cx < len(rows[cy])):
        return False
    row = rows[cy]
    swapped = {"D": "O", "O": "D"}.get(row[cx])
    if swapped is None:
        return False
    rows[cy] = row[:cx] + swapped + row[cx + 1:]
    return True