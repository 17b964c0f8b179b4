"""Extracting the map grid from a scene and checking that it is closed."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from cub3d.config import SceneConfig, split_lines
from cub3d.scene import (
    EMPTY_FILE,
    CubError,
    is_map_line,
    split_file_lines,
    trim_config_lines,
)

PLAYER_CHARS = frozenset("NSEW")
_REMAINING_CHARS = frozenset("01 \t\nNSEWD")
_MAP_CHARS = frozenset("01 \nD\t")
_BORDER_CHARS = frozenset("1 \t")
_FILL_STOP = frozenset("12")


@dataclass
class Scene:
    """A fully validated scene: settings, map rows and the player's start."""

    config: SceneConfig
    rows: list[str]
    width: int
    height: int
    direction: str
    player_row: int
    player_col: int


def check_remaining_chars(lines: str | Iterable[str]) -> None:
    """Raise CubError if the non-setting text holds a character a map may not."""
    text = lines if isinstance(lines, str) else "".join(lines)
    if any(char not in _REMAINING_CHARS for char in text):
        raise CubError()


def create_map(lines: list[str]) -> list[str]:
    """Return the lines from the first map line to the end of the file."""
    for index, line in enumerate(lines):
        if is_map_line(line):
            return list(lines[index:])
    return []


def check_map(rows: list[str]) -> None:
    """Raise CubError on an unknown map character or not exactly one player."""
    players = 0
    for row in rows:
        for char in row:
            if char in PLAYER_CHARS:
                players += 1
            elif char not in _MAP_CHARS:
                raise CubError()
    if players != 1:
        raise CubError()


def _is_blank(line: str) -> bool:
    return all(char in " \n" for char in line)


def strip_trailing_blank_rows(rows: list[str]) -> list[str]:
    """Drop blank rows after the map; raise CubError on a blank row inside it."""
    last = len(rows) - 1
    while last >= 0 and _is_blank(rows[last]):
        last -= 1
    body = list(rows[: last + 1])
    for row in body:
        if is_map_line(row):
            continue
        rest = row.lstrip(" ")
        if not rest or rest[0] == "\n":
            raise CubError()
    return body


def find_player(rows: list[str]) -> tuple[str, int, int]:
    """Return the player's facing letter, row and column (the last one found)."""
    found: tuple[str, int, int] | None = None
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char in PLAYER_CHARS:
                found = (char, y, x)
    if found is None:
        raise CubError()
    return found


def pad_map(rows: list[str]) -> list[str]:
    """Return the rows right-padded with spaces to the width of the longest."""
    width = max((len(row) for row in rows), default=0)
    return [row.ljust(width) for row in rows]


def check_map_borders(rows: list[str]) -> None:
    """Raise CubError unless the outer edges of a padded map hold only walls or blanks."""
    if not rows:
        raise CubError()
    for edge in (rows[0], rows[-1]):
        if any(char not in _BORDER_CHARS for char in edge):
            raise CubError()
    for row in rows:
        if row and (row[0] not in _BORDER_CHARS or row[-1] not in _BORDER_CHARS):
            raise CubError()


def flood_fill(rows: list[str], y: int, x: int) -> list[str]:
    """Fill every cell reachable from (y, x) with ``2``.

    Raises CubError if the fill reaches past the edge of the grid, which
    means the map is not enclosed by walls.
    """
    height = len(rows)
    width = max((len(row) for row in rows), default=0)
    grid = [list(row.ljust(width)) for row in rows]
    stack = [(y, x)]
    while stack:
        cy, cx = stack.pop()
        if cy < 0 or cx < 0 or cy >= height or cx >= width:
            raise CubError()
        if grid[cy][cx] in _FILL_STOP:
            continue
        grid[cy][cx] = "2"
        stack.extend(((cy + 1, cx), (cy - 1, cx), (cy, cx + 1), (cy, cx - 1)))
    return ["".join(row) for row in grid]


def parse_scene(text: str, check_files: bool = True) -> Scene:
    """Parse and validate the full text of a scene file."""
    lines = split_file_lines(text)
    if not lines:
        raise CubError(EMPTY_FILE)
    lines = trim_config_lines(lines)
    config = split_lines(lines)
    if check_files:
        config.check_texture_files()
    check_remaining_chars(config.remaining)
    rows = create_map(lines)
    check_map(rows)
    rows = strip_trailing_blank_rows(rows)
    direction, player_row, player_col = find_player(rows)
    padded = pad_map(rows)
    check_map_borders(padded)
    flood_fill(padded, player_row, player_col)
    return Scene(
        config=config,
        rows=rows,
        width=len(padded[0]) if padded else 0,
        height=len(padded),
        direction=direction,
        player_row=player_row,
        player_col=player_col,
    )