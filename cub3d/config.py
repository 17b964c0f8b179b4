"""Texture paths and floor/ceiling colours declared in a scene."""

from __future__ import annotations

from dataclasses import dataclass

from cub3d.scene import CubError

_COLOR_KEYS = ("F ", "C ")
_TEXTURE_KEYS = ("NO ", "SO ", "WE ", "EA ")
_WHITESPACE = "\t\n\v\f\r "


@dataclass
class SceneConfig:
    """The settings of a scene plus the text of the lines left for the map."""

    north: str
    south: str
    west: str
    east: str
    floor: tuple[int, int, int]
    ceiling: tuple[int, int, int]
    remaining: str = ""

    def check_texture_files(self) -> None:
        """Raise CubError unless every texture path can be opened for reading."""
        for path in (self.east, self.north, self.south, self.west):
            try:
                with open(path, "rb"):
                    pass
            except OSError as exc:
                raise CubError() from exc


def _atoi(text: str) -> int:
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("+", "-"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = ""
    for char in rest:
        if not char.isdigit() or not char.isascii():
            break
        digits += char
    return sign * int(digits) if digits else 0


def parse_rgb(text: str) -> tuple[int, int, int]:
    """Parse ``R,G,B`` with each part 0..255; raise CubError otherwise."""
    if text.count(",") != 2:
        raise CubError()
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise CubError()
    values = []
    for part in parts:
        trimmed = part.strip(" ")
        if len(trimmed) > 3:
            raise CubError()
        value = _atoi(trimmed)
        if not 0 <= value <= 255:
            raise CubError()
        values.append(value)
    return values[0], values[1], values[2]


def split_lines(lines: list[str]) -> SceneConfig:
    """Sort normalised lines into settings and map text.

    Each of NO, SO, WE, EA, F and C must appear exactly once. Texture files
    are not opened here; see :meth:`SceneConfig.check_texture_files`.
    """
    found: dict[str, str] = {}
    counts: dict[str, int] = {}
    remaining: list[str] = []
    for line in lines:
        key = next(
            (k for k in _COLOR_KEYS + _TEXTURE_KEYS if line.startswith(k)), None
        )
        if key is None:
            remaining.append(line)
            continue
        found[key] = line[len(key):]
        counts[key] = counts.get(key, 0) + 1
    if any(counts.get(key, 0) != 1 for key in _COLOR_KEYS + _TEXTURE_KEYS):
        raise CubError()
    floor_text, ceiling_text = found["F "], found["C "]
    if floor_text.count(",") != 2 or ceiling_text.count(",") != 2:
        raise CubError()
    return SceneConfig(
        north=found["NO "],
        south=found["SO "],
        west=found["WE "],
        east=found["EA "],
        floor=parse_rgb(floor_text),
        ceiling=parse_rgb(ceiling_text),
        remaining="".join(remaining),
    )