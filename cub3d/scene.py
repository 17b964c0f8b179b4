"""Reading a scene file and splitting it into normalised lines."""

from __future__ import annotations

from pathlib import Path

WRONG_MAP = "Wrong map"
BAD_NAME = "file_name must final with .cub"
UNREADABLE = "can not read from the file or the file does not exist"
EMPTY_FILE = "empty file"


class CubError(Exception):
    """Raised when a scene file or its contents are not acceptable."""

    def __init__(self, message: str = WRONG_MAP) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def check_file_name(file_name: str) -> str:
    """Return the name unchanged if it ends in ``.cub``, else raise CubError."""
    if len(file_name) <= 3 or not file_name.endswith(".cub"):
        raise CubError(BAD_NAME)
    return file_name


def check_empty_read(path: str | Path) -> None:
    """Raise CubError if the file cannot be opened or holds no bytes."""
    try:
        with open(path, "rb") as handle:
            first = handle.read(1)
    except OSError as exc:
        raise CubError(UNREADABLE) from exc
    if not first:
        raise CubError(EMPTY_FILE)


def read_map(path: str | Path) -> str:
    """Return the whole text of the scene file, line endings untouched."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            return handle.read()
    except OSError as exc:
        raise CubError(UNREADABLE) from exc


def split_file_lines(text: str) -> list[str]:
    """Split text on newlines; an empty line is kept as a single ``"\\n"``."""
    if not text:
        return []
    pieces = text.split("\n")
    if text.endswith("\n"):
        pieces.pop()
    return [piece if piece else "\n" for piece in pieces]


def normalize_config_line(line: str) -> str:
    """Collapse a ``KEY   value`` line to ``KEY value`` with outer blanks removed."""
    rest = line.lstrip(" \t")
    end = 0
    while end < len(rest) and rest[end] not in " \t":
        end += 1
    key = rest[:end]
    value = rest[end:].lstrip(" \t")
    return f"{key.strip(' \t')} {value.strip(' \t')}"


def _is_config_line(line: str) -> bool:
    trimmed = line.strip(" \t\n")
    return not trimmed.startswith(("1", "0"))


def trim_config_lines(lines: list[str]) -> list[str]:
    """Return the lines with every non-map line normalised."""
    return [
        normalize_config_line(line) if _is_config_line(line) else line
        for line in lines
    ]


def is_map_line(line: str) -> bool:
    """True if, after leading spaces, the line starts with ``1`` or ``0``."""
    return line.lstrip(" ").startswith(("1", "0"))