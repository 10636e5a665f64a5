"""Reading wireframe height maps from ``.fdf`` files."""

from __future__ import annotations

import itertools
import string
from dataclasses import dataclass
from os import PathLike
from typing import Iterator

from .colors import hex_to_abgr

DEFAULT_COLOR = "ffffff"
_WHITESPACE = " \t\n\v\f\r"


def has_fdf_extension(filename: str | None) -> bool:
    """Tell whether the text after the first dot is exactly ``fdf``."""
    if not filename:
        return False
    dot = filename.find(".")
    return dot >= 0 and filename[dot + 1:] == "fdf"


def atoi(text: str) -> int:
    """Parse a leading signed decimal integer, 0 if there is none.

    The result wraps to a signed 32-bit value.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = "".join(itertools.takewhile(lambda c: c in string.digits, rest))
    value = sign * int(digits or "0")
    return ((value + 2**31) % 2**32) - 2**31


def split_words(text: str, delimiter: str) -> list[str]:
    """Split ``text`` on ``delimiter``, dropping empty pieces."""
    return [piece for piece in text.split(delimiter) if piece]


def color_hex(color: str | None) -> str:
    """Return the hex digits after a two-character prefix, at most six."""
    if color is None:
        return DEFAULT_COLOR
    return color[2:8]


@dataclass(frozen=True)
class MapNode:
    """One point of the map: its height and its colour as hex digits."""

    z: int
    color: str = DEFAULT_COLOR

    @property
    def abgr(self) -> int:
        """The colour as an opaque ABGR value."""
        return hex_to_abgr(self.color)


def parse_point(word: str) -> MapNode:
    """Parse ``z`` or ``z,0xRRGGBB`` into a node."""
    parts = split_words(word, ",")
    if not parts:
        raise ValueError(f"no height in point: {word!r}")
    return MapNode(atoi(parts[0]), color_hex(parts[1] if len(parts) > 1 else None))


def parse_line(line: str) -> list[MapNode]:
    """Parse one line of a map into its nodes."""
    return [parse_point(word) for word in split_words(line, " ")]


@dataclass
class HeightMap:
    """A grid of nodes, stored row by row."""

    rows: list[list[MapNode]]

    @property
    def width(self) -> int:
        """Number of nodes in each row."""
        return len(self.rows[0]) if self.rows else 0

    @property
    def length(self) -> int:
        """Number of rows."""
        return len(self.rows)

    def at(self, x: int, y: int) -> MapNode:
        """Return the node in column ``x`` of row ``y``."""
        return self.rows[y][x]

    def __iter__(self) -> Iterator[list[MapNode]]:
        return iter(self.rows)


def _split_lines(text: str) -> list[str]:
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def load_map(path: str | PathLike[str]) -> HeightMap:
    """Read a map file.

    The width is the number of points on the first line; longer rows are
    cut to it and shorter rows are an error, as is an empty map.
    """
    with open(path, encoding="utf-8", newline="") as handle:
        lines = _split_lines(handle.read())
    if not lines:
        raise ValueError(f"map is empty: {path}")
    width = len(split_words(lines[0], " "))
    if width == 0:
        raise ValueError(f"map has no points on its first line: {path}")
    rows = []
    for number, line in enumerate(lines, start=1):
        row = parse_line(line)
        if len(row) < width:
            raise ValueError(
                f"line {number} has {len(row)} points, expected {width}"
            )
        rows.append(row[:width])
    return HeightMap(rows)