"""Loading images in the XPM42 text format."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import BinaryIO

from .canvas import BPP, MAX_DIMENSION, Texture
from .colors import fnv_hash, rgba_to_mono, strtol
from .errors import ErrorCode, MlxError

_MAGIC = b"!XPM42\n"
_TABLE_SIZE = 0xFFFF
_MAX_CPP = 10
_INT = re.compile(rb"[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_SPACE = b" \t\n\v\f\r"


@dataclass
class Xpm:
    """A decoded XPM42 image."""

    texture: Texture
    color_count: int
    cpp: int
    mode: str

    @property
    def width(self) -> int:
        return self.texture.width

    @property
    def height(self) -> int:
        return self.texture.height


class _Invalid(Exception):
    pass


def _scan_int(text: bytes, pos: int) -> tuple[int, int]:
    while pos < len(text) and text[pos] in _SPACE:
        pos += 1
    match = _INT.match(text, pos)
    if match is None:
        raise _Invalid
    token = match.group()
    sign = -1 if token[:1] == b"-" else 1
    digits = token.lstrip(b"+-")
    if digits[:2] in (b"0x", b"0X"):
        value = int(digits[2:], 16)
    elif len(digits) > 1 and digits[:1] == b"0":
        value = int(digits[1:], 8)
    else:
        value = int(digits)
    return sign * value, match.end()


def _parse_header(line: bytes) -> tuple[int, int, int, int, str]:
    pos = 0
    values = []
    for _ in range(4):
        value, pos = _scan_int(line, pos)
        values.append(value)
    while pos < len(line) and line[pos] in _SPACE:
        pos += 1
    if pos >= len(line):
        raise _Invalid
    mode = chr(line[pos])
    width, height, color_count, cpp = values
    if not (0 <= width <= MAX_DIMENSION and 0 <= height <= MAX_DIMENSION):
        raise _Invalid
    if mode not in ("c", "m") or not 0 <= cpp <= _MAX_CPP:
        raise _Invalid
    return width, height, color_count, cpp, mode


def _channel(text: bytes) -> int:
    return strtol(text.decode("latin-1"), 16) & 0xFF


def _parse_entry(line: bytes, cpp: int, mode: str, table: dict[int, int]) -> None:
    if line.rfind(b" ") != cpp:
        raise _Invalid
    if len(line) < cpp + 3 or line[cpp + 1:cpp + 2] != b"#":
        raise _Invalid
    if not line[cpp + 2:cpp + 3].isalnum():
        raise _Invalid
    start = cpp + 2
    color = 0
    for shift, offset in zip((24, 16, 8, 0), (0, 2, 4, 6)):
        color |= _channel(line[start + offset:start + offset + 2]) << shift
    index = fnv_hash(line[:cpp]) % _TABLE_SIZE
    table[index] = rgba_to_mono(color) if mode == "m" else color


def _read_line(handle: BinaryIO) -> bytes:
    line = handle.readline()
    if not line:
        raise _Invalid
    return line


def _read(handle: BinaryIO) -> Xpm:
    if handle.readline() != _MAGIC:
        raise _Invalid
    header = handle.readline()
    if not header:
        raise _Invalid
    width, height, color_count, cpp, mode = _parse_header(header)

    table: dict[int, int] = {}
    for _ in range(color_count):
        _parse_entry(_read_line(handle), cpp, mode, table)

    pixels = bytearray(width * height * BPP)
    for y in range(height):
        line = _read_line(handle)
        if line.endswith(b"\n"):
            line = line[:-1]
        if len(line) != width * cpp:
            raise _Invalid
        for x in range(width):
            key = line[x * cpp:(x + 1) * cpp]
            color = table.get(fnv_hash(key) % _TABLE_SIZE, 0)
            start = (y * width + x) * BPP
            pixels[start:start + BPP] = color.to_bytes(BPP, "big")

    texture = Texture(width, height, bytes(pixels), BPP)
    return Xpm(texture, color_count, cpp, mode)


def load_xpm42(path: str | PathLike[str]) -> Xpm:
    """Read an XPM42 file.

    Raises MlxError with INVEXT for a wrong file name, INVFILE when the
    file cannot be opened and INVXPM when its contents are malformed.
    """
    if ".xpm42" not in str(path):
        raise MlxError(ErrorCode.INVEXT)
    try:
        handle = open(path, "rb")
    except OSError:
        raise MlxError(ErrorCode.INVFILE) from None
    with handle:
        try:
            return _read(handle)
        except _Invalid:
            raise MlxError(ErrorCode.INVXPM) from None