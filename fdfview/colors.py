"""Colour parsing and conversion helpers."""

from __future__ import annotations

import string
import struct

_U32 = 0xFFFFFFFF
_U64 = 0xFFFFFFFFFFFFFFFF
_WHITESPACE = " \t\n\v\f\r"

_FNV_PRIME = 0x100000001B3
_FNV_OFFSET = 0xCBF29CE484222325

WHITE = 0xFFFFFFFF


def _digit_value(char: str) -> int:
    if char in string.digits:
        return ord(char) - ord("0")
    if char in string.ascii_letters:
        return ord(char.lower()) - ord("a") + 10
    return -1


def strtol(text: str | None, base: int) -> int:
    """Parse an unsigned 32-bit number in base 10 or 16.

    Leading whitespace is skipped, a ``0x`` prefix is accepted in base 16,
    and parsing stops at the first character that is not a digit. The
    result wraps modulo 2**32.
    """
    if base not in (10, 16):
        raise ValueError(f"unsupported base: {base}")
    if text is None:
        return 0
    text = text.lstrip(_WHITESPACE)
    if base == 16 and text[:2] in ("0x", "0X"):
        text = text[2:]
    result = 0
    for char in text:
        digit = _digit_value(char)
        if not 0 <= digit < base:
            break
        result = (result * base + digit) & _U32
    return result


def hex_to_abgr(text: str | None) -> int:
    """Turn a six-digit ``RRGGBB`` string into an opaque ABGR value.

    Anything that is not exactly six characters long gives opaque white.
    """
    if text is None or len(text) != 6:
        return WHITE
    rgb = strtol(text, 16)
    return (
        0xFF000000
        | ((rgb & 0xFF) << 16)
        | (rgb & 0xFF00)
        | ((rgb >> 16) & 0xFF)
    )


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_R_WEIGHT = _f32(0.299)
_G_WEIGHT = _f32(0.587)
_B_WEIGHT = _f32(0.114)


def rgba_to_mono(color: int) -> int:
    """Convert an RGBA colour to grey, keeping its alpha channel."""
    red = int(_f32(_R_WEIGHT * ((color >> 24) & 0xFF))) & 0xFF
    green = int(_f32(_G_WEIGHT * ((color >> 16) & 0xFF))) & 0xFF
    blue = int(_f32(_B_WEIGHT * ((color >> 8) & 0xFF))) & 0xFF
    grey = (red + green + blue) & 0xFF
    return (grey << 24) | (grey << 16) | (grey << 8) | (color & 0xFF)


def fnv_hash(data: bytes | str) -> int:
    """Return the 64-bit FNV-1a hash of ``data``.

    Bytes of 128 and above are treated as signed characters, as the
    texture format's colour tables expect.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    value = _FNV_OFFSET
    for byte in data:
        if byte >= 0x80:
            byte = (byte - 0x100) & _U64
        value ^= byte
        value = (value * _FNV_PRIME) & _U64
    return value