"""In-memory images, their on-screen instances and the render queue."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterable

from .errors import ErrorCode, MlxError

BPP = 4
MAX_DIMENSION = 0x7FFF


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _check_dimensions(width: int, height: int) -> None:
    if not (0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION):
        raise MlxError(ErrorCode.INVDIM)


@dataclass
class Instance:
    """One placement of an image in the window."""

    x: int
    y: int
    z: int = 0
    enabled: bool = True


@dataclass(eq=False)
class Image:
    """A width by height buffer of RGBA pixels, four bytes each."""

    width: int
    height: int
    pixels: bytearray = field(default=None, repr=False)  # type: ignore[assignment]
    enabled: bool = True
    instances: list[Instance] = field(default_factory=list)

    def __post_init__(self) -> None:
        _check_dimensions(self.width, self.height)
        size = self.width * self.height * BPP
        if self.pixels is None:
            self.pixels = bytearray(size)
        else:
            self.pixels = bytearray(self.pixels)
            if len(self.pixels) != size:
                raise ValueError(
                    f"pixel buffer holds {len(self.pixels)} bytes, expected {size}"
                )

    @property
    def count(self) -> int:
        """Number of instances of this image."""
        return len(self.instances)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise MlxError(ErrorCode.INVPOS)
        return (y * self.width + x) * BPP

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store an RGBA colour at ``(x, y)``, red in the first byte."""
        start = self._offset(x, y)
        self.pixels[start:start + BPP] = (color & 0xFFFFFFFF).to_bytes(BPP, "big")

    def get_pixel(self, x: int, y: int) -> int:
        """Return the RGBA colour stored at ``(x, y)``."""
        start = self._offset(x, y)
        return int.from_bytes(self.pixels[start:start + BPP], "big")

    def resize(self, width: int, height: int) -> None:
        """Scale the image to a new size by nearest-neighbour sampling."""
        _check_dimensions(width, height)
        if width == self.width and height == self.height:
            return
        wstep = _f32(self.width / width)
        hstep = _f32(self.height / height)
        old = self.pixels
        old_width = self.width
        new = bytearray(width * height * BPP)
        for j in range(height):
            src_row = int(_f32(j * hstep)) * old_width
            dst_row = j * width
            for i in range(width):
                src = (src_row + int(_f32(i * wstep))) * BPP
                dst = (dst_row + i) * BPP
                new[dst:dst + BPP] = old[src:src + BPP]
        self.pixels = new
        self.width = width
        self.height = height


@dataclass
class Texture:
    """Decoded pixel data not yet turned into a drawable image."""

    width: int
    height: int
    pixels: bytes = field(repr=False)
    bytes_per_pixel: int = BPP

    def __post_init__(self) -> None:
        if not 1 <= self.bytes_per_pixel <= BPP:
            raise ValueError(f"unsupported bytes per pixel: {self.bytes_per_pixel}")
        size = self.width * self.height * self.bytes_per_pixel
        if self.width < 0 or self.height < 0 or len(self.pixels) < size:
            raise ValueError("texture pixel buffer is smaller than its dimensions")


def image_from_texture(texture: Texture) -> Image:
    """Copy a texture's pixels into a new image of the same size."""
    image = Image(texture.width, texture.height)
    bpp = texture.bytes_per_pixel
    row_bytes = texture.width * bpp
    for row in range(texture.height):
        src = row * texture.width * bpp
        dst = row * image.width * bpp
        image.pixels[dst:dst + row_bytes] = texture.pixels[src:src + row_bytes]
    return image


@dataclass(eq=False)
class DrawCall:
    """A request to draw one instance of an image."""

    image: Image
    instance_id: int

    @property
    def instance(self) -> Instance:
        """The instance this call draws."""
        return self.image.instances[self.instance_id]

    @property
    def z(self) -> int:
        """Depth of the instance this call draws."""
        return self.instance.z


def sort_render_queue(queue: Iterable[DrawCall]) -> list[DrawCall]:
    """Return the queue ordered by depth, back to front.

    Among calls of equal depth, the later one in the queue comes first.
    """
    return sorted(reversed(list(queue)), key=lambda call: call.z)