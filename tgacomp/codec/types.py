from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Tuple

from ..errors import DimensionMismatchError

HEADER_SIZE = 18
COLOR_MAP_SPEC_SIZE = 5
IMAGE_SPEC_SIZE = 10
BYTES_PER_PIXEL = 3
UNCOMPRESSED_TRUECOLOR = 2
TRUECOLOR_DEPTH = 24
TOP_LEFT_ORIGIN = 0x20
MAX_DIMENSION = 0xFFFF

CHANNELS: Tuple[str, ...] = ("blue", "green", "red")


def _u16(data: bytes, offset: int) -> int:
    return data[offset] | (data[offset + 1] << 8)


def _pack_size(spec: bytearray, width: int, height: int) -> None:
    if not (0 <= width <= MAX_DIMENSION and 0 <= height <= MAX_DIMENSION):
        raise DimensionMismatchError(f"TGA dimensions must be within 0..{MAX_DIMENSION}, got {width}x{height}")
    spec[4:6] = width.to_bytes(2, "little")
    spec[6:8] = height.to_bytes(2, "little")


@dataclass(frozen=True)
class Header:
    """The fixed 18-byte TGA header.

    ``color_map_spec`` and ``image_spec`` are kept as raw bytes so fields the
    codec does not interpret survive a round trip untouched.
    """

    id_length: int = 0
    color_map_type: int = 0
    image_type: int = UNCOMPRESSED_TRUECOLOR
    color_map_spec: bytes = bytes(COLOR_MAP_SPEC_SIZE)
    image_spec: bytes = bytes(IMAGE_SPEC_SIZE)

    def __post_init__(self) -> None:
        if len(self.color_map_spec) != COLOR_MAP_SPEC_SIZE:
            raise ValueError(f"Color map spec must be {COLOR_MAP_SPEC_SIZE} bytes")
        if len(self.image_spec) != IMAGE_SPEC_SIZE:
            raise ValueError(f"Image spec must be {IMAGE_SPEC_SIZE} bytes")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Header":
        """Parse the first 18 bytes of ``data`` positionally."""
        return cls(
            id_length=data[0],
            color_map_type=data[1],
            image_type=data[2],
            color_map_spec=bytes(data[3:8]),
            image_spec=bytes(data[8:18]),
        )

    @classmethod
    def for_size(cls, width: int, height: int, descriptor: int = 0) -> "Header":
        """Build a fresh uncompressed 24-bit header for the given dimensions."""
        spec = bytearray(IMAGE_SPEC_SIZE)
        _pack_size(spec, width, height)
        spec[8] = TRUECOLOR_DEPTH
        spec[9] = descriptor
        return cls(image_spec=bytes(spec))

    def to_bytes(self) -> bytes:
        return bytes([self.id_length, self.color_map_type, self.image_type]) + self.color_map_spec + self.image_spec

    def with_size(self, width: int, height: int) -> "Header":
        """Return a copy of this header describing ``width`` x ``height``."""
        spec = bytearray(self.image_spec)
        _pack_size(spec, width, height)
        return replace(self, image_spec=bytes(spec))

    @property
    def x_origin(self) -> int:
        return _u16(self.image_spec, 0)

    @property
    def y_origin(self) -> int:
        return _u16(self.image_spec, 2)

    @property
    def width(self) -> int:
        return _u16(self.image_spec, 4)

    @property
    def height(self) -> int:
        return _u16(self.image_spec, 6)

    @property
    def pixel_depth(self) -> int:
        return self.image_spec[8]

    @property
    def descriptor(self) -> int:
        return self.image_spec[9]

    @property
    def top_left_origin(self) -> bool:
        """True when rows are stored top-down (descriptor bit 5)."""
        return bool(self.descriptor & TOP_LEFT_ORIGIN)


@dataclass(frozen=True)
class Pixel:
    """One BGR pixel with 8-bit channels."""

    blue: int
    green: int
    red: int

    def __post_init__(self) -> None:
        for name in CHANNELS:
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} out of range: {value}")

    @classmethod
    def gray(cls, value: int) -> "Pixel":
        return cls(value, value, value)

    def channel(self, name: str) -> int:
        if name not in CHANNELS:
            raise ValueError(f"Unknown channel: {name}")
        return getattr(self, name)

    def to_bytes(self) -> bytes:
        return bytes((self.blue, self.green, self.red))

    def __str__(self) -> str:
        return f"Pixel(R: {self.red}, G: {self.green}, B: {self.blue})"


@dataclass(frozen=True)
class Image:
    """A decoded TGA image: header plus pixels in stored row order."""

    header: Header
    pixels: List[Pixel] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height

    def derive(self, pixels: List[Pixel]) -> "Image":
        """Pair new pixels with a copy of this image's header."""
        return Image(self.header, pixels)
