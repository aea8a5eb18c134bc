from __future__ import annotations

import logging
import os
from typing import Iterable, List, Union

from ..errors import ImageIOError, TruncatedError
from .types import BYTES_PER_PIXEL, HEADER_SIZE, Header, Image, Pixel

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def unpack_pixels(data: bytes) -> List[Pixel]:
    """Split a BGR byte stream into pixels, dropping a trailing partial triplet."""
    usable = len(data) - (len(data) % BYTES_PER_PIXEL)
    return [Pixel(data[i], data[i + 1], data[i + 2]) for i in range(0, usable, BYTES_PER_PIXEL)]


def pack_pixels(pixels: Iterable[Pixel]) -> bytes:
    """Serialize pixels as a contiguous B, G, R byte stream."""
    out = bytearray()
    for pixel in pixels:
        out += pixel.to_bytes()
    return bytes(out)


def decode(data: bytes) -> Image:
    """Decode an uncompressed 24-bit TGA byte buffer."""
    if len(data) < HEADER_SIZE:
        raise TruncatedError(f"TGA data is {len(data)} bytes, header needs {HEADER_SIZE}")
    header = Header.from_bytes(data[:HEADER_SIZE])
    return Image(header, unpack_pixels(data[HEADER_SIZE:]))


def encode(image: Image) -> bytes:
    """Encode an image back into TGA bytes."""
    return image.header.to_bytes() + pack_pixels(image.pixels)


def read_tga(path: PathLike) -> Image:
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise ImageIOError(f"Failed to read {os.fspath(path)}: {exc}") from exc
    logger.debug("read %s (%d bytes)", os.fspath(path), len(data))
    return decode(data)


def write_tga(path: PathLike, image: Image) -> None:
    data = encode(image)
    try:
        parent = os.path.dirname(os.fspath(path))
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise ImageIOError(f"Failed to write {os.fspath(path)}: {exc}") from exc
    logger.debug("wrote %s (%d bytes)", os.fspath(path), len(data))
