from __future__ import annotations

import os
from typing import List

from PIL import Image as PILImage

from ..codec.types import Header, Image, Pixel
from ..compositor.geometry import flip_vertical
from ..errors import DimensionMismatchError, ImageIOError


def _top_down(image: Image) -> List[Pixel]:
    if image.header.top_left_origin:
        return list(image.pixels)
    return flip_vertical(image.pixels, image.width, image.height)


def to_pil_image(image: Image) -> PILImage.Image:
    """Convert to an RGB Pillow image oriented top row first."""
    if len(image.pixels) != image.width * image.height:
        raise DimensionMismatchError(
            f"Header says {image.width}x{image.height} but image has {len(image.pixels)} pixels"
        )
    data = bytearray()
    for pixel in _top_down(image):
        data += bytes((pixel.red, pixel.green, pixel.blue))
    return PILImage.frombytes("RGB", (image.width, image.height), bytes(data))


def from_pil_image(img: PILImage.Image) -> Image:
    """Build a bottom-up 24-bit TGA image from any Pillow image."""
    if img.mode != "RGB":
        img = img.convert("RGB")
    width, height = img.size
    raw = img.tobytes()
    rows = []
    for row in range(height):
        start = row * width * 3
        rows.append([Pixel(raw[i + 2], raw[i + 1], raw[i]) for i in range(start, start + width * 3, 3)])
    pixels: List[Pixel] = []
    for row in reversed(rows):
        pixels.extend(row)
    return Image(Header.for_size(width, height), pixels)


def save_preview(image: Image, path: str) -> None:
    """Write ``image`` in the format implied by the file extension (PNG by default)."""
    img = to_pil_image(image)
    try:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        img.save(path)
    except OSError as exc:
        raise ImageIOError(f"Failed to write preview {path}: {exc}") from exc


def load_image(path: str) -> Image:
    """Load any Pillow-readable file as a TGA image."""
    try:
        with PILImage.open(path) as img:
            return from_pil_image(img)
    except OSError as exc:
        raise ImageIOError(f"Failed to read {path}: {exc}") from exc
