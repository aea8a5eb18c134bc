from __future__ import annotations

from typing import List, Sequence, Tuple

from ..codec.types import Header, Image, Pixel
from ..errors import DimensionMismatchError

TOP_LEFT = 0
TOP_RIGHT = 1
BOTTOM_LEFT = 2
BOTTOM_RIGHT = 3


def _require_geometry(pixels: Sequence[Pixel], width: int, height: int) -> None:
    if len(pixels) != width * height:
        raise DimensionMismatchError(
            f"Expected {width}x{height}={width * height} pixels, got {len(pixels)}"
        )


def flip_vertical(pixels: Sequence[Pixel], width: int, height: int) -> List[Pixel]:
    """Reverse row order; pixels within a row keep their columns."""
    _require_geometry(pixels, width, height)
    out: List[Pixel] = []
    for row in range(height - 1, -1, -1):
        out.extend(pixels[row * width : (row + 1) * width])
    return out


def flip_image(image: Image) -> Image:
    return image.derive(flip_vertical(image.pixels, image.width, image.height))


def quadrant_of(row: int, col: int, width: int, height: int) -> int:
    """Index of the source image owning cell ``(row, col)``."""
    if col < width // 2:
        return TOP_LEFT if row < height // 2 else BOTTOM_LEFT
    return TOP_RIGHT if row < height // 2 else BOTTOM_RIGHT


def _shared_size(images: Sequence[Image]) -> Tuple[int, int]:
    if len(images) != 4:
        raise ValueError(f"Expected 4 images, got {len(images)}")
    width = images[0].width
    height = images[0].height
    for index, image in enumerate(images):
        if (image.width, image.height) != (width, height):
            raise DimensionMismatchError(
                f"Image {index} is {image.width}x{image.height}, expected {width}x{height}"
            )
        _require_geometry(image.pixels, width, height)
    return width, height


def compose_quadrants(images: Sequence[Image]) -> Image:
    """Build one image whose four quadrants come from four equal-sized sources.

    Every output cell is copied from the cell at the same index in the source
    that owns its quadrant, so the result keeps the sources' dimensions.
    """
    width, height = _shared_size(images)
    out: List[Pixel] = []
    for row in range(height):
        for col in range(width):
            source = images[quadrant_of(row, col, width, height)]
            out.append(source.pixels[row * width + col])
    return Image(Header.for_size(width, height), out)


def tile_images(images: Sequence[Image]) -> Image:
    """Lay four equal-sized images out in a 2x2 grid of double the size."""
    width, height = _shared_size(images)
    out: List[Pixel] = []
    for left, right in ((images[TOP_LEFT], images[TOP_RIGHT]), (images[BOTTOM_LEFT], images[BOTTOM_RIGHT])):
        for row in range(height):
            start = row * width
            out.extend(left.pixels[start : start + width])
            out.extend(right.pixels[start : start + width])
    return Image(Header.for_size(width * 2, height * 2), out)
