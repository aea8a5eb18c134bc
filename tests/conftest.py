from __future__ import annotations

from typing import List, Sequence, Tuple

import pytest

from tgacomp.codec import Header, Image, Pixel


def solid(width: int, height: int, bgr: Tuple[int, int, int]) -> Image:
    return Image(Header.for_size(width, height), [Pixel(*bgr) for _ in range(width * height)])


def gray_ramp(width: int, height: int) -> Image:
    pixels: List[Pixel] = [Pixel.gray(i % 256) for i in range(width * height)]
    return Image(Header.for_size(width, height), pixels)


def pixels_of(values: Sequence[Tuple[int, int, int]]) -> List[Pixel]:
    return [Pixel(*value) for value in values]


@pytest.fixture
def write_image(tmp_path):
    from tgacomp.codec import write_tga

    def _write(relative: str, image: Image) -> str:
        path = tmp_path / relative
        write_tga(str(path), image)
        return str(path)

    return _write
