from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Sequence, Tuple

from ..codec.types import CHANNELS, Pixel
from .blend import clamp, require_same_length


def _check_channel(channel: str) -> None:
    if channel not in CHANNELS:
        raise ValueError(f"Unknown channel '{channel}', expected one of: {', '.join(CHANNELS)}")


def map_channel(pixels: Sequence[Pixel], channel: str, fn: Callable[[int], int]) -> List[Pixel]:
    """Return new pixels with ``channel`` replaced by ``clamp(fn(value))``."""
    _check_channel(channel)
    return [replace(pixel, **{channel: clamp(fn(getattr(pixel, channel)))}) for pixel in pixels]


def add_channel(pixels: Sequence[Pixel], channel: str, amount: int) -> List[Pixel]:
    """Saturating add of ``amount`` to one channel."""
    return map_channel(pixels, channel, lambda value: value + amount)


def scale_channel(pixels: Sequence[Pixel], channel: str, factor: int) -> List[Pixel]:
    """Saturating integer multiply of one channel by ``factor``."""
    return map_channel(pixels, channel, lambda value: value * factor)


def set_channel(pixels: Sequence[Pixel], channel: str, value: int) -> List[Pixel]:
    return map_channel(pixels, channel, lambda _: value)


def extract_channel(pixels: Sequence[Pixel], channel: str) -> List[Pixel]:
    """Replicate one channel into all three, giving a grayscale view of it."""
    _check_channel(channel)
    return [Pixel.gray(pixel.channel(channel)) for pixel in pixels]


def split_channels(pixels: Sequence[Pixel]) -> Tuple[List[Pixel], List[Pixel], List[Pixel]]:
    """Return the red, green and blue grayscale views, in that order."""
    return (
        extract_channel(pixels, "red"),
        extract_channel(pixels, "green"),
        extract_channel(pixels, "blue"),
    )


def combine_channels(
    blue: Sequence[Pixel],
    green: Sequence[Pixel],
    red: Sequence[Pixel],
) -> List[Pixel]:
    """Take blue, green and red from three separate layers at matching indices."""
    require_same_length(blue, green, red)
    return [Pixel(b.blue, g.green, r.red) for b, g, r in zip(blue, green, red)]
