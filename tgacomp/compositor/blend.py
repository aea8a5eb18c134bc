from __future__ import annotations

import math
from typing import Callable, List, Sequence

from ..codec.types import Pixel
from ..errors import DimensionMismatchError

ChannelRule = Callable[[int, int], int]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def clamp(value: int) -> int:
    return max(0, min(255, value))


def require_same_length(*layers: Sequence[Pixel]) -> int:
    """Return the shared length of ``layers`` or raise DimensionMismatchError."""
    lengths = [len(layer) for layer in layers]
    if len(set(lengths)) > 1:
        raise DimensionMismatchError(f"Layers have different dimensions: {lengths}")
    return lengths[0] if lengths else 0


def blend(top: Sequence[Pixel], bottom: Sequence[Pixel], rule: ChannelRule) -> List[Pixel]:
    """Apply ``rule(top_value, bottom_value)`` to every channel of every pixel pair."""
    require_same_length(top, bottom)
    out: List[Pixel] = []
    for upper, lower in zip(top, bottom):
        out.append(
            Pixel(
                clamp(rule(upper.blue, lower.blue)),
                clamp(rule(upper.green, lower.green)),
                clamp(rule(upper.red, lower.red)),
            )
        )
    return out


def multiply_channel(top: int, bottom: int) -> int:
    return round_half_up(top * bottom / 255.0)


def subtract_channel(top: int, bottom: int) -> int:
    return max(bottom - top, 0)


def screen_channel(top: int, bottom: int) -> int:
    return 255 - round_half_up((255 - top) * (255 - bottom) / 255.0)


def overlay_channel(top: int, bottom: int) -> int:
    # Branch on this channel's bottom value; 128 takes the screen side.
    if bottom < 128:
        return round_half_up(2.0 * top * bottom / 255.0)
    return round_half_up(255.0 - 2.0 * (255 - top) * (255 - bottom) / 255.0)


def multiply(top: Sequence[Pixel], bottom: Sequence[Pixel]) -> List[Pixel]:
    """Darken: ``top * bottom / 255`` per channel."""
    return blend(top, bottom, multiply_channel)


def subtract(top: Sequence[Pixel], bottom: Sequence[Pixel]) -> List[Pixel]:
    """Remove ``top`` from ``bottom``, flooring at zero."""
    return blend(top, bottom, subtract_channel)


def screen(top: Sequence[Pixel], bottom: Sequence[Pixel]) -> List[Pixel]:
    """Lighten: invert both layers, multiply, invert the result."""
    return blend(top, bottom, screen_channel)


def overlay(top: Sequence[Pixel], bottom: Sequence[Pixel]) -> List[Pixel]:
    """Multiply where ``bottom`` is dark, screen where it is light (doubled)."""
    return blend(top, bottom, overlay_channel)


BLEND_MODES = {
    "multiply": multiply,
    "subtract": subtract,
    "screen": screen,
    "overlay": overlay,
}
