from .blend import BLEND_MODES, blend, multiply, overlay, screen, subtract
from .channels import (
    add_channel,
    combine_channels,
    extract_channel,
    scale_channel,
    set_channel,
    split_channels,
)
from .geometry import compose_quadrants, flip_image, flip_vertical, quadrant_of, tile_images

__all__ = [
    "add_channel",
    "blend",
    "BLEND_MODES",
    "combine_channels",
    "compose_quadrants",
    "extract_channel",
    "flip_image",
    "flip_vertical",
    "multiply",
    "overlay",
    "quadrant_of",
    "scale_channel",
    "screen",
    "set_channel",
    "split_channels",
    "subtract",
    "tile_images",
]
