from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..codec.types import CHANNELS, Image
from ..compositor import (
    BLEND_MODES,
    add_channel,
    combine_channels,
    compose_quadrants,
    extract_channel,
    flip_image,
    scale_channel,
    set_channel,
    tile_images,
)
from ..errors import PipelineError

Params = Mapping[str, Any]
OperationFn = Callable[[Sequence[Image], Params], Image]
INTEGER_PARAMS = ("amount", "factor", "value")


@dataclass(frozen=True)
class Operation:
    name: str
    arity: int
    fn: OperationFn
    required_params: Tuple[str, ...] = ()

    def check(self, inputs: Sequence[Any], params: Params) -> None:
        if len(inputs) != self.arity:
            raise PipelineError(f"Operation '{self.name}' takes {self.arity} input(s), got {len(inputs)}")
        missing = [key for key in self.required_params if key not in params]
        if missing:
            raise PipelineError(f"Operation '{self.name}' is missing params: {', '.join(missing)}")
        if "channel" in params and params["channel"] not in CHANNELS:
            raise PipelineError(
                f"Operation '{self.name}' got unknown channel {params['channel']!r}, expected one of: {', '.join(CHANNELS)}"
            )
        for key in INTEGER_PARAMS:
            if key in params:
                try:
                    int(params[key])
                except (TypeError, ValueError) as exc:
                    raise PipelineError(f"Operation '{self.name}' param '{key}' must be an integer: {exc}") from exc

    def apply(self, images: Sequence[Image], params: Params) -> Image:
        self.check(images, params)
        return self.fn(images, params)


def _blend_op(name: str) -> OperationFn:
    mode = BLEND_MODES[name]

    def run(images: Sequence[Image], params: Params) -> Image:
        top, bottom = images
        return top.derive(mode(top.pixels, bottom.pixels))

    return run


def _add_channel(images: Sequence[Image], params: Params) -> Image:
    image = images[0]
    return image.derive(add_channel(image.pixels, params["channel"], int(params["amount"])))


def _scale_channel(images: Sequence[Image], params: Params) -> Image:
    image = images[0]
    return image.derive(scale_channel(image.pixels, params["channel"], int(params["factor"])))


def _set_channel(images: Sequence[Image], params: Params) -> Image:
    image = images[0]
    return image.derive(set_channel(image.pixels, params["channel"], int(params["value"])))


def _extract_channel(images: Sequence[Image], params: Params) -> Image:
    image = images[0]
    return image.derive(extract_channel(image.pixels, params["channel"]))


def _combine_channels(images: Sequence[Image], params: Params) -> Image:
    blue, green, red = images
    return blue.derive(combine_channels(blue.pixels, green.pixels, red.pixels))


def _flip(images: Sequence[Image], params: Params) -> Image:
    return flip_image(images[0])


def _quadrants(images: Sequence[Image], params: Params) -> Image:
    return compose_quadrants(images)


def _tile(images: Sequence[Image], params: Params) -> Image:
    return tile_images(images)


class OperationRegistry:
    def __init__(self, operations: Optional[List[Operation]] = None) -> None:
        if operations is None:
            operations = [Operation(name, 2, _blend_op(name)) for name in BLEND_MODES]
            operations += [
                Operation("add_channel", 1, _add_channel, ("channel", "amount")),
                Operation("scale_channel", 1, _scale_channel, ("channel", "factor")),
                Operation("set_channel", 1, _set_channel, ("channel", "value")),
                Operation("extract_channel", 1, _extract_channel, ("channel",)),
                Operation("combine_channels", 3, _combine_channels),
                Operation("flip", 1, _flip),
                Operation("quadrants", 4, _quadrants),
                Operation("tile", 4, _tile),
            ]
        self._operations: Dict[str, Operation] = {op.name: op for op in operations}

    @property
    def names(self) -> List[str]:
        return sorted(self._operations)

    def get(self, name: str) -> Operation:
        operation = self._operations.get(name)
        if not operation:
            raise PipelineError(f"Unknown operation '{name}'")
        return operation


DEFAULT_REGISTRY = OperationRegistry()
