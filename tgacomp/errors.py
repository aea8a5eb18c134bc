from __future__ import annotations


class TgaError(Exception):
    """Base class for errors raised by tgacomp."""


class TruncatedError(TgaError, ValueError):
    """Input is shorter than the fixed TGA header."""


class DimensionMismatchError(TgaError, ValueError):
    """Pixel buffers that must share a geometry do not."""


class ImageIOError(TgaError, RuntimeError):
    """Reading or writing an image file failed."""


class PipelineError(TgaError, ValueError):
    """A pipeline description cannot be executed."""


__all__ = [
    "DimensionMismatchError",
    "ImageIOError",
    "PipelineError",
    "TgaError",
    "TruncatedError",
]
