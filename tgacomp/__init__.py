from .codec import Header, Image, Pixel, decode, encode, read_tga, write_tga
from .errors import DimensionMismatchError, ImageIOError, PipelineError, TgaError, TruncatedError

__version__ = "0.1.0"

__all__ = [
    "decode",
    "DimensionMismatchError",
    "encode",
    "Header",
    "Image",
    "ImageIOError",
    "Pixel",
    "PipelineError",
    "read_tga",
    "TgaError",
    "TruncatedError",
    "write_tga",
]
