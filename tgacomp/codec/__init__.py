from .tga import decode, encode, pack_pixels, read_tga, unpack_pixels, write_tga
from .types import CHANNELS, HEADER_SIZE, Header, Image, Pixel

__all__ = [
    "CHANNELS",
    "decode",
    "encode",
    "Header",
    "HEADER_SIZE",
    "Image",
    "pack_pixels",
    "Pixel",
    "read_tga",
    "unpack_pixels",
    "write_tga",
]
