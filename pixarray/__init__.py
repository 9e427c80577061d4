from __future__ import annotations

from .codec import ImageCodec, PillowCodec, PixelBuffer  # noqa: F401
from .converter import (  # noqa: F401
    PixelBufferConverter,
    decode_to_flat_rgb,
    decode_to_packed_pixels,
    encode_from_flat_rgb,
    encode_from_packed_pixels,
)
from .errors import DecodeError, EncodeError, PixelArrayError  # noqa: F401
from .utils.layout import pack_rgb, unpack_rgb  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "PixelBufferConverter",
    "decode_to_flat_rgb",
    "encode_from_flat_rgb",
    "decode_to_packed_pixels",
    "encode_from_packed_pixels",
    "ImageCodec",
    "PillowCodec",
    "PixelBuffer",
    "PixelArrayError",
    "DecodeError",
    "EncodeError",
    "pack_rgb",
    "unpack_rgb",
]
