"""Asynchronous conversion between image files and flat pixel arrays.

Each operation is a single decode or encode call on the codec wrapped around a
layout conversion. Codec calls do blocking file I/O, so they run in the event
loop's default executor; the layout work is done on the loop itself.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Optional, TypeVar

import numpy as np

from .codec import ImageCodec, PathLike, PillowCodec, PixelBuffer
from .errors import DecodeError, EncodeError, PixelArrayError
from .utils.layout import (
    IntVector,
    flat_rgb_to_rgba,
    packed_to_rgba,
    rgba_to_flat_rgb,
    rgba_to_packed,
)

T = TypeVar("T")

# Failures an injected codec may raise for a bad path, an unsupported format
# or a buffer it cannot allocate.
_CODEC_ERRORS = (OSError, ValueError, KeyError, MemoryError)


async def _run_blocking(func: Callable[..., T], *args) -> T:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func, *args)


class PixelBufferConverter:
    """Convert image files to RGB / packed pixel arrays and back.

    Parameters
    ----------
    codec : ImageCodec | None
        Codec used for all file access. Defaults to ``PillowCodec``.
    """

    def __init__(self, codec: Optional[ImageCodec] = None) -> None:
        self.codec: ImageCodec = codec if codec is not None else PillowCodec()

    async def _decode(self, path: PathLike) -> PixelBuffer:
        try:
            return await _run_blocking(self.codec.decode, path)
        except PixelArrayError:
            raise
        except _CODEC_ERRORS as exc:
            raise DecodeError(f"Cannot decode image {path}: {exc}", path) from exc

    async def _encode(self, rgba: np.ndarray, path: PathLike) -> None:
        height, width = rgba.shape[:2]
        try:
            buffer = self.codec.create(width, height)
            buffer.data[...] = rgba
            await _run_blocking(self.codec.encode, buffer, path)
        except PixelArrayError:
            raise
        except _CODEC_ERRORS as exc:
            raise EncodeError(f"Cannot encode image {path}: {exc}", path) from exc

    async def decode_to_flat_rgb(self, path: PathLike) -> np.ndarray:
        """Read an image and return [R0, G0, B0, R1, ...] as uint8, alpha dropped."""
        buffer = await self._decode(path)
        return rgba_to_flat_rgb(buffer.data)

    async def encode_from_flat_rgb(self, array: IntVector, width: int, path: PathLike) -> None:
        """Write a flat RGB array as an opaque image ``width`` pixels wide.

        The height is ``len(array) // (width * 3)``. The length must be a whole
        number of rows; otherwise ``EncodeError`` is raised and nothing is
        written.
        """
        try:
            rgba = flat_rgb_to_rgba(array, width)
        except ValueError as exc:
            raise EncodeError(f"Invalid RGB array for {path}: {exc}", path) from exc
        await self._encode(rgba, path)

    async def decode_to_packed_pixels(self, path: PathLike) -> np.ndarray:
        """Read an image and return one (R << 16) | (G << 8) | B value per pixel (uint32)."""
        buffer = await self._decode(path)
        return rgba_to_packed(buffer.data)

    async def encode_from_packed_pixels(self, array: IntVector, width: int, path: PathLike) -> None:
        """Write packed 24-bit pixels as an opaque image ``width`` pixels wide.

        Bits above bit 23 are masked off silently.
        """
        try:
            rgba = packed_to_rgba(array, width)
        except ValueError as exc:
            raise EncodeError(f"Invalid pixel array for {path}: {exc}", path) from exc
        await self._encode(rgba, path)


_default: Optional[PixelBufferConverter] = None


def _default_converter() -> PixelBufferConverter:
    global _default
    if _default is None:
        _default = PixelBufferConverter()
    return _default


async def decode_to_flat_rgb(path: PathLike) -> np.ndarray:
    return await _default_converter().decode_to_flat_rgb(path)


async def encode_from_flat_rgb(array: IntVector, width: int, path: PathLike) -> None:
    await _default_converter().encode_from_flat_rgb(array, width, path)


async def decode_to_packed_pixels(path: PathLike) -> np.ndarray:
    return await _default_converter().decode_to_packed_pixels(path)


async def encode_from_packed_pixels(array: IntVector, width: int, path: PathLike) -> None:
    await _default_converter().encode_from_packed_pixels(array, width, path)


__all__ = [
    "PixelBufferConverter",
    "decode_to_flat_rgb",
    "encode_from_flat_rgb",
    "decode_to_packed_pixels",
    "encode_from_packed_pixels",
]
