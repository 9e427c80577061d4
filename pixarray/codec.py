"""Image codec interface and its Pillow implementation.

The converter never talks to an image library directly. It goes through an
``ImageCodec``: anything with ``decode``, ``encode`` and ``create`` methods
operating on ``PixelBuffer`` objects.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union

import numpy as np
from PIL import Image

from .errors import DecodeError, EncodeError
from .utils.layout import BUFFER_CHANNELS, OPAQUE_ALPHA
from .utils.loader import load_rgba, save_rgba

PathLike = Union[str, Path]


@dataclass
class PixelBuffer:
    """A width x height grid of RGBA bytes, row-major, without padding."""

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self) -> None:
        expected = (self.height, self.width, BUFFER_CHANNELS)
        if self.data.dtype != np.uint8 or self.data.shape != expected:
            raise ValueError(
                f"data must be uint8 with shape {expected}, "
                f"got {self.data.dtype} {self.data.shape}"
            )

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "PixelBuffer":
        height, width = rgba.shape[:2]
        return cls(width=width, height=height, data=rgba)


class ImageCodec(Protocol):
    def decode(self, path: PathLike) -> PixelBuffer:
        ...

    def encode(self, buffer: PixelBuffer, path: PathLike) -> None:
        ...

    def create(self, width: int, height: int) -> PixelBuffer:
        ...


# Everything Pillow raises for an unreadable, unknown or oversized image.
_PILLOW_ERRORS = (OSError, ValueError, KeyError, Image.DecompressionBombError)


class PillowCodec:
    """Decode and encode any format Pillow supports.

    Pillow failures are reported as ``DecodeError`` / ``EncodeError``.
    """

    def decode(self, path: PathLike) -> PixelBuffer:
        try:
            return PixelBuffer.from_array(load_rgba(path))
        except _PILLOW_ERRORS as exc:
            raise DecodeError(f"Cannot decode image {path}: {exc}", path) from exc

    def encode(self, buffer: PixelBuffer, path: PathLike) -> None:
        try:
            save_rgba(buffer.data, path)
        except _PILLOW_ERRORS as exc:
            raise EncodeError(f"Cannot encode image {path}: {exc}", path) from exc

    def create(self, width: int, height: int) -> PixelBuffer:
        data = np.zeros((height, width, BUFFER_CHANNELS), dtype=np.uint8)
        data[:, :, 3] = OPAQUE_ALPHA
        return PixelBuffer(width=width, height=height, data=data)


__all__ = ["PixelBuffer", "ImageCodec", "PillowCodec"]
