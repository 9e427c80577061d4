"""Exceptions raised by pixarray.

Validation problems and failures from the underlying image library are both
reported through these types. The original library exception is always kept
as ``__cause__``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class PixelArrayError(Exception):
    """Base class for every error raised by pixarray."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.path = path


class DecodeError(PixelArrayError):
    """An image could not be read: missing file, unreadable path or unknown format."""


class EncodeError(PixelArrayError):
    """An image could not be written, or the array does not describe a valid image."""


__all__ = ["PixelArrayError", "DecodeError", "EncodeError"]
