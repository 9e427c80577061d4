"""Utility functions for pixarray.

Modules:
- loader: Load/save Pillow <-> NumPy RGBA conversion utilities.
- layout: Conversions between RGBA buffers, flat RGB and packed pixel arrays.
"""
from .loader import load_rgba, save_rgba
from .layout import (
    pack_rgb,
    unpack_rgb,
    rgba_to_flat_rgb,
    rgba_to_packed,
    flat_rgb_to_rgba,
    packed_to_rgba,
)

__all__ = [
    "load_rgba",
    "save_rgba",
    "pack_rgb",
    "unpack_rgb",
    "rgba_to_flat_rgb",
    "rgba_to_packed",
    "flat_rgb_to_rgba",
    "packed_to_rgba",
]
