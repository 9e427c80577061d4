"""Pixel layout conversions operating on NumPy arrays.

Three layouts are involved:

- RGBA buffer: (H, W, 4) uint8, row-major, as produced by the codec.
- Flat RGB: 1-D uint8 of length H*W*3, laid out [R0, G0, B0, R1, ...].
- Packed: 1-D uint32 of length H*W, each element (R << 16) | (G << 8) | B.

Flat and packed arrays carry no dimensions; the width is supplied when
turning them back into a buffer and the height is derived from the length.
Alpha is dropped on the way out and forced to fully opaque on the way in.
"""
from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np

Array = np.ndarray
IntVector = Union[Array, Sequence[int]]

CHANNELS = 3
BUFFER_CHANNELS = 4
OPAQUE_ALPHA = 255
BYTE_MASK = 0xFF
RGB_MASK = 0xFFFFFF


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack one pixel into a 24-bit integer. Each channel is masked to a byte."""
    return ((r & BYTE_MASK) << 16) | ((g & BYTE_MASK) << 8) | (b & BYTE_MASK)


def unpack_rgb(value: int) -> Tuple[int, int, int]:
    """Split a packed pixel into (r, g, b). Bits above bit 23 are ignored."""
    return (value >> 16) & BYTE_MASK, (value >> 8) & BYTE_MASK, value & BYTE_MASK


def _check_rgba(rgba: Array) -> None:
    if not isinstance(rgba, np.ndarray) or rgba.ndim != 3 or rgba.shape[2] != BUFFER_CHANNELS:
        raise ValueError("rgba must be an RGBA array with shape (H, W, 4)")


def _is_int(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def as_int_vector(values: IntVector, mask: int) -> Array:
    """Coerce ``values`` to a 1-D int64 array with every element ANDed with ``mask``.

    NumPy integer arrays are masked with one vectorised AND. Python sequences
    are masked element by element, so integers outside the int64 range are
    reduced instead of falling back to an object or float dtype.

    Raises
    ------
    ValueError
        If the input is not one-dimensional, is empty, or holds non-integers.
    """
    if isinstance(values, np.ndarray):
        arr = values
    else:
        arr = np.asarray(values, dtype=object)
    if arr.ndim != 1:
        raise ValueError(f"expected a 1-D array, got {arr.ndim} dimensions")
    if arr.size == 0:
        raise ValueError("array is empty")
    if arr.dtype.kind in "iu":
        return arr.astype(np.int64, copy=False) & mask
    if arr.dtype.kind != "O" or not all(_is_int(v) for v in arr):
        raise ValueError(f"array must hold integers, got dtype {arr.dtype}")
    return np.fromiter((int(v) & mask for v in arr), dtype=np.int64, count=arr.size)


def derive_height(length: int, width: int, channels: int = 1) -> int:
    """Return the image height implied by an array of ``length`` elements.

    Parameters
    ----------
    length : int
        Number of elements in the flat or packed array.
    width : int
        Image width in pixels (>=1).
    channels : int
        Elements per pixel: 3 for flat RGB, 1 for packed.

    Raises
    ------
    ValueError
        If ``width`` is not positive or ``length`` is not a whole number of rows.
    """
    if not _is_int(width) or width < 1:
        raise ValueError(f"width must be an integer >= 1, got {width!r}")
    row = width * channels
    if length == 0 or length % row != 0:
        raise ValueError(
            f"array length {length} is not a multiple of width*{channels} ({row})"
        )
    return length // row


def rgba_to_flat_rgb(rgba: Array) -> Array:
    """Drop alpha and flatten an RGBA buffer to [R0, G0, B0, R1, ...] (uint8)."""
    _check_rgba(rgba)
    return rgba[:, :, :CHANNELS].astype(np.uint8).reshape(-1)


def rgba_to_packed(rgba: Array) -> Array:
    """Pack each pixel of an RGBA buffer into (R << 16) | (G << 8) | B (uint32)."""
    _check_rgba(rgba)
    r = rgba[:, :, 0].astype(np.uint32)
    g = rgba[:, :, 1].astype(np.uint32)
    b = rgba[:, :, 2].astype(np.uint32)
    return ((r << 16) | (g << 8) | b).reshape(-1)


def flat_rgb_to_rgba(values: IntVector, width: int) -> Array:
    """Build an opaque RGBA buffer of the given width from a flat RGB array.

    Values are masked to one byte before they are stored.
    """
    flat = as_int_vector(values, BYTE_MASK)
    height = derive_height(flat.size, width, CHANNELS)
    out = np.empty((height, width, BUFFER_CHANNELS), dtype=np.uint8)
    out[:, :, :CHANNELS] = flat.reshape(height, width, CHANNELS)
    out[:, :, 3] = OPAQUE_ALPHA
    return out


def packed_to_rgba(values: IntVector, width: int) -> Array:
    """Build an opaque RGBA buffer of the given width from packed pixels.

    Bits above bit 23 are discarded.
    """
    packed = as_int_vector(values, RGB_MASK)
    height = derive_height(packed.size, width)
    grid = packed.reshape(height, width)
    out = np.empty((height, width, BUFFER_CHANNELS), dtype=np.uint8)
    out[:, :, 0] = (grid >> 16) & BYTE_MASK
    out[:, :, 1] = (grid >> 8) & BYTE_MASK
    out[:, :, 2] = grid & BYTE_MASK
    out[:, :, 3] = OPAQUE_ALPHA
    return out
