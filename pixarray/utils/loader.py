"""Image loading and saving utilities using Pillow, with NumPy arrays.

Pixel data always travels as RGBA `uint8` arrays of shape (H, W, 4). These
helpers are the only place where Pillow touches the filesystem.
"""
from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image


Array = np.ndarray

# Formats Pillow cannot write with an alpha band.
ALPHA_LESS_FORMATS = frozenset({".jpg", ".jpeg"})

# Greyscale modes wider than 8 bits; Pillow clips these when converting to RGBA.
WIDE_GREY_MODES = frozenset({"I", "I;16", "I;16L", "I;16B", "I;16N"})


def load_rgba(path: Union[str, Path]) -> Array:
    """Load an image file into an RGBA NumPy array (uint8).

    Parameters
    ----------
    path : str | Path
        Path to an image supported by Pillow.

    Returns
    -------
    np.ndarray
        C-contiguous array of shape (H, W, 4), dtype=uint8, in RGBA order.
        16-bit greyscale samples are scaled to 8 bits by keeping the high byte.
    """
    p = Path(path)
    with Image.open(p) as im:
        if im.mode in WIDE_GREY_MODES:
            wide = np.array(im).astype(np.int64)
            im = Image.fromarray(np.clip(wide >> 8, 0, 255).astype(np.uint8))
        im = im.convert("RGBA")
        arr = np.array(im, dtype=np.uint8)
    return np.ascontiguousarray(arr)


def save_rgba(arr: Array, path: Union[str, Path]) -> None:
    """Save an RGBA NumPy array (uint8) to an image file via Pillow.

    Parameters
    ----------
    arr : np.ndarray
        Array of shape (H, W, 4), dtype=uint8.
    path : str | Path
        Output file path. The format is inferred from the extension. For
        formats without alpha support the alpha band is dropped.
    """
    if not isinstance(arr, np.ndarray):
        raise TypeError("arr must be a NumPy array")
    if arr.dtype != np.uint8:
        raise TypeError("arr must have dtype=uint8")
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError("arr must have shape (H, W, 4)")

    p = Path(path)
    im = Image.fromarray(np.ascontiguousarray(arr))
    if p.suffix.lower() in ALPHA_LESS_FORMATS:
        im = im.convert("RGB")
    im.save(p)
