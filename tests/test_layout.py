"""Unit tests for the pixel layout conversions."""
from __future__ import annotations

import numpy as np
import pytest

from pixarray.utils.layout import (
    as_int_vector,
    derive_height,
    flat_rgb_to_rgba,
    pack_rgb,
    packed_to_rgba,
    rgba_to_flat_rgb,
    rgba_to_packed,
    unpack_rgb,
)


def _rgba(pixels: list[tuple[int, int, int, int]], width: int) -> np.ndarray:
    arr = np.array(pixels, dtype=np.uint8)
    return arr.reshape(len(pixels) // width, width, 4)


@pytest.mark.parametrize(
    "rgb",
    [(0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 255, 0), (0, 0, 255), (18, 52, 86)],
)
def test_pack_unpack_recovers_channels(rgb: tuple[int, int, int]) -> None:
    packed = pack_rgb(*rgb)
    assert 0 <= packed <= 0xFFFFFF
    assert unpack_rgb(packed) == rgb


def test_pack_rgb_layout() -> None:
    assert pack_rgb(0x12, 0x34, 0x56) == 0x123456


def test_unpack_ignores_high_bits() -> None:
    assert unpack_rgb(0xAB123456) == (0x12, 0x34, 0x56)


def test_rgba_to_flat_rgb_drops_alpha_in_row_major_order() -> None:
    rgba = _rgba([(1, 2, 3, 0), (4, 5, 6, 128), (7, 8, 9, 255), (10, 11, 12, 7)], width=2)
    flat = rgba_to_flat_rgb(rgba)
    assert flat.dtype == np.uint8
    assert flat.tolist() == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12]


def test_rgba_to_packed() -> None:
    rgba = _rgba([(255, 0, 0, 9), (0, 255, 0, 9), (0, 0, 255, 9)], width=3)
    packed = rgba_to_packed(rgba)
    assert packed.dtype == np.uint32
    assert packed.tolist() == [0xFF0000, 0x00FF00, 0x0000FF]


def test_rgba_conversions_reject_bad_shape() -> None:
    with pytest.raises(ValueError):
        rgba_to_flat_rgb(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        rgba_to_packed(np.zeros((4,), dtype=np.uint8))


def test_flat_rgb_to_rgba_two_by_two() -> None:
    flat = [255, 0, 0, 0, 255, 0, 0, 0, 255, 255, 255, 255]
    rgba = flat_rgb_to_rgba(flat, width=2)
    assert rgba.shape == (2, 2, 4)
    assert rgba.dtype == np.uint8
    assert rgba[0, 0].tolist() == [255, 0, 0, 255]
    assert rgba[0, 1].tolist() == [0, 255, 0, 255]
    assert rgba[1, 0].tolist() == [0, 0, 255, 255]
    assert rgba[1, 1].tolist() == [255, 255, 255, 255]


def test_flat_rgb_to_rgba_masks_to_byte() -> None:
    rgba = flat_rgb_to_rgba([256, -1, 511], width=1)
    assert rgba[0, 0].tolist() == [0, 255, 255, 255]


def test_packed_to_rgba_one_column() -> None:
    rgba = packed_to_rgba(np.array([0xFF0000, 0x00FF00], dtype=np.uint32), width=1)
    assert rgba.shape == (2, 1, 4)
    assert rgba[0, 0].tolist() == [255, 0, 0, 255]
    assert rgba[1, 0].tolist() == [0, 255, 0, 255]


def test_packed_to_rgba_discards_bits_above_24() -> None:
    rgba = packed_to_rgba([0x7F00FF00], width=1)
    assert rgba[0, 0].tolist() == [0, 255, 0, 255]


def test_alpha_is_always_opaque() -> None:
    rng = np.random.default_rng(0)
    flat = rng.integers(0, 256, size=5 * 4 * 3)
    assert (flat_rgb_to_rgba(flat, width=5)[:, :, 3] == 255).all()
    packed = rng.integers(0, 1 << 24, size=20)
    assert (packed_to_rgba(packed, width=4)[:, :, 3] == 255).all()


@pytest.mark.parametrize(
    "length, width, channels, expected",
    [(12, 2, 3, 2), (6, 2, 3, 1), (10, 5, 1, 2), (7, 7, 1, 1)],
)
def test_derive_height(length: int, width: int, channels: int, expected: int) -> None:
    assert derive_height(length, width, channels) == expected


@pytest.mark.parametrize(
    "length, width, channels",
    [(13, 2, 3), (9, 2, 3), (0, 2, 3), (3, 2, 1), (6, 0, 3), (6, -1, 3)],
)
def test_derive_height_rejects_partial_rows(length: int, width: int, channels: int) -> None:
    with pytest.raises(ValueError):
        derive_height(length, width, channels)


def test_derive_height_rejects_non_integer_width() -> None:
    with pytest.raises(ValueError):
        derive_height(6, 1.0, 3)  # type: ignore[arg-type]


def test_as_int_vector_validation() -> None:
    assert as_int_vector((1, 2, 3), 0xFF).dtype == np.int64
    with pytest.raises(ValueError):
        as_int_vector([], 0xFF)
    with pytest.raises(ValueError):
        as_int_vector([[1, 2, 3]], 0xFF)
    with pytest.raises(ValueError):
        as_int_vector([0.5, 1.0, 2.0], 0xFF)
    with pytest.raises(ValueError):
        as_int_vector(np.array([0.5, 1.0]), 0xFF)
    with pytest.raises(ValueError):
        as_int_vector([True, False, True], 0xFF)


def test_as_int_vector_masks_python_ints_beyond_int64() -> None:
    masked = as_int_vector([(1 << 64) | 0xFF0000, -1, 1 << 63], 0xFFFFFF)
    assert masked.dtype == np.int64
    assert masked.tolist() == [0xFF0000, 0xFFFFFF, 0]


def test_as_int_vector_masks_numpy_arrays() -> None:
    values = np.array([0x1FF, 0xFFFFFFFFFFFFFFFF], dtype=np.uint64)
    assert as_int_vector(values, 0xFF).tolist() == [0xFF, 0xFF]


def test_packed_to_rgba_accepts_huge_python_ints() -> None:
    rgba = packed_to_rgba([(1 << 64) | 0xFF0000], width=1)
    assert rgba[0, 0].tolist() == [255, 0, 0, 255]
    rgba = packed_to_rgba([-1, 1 << 63], width=2)
    assert rgba[0].tolist() == [[255, 255, 255, 255], [0, 0, 0, 255]]


def test_flat_rgb_to_rgba_accepts_huge_python_ints() -> None:
    rgba = flat_rgb_to_rgba([(1 << 70) | 7, -2, 1 << 63], width=1)
    assert rgba[0, 0].tolist() == [7, 254, 0, 255]


@pytest.mark.parametrize("width", [True, np.bool_(True)])
def test_derive_height_rejects_bool_width(width: object) -> None:
    with pytest.raises(ValueError):
        derive_height(3, width, 3)  # type: ignore[arg-type]


def test_derive_height_accepts_numpy_int_width() -> None:
    assert derive_height(6, np.int64(2), 3) == 1
