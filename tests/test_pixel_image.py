#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Тесты модели изображения с шагом строки.
"""

import numpy as np
import pytest
from models.pixel_image import (
    PixelFormat, PixelImage, UnsupportedFormatError, is_supported_format,
)


def test_rows_skip_stride_padding():
    buffer = bytes([1, 2, 3, 99, 4, 5, 6])
    image = PixelImage(buffer, 3, 2, 4, PixelFormat.INDEXED8)

    assert image.rows().tolist() == [[1, 2, 3], [4, 5, 6]]
    assert image.offset(2, 1) == 6
    assert image.pixel(2, 1) == (6,)


def test_offset_outside_image_raises():
    image = PixelImage(bytes(6), 3, 2, 3, PixelFormat.INDEXED8)
    with pytest.raises(IndexError):
        image.offset(3, 0)
    with pytest.raises(IndexError):
        image.offset(0, -1)


def test_multibyte_pixel_offsets():
    pixels = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(2, 3, 4)
    image = PixelImage.from_array(pixels, PixelFormat.RGB32)

    assert image.stride == 12
    assert image.offset(1, 1) == 16
    assert image.pixel(1, 1) == (16, 17, 18, 19)
    assert image.channels().shape == (2, 3, 4)


def test_from_array_infers_format():
    assert PixelImage.from_array(np.zeros((4, 5), np.uint8)).pixel_format is PixelFormat.INDEXED8
    assert PixelImage.from_array(np.zeros((4, 5, 3), np.uint8)).pixel_format is PixelFormat.RGB24
    assert PixelImage.from_array(np.zeros((4, 5, 4), np.uint8)).pixel_format is PixelFormat.ARGB32
    with pytest.raises(ValueError):
        PixelImage.from_array(np.zeros((4, 5, 2), np.uint8))


def test_caller_buffer_is_not_locked_or_copied():
    pixels = np.zeros((4, 5), dtype=np.uint8)
    image = PixelImage.from_array(pixels)

    assert pixels.flags.writeable
    assert not image.rows().flags.writeable
    assert np.shares_memory(image.rows(), pixels)


@pytest.mark.parametrize("width,height,stride,size", [
    (0, 2, 4, 8),     # пустая ширина
    (3, 2, 2, 8),     # шаг меньше строки
    (3, 2, 4, 6),     # буфер короче последней строки
])
def test_invalid_geometry_rejected(width, height, stride, size):
    with pytest.raises(ValueError):
        PixelImage(bytes(size), width, height, stride, PixelFormat.INDEXED8)


def test_supported_formats():
    assert is_supported_format(PixelFormat.INDEXED8)
    assert is_supported_format(PixelFormat.ARGB32)
    assert not is_supported_format(PixelFormat.RGB48)
    assert not is_supported_format("yuv422")


def test_unsupported_format_error_is_value_error():
    error = UnsupportedFormatError(PixelFormat.RGB16_565)
    assert isinstance(error, ValueError)
    assert error.pixel_format is PixelFormat.RGB16_565


def test_strided_array_buffer_rejected():
    pixels = np.arange(40, dtype=np.uint8).reshape(4, 10)
    with pytest.raises(ValueError):
        PixelImage(pixels[:, ::2], 5, 4, 5, PixelFormat.INDEXED8)

    # from_array сам делает массив непрерывным
    image = PixelImage.from_array(pixels[:, ::2])
    assert image.stride == 5
    assert image.rows().tolist() == pixels[:, ::2].tolist()
