#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Тесты приведения к серому.
"""

import numpy as np
import pytest
from models.grayscale import to_grayscale
from models.pixel_image import PixelFormat, PixelImage, UnsupportedFormatError


def test_indexed8_reused_without_copy():
    pixels = np.arange(12, dtype=np.uint8).reshape(3, 4)
    image = PixelImage.from_array(pixels)

    gray = to_grayscale(image)

    assert np.shares_memory(gray, pixels)
    assert not gray.flags.writeable
    assert np.array_equal(gray, pixels)


def test_bt709_weights_truncate():
    # Порядок хранения B, G, R
    pixels = np.array([[[0, 0, 200], [0, 100, 0], [100, 0, 0], [100, 100, 200]]], dtype=np.uint8)
    gray = to_grayscale(PixelImage.from_array(pixels))

    assert gray.tolist() == [[42, 71, 7, 121]]


@pytest.mark.parametrize("pixel_format", [PixelFormat.RGB32, PixelFormat.ARGB32])
def test_fourth_byte_ignored(pixel_format):
    opaque = np.array([[[0, 0, 200, 255]]], dtype=np.uint8)
    clear = np.array([[[0, 0, 200, 0]]], dtype=np.uint8)

    a = to_grayscale(PixelImage.from_array(opaque, pixel_format))
    b = to_grayscale(PixelImage.from_array(clear, pixel_format))

    assert a.tolist() == b.tolist() == [[42]]


def test_rgb24_with_padded_stride():
    # Ширина 2 (6 байт), шаг 8
    buffer = bytes([0, 0, 200, 0, 100, 0, 7, 7,
                    100, 0, 0, 0, 0, 0])
    image = PixelImage(buffer, 2, 2, 8, PixelFormat.RGB24)

    assert to_grayscale(image).tolist() == [[42, 71], [7, 0]]


def test_unsupported_format_raises():
    image = PixelImage(bytes(16), 2, 2, 8, PixelFormat.RGB16_565)
    with pytest.raises(UnsupportedFormatError):
        to_grayscale(image)
