#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Общие фикстуры тестов: синтетические изображения.
"""

import numpy as np
import pytest
from models.pixel_image import PixelImage

# Квадрат 16x16 (строки и столбцы 12..27) на изображении 40x40
SQUARE_CORNERS = [(12, 12), (27, 12), (12, 27), (27, 27)]


def make_square(size=40, start=12, end=28, value=255):
    pixels = np.zeros((size, size), dtype=np.uint8)
    pixels[start:end, start:end] = value
    return pixels


@pytest.fixture
def square_pixels():
    return make_square()


@pytest.fixture
def square_image(square_pixels):
    return PixelImage.from_array(square_pixels)


@pytest.fixture
def uniform_image():
    return PixelImage.from_array(np.full((24, 24), 137, dtype=np.uint8))


@pytest.fixture
def random_image():
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(48, 56), dtype=np.uint8)
    # Несколько контрастных блоков, чтобы были сильные углы
    pixels[8:20, 10:22] = 255
    pixels[28:40, 30:44] = 0
    return PixelImage.from_array(pixels)
