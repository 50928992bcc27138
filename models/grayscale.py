#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Приведение изображения к одноканальной яркости (8 бит).
"""

import numpy as np
from config.settings import LUMA_RED, LUMA_GREEN, LUMA_BLUE, MAX_PIXEL_VALUE, MIN_PIXEL_VALUE
from models.pixel_image import PixelFormat, PixelImage, UnsupportedFormatError


def to_grayscale(image: PixelImage) -> np.ndarray:
    """
    Конвертирует изображение в серое по формуле BT.709.

    Для INDEXED8 возвращается представление исходного буфера без
    копирования (палитра игнорируется, индексы считаются яркостью).
    Байт альфа-канала и байт выравнивания в 32-битных форматах не учитываются.

    Args:
        image: Исходное изображение

    Returns:
        Массив H x W uint8 (для INDEXED8 - только для чтения)

    Raises:
        UnsupportedFormatError: Если формат пикселей не поддерживается
    """
    pixel_format = image.pixel_format

    if pixel_format is PixelFormat.INDEXED8:
        return image.rows()
    elif pixel_format in (PixelFormat.RGB24, PixelFormat.RGB32, PixelFormat.ARGB32):
        return _luma_bgr(image.channels())
    else:
        raise UnsupportedFormatError(pixel_format)


def _luma_bgr(pixels: np.ndarray) -> np.ndarray:
    """Взвешенная сумма каналов с отбрасыванием дробной части."""
    blue_channel = pixels[..., 0].astype(np.float64)
    green_channel = pixels[..., 1].astype(np.float64)
    red_channel = pixels[..., 2].astype(np.float64)

    gray = LUMA_RED * red_channel + LUMA_GREEN * green_channel + LUMA_BLUE * blue_channel
    return np.clip(gray, MIN_PIXEL_VALUE, MAX_PIXEL_VALUE).astype(np.uint8)
