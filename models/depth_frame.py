#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Преобразование кадра глубины в изображение для отображения.
"""

import numpy as np
from config.settings import DEPTH_PLAYER_INDEX_BITS
from models.pixel_image import PixelFormat, PixelImage


def depth_to_intensity(depth_pixels: np.ndarray) -> np.ndarray:
    """
    Переводит сырые отсчеты глубины в яркость 0..255.

    Из отсчета отбрасываются биты индекса игрока, затем берутся младшие
    8 бит (depth + 1): яркость "заворачивается", зато сохраняется детализация.
    Неизвестная глубина (-1 после сдвига) переходит в 0, то есть в черный.

    Args:
        depth_pixels: Массив отсчетов int16/uint16 любой формы

    Returns:
        Массив uint8 той же формы
    """
    raw = np.asarray(depth_pixels).astype(np.int16, copy=False)
    depth = raw >> DEPTH_PLAYER_INDEX_BITS
    return ((depth.astype(np.int32) + 1) & 0xFF).astype(np.uint8)


def depth_frame_to_image(depth_pixels: np.ndarray, width: int, height: int) -> PixelImage:
    """
    Упаковывает кадр глубины в 32-битное изображение (B = G = R, четвертый байт не используется).

    Args:
        depth_pixels: Плоский или двумерный массив из width * height отсчетов
        width: Ширина кадра
        height: Высота кадра

    Returns:
        Изображение в формате RGB32
    """
    depth_pixels = np.asarray(depth_pixels)
    if depth_pixels.size != width * height:
        raise ValueError(f"Depth frame holds {depth_pixels.size} samples, {width * height} expected")

    intensity = depth_to_intensity(depth_pixels.reshape(height, width))
    color_pixels = np.zeros((height, width, 4), dtype=np.uint8)
    color_pixels[..., 0] = intensity
    color_pixels[..., 1] = intensity
    color_pixels[..., 2] = intensity

    return PixelImage(color_pixels, width, height, width * 4, PixelFormat.RGB32)
