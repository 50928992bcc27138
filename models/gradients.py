#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Оценка производных яркости маской 3x3 (аналог Prewitt).
"""

from typing import Tuple
import numpy as np

# 1/6 в float32, нормировка суммы трех разностей
ONE_SIXTH = np.float32(0.166666667)


def compute_derivative_products(gray: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Вычисляет карты h*h, v*v и h*v для внутренних пикселей.

    h = ((tl + t + tr) - (bl + b + br)) / 6
    v = ((tl + l + bl) - (tr + r + br)) / 6

    Рамка шириной 1 пиксель остается нулевой.

    Args:
        gray: Серое изображение H x W uint8

    Returns:
        Кортеж (dx2, dy2, dxy) массивов H x W float32
    """
    height, width = gray.shape
    diff_xx = np.zeros((height, width), dtype=np.float32)
    diff_yy = np.zeros((height, width), dtype=np.float32)
    diff_xy = np.zeros((height, width), dtype=np.float32)

    if height < 3 or width < 3:
        return diff_xx, diff_yy, diff_xy

    src = gray.astype(np.int32)

    # Соседи каждого внутреннего пикселя
    top_left, top, top_right = src[:-2, :-2], src[:-2, 1:-1], src[:-2, 2:]
    left, right = src[1:-1, :-2], src[1:-1, 2:]
    bottom_left, bottom, bottom_right = src[2:, :-2], src[2:, 1:-1], src[2:, 2:]

    h = ((top_left + top + top_right) - (bottom_left + bottom + bottom_right)).astype(np.float32) * ONE_SIXTH
    v = ((top_left + left + bottom_left) - (top_right + right + bottom_right)).astype(np.float32) * ONE_SIXTH

    diff_xx[1:-1, 1:-1] = h * h
    diff_yy[1:-1, 1:-1] = v * v
    diff_xy[1:-1, 1:-1] = h * v

    return diff_xx, diff_yy, diff_xy
