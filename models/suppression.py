#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Подавление немаксимумов на карте отклика.
"""

from typing import List, NamedTuple
import numpy as np


class CornerPoint(NamedTuple):
    """Целочисленные координаты угла в системе исходного изображения."""

    x: int
    y: int


def suppress_non_maximum(response: np.ndarray, radius: int) -> List[CornerPoint]:
    """
    Оставляет только локальные максимумы в окне (2r+1) x (2r+1).

    Кандидат - ненулевая ячейка не ближе max(1, r) к краю. Кандидат
    отбрасывается, если в окне есть значение строго больше (равные
    значения не мешают друг другу).

    Args:
        response: Карта отклика H x W float32
        radius: Радиус окна подавления r

    Returns:
        Список углов в порядке построчного обхода
    """
    radius = max(0, int(radius))
    margin = max(1, radius)
    height, width = response.shape
    if height <= 2 * margin or width <= 2 * margin:
        return []

    # Окна для кандидатов через as_strided (без копирования)
    size = 2 * radius + 1
    origin = response[margin - radius:, margin - radius:]
    out_h = height - 2 * margin
    out_w = width - 2 * margin
    strides = (response.strides[0], response.strides[1], response.strides[0], response.strides[1])
    windows = np.lib.stride_tricks.as_strided(
        origin, shape=(out_h, out_w, size, size), strides=strides, writeable=False
    )
    local_max = windows.max(axis=(2, 3))

    center = response[margin:height - margin, margin:width - margin]
    keep = (center != 0) & (center >= local_max)

    ys, xs = np.nonzero(keep)
    return [CornerPoint(int(x) + margin, int(y) + margin) for y, x in zip(ys, xs)]
