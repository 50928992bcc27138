#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Измерения по найденным углам и их отображение.
"""

import math
from typing import List, Sequence, Tuple
import numpy as np
from config.settings import COLOR_GREEN, MARKER_WIDTH, REFERENCE_POINT
from models.pixel_image import PixelFormat, PixelImage
from models.grayscale import to_grayscale


def distance(p1: Tuple[int, int], p2: Tuple[int, int]) -> float:
    """Евклидово расстояние между двумя точками."""
    dx = float(p2[0] - p1[0])
    dy = float(p2[1] - p1[1])
    return math.sqrt(dx * dx + dy * dy)


def distances_from(corners: Sequence[Tuple[int, int]],
                   origin: Tuple[int, int] = REFERENCE_POINT) -> List[float]:
    """
    Расстояния от опорной точки до каждого угла.

    Args:
        corners: Список углов
        origin: Опорная точка

    Returns:
        Расстояния в том же порядке, что и углы
    """
    return [distance(origin, corner) for corner in corners]


def successive_distances(corners: Sequence[Tuple[int, int]]) -> List[float]:
    """Расстояния между соседними углами списка (на одно меньше, чем углов)."""
    return [distance(corners[i], corners[i + 1]) for i in range(len(corners) - 1)]


def image_to_bgr(image: PixelImage) -> np.ndarray:
    """
    Копирует изображение в трехканальный массив BGR для отрисовки.

    INDEXED8 размножается на три канала, байт альфа/выравнивания отбрасывается.
    """
    if image.pixel_format is PixelFormat.INDEXED8:
        gray = to_grayscale(image)
        return np.repeat(gray[..., np.newaxis], 3, axis=2)
    return np.array(image.channels()[..., :3], dtype=np.uint8)


def draw_markers(bgr: np.ndarray, corners: Sequence[Tuple[int, int]],
                 color: Tuple[int, int, int] = COLOR_GREEN, width: int = MARKER_WIDTH) -> np.ndarray:
    """
    Рисует закрашенные квадраты шириной width с центром в каждом угле.

    Args:
        bgr: Изображение BGR (не изменяется)
        corners: Список углов
        color: Цвет маркера (B, G, R)
        width: Сторона квадрата в пикселях

    Returns:
        Копия изображения с маркерами
    """
    result = bgr.copy()
    h, w = result.shape[:2]
    half = width // 2
    for x, y in corners:
        x0 = max(0, x - half)
        x1 = min(w - 1, x - half + width - 1)
        y0 = max(0, y - half)
        y1 = min(h - 1, y - half + width - 1)
        if x0 > x1 or y0 > y1:
            continue
        result[y0:y1 + 1, x0:x1 + 1] = color
    return result


def format_measurements(corners: Sequence[Tuple[int, int]],
                        origin: Tuple[int, int] = REFERENCE_POINT) -> List[str]:
    """Формирует строки отчета: угол, расстояние от опорной точки и от предыдущего угла."""
    lines = []
    from_origin = distances_from(corners, origin)
    between = successive_distances(corners)
    for index, (corner, dist) in enumerate(zip(corners, from_origin)):
        line = f"{index:4d}: ({corner[0]}, {corner[1]})  от {origin}: {dist:.2f}"
        if index > 0:
            line += f"  от предыдущего: {between[index - 1]:.2f}"
        lines.append(line)
    return lines
