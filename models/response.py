#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Карта отклика углов по сглаженному структурному тензору.
"""

from enum import Enum
import numpy as np

# Машинный эпсилон float32, знаменатель меры Noble
NOBLE_EPSILON = np.finfo(np.float32).eps


class CornerMeasure(Enum):
    """Мера угловатости."""

    # Исходная мера Харриса, требует коэффициента k
    HARRIS = "harris"
    # Мера Noble, без параметров
    NOBLE = "noble"


def compute_response(diff_xx: np.ndarray, diff_yy: np.ndarray, diff_xy: np.ndarray,
                     measure: CornerMeasure, k: float, threshold: float) -> np.ndarray:
    """
    Вычисляет карту отклика углов.

    Harris: M = (A*B - C^2) - k*(A+B)^2
    Noble:  M = (A*B - C^2) / (A+B+eps)

    В карту записываются только значения M > threshold, остальные ячейки
    остаются нулевыми (ноль означает "не кандидат").

    Args:
        diff_xx: Сглаженная карта dx^2 (A)
        diff_yy: Сглаженная карта dy^2 (B)
        diff_xy: Сглаженная карта dx*dy (C)
        measure: Мера угловатости
        k: Коэффициент чувствительности (только для Harris)
        threshold: Порог отклика

    Returns:
        Карта H x W float32
    """
    if not (diff_xx.shape == diff_yy.shape == diff_xy.shape):
        raise ValueError("Derivative maps must share the same shape")

    a, b, c = diff_xx, diff_yy, diff_xy
    determinant = a * b - c * c
    trace = a + b

    if measure is CornerMeasure.HARRIS:
        measure_map = determinant - np.float32(k) * (trace * trace)
    elif measure is CornerMeasure.NOBLE:
        measure_map = determinant / (trace + NOBLE_EPSILON)
    else:
        raise ValueError(f"Unknown corner measure: {measure}")

    response = np.zeros(a.shape, dtype=np.float32)
    mask = measure_map > np.float32(threshold)
    response[mask] = measure_map[mask]
    return response
