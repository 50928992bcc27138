#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Сепарабельное гауссово сглаживание карт производных.
"""

import math
import logging
from functools import lru_cache
import numpy as np

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def gaussian_kernel_1d(sigma: float, size: int) -> np.ndarray:
    """
    Строит нормированное одномерное ядро Гаусса нечетной длины.

    Отсчеты w(i) = exp(-i^2 / 2 sigma^2) / (sqrt(2 pi) sigma), i = -R..R,
    затем делятся на сумму. Результат кэшируется и доступен только для чтения.

    Args:
        sigma: Стандартное отклонение (> 0)
        size: Длина ядра (нечетная, >= 3)

    Returns:
        Ядро float32 длины size
    """
    if sigma <= 0:
        raise ValueError(f"Sigma must be positive, got {sigma}")
    if size < 3 or size % 2 == 0:
        raise ValueError(f"Kernel size must be odd and >= 3, got {size}")

    radius = size // 2
    x = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.exp(-(x * x) / (2.0 * sigma * sigma)) / (math.sqrt(2.0 * math.pi) * sigma)
    kernel /= np.sum(kernel)

    kernel = kernel.astype(np.float32)
    kernel.flags.writeable = False
    logger.debug("Gaussian kernel rebuilt: sigma=%s size=%d", sigma, size)
    return kernel


def convolve_separable(image: np.ndarray, kernel: np.ndarray) -> None:
    """
    Сворачивает карту ядром по строкам, затем по столбцам, на месте.

    Первый проход читает image и пишет во вспомогательную карту (столбцы
    R..W-R-1), второй читает вспомогательную карту и пишет строки R..H-R-1
    обратно в image. Края не дополняются: строки вне полосы сохраняют
    исходные значения, а крайние столбцы сглаженных строк обнуляются,
    так как во вспомогательной карте они нулевые.

    Args:
        image: Карта H x W float32 (изменяется на месте)
        kernel: Одномерное ядро нечетной длины
    """
    height, width = image.shape
    radius = len(kernel) // 2
    scratch = np.zeros_like(image)

    # Горизонтальный проход: image -> scratch
    inner_width = width - 2 * radius
    if inner_width > 0:
        acc = np.zeros((height, inner_width), dtype=np.float32)
        for k, weight in enumerate(kernel):
            acc += image[:, k:k + inner_width] * weight
        scratch[:, radius:width - radius] = acc

    # Вертикальный проход: scratch -> image
    inner_height = height - 2 * radius
    if inner_height > 0:
        acc = np.zeros((inner_height, width), dtype=np.float32)
        for k, weight in enumerate(kernel):
            acc += scratch[k:k + inner_height, :] * weight
        image[radius:height - radius, :] = acc


def smooth_maps(maps, sigma: float, kernel) -> None:
    """
    Сглаживает каждую карту производных независимо.

    При sigma <= 0 сглаживание отключено и карты не изменяются.
    """
    if sigma <= 0 or kernel is None:
        return
    for derivative_map in maps:
        convolve_separable(derivative_map, kernel)
