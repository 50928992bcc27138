#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Детектор углов Харриса.

Конвейер: серое изображение -> производные -> гауссово сглаживание ->
карта отклика -> подавление немаксимумов -> список углов.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional
import numpy as np
from config.settings import (
    CORNER_MEASURE, GAUSSIAN_KERNEL_SIZE, GAUSSIAN_SIGMA,
    HARRIS_K, HARRIS_THRESHOLD, SUPPRESSION_RADIUS,
)
from models.pixel_image import PixelImage, UnsupportedFormatError, is_supported_format
from models.grayscale import to_grayscale
from models.gradients import compute_derivative_products
from models.smoothing import gaussian_kernel_1d, smooth_maps
from models.response import CornerMeasure, compute_response
from models.suppression import CornerPoint, suppress_non_maximum

logger = logging.getLogger(__name__)


class DetectorState(Enum):
    """Этапы одного вызова детектора."""

    IDLE = "idle"
    VALIDATING = "validating"
    REDUCING = "reducing"
    DIFFERENTIATING = "differentiating"
    SMOOTHING = "smoothing"
    SCORING = "scoring"
    SUPPRESSING = "suppressing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class DetectorConfig:
    """
    Неизменяемые параметры детектора.

    Для изменения параметра создается новый экземпляр через with_changes().
    """

    measure: CornerMeasure = CornerMeasure(CORNER_MEASURE)
    k: float = HARRIS_K
    threshold: float = HARRIS_THRESHOLD
    sigma: float = GAUSSIAN_SIGMA
    kernel_size: int = GAUSSIAN_KERNEL_SIZE
    suppression: int = SUPPRESSION_RADIUS

    def __post_init__(self):
        if not isinstance(self.measure, CornerMeasure):
            # Допускаем строковые имена меры ("harris", "noble")
            object.__setattr__(self, "measure", CornerMeasure(str(self.measure).lower()))
        if self.kernel_size < 3 or self.kernel_size % 2 == 0:
            raise ValueError(f"Kernel size must be odd and >= 3, got {self.kernel_size}")
        if self.suppression < 0:
            raise ValueError(f"Suppression radius must be >= 0, got {self.suppression}")

    @property
    def smoothing_enabled(self) -> bool:
        return self.sigma > 0.0

    def with_changes(self, **changes) -> "DetectorConfig":
        """Возвращает копию конфигурации с измененными полями."""
        return replace(self, **changes)


StageCallback = Callable[[DetectorState], None]


class HarrisCornersDetector:
    """
    Детектор углов с кэшированным ядром Гаусса.

    Конфигурация и собранное по ней ядро хранятся одной парой и
    публикуются одним присваиванием. Ядро собирается до публикации,
    поэтому выполняющийся вызов всегда видит согласованные sigma и ядро.
    """

    def __init__(self, config: Optional[DetectorConfig] = None):
        """
        Инициализация детектора.

        Args:
            config: Параметры детектора (по умолчанию из config.settings)
        """
        config = config or DetectorConfig()
        self._state = (config, _build_kernel(config))

    @property
    def config(self) -> DetectorConfig:
        return self._state[0]

    @property
    def kernel(self):
        return self._state[1]

    def configure(self, config: DetectorConfig) -> None:
        """
        Устанавливает новую конфигурацию.

        Ядро пересобирается только если изменились sigma или размер ядра.
        """
        previous, kernel = self._state
        if (previous.sigma, previous.kernel_size) != (config.sigma, config.kernel_size):
            kernel = _build_kernel(config)
        self._state = (config, kernel)

    def rebuild_kernel(self) -> None:
        """Пересобирает ядро Гаусса по текущим sigma и размеру."""
        config = self._state[0]
        self._state = (config, _build_kernel(config))

    def detect(self, image: PixelImage, on_stage: Optional[StageCallback] = None) -> List[CornerPoint]:
        """
        Ищет углы на изображении.

        Args:
            image: Исходное изображение
            on_stage: Необязательный обработчик, вызывается перед каждым этапом;
                исключение из него прерывает вызов

        Returns:
            Список углов в порядке построчного обхода

        Raises:
            UnsupportedFormatError: Если формат пикселей не поддерживается
        """
        # Снимок конфигурации и ядра на время вызова
        config, kernel = self._state
        return _run_pipeline(image, config, kernel, on_stage)

    def response_map(self, image: PixelImage, on_stage: Optional[StageCallback] = None) -> np.ndarray:
        """Карта отклика с текущими конфигурацией и ядром (без подавления немаксимумов)."""
        config, kernel = self._state
        return _score_image(image, config, kernel, _stage_notifier(on_stage))


def detect(image: PixelImage, config: Optional[DetectorConfig] = None,
           on_stage: Optional[StageCallback] = None) -> List[CornerPoint]:
    """
    Ищет углы на изображении с заданной конфигурацией.

    Ядро Гаусса берется из общего кэша по (sigma, size).

    Raises:
        UnsupportedFormatError: Если формат пикселей не поддерживается
    """
    config = config or DetectorConfig()
    return _run_pipeline(image, config, _build_kernel(config), on_stage)


def response_map(image: PixelImage, config: Optional[DetectorConfig] = None,
                 on_stage: Optional[StageCallback] = None) -> np.ndarray:
    """
    Возвращает карту отклика без подавления немаксимумов.

    Проходит те же этапы, что и detect(), до SCORING включительно.
    Используется для визуализации и отладки порога.

    Raises:
        UnsupportedFormatError: Если формат пикселей не поддерживается
    """
    config = config or DetectorConfig()
    return _score_image(image, config, _build_kernel(config), _stage_notifier(on_stage))


def _build_kernel(config: DetectorConfig):
    if not config.smoothing_enabled:
        return None
    return gaussian_kernel_1d(float(config.sigma), int(config.kernel_size))


def _stage_notifier(on_stage: Optional[StageCallback]) -> StageCallback:
    def enter(state: DetectorState) -> None:
        logger.debug("Detector stage: %s", state.value)
        if on_stage is not None:
            on_stage(state)

    return enter


def _score_image(image: PixelImage, config: DetectorConfig, kernel,
                 enter: StageCallback) -> np.ndarray:
    enter(DetectorState.VALIDATING)
    if not is_supported_format(image.pixel_format):
        logger.warning("Rejected image with unsupported pixel format: %s", image.pixel_format)
        enter(DetectorState.FAILED)
        raise UnsupportedFormatError(image.pixel_format)

    # 1) Серое изображение
    enter(DetectorState.REDUCING)
    gray = to_grayscale(image)

    # 2) Производные
    enter(DetectorState.DIFFERENTIATING)
    diff_xx, diff_yy, diff_xy = compute_derivative_products(gray)

    # 3) Сглаживание
    enter(DetectorState.SMOOTHING)
    smooth_maps((diff_xx, diff_yy, diff_xy), config.sigma, kernel)

    # 4) Карта отклика
    enter(DetectorState.SCORING)
    return compute_response(diff_xx, diff_yy, diff_xy,
                            config.measure, config.k, config.threshold)


def _run_pipeline(image: PixelImage, config: DetectorConfig, kernel,
                  on_stage: Optional[StageCallback]) -> List[CornerPoint]:
    enter = _stage_notifier(on_stage)
    response = _score_image(image, config, kernel, enter)

    # 5) Подавление немаксимумов
    enter(DetectorState.SUPPRESSING)
    corners = suppress_non_maximum(response, config.suppression)

    enter(DetectorState.DONE)
    logger.info("Detected %d corners on %dx%d image (%s)",
                len(corners), image.width, image.height, config.measure.value)
    return corners
