#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Контроллер для OpenCV интерфейса.
Показывает поток глубины, по запросу ищет углы и сохраняет снимки.
"""

import logging
from typing import List, Optional
import cv2
import numpy as np
from models.corner_detector import DetectorConfig, HarrisCornersDetector
from models.depth_stream import DepthStreamReader
from models.measurement import draw_markers, format_measurements, image_to_bgr
from models.pixel_image import PixelImage, UnsupportedFormatError
from models.response import CornerMeasure
from models.suppression import CornerPoint
from utils.file_utils import get_screenshot_filename, load_pixel_image
from config.settings import *

logger = logging.getLogger(__name__)


class OpenCVController:
    """
    Контроллер для управления OpenCV интерфейсом.
    """

    def __init__(self, config: Optional[DetectorConfig] = None,
                 depth_source: Optional[DepthStreamReader] = None):
        """
        Инициализация контроллера.

        Args:
            config: Параметры детектора углов
            depth_source: Источник кадров глубины (может отсутствовать)
        """
        self.detector = HarrisCornersDetector(config)
        self.depth_source = depth_source
        self.still_image: Optional[PixelImage] = None
        self.depth_image: Optional[PixelImage] = None
        self.corners: List[CornerPoint] = []
        self.corners_view: Optional[np.ndarray] = None
        self.status = ""
        self.running = True

    def load_image(self, path: str) -> bool:
        """
        Загружает неподвижное изображение для поиска углов.

        Args:
            path: Путь к изображению

        Returns:
            True если изображение загружено успешно
        """
        try:
            self.still_image = load_pixel_image(path)
        except OSError as e:
            logger.error("Failed to load %s: %s", path, e)
            self.status = f"Ошибка загрузки: {path}"
            return False
        self.status = f"Загружено: {path}"
        return True

    def create_windows(self) -> None:
        """Создает все необходимые окна OpenCV."""
        for window_name in WINDOW_NAMES.values():
            cv2.namedWindow(window_name, cv2.WINDOW_AUTOSIZE)

    def detect_corners(self) -> List[CornerPoint]:
        """
        Ищет углы на неподвижном изображении или на текущем кадре глубины.

        Returns:
            Список найденных углов (пустой, если искать не на чем)
        """
        source = self._current_source()
        if source is None:
            self.status = "Нет изображения для поиска углов"
            return []

        try:
            corners = self.detector.detect(source)
        except UnsupportedFormatError as e:
            self.status = f"Ошибка: {e}"
            return []

        self.corners = corners
        self.corners_view = draw_markers(image_to_bgr(source), corners)
        for line in format_measurements(corners):
            print(line)
        self.status = f"Углов: {len(corners)} ({self.detector.config.measure.value})"
        return corners

    def show_response(self) -> Optional[np.ndarray]:
        """
        Показывает карту отклика детектора вместо изображения с углами.

        Returns:
            Цветная карта отклика (BGR) или None, если показывать нечего
        """
        source = self._current_source()
        if source is None:
            self.status = "Нет изображения для карты отклика"
            return None

        try:
            response = self.detector.response_map(source)
        except UnsupportedFormatError as e:
            self.status = f"Ошибка: {e}"
            return None

        # Только положительный отклик; нормализация в 0..255 для цветовой карты
        scaled = cv2.normalize(np.maximum(response, 0), None, MIN_PIXEL_VALUE, MAX_PIXEL_VALUE,
                               cv2.NORM_MINMAX).astype(np.uint8)
        self.corners_view = cv2.applyColorMap(scaled, cv2.COLORMAP_JET)
        self.status = f"Карта отклика ({self.detector.config.measure.value})"
        return self.corners_view

    def toggle_measure(self) -> None:
        """Переключает меру Harris/Noble."""
        config = self.detector.config
        measure = CornerMeasure.NOBLE if config.measure is CornerMeasure.HARRIS else CornerMeasure.HARRIS
        self.detector.configure(config.with_changes(measure=measure))
        self.status = f"Мера: {measure.value}"

    def handle_keyboard_input(self, key: int) -> None:
        """
        Обрабатывает ввод с клавиатуры.

        Args:
            key: Код нажатой клавиши
        """
        if key in (27, ord('q'), ord('Q')):
            self.running = False
        elif key in (ord('c'), ord('C')):
            self.detect_corners()
        elif key in (ord('m'), ord('M')):
            self.toggle_measure()
        elif key in (ord('r'), ord('R')):
            self.show_response()
        elif key in (ord('s'), ord('S')):
            self.save_screenshot()

    def advance_depth_frame(self) -> None:
        """Берет следующий кадр из источника глубины."""
        if self.depth_source is None:
            return
        image = self.depth_source.next_image()
        if image is not None:
            self.depth_image = image

    def update_display(self) -> None:
        """Обновляет отображение всех окон."""
        self.advance_depth_frame()

        if self.depth_image is not None:
            cv2.imshow(WINDOW_NAMES["DEPTH"], self._with_status(image_to_bgr(self.depth_image)))

        corners_view = self.corners_view
        if corners_view is None and self.still_image is not None:
            corners_view = image_to_bgr(self.still_image)
        if corners_view is not None:
            cv2.imshow(WINDOW_NAMES["CORNERS"], self._with_status(corners_view))

    def run_main_loop(self) -> None:
        """Запускает главный цикл приложения."""
        while self.running:
            self.update_display()

            # Обрабатываем ввод с клавиатуры
            key = cv2.waitKey(GUI_SETTINGS["update_interval"]) & 0xFF
            self.handle_keyboard_input(key)

        # Закрываем все окна
        cv2.destroyAllWindows()

    def save_screenshot(self, path: Optional[str] = None) -> Optional[str]:
        """
        Сохраняет текущий кадр глубины (или изображение с углами) в PNG.

        Args:
            path: Путь к файлу (по умолчанию PartMeasurement-hh-mm-ss.png)

        Returns:
            Путь к сохраненному файлу или None при ошибке
        """
        if self.depth_image is not None:
            frame = image_to_bgr(self.depth_image)
        elif self.corners_view is not None:
            frame = self.corners_view
        else:
            self.status = "Сначала подключите источник глубины"
            return None

        path = path or get_screenshot_filename()
        try:
            written = cv2.imwrite(path, frame)
        except cv2.error as e:
            logger.error("Screenshot write failed: %s", e)
            written = False

        if not written:
            self.status = f"Не удалось сохранить снимок: {path}"
            return None

        self.status = f"Снимок сохранен: {path}"
        print(f"[OK] Сохранено: {path}")
        return path

    def _current_source(self) -> Optional[PixelImage]:
        return self.still_image if self.still_image is not None else self.depth_image

    def _with_status(self, bgr: np.ndarray) -> np.ndarray:
        """Добавляет строку статуса внизу изображения."""
        if not self.status:
            return bgr
        result = bgr.copy()
        cv2.putText(result, self.status, (8, result.shape[0] - 8), cv2.FONT_HERSHEY_SIMPLEX,
                    GUI_SETTINGS["status_font_scale"], COLOR_TEXT, 1, cv2.LINE_AA)
        return result
