#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Чтение записанного потока кадров глубины.

Каталог записи содержит parameters.json и двоичный файл кадров:
{
    "width": 640,
    "height": 480,
    "frame_count": 30,
    "file": "frames.bin"
}
Кадры идут подряд, отсчеты - uint16 little-endian.
"""

import os
import json
import logging
from typing import Iterator, Optional
import numpy as np
from config.settings import DEPTH_PARAMETERS_FILE
from models.depth_frame import depth_frame_to_image
from models.pixel_image import PixelImage

logger = logging.getLogger(__name__)

DEPTH_DTYPE = np.dtype("<u2")


class DepthStreamReader:
    """
    Источник кадров глубины из записи на диске.

    Заменяет живой сенсор: отдает по одному кадру за вызов next_frame().
    """

    def __init__(self, directory: str, loop: bool = False):
        """
        Инициализация источника.

        Args:
            directory: Каталог с parameters.json и файлом кадров
            loop: Начинать сначала после последнего кадра
        """
        params_path = os.path.join(directory, DEPTH_PARAMETERS_FILE)
        with open(params_path, 'r') as f:
            params = json.load(f)

        self.width = int(params["width"])
        self.height = int(params["height"])
        self.loop = loop
        self.frames_path = os.path.join(directory, params.get("file", "frames.bin"))

        frame_samples = self.width * self.height
        data = np.fromfile(self.frames_path, dtype=DEPTH_DTYPE)
        available = data.size // frame_samples
        self.frame_count = int(params.get("frame_count", available))
        if self.frame_count > available:
            raise ValueError(
                f"{self.frames_path} holds {available} frames, {self.frame_count} declared"
            )

        self._frames = data[:self.frame_count * frame_samples].reshape(
            self.frame_count, self.height, self.width
        )
        self._position = 0
        logger.info("Opened depth recording %s: %dx%d, %d frames",
                    directory, self.width, self.height, self.frame_count)

    def next_frame(self) -> Optional[np.ndarray]:
        """
        Возвращает следующий кадр сырых отсчетов или None, если запись закончилась.
        """
        if self._position >= self.frame_count:
            if not self.loop or self.frame_count == 0:
                return None
            self._position = 0

        frame = self._frames[self._position]
        self._position += 1
        return frame

    def next_image(self) -> Optional[PixelImage]:
        """Возвращает следующий кадр, упакованный для отображения."""
        frame = self.next_frame()
        if frame is None:
            return None
        return depth_frame_to_image(frame, self.width, self.height)

    def __iter__(self) -> Iterator[np.ndarray]:
        while True:
            frame = self.next_frame()
            if frame is None:
                return
            yield frame


def write_depth_recording(directory: str, frames, file_name: str = "frames.bin") -> str:
    """
    Сохраняет кадры глубины в формате, который читает DepthStreamReader.

    Args:
        directory: Каталог записи (создается при необходимости)
        frames: Последовательность массивов H x W одинакового размера
        file_name: Имя файла кадров

    Returns:
        Путь к parameters.json
    """
    frames = np.asarray(frames)
    if frames.ndim != 3:
        raise ValueError(f"Expected a stack of frames, got shape {frames.shape}")

    if not os.path.exists(directory):
        os.makedirs(directory)

    frames.astype(DEPTH_DTYPE).tofile(os.path.join(directory, file_name))

    params = {
        "width": int(frames.shape[2]),
        "height": int(frames.shape[1]),
        "frame_count": int(frames.shape[0]),
        "file": file_name,
    }
    params_path = os.path.join(directory, DEPTH_PARAMETERS_FILE)
    with open(params_path, 'w') as f:
        json.dump(params, f, indent=4)
    return params_path
