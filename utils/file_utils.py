#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Утилиты для работы с файлами.
"""

import os
from datetime import datetime
from typing import Optional
import numpy as np
from PIL import Image
from config.settings import SUPPORTED_FORMATS, SCREENSHOT_PREFIX, SCREENSHOT_TIME_FORMAT
from models.pixel_image import PixelFormat, PixelImage


def validate_image_path(path: str) -> bool:
    """
    Проверяет, является ли путь валидным файлом изображения.

    Args:
        path: Путь к файлу

    Returns:
        True если файл валиден, False иначе
    """
    if not os.path.exists(path):
        return False

    _, ext = os.path.splitext(path.lower())
    return ext in SUPPORTED_FORMATS


def load_pixel_image(path: str) -> PixelImage:
    """
    Загружает файл изображения в PixelImage.

    Режимы PIL: L и P -> INDEXED8 (индексы палитры как есть), RGB -> RGB24,
    RGBA -> ARGB32; остальные режимы сначала конвертируются в RGB.
    Каналы переставляются в порядок хранения B, G, R(, A).

    Args:
        path: Путь к файлу

    Returns:
        Загруженное изображение

    Raises:
        OSError: Если файл не удалось прочитать
    """
    with Image.open(path) as img:
        img.load()
        if img.mode in ("L", "P"):
            pixels = np.array(img, dtype=np.uint8)
            return PixelImage.from_array(pixels, PixelFormat.INDEXED8)
        if img.mode == "RGBA":
            pixels = np.array(img, dtype=np.uint8)
            bgra = pixels[..., [2, 1, 0, 3]]
            return PixelImage.from_array(bgra, PixelFormat.ARGB32)
        if img.mode != "RGB":
            img = img.convert("RGB")
        pixels = np.array(img, dtype=np.uint8)
        return PixelImage.from_array(pixels[..., ::-1], PixelFormat.RGB24)


def get_pictures_directory() -> str:
    """Возвращает каталог изображений пользователя (или домашний каталог)."""
    home = os.path.expanduser("~")
    pictures = os.path.join(home, "Pictures")
    if os.path.isdir(pictures):
        return pictures
    return home


def get_screenshot_filename(now: Optional[datetime] = None, directory: Optional[str] = None) -> str:
    """
    Генерирует путь для снимка экрана вида PartMeasurement-hh-mm-ss.png.

    Args:
        now: Время снимка (по умолчанию текущее)
        directory: Каталог (по умолчанию каталог изображений пользователя)

    Returns:
        Путь к файлу снимка
    """
    now = now or datetime.now()
    directory = directory or get_pictures_directory()
    return os.path.join(directory, f"{SCREENSHOT_PREFIX}{now.strftime(SCREENSHOT_TIME_FORMAT)}.png")


def get_supported_formats_string() -> str:
    """
    Возвращает строку с поддерживаемыми форматами.

    Returns:
        Строка с форматами
    """
    return ", ".join(SUPPORTED_FORMATS)
