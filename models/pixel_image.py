#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Модель растрового изображения с явным шагом строки.

Буфер хранится как неизменяемое представление numpy; доступ к пикселям
выполняется через смещение offset = y * stride + x * bytes_per_pixel.
"""

from enum import Enum
from typing import Tuple
import numpy as np


class UnsupportedFormatError(ValueError):
    """Формат пикселей исходного изображения не поддерживается детектором."""

    def __init__(self, pixel_format):
        self.pixel_format = pixel_format
        super().__init__(f"Unsupported pixel format of the source image: {pixel_format}")


class PixelFormat(Enum):
    """
    Кодировка пикселей.

    Значение элемента - число байт на пиксель (0 для форматов с
    упаковкой нескольких пикселей в байт). Многобайтные пиксели хранятся
    в порядке B, G, R(, X/A), как в GDI и OpenCV.
    """

    INDEXED1 = ("indexed1", 0)
    INDEXED4 = ("indexed4", 0)
    INDEXED8 = ("indexed8", 1)
    RGB16_565 = ("rgb16_565", 2)
    RGB24 = ("rgb24", 3)
    RGB32 = ("rgb32", 4)
    ARGB32 = ("argb32", 4)
    RGB48 = ("rgb48", 6)
    ARGB64 = ("argb64", 8)

    @property
    def bytes_per_pixel(self) -> int:
        return self.value[1]


# Форматы, которые принимает детектор углов
SUPPORTED_PIXEL_FORMATS = (
    PixelFormat.INDEXED8,
    PixelFormat.RGB24,
    PixelFormat.RGB32,
    PixelFormat.ARGB32,
)


def is_supported_format(pixel_format) -> bool:
    """Проверяет, входит ли формат в число поддерживаемых детектором."""
    return pixel_format in SUPPORTED_PIXEL_FORMATS


class PixelImage:
    """
    Неизменяемое изображение W x H с шагом строки stride (в байтах).

    Изображение не владеет памятью вызывающей стороны: буфер сохраняется
    как представление только для чтения, исходный массив не изменяется.
    Массив numpy должен быть непрерывным (C-contiguous), иначе
    смещения по stride не совпадут с его раскладкой в памяти.
    """

    def __init__(self, buffer, width: int, height: int, stride: int, pixel_format):
        """
        Инициализация изображения.

        Args:
            buffer: bytes, bytearray, memoryview или массив numpy uint8
            width: Ширина в пикселях
            height: Высота в пикселях
            stride: Число байт в строке (>= width * bytes_per_pixel)
            pixel_format: Тег кодировки пикселей
        """
        width = int(width)
        height = int(height)
        stride = int(stride)
        if width <= 0 or height <= 0:
            raise ValueError(f"Image size must be positive, got {width}x{height}")

        bytes_per_pixel = _row_bytes_per_pixel(pixel_format)
        row_bytes = _row_length(width, pixel_format, bytes_per_pixel)
        if stride < row_bytes:
            raise ValueError(f"Stride {stride} is smaller than row length {row_bytes}")

        if isinstance(buffer, np.ndarray):
            # stride описывает непрерывный буфер; срез с шагом пришлось бы копировать
            if not buffer.flags.c_contiguous:
                raise ValueError("Buffer array must be C-contiguous; use PixelImage.from_array()")
            data = buffer.reshape(-1).view(np.uint8)
        else:
            data = np.frombuffer(buffer, dtype=np.uint8)
        required = stride * (height - 1) + row_bytes
        if data.size < required:
            raise ValueError(f"Buffer holds {data.size} bytes, {required} required")

        # Представление только для чтения: флаг не влияет на массив вызывающего
        data = data[:required].view()
        data.flags.writeable = False

        self._data = data
        self._width = width
        self._height = height
        self._stride = stride
        self._pixel_format = pixel_format
        self._bytes_per_pixel = bytes_per_pixel

    @classmethod
    def from_array(cls, array: np.ndarray, pixel_format=None) -> "PixelImage":
        """
        Создает изображение из массива numpy.

        Двумерный массив интерпретируется как INDEXED8, H x W x 3 как RGB24
        (порядок BGR), H x W x 4 как ARGB32 (порядок BGRA), если формат не
        указан явно.

        Args:
            array: Массив uint8
            pixel_format: Явный тег формата

        Returns:
            Новое изображение
        """
        array = np.ascontiguousarray(array, dtype=np.uint8)
        if array.ndim == 2:
            height, width = array.shape
            default_format = PixelFormat.INDEXED8
        elif array.ndim == 3 and array.shape[2] in (3, 4):
            height, width, channels = array.shape
            default_format = PixelFormat.RGB24 if channels == 3 else PixelFormat.ARGB32
        else:
            raise ValueError(f"Cannot infer pixel format from array of shape {array.shape}")

        pixel_format = pixel_format or default_format
        stride = array.strides[0]
        return cls(array, width, height, stride, pixel_format)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def pixel_format(self):
        return self._pixel_format

    @property
    def bytes_per_pixel(self) -> int:
        return self._bytes_per_pixel

    @property
    def shape(self) -> Tuple[int, int]:
        """Размеры в порядке (высота, ширина), как у массивов numpy."""
        return self._height, self._width

    def offset(self, x: int, y: int) -> int:
        """
        Вычисляет смещение первого байта пикселя (x, y) в буфере.

        Raises:
            IndexError: Если координаты вне изображения
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) is outside {self._width}x{self._height} image")
        return y * self._stride + x * self._bytes_per_pixel

    def pixel(self, x: int, y: int) -> Tuple[int, ...]:
        """Возвращает байты пикселя (x, y) в порядке хранения."""
        start = self.offset(x, y)
        return tuple(int(b) for b in self._data[start:start + self._bytes_per_pixel])

    def rows(self) -> np.ndarray:
        """
        Возвращает представление H x (W * bpp) без байтов выравнивания.

        Представление только для чтения и не копирует данные.
        """
        row_bytes = self._width * self._bytes_per_pixel
        return np.lib.stride_tricks.as_strided(
            self._data,
            shape=(self._height, row_bytes),
            strides=(self._stride, 1),
            writeable=False,
        )

    def channels(self) -> np.ndarray:
        """Возвращает представление H x W x bpp (только для чтения)."""
        return self.rows().reshape(self._height, self._width, self._bytes_per_pixel)

    def __repr__(self):
        name = getattr(self._pixel_format, "name", self._pixel_format)
        return f"PixelImage({self._width}x{self._height}, stride={self._stride}, format={name})"


def _row_bytes_per_pixel(pixel_format) -> int:
    if isinstance(pixel_format, PixelFormat):
        return pixel_format.bytes_per_pixel
    # Неизвестный тег: геометрию считаем побайтно, формат отклонит детектор
    return 1


def _row_length(width: int, pixel_format, bytes_per_pixel: int) -> int:
    if pixel_format is PixelFormat.INDEXED1:
        return (width + 7) // 8
    if pixel_format is PixelFormat.INDEXED4:
        return (width + 1) // 2
    return width * bytes_per_pixel
