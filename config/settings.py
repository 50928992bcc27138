#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Конфигурационные настройки приложения.
"""

# Параметры детектора углов (Harris)
HARRIS_K = 0.04
HARRIS_THRESHOLD = 200000.0
GAUSSIAN_SIGMA = 1.2
GAUSSIAN_KERNEL_SIZE = 7  # нечетный, >= 3
SUPPRESSION_RADIUS = 3  # окно NMS (2r+1)x(2r+1)
CORNER_MEASURE = "harris"  # harris | noble

# Коэффициенты яркости BT.709
LUMA_RED = 0.2125
LUMA_GREEN = 0.7154
LUMA_BLUE = 0.0721

# Поток глубины
DEPTH_PLAYER_INDEX_BITS = 3  # младшие биты отсчета содержат индекс игрока
DEPTH_PARAMETERS_FILE = "parameters.json"

# Маркеры углов
MARKER_WIDTH = 4
REFERENCE_POINT = (0, 0)

# Диапазоны значений
MAX_PIXEL_VALUE = 255
MIN_PIXEL_VALUE = 0

# Цвета для отображения (BGR)
COLOR_GREEN = (0, 255, 0)
COLOR_TEXT = (220, 220, 220)

# Названия окон
WINDOW_NAMES = {
    "DEPTH": "Depth",
    "CORNERS": "Corners",
}

# Настройки интерфейса
GUI_SETTINGS = {
    "update_interval": 30,  # мс
    "status_font_scale": 0.5,
}

# Поддерживаемые форматы изображений
SUPPORTED_FORMATS = ['.bmp', '.png', '.tiff', '.tif', '.jpg', '.jpeg', '.gif']

# Снимки экрана
SCREENSHOT_PREFIX = "PartMeasurement-"
SCREENSHOT_TIME_FORMAT = "%I-%M-%S"
