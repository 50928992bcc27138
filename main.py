#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Главный файл приложения для поиска углов на изображениях глубины.

Показывает поток кадров глубины и по запросу ищет углы детектором Харриса
на неподвижном изображении, выводит координаты и расстояния.

Использование:
    python main.py image.png                   # Окно OpenCV с изображением
    python main.py --depth recording/          # Поток глубины из записи
    python main.py --headless image.png        # Только вывод углов в консоль
    python main.py --headless --measure noble --threshold 50 image.png
"""

import sys
import logging
import argparse
import cv2
from config.settings import (
    CORNER_MEASURE, GAUSSIAN_KERNEL_SIZE, GAUSSIAN_SIGMA,
    HARRIS_K, HARRIS_THRESHOLD, SUPPRESSION_RADIUS,
)
from controllers.opencv_controller import OpenCVController
from models.corner_detector import DetectorConfig, detect
from models.depth_stream import DepthStreamReader
from models.measurement import draw_markers, format_measurements, image_to_bgr
from models.pixel_image import UnsupportedFormatError
from utils.file_utils import load_pixel_image, validate_image_path, get_supported_formats_string

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """
    Парсит аргументы командной строки.

    Returns:
        Объект с аргументами
    """
    parser = argparse.ArgumentParser(
        description="Поиск углов на изображениях глубины",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Управление в окне:
  C     - найти углы
  M     - переключить меру Harris/Noble
  R     - показать карту отклика
  S     - сохранить снимок
  Q/ESC - выход
        """
    )

    parser.add_argument("image_path", nargs="?", help="Путь к изображению для поиска углов")
    parser.add_argument("--depth", metavar="DIR", help="Каталог с записью потока глубины")
    parser.add_argument("--loop", action="store_true", help="Повторять запись глубины по кругу")
    parser.add_argument("--headless", action="store_true", help="Найти углы и вывести их без окон")
    parser.add_argument("--save", metavar="PATH", help="Сохранить изображение с маркерами углов")

    # Параметры детектора
    parser.add_argument("--measure", choices=["harris", "noble"], default=CORNER_MEASURE,
                        help=f"Мера угловатости (по умолчанию: {CORNER_MEASURE})")
    parser.add_argument("--k", type=float, default=HARRIS_K,
                        help=f"Коэффициент Харриса (по умолчанию: {HARRIS_K})")
    parser.add_argument("--threshold", type=float, default=HARRIS_THRESHOLD,
                        help=f"Порог отклика (по умолчанию: {HARRIS_THRESHOLD})")
    parser.add_argument("--sigma", type=float, default=GAUSSIAN_SIGMA,
                        help=f"Sigma сглаживания, 0 - без сглаживания (по умолчанию: {GAUSSIAN_SIGMA})")
    parser.add_argument("--kernel-size", type=int, default=GAUSSIAN_KERNEL_SIZE,
                        help=f"Размер ядра Гаусса (по умолчанию: {GAUSSIAN_KERNEL_SIZE})")
    parser.add_argument("--suppression", type=int, default=SUPPRESSION_RADIUS,
                        help=f"Радиус подавления немаксимумов (по умолчанию: {SUPPRESSION_RADIUS})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный журнал")

    return parser.parse_args(argv)


def build_config(args) -> DetectorConfig:
    """Собирает конфигурацию детектора из аргументов."""
    return DetectorConfig(
        measure=args.measure,
        k=args.k,
        threshold=args.threshold,
        sigma=args.sigma,
        kernel_size=args.kernel_size,
        suppression=args.suppression,
    )


def run_headless(image_path: str, config: DetectorConfig, save_path=None) -> int:
    """
    Ищет углы на изображении и выводит результат в консоль.

    Returns:
        Код возврата
    """
    image = load_pixel_image(image_path)
    print(f"Изображение: {image_path} ({image.width}x{image.height}, {image.pixel_format.name})")

    try:
        corners = detect(image, config)
    except UnsupportedFormatError as e:
        print(f"Ошибка: {e}")
        return 1

    print(f"Найдено углов: {len(corners)}")
    for line in format_measurements(corners):
        print(line)

    if save_path:
        try:
            written = cv2.imwrite(save_path, draw_markers(image_to_bgr(image), corners))
        except cv2.error as e:
            logger.error("Image write failed: %s", e)
            written = False
        if not written:
            print(f"Ошибка: Не удалось сохранить изображение: {save_path}")
            return 1
        print(f"[OK] Сохранено: {save_path}")
    return 0


def run_opencv_interface(image_path, depth_dir, loop: bool, config: DetectorConfig) -> int:
    """
    Запускает OpenCV интерфейс.

    Returns:
        Код возврата
    """
    print("Запуск OpenCV интерфейса...")

    depth_source = DepthStreamReader(depth_dir, loop=loop) if depth_dir else None
    controller = OpenCVController(config, depth_source)

    if image_path and not controller.load_image(image_path):
        print(f"Ошибка: Не удалось загрузить изображение: {image_path}")
        return 1

    print("Управление:")
    print("  C - найти углы")
    print("  M - переключить меру Harris/Noble")
    print("  R - показать карту отклика")
    print("  S - сохранить снимок")
    print("  Q/ESC - выход")

    controller.create_windows()
    controller.run_main_loop()
    return 0


def main(argv=None) -> int:
    """Главная функция приложения."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)

        if args.image_path and not validate_image_path(args.image_path):
            print(f"Ошибка: Неверный формат файла: {args.image_path}")
            print(f"Поддерживаемые форматы: {get_supported_formats_string()}")
            return 1

        if args.headless:
            if not args.image_path:
                print("Ошибка: для --headless нужен путь к изображению")
                return 1
            return run_headless(args.image_path, config, args.save)

        if not args.image_path and not args.depth:
            print("Ошибка: укажите изображение или --depth")
            return 1
        return run_opencv_interface(args.image_path, args.depth, args.loop, config)

    except KeyboardInterrupt:
        print("\nПриложение прервано пользователем")
        return 0
    except Exception as e:
        logging.getLogger(__name__).debug("Unhandled error", exc_info=True)
        print(f"Ошибка: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
