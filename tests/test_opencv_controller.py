#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Тесты контроллера просмотра (без создания окон).
"""

import os
import numpy as np
from PIL import Image
from controllers.opencv_controller import OpenCVController
from models.depth_stream import DepthStreamReader, write_depth_recording
from models.response import CornerMeasure
from conftest import make_square


def save_square(tmp_path):
    path = str(tmp_path / "square.png")
    Image.fromarray(make_square()).save(path)
    return path


def test_detect_on_still_image(tmp_path, capsys):
    controller = OpenCVController()
    assert controller.load_image(save_square(tmp_path))

    corners = controller.detect_corners()

    assert len(corners) == 4
    assert controller.corners_view.shape == (40, 40, 3)
    assert "4" in controller.status
    assert len(capsys.readouterr().out.strip().splitlines()) == 4


def test_detect_without_image():
    controller = OpenCVController()
    assert controller.detect_corners() == []
    assert controller.corners_view is None


def test_load_missing_image(tmp_path):
    controller = OpenCVController()
    assert not controller.load_image(str(tmp_path / "missing.png"))


def test_keyboard_handling(tmp_path):
    controller = OpenCVController()
    controller.handle_keyboard_input(ord('m'))
    assert controller.detector.config.measure is CornerMeasure.NOBLE
    controller.handle_keyboard_input(ord('M'))
    assert controller.detector.config.measure is CornerMeasure.HARRIS

    controller.handle_keyboard_input(ord('q'))
    assert not controller.running


def test_depth_frames_and_screenshot(tmp_path):
    depth = np.full((1, 40, 40), 100 * 8, dtype=np.uint16)
    depth[0, 12:28, 12:28] = 220 * 8
    recording = str(tmp_path / "rec")
    write_depth_recording(recording, depth)

    controller = OpenCVController(depth_source=DepthStreamReader(recording))
    controller.advance_depth_frame()
    assert controller.depth_image is not None
    assert len(controller.detect_corners()) == 4

    path = controller.save_screenshot(str(tmp_path / "shot.png"))
    assert path is not None and os.path.exists(path)


def test_screenshot_without_source():
    controller = OpenCVController()
    assert controller.save_screenshot() is None


def test_response_view(tmp_path):
    controller = OpenCVController()
    assert controller.show_response() is None

    assert controller.load_image(save_square(tmp_path))
    controller.handle_keyboard_input(ord('r'))

    assert controller.corners_view.shape == (40, 40, 3)
    assert controller.corners_view.dtype == np.uint8
    assert "harris" in controller.status
